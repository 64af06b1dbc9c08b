import asyncio
from pathlib import Path
from typing import Any, Dict, Optional

import click
import httpx
from rich.console import Console

from clash_dash.errors import ClashDashError
from clash_dash.log import configure_logging
from clash_dash.rules.editing import build_rule
from clash_dash.rules.export import export_clash_rules
from clash_dash.rules.fetcher import fetch_server_rules, verify_openwrt_login
from clash_dash.rules.models import RuleType
from clash_dash.rules.parser import serialize_rules_text
from clash_dash.rules.repository import RuleFileRepository
from clash_dash.servers.models import LuciPackage
from clash_dash.servers.repository import ServersRepository
from clash_dash.servers.validation import build_openwrt_config, build_server_config
from clash_dash.tui.renderers import DashConsoleUI


RULE_TYPE_VALUES = [item.value for item in RuleType]
PACKAGE_VALUES = [item.value for item in LuciPackage]


def _transport_from_obj(obj: Dict[str, Any]) -> Optional[httpx.AsyncBaseTransport]:
    return obj.get("transport")


def _rule_file_argument() -> Any:
    return click.argument("path", type=click.Path(path_type=Path, dir_okay=False))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", is_flag=True, help="Log RPC calls and state changes.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Manage OpenClash custom rules on OpenWrt routers."""
    configure_logging(verbose=verbose)
    ctx.ensure_object(dict)


@cli.group(help="Manage configured servers.")
def servers() -> None:
    pass


@servers.command("list", help="List configured servers.")
def servers_list() -> None:
    ui = DashConsoleUI(Console())
    try:
        items = ServersRepository().load_servers()
    except ClashDashError as exc:
        raise click.ClickException(str(exc))
    ui.render_servers(items)


@servers.command("add", help="Add a server, optionally with OpenWrt control.")
@click.option("--host", required=True, help="External controller address.")
@click.option("--port", required=True, help="External controller port.")
@click.option("--name", default="", help="Display name (defaults to host:port).")
@click.option("--secret", default="", help="External controller secret.")
@click.option("--ssl", "use_ssl", is_flag=True, help="Controller uses HTTPS.")
@click.option("--openwrt-host", default=None, help="OpenWrt LuCI address.")
@click.option("--openwrt-port", default="80", show_default=True)
@click.option("--openwrt-ssl", is_flag=True, help="LuCI uses HTTPS.")
@click.option("--username", default="", help="OpenWrt username.")
@click.option("--password", default="", help="OpenWrt password.")
@click.option(
    "--package",
    type=click.Choice(PACKAGE_VALUES, case_sensitive=False),
    default=LuciPackage.OPENCLASH.value,
    show_default=True,
)
@click.option("--no-verify", is_flag=True, help="Skip the OpenWrt login check.")
@click.pass_obj
def servers_add(
    obj: Dict[str, Any],
    host: str,
    port: str,
    name: str,
    secret: str,
    use_ssl: bool,
    openwrt_host: Optional[str],
    openwrt_port: str,
    openwrt_ssl: bool,
    username: str,
    password: str,
    package: str,
    no_verify: bool,
) -> None:
    ui = DashConsoleUI(Console())
    try:
        openwrt = None
        if openwrt_host is not None:
            openwrt = build_openwrt_config(
                host=openwrt_host,
                port=openwrt_port,
                username=username,
                password=password,
                use_ssl=openwrt_ssl,
                luci_package=LuciPackage(package.lower()),
            )
        server = build_server_config(
            host=host,
            port=port,
            name=name,
            secret=secret,
            use_ssl=use_ssl,
            openwrt=openwrt,
        )
        if openwrt is not None and not no_verify:
            asyncio.run(
                verify_openwrt_login(server, transport=_transport_from_obj(obj))
            )
        ServersRepository().add_server(server)
    except ClashDashError as exc:
        raise click.ClickException(str(exc))
    ui.render_server_saved(server.name)


@servers.command("remove", help="Remove a server by name.")
@click.argument("name")
def servers_remove(name: str) -> None:
    ui = DashConsoleUI(Console())
    try:
        removed = ServersRepository().remove_server(name)
    except ClashDashError as exc:
        raise click.ClickException(str(exc))
    if not removed:
        raise click.ClickException(f"Server not found: {name}")
    ui.render_server_saved(name, removed=True)


@cli.group(help="Fetch, inspect and edit custom rules.")
def rules() -> None:
    pass


@rules.command("fetch", help="Fetch custom rules from a server's router.")
@click.argument("server_name")
@click.option(
    "--show-disabled/--hide-disabled",
    default=True,
    show_default=True,
    help="Include commented-out rules.",
)
@click.option(
    "--output",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write the fetched rule section to this file.",
)
@click.pass_obj
def rules_fetch(
    obj: Dict[str, Any],
    server_name: str,
    show_disabled: bool,
    output: Optional[Path],
) -> None:
    ui = DashConsoleUI(Console())
    try:
        server = ServersRepository().get_server(server_name)
        fetched = asyncio.run(
            fetch_server_rules(server, transport=_transport_from_obj(obj))
        )
    except ClashDashError as exc:
        raise click.ClickException(str(exc))

    if output is not None:
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(serialize_rules_text(fetched), encoding="utf-8")
        except OSError as exc:
            raise click.ClickException(f"Cannot write {output}: {exc}")
        ui.render_rules_written(len(fetched), str(output))

    shown = fetched if show_disabled else [rule for rule in fetched if rule.enabled]
    ui.render_rules(shown, source=server.name)


@rules.command("parse", help="Parse a local custom rules file.")
@_rule_file_argument()
def rules_parse(path: Path) -> None:
    ui = DashConsoleUI(Console())
    try:
        items = RuleFileRepository(path).list_rules()
    except ClashDashError as exc:
        raise click.ClickException(str(exc))
    ui.render_rules(items, source=str(path))


@rules.command("add", help="Append a rule to a local custom rules file.")
@_rule_file_argument()
@click.option(
    "--type",
    "match_type",
    required=True,
    type=click.Choice(RULE_TYPE_VALUES, case_sensitive=False),
)
@click.option("--target", required=True, help="Domain, IP range, port or name to match.")
@click.option("--action", required=True, help="DIRECT, REJECT or a policy group name.")
@click.option("--comment", default=None)
@click.option("--disabled", is_flag=True, help="Add the rule commented out.")
def rules_add(
    path: Path,
    match_type: str,
    target: str,
    action: str,
    comment: Optional[str],
    disabled: bool,
) -> None:
    ui = DashConsoleUI(Console())
    try:
        rule = build_rule(match_type, target, action, comment=comment, enabled=not disabled)
        RuleFileRepository(path).add_rule(rule)
    except ClashDashError as exc:
        raise click.ClickException(str(exc))
    ui.render_rule_saved("Added", rule, str(path))


@rules.command("toggle", help="Enable or disable a rule by its 1-based index.")
@_rule_file_argument()
@click.argument("index", type=int)
def rules_toggle(path: Path, index: int) -> None:
    ui = DashConsoleUI(Console())
    try:
        rule = RuleFileRepository(path).toggle_rule(index)
    except ClashDashError as exc:
        raise click.ClickException(str(exc))
    ui.render_rule_saved("Enabled" if rule.enabled else "Disabled", rule, str(path))


@rules.command("remove", help="Remove a rule by its 1-based index.")
@_rule_file_argument()
@click.argument("index", type=int)
def rules_remove(path: Path, index: int) -> None:
    ui = DashConsoleUI(Console())
    try:
        rule = RuleFileRepository(path).remove_rule(index)
    except ClashDashError as exc:
        raise click.ClickException(str(exc))
    ui.render_rule_saved("Removed", rule, str(path))


@rules.command("export", help="Print rules as a Clash rules YAML document.")
@_rule_file_argument()
@click.option("--include-disabled", is_flag=True)
def rules_export(path: Path, include_disabled: bool) -> None:
    try:
        items = RuleFileRepository(path).list_rules()
    except ClashDashError as exc:
        raise click.ClickException(str(exc))
    click.echo(export_clash_rules(items, include_disabled=include_disabled), nl=False)


@rules.command("types", help="List supported rule types.")
def rules_types() -> None:
    DashConsoleUI(Console()).render_rule_types()


def main() -> int:
    try:
        cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.exceptions.Abort:
        return 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
