from rich.console import Console
from rich.markup import escape

from clash_dash.rules.models import Rule
from clash_dash.servers.models import ServerConfig
from clash_dash.tui.enums import UIStyle
from clash_dash.tui.sections import UISection
from clash_dash.tui.tables import RulesTable, ServersTable
from clash_dash.utils import compact_home_path


class DashConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_rules(self, rules: list[Rule], source: str) -> None:
        self.console.print(
            UISection.wrap(
                "rules overview",
                RulesTable.summary_block(rules, source=source),
                style=UIStyle.BLUE.value,
            )
        )
        if not rules:
            self.console.print(
                UISection.note("rules", "No rules found.", style=UIStyle.DIM.value)
            )
            return
        self.console.print(
            UISection.wrap(
                "custom rules",
                RulesTable.rules_table(rules),
                style=UIStyle.CYAN.value,
            )
        )

    def render_rule_types(self) -> None:
        self.console.print(
            UISection.wrap(
                "rule types",
                RulesTable.types_table(),
                style=UIStyle.MAGENTA.value,
            )
        )

    def render_rule_saved(self, action: str, rule: Rule, path: str) -> None:
        self.console.print(
            UISection.note(
                "rules",
                escape(f"{action}: {rule.as_clash_rule()} -> {compact_home_path(path)}"),
                style=UIStyle.GREEN.value,
            ),
        )

    def render_rules_written(self, count: int, path: str) -> None:
        self.console.print(
            UISection.note(
                "output",
                escape(f"Wrote {count} rules to {compact_home_path(path)}"),
                style=UIStyle.GREEN.value,
            ),
        )

    def render_servers(self, servers: list[ServerConfig]) -> None:
        if not servers:
            self.console.print(
                UISection.note(
                    "servers",
                    "No servers configured. Add one with: clash-dash servers add",
                    style=UIStyle.DIM.value,
                )
            )
            return
        self.console.print(
            UISection.wrap(
                "servers",
                ServersTable.servers_table(servers),
                style=UIStyle.CYAN.value,
            )
        )

    def render_server_saved(self, name: str, removed: bool = False) -> None:
        verb = "Removed" if removed else "Added"
        style = UIStyle.YELLOW.value if removed else UIStyle.GREEN.value
        self.console.print(
            UISection.note("servers", escape(f"{verb} server: {name}"), style=style),
        )
