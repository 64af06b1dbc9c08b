from rich.markup import escape
from rich.table import Column, Table

from clash_dash.rules.models import Rule, RuleType
from clash_dash.servers.models import ServerConfig
from clash_dash.tui.enums import RULE_ENABLED_STYLE, UIStyle


class RulesTable:
    @staticmethod
    def summary_block(rules: list[Rule], source: str) -> Table:
        enabled = sum(1 for rule in rules if rule.enabled)
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Source", escape(source))
        table.add_row("Rules", str(len(rules)))
        table.add_row("Enabled", str(enabled))
        table.add_row("Disabled", str(len(rules) - enabled))
        return table

    @staticmethod
    def rules_table(rules: list[Rule]) -> Table:
        table = Table(
            Column(header="#", width=4, justify="right"),
            Column(header="Type", width=16),
            Column(header="Target", overflow="fold"),
            Column(header="Action", width=16),
            Column(header="State", width=9),
            Column(header="Comment", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for index, rule in enumerate(rules, 1):
            style = RULE_ENABLED_STYLE[rule.enabled]
            state = "enabled" if rule.enabled else "disabled"
            table.add_row(
                str(index),
                escape(rule.match_type),
                escape(rule.target),
                f"[{UIStyle.CYAN.value}]{escape(rule.action)}[/{UIStyle.CYAN.value}]",
                f"[{style}]{state}[/{style}]",
                escape(rule.comment or ""),
            )
        return table

    @staticmethod
    def types_table() -> Table:
        table = Table(
            Column(header="Type", width=16),
            Column(header="Description"),
            Column(header="Example"),
            expand=True,
            header_style="bold",
        )
        for rule_type in RuleType:
            table.add_row(rule_type.value, rule_type.description, rule_type.example)
        return table


class ServersTable:
    @staticmethod
    def servers_table(servers: list[ServerConfig]) -> Table:
        table = Table(
            Column(header="Name", width=20),
            Column(header="Controller", overflow="ellipsis"),
            Column(header="OpenWrt", overflow="ellipsis"),
            Column(header="Package", width=10),
            expand=True,
            header_style="bold",
        )
        for server in servers:
            openwrt = server.openwrt
            if openwrt is None:
                openwrt_text = f"[{UIStyle.DIM.value}]-[/{UIStyle.DIM.value}]"
                package = ""
            else:
                scheme = "https" if openwrt.use_ssl else "http"
                openwrt_text = f"{scheme}://{openwrt.host}:{openwrt.port} ({escape(openwrt.username)})"
                package = openwrt.luci_package.value
            table.add_row(escape(server.name), server.controller_url, openwrt_text, package)
        return table
