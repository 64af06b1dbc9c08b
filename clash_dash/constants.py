from typing import Final


CONFIG_DIRNAME: Final[str] = "clash-dash"
SERVERS_FILENAME: Final[str] = "servers.json"

LUCI_AUTH_PATH: Final[str] = "/cgi-bin/luci/rpc/auth"
LUCI_SYS_PATH: Final[str] = "/cgi-bin/luci/rpc/sys"
DEFAULT_LUCI_PORT: Final[int] = 80
DEFAULT_TIMEOUT_SECONDS: Final[float] = 30.0

OPENCLASH_CUSTOM_RULES_PATH: Final[str] = "/etc/openclash/custom/openclash_custom_rules.list"

RULES_SECTION_MARKER: Final[str] = "rules:"
RULE_ITEM_PREFIX: Final[str] = "- "
DISABLED_MARKER: Final[str] = "##"
DISABLED_RULE_ITEM_PREFIX: Final[str] = "##- "
CANDIDATE_LINE_PREFIXES: Final[tuple[str, ...]] = ("-", "##-")
COMMENT_SEPARATOR: Final[str] = "#"
FIELD_SEPARATOR: Final[str] = ","
