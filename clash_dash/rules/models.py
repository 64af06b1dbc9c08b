"""Rule data models."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Rule:
    target: str
    match_type: str
    action: str
    enabled: bool = True
    comment: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return bool(self.match_type)

    def as_clash_rule(self) -> str:
        return f"{self.match_type},{self.target},{self.action}"

    def with_enabled(self, enabled: bool) -> "Rule":
        return replace(self, enabled=enabled)


class RuleType(str, Enum):
    DOMAIN = "DOMAIN"
    DOMAIN_SUFFIX = "DOMAIN-SUFFIX"
    DOMAIN_KEYWORD = "DOMAIN-KEYWORD"
    IP_CIDR = "IP-CIDR"
    IP_CIDR6 = "IP-CIDR6"
    SRC_IP_CIDR = "SRC-IP-CIDR"
    GEOIP = "GEOIP"
    DST_PORT = "DST-PORT"
    SRC_PORT = "SRC-PORT"
    PROCESS_NAME = "PROCESS-NAME"

    @property
    def description(self) -> str:
        return _RULE_TYPE_INFO[self][0]

    @property
    def example(self) -> str:
        return _RULE_TYPE_INFO[self][1]


_RULE_TYPE_INFO: dict[RuleType, tuple[str, str]] = {
    RuleType.DOMAIN: ("exact domain match", "www.example.com"),
    RuleType.DOMAIN_SUFFIX: ("domain and all subdomains", "example.com"),
    RuleType.DOMAIN_KEYWORD: ("domain contains keyword", "google"),
    RuleType.IP_CIDR: ("IPv4 address range", "192.168.1.0/24"),
    RuleType.IP_CIDR6: ("IPv6 address range", "2001:db8::/32"),
    RuleType.SRC_IP_CIDR: ("source IP address range", "192.168.1.100/32"),
    RuleType.GEOIP: ("country code of the destination IP", "CN"),
    RuleType.DST_PORT: ("destination port", "443"),
    RuleType.SRC_PORT: ("source port", "7777"),
    RuleType.PROCESS_NAME: ("local process name", "curl"),
}
