"""Render rule lists as a Clash ``rules:`` YAML document."""

from __future__ import annotations

from typing import Iterable

import yaml

from clash_dash.rules.models import Rule


def export_clash_rules(rules: Iterable[Rule], include_disabled: bool = False) -> str:
    entries = [
        rule.as_clash_rule()
        for rule in rules
        if rule.is_valid and (rule.enabled or include_disabled)
    ]
    payload = {"rules": entries}
    return yaml.safe_dump(
        payload, default_flow_style=False, sort_keys=False, allow_unicode=True
    )
