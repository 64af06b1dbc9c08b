"""Decode and encode OpenClash custom rule lines."""

from __future__ import annotations

from typing import Iterable, Optional

from clash_dash.constants import (
    CANDIDATE_LINE_PREFIXES,
    COMMENT_SEPARATOR,
    DISABLED_MARKER,
    DISABLED_RULE_ITEM_PREFIX,
    FIELD_SEPARATOR,
    RULE_ITEM_PREFIX,
    RULES_SECTION_MARKER,
)
from clash_dash.rules.models import Rule


def decode_rule_line(line: str) -> Rule:
    """Decode one rule line.

    Never raises: a body with fewer than three comma-separated fields gives a
    rule with empty ``match_type``, ``target`` and ``action``.
    """
    trimmed = line.strip()
    enabled = not trimmed.startswith(DISABLED_MARKER)

    cleaned = trimmed.replace(DISABLED_RULE_ITEM_PREFIX, "").replace(RULE_ITEM_PREFIX, "")

    body, *comments = cleaned.split(COMMENT_SEPARATOR)
    fields = body.split(FIELD_SEPARATOR)
    if len(fields) >= 3:
        match_type, target, action = (item.strip() for item in fields[:3])
    else:
        match_type = target = action = ""

    comment = comments[0].strip() if comments else None
    return Rule(
        target=target,
        match_type=match_type,
        action=action,
        enabled=enabled,
        comment=comment,
    )


def encode_rule(rule: Rule) -> str:
    prefix = RULE_ITEM_PREFIX if rule.enabled else DISABLED_RULE_ITEM_PREFIX
    line = f"{prefix}{rule.as_clash_rule()}"
    if rule.comment is not None:
        line = f"{line}{FIELD_SEPARATOR}{COMMENT_SEPARATOR} {rule.comment}"
    return line


def is_candidate_rule_line(line: str) -> bool:
    return line.strip().startswith(CANDIDATE_LINE_PREFIXES)


def find_rules_marker(lines: list[str]) -> Optional[int]:
    for position, line in enumerate(lines):
        if line.strip() == RULES_SECTION_MARKER:
            return position
    return None


def rule_line_positions(lines: list[str]) -> list[int]:
    """Return the positions of the lines that decode to rules.

    Lines before the ``rules:`` marker, lines that are not list items and rules
    without a match type are skipped.
    """
    marker = find_rules_marker(lines)
    if marker is None:
        return []
    positions: list[int] = []
    for position in range(marker + 1, len(lines)):
        trimmed = lines[position].strip()
        if trimmed == RULES_SECTION_MARKER or not is_candidate_rule_line(trimmed):
            continue
        if decode_rule_line(trimmed).is_valid:
            positions.append(position)
    return positions


def parse_rules_text(text: str) -> list[Rule]:
    """Parse the ``rules:`` section of a custom rule file."""
    lines = text.splitlines()
    return [decode_rule_line(lines[position]) for position in rule_line_positions(lines)]


def serialize_rules_text(rules: Iterable[Rule]) -> str:
    lines = [RULES_SECTION_MARKER]
    lines.extend(encode_rule(rule) for rule in rules)
    return "\n".join(lines) + "\n"
