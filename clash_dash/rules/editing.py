"""Rule construction and list edits."""

from __future__ import annotations

from typing import Optional

from clash_dash.constants import COMMENT_SEPARATOR, FIELD_SEPARATOR, RULE_ITEM_PREFIX
from clash_dash.errors import ValidationError
from clash_dash.rules.models import Rule, RuleType


def build_rule(
    match_type: str,
    target: str,
    action: str,
    comment: Optional[str] = None,
    enabled: bool = True,
) -> Rule:
    try:
        rule_type = RuleType(match_type.strip().upper())
    except ValueError:
        allowed = ", ".join(item.value for item in RuleType)
        raise ValidationError(f"Unknown rule type: {match_type} (expected one of {allowed})")

    normalized_target = target.strip()
    if not normalized_target:
        raise ValidationError("Rule target cannot be empty")
    normalized_action = action.strip()
    if not normalized_action:
        raise ValidationError("Rule action cannot be empty")

    for label, value in (("target", normalized_target), ("action", normalized_action)):
        if FIELD_SEPARATOR in value or COMMENT_SEPARATOR in value:
            raise ValidationError(
                f"Rule {label} cannot contain '{FIELD_SEPARATOR}' or '{COMMENT_SEPARATOR}': {value}"
            )

    normalized_comment = comment.strip() if comment is not None else None
    if normalized_comment and COMMENT_SEPARATOR in normalized_comment:
        raise ValidationError(
            f"Rule comment cannot contain '{COMMENT_SEPARATOR}': {normalized_comment}"
        )
    for label, value in (
        ("target", normalized_target),
        ("action", normalized_action),
        ("comment", normalized_comment or ""),
    ):
        if RULE_ITEM_PREFIX in value:
            raise ValidationError(f"Rule {label} cannot contain '{RULE_ITEM_PREFIX}': {value}")

    return Rule(
        target=normalized_target,
        match_type=rule_type.value,
        action=normalized_action,
        enabled=enabled,
        comment=normalized_comment or None,
    )


def _check_index(rules: list[Rule], index: int) -> int:
    if index < 1 or index > len(rules):
        raise ValidationError(f"Rule index out of range: {index} (have {len(rules)})")
    return index - 1


def toggle_rule(rules: list[Rule], index: int) -> list[Rule]:
    """Return a copy with the rule at 1-based ``index`` flipped on or off."""
    position = _check_index(rules, index)
    updated = list(rules)
    updated[position] = updated[position].with_enabled(not updated[position].enabled)
    return updated


def remove_rule(rules: list[Rule], index: int) -> list[Rule]:
    position = _check_index(rules, index)
    return rules[:position] + rules[position + 1 :]
