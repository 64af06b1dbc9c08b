"""Tests for the custom rule line codec."""

import pytest

from clash_dash.rules.models import Rule
from clash_dash.rules.parser import (
    decode_rule_line,
    encode_rule,
    is_candidate_rule_line,
    parse_rules_text,
    serialize_rules_text,
)


def test_decode_enabled_rule() -> None:
    rule = decode_rule_line("- DOMAIN-SUFFIX,example.com,DIRECT")
    assert rule == Rule(
        target="example.com",
        match_type="DOMAIN-SUFFIX",
        action="DIRECT",
        enabled=True,
        comment=None,
    )


def test_decode_disabled_rule_with_comment() -> None:
    rule = decode_rule_line("##- DOMAIN,ads.com,REJECT# note")
    assert rule.enabled is False
    assert rule.match_type == "DOMAIN"
    assert rule.target == "ads.com"
    assert rule.action == "REJECT"
    assert rule.comment == "note"


def test_decode_trims_fields_and_surrounding_whitespace() -> None:
    rule = decode_rule_line("   -  IP-CIDR , 10.0.0.0/8 ,  Proxy Group  #  lan  \n")
    assert rule.match_type == "IP-CIDR"
    assert rule.target == "10.0.0.0/8"
    assert rule.action == "Proxy Group"
    assert rule.comment == "lan"


def test_decode_ignores_fields_after_action() -> None:
    rule = decode_rule_line("- IP-CIDR,1.1.1.1/32,DIRECT,no-resolve")
    assert rule.action == "DIRECT"
    assert rule.comment is None


@pytest.mark.parametrize("line", ["- DIRECT", "- DOMAIN,example.com", "##- ", "-"])
def test_decode_short_body_yields_empty_fields(line: str) -> None:
    rule = decode_rule_line(line)
    assert rule.match_type == ""
    assert rule.target == ""
    assert rule.action == ""
    assert rule.is_valid is False


def test_decode_keeps_only_first_comment_segment() -> None:
    rule = decode_rule_line("- DOMAIN,a.com,DIRECT#first#second")
    assert rule.comment == "first"


def test_decode_empty_comment_is_present() -> None:
    rule = decode_rule_line("- DOMAIN,a.com,DIRECT#")
    assert rule.comment == ""


def test_decode_strips_item_markers_anywhere_in_line() -> None:
    rule = decode_rule_line("- DOMAIN,a.com,DIRECT# see - docs")
    assert rule.comment == "see docs"


def test_encode_enabled_rule() -> None:
    rule = Rule(target="example.com", match_type="DOMAIN-SUFFIX", action="DIRECT")
    assert encode_rule(rule) == "- DOMAIN-SUFFIX,example.com,DIRECT"


def test_encode_disabled_rule_with_comment() -> None:
    rule = Rule(
        target="ads.com",
        match_type="DOMAIN",
        action="REJECT",
        enabled=False,
        comment="blocked",
    )
    assert encode_rule(rule) == "##- DOMAIN,ads.com,REJECT,# blocked"


@pytest.mark.parametrize(
    "line",
    [
        "- DOMAIN-SUFFIX,example.com,DIRECT",
        "##- DOMAIN,ads.com,REJECT#blocked",
        "- GEOIP,CN,DIRECT,# mainland",
        "##- DST-PORT,22,REJECT",
        "- DOMAIN,a.com,DIRECT#",
    ],
)
def test_encode_inverts_decode(line: str) -> None:
    rule = decode_rule_line(line)
    assert decode_rule_line(encode_rule(rule)) == rule


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("- DOMAIN,a.com,DIRECT", True),
        ("  ##- DOMAIN,a.com,DIRECT", True),
        ("rules:", False),
        ("# DOMAIN,a.com,DIRECT", False),
        ("", False),
    ],
)
def test_candidate_rule_line(line: str, expected: bool) -> None:
    assert is_candidate_rule_line(line) is expected


def test_parse_rules_text_example() -> None:
    text = (
        "rules:\n"
        "- DOMAIN-SUFFIX,example.com,DIRECT\n"
        "##- DOMAIN,ads.com,REJECT#blocked\n"
    )
    assert parse_rules_text(text) == [
        Rule(target="example.com", match_type="DOMAIN-SUFFIX", action="DIRECT"),
        Rule(
            target="ads.com",
            match_type="DOMAIN",
            action="REJECT",
            enabled=False,
            comment="blocked",
        ),
    ]


def test_parse_rules_text_ignores_lines_before_marker() -> None:
    text = "- DOMAIN,before.com,DIRECT\nrules:\n- DOMAIN,after.com,DIRECT\n"
    rules = parse_rules_text(text)
    assert [rule.target for rule in rules] == ["after.com"]


def test_parse_rules_text_skips_non_items_and_degenerate_rules() -> None:
    text = (
        "rules:\n"
        "# plain comment\n"
        "  - DOMAIN,a.com,DIRECT\n"
        "- MATCH\n"
        "\n"
        "proxy-groups: []\n"
        "\t##- DOMAIN,b.com,REJECT\r\n"
    )
    rules = parse_rules_text(text)
    assert [(rule.target, rule.enabled) for rule in rules] == [
        ("a.com", True),
        ("b.com", False),
    ]


def test_parse_rules_text_without_marker_is_empty() -> None:
    assert parse_rules_text("- DOMAIN,a.com,DIRECT\n") == []
    assert parse_rules_text("") == []


def test_serialize_rules_text_roundtrip() -> None:
    rules = [
        Rule(target="example.com", match_type="DOMAIN-SUFFIX", action="DIRECT"),
        Rule(
            target="ads.com",
            match_type="DOMAIN",
            action="REJECT",
            enabled=False,
            comment="blocked",
        ),
    ]
    text = serialize_rules_text(rules)
    assert text.startswith("rules:\n")
    assert text.endswith("\n")
    assert parse_rules_text(text) == rules
