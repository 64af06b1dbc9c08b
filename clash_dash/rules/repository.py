from pathlib import Path

from clash_dash.constants import RULES_SECTION_MARKER
from clash_dash.errors import ValidationError
from clash_dash.rules.editing import remove_rule, toggle_rule
from clash_dash.rules.models import Rule
from clash_dash.rules.parser import (
    encode_rule,
    find_rules_marker,
    parse_rules_text,
    rule_line_positions,
    serialize_rules_text,
)


class RuleFileRepository:
    """A local custom rules file.

    Edits touch only the rule lines they change. Everything else in the file,
    including content before ``rules:`` and comment lines, is written back as
    it was read.
    """

    def __init__(self, path: Path):
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def list_rules(self) -> list[Rule]:
        return parse_rules_text(self._read_text())

    def add_rule(self, rule: Rule) -> list[Rule]:
        if not self._path.exists():
            self._write_lines(serialize_rules_text([rule]).splitlines())
            return [rule]

        lines = self._read_text().splitlines()
        positions = rule_line_positions(lines)
        if positions:
            lines.insert(positions[-1] + 1, encode_rule(rule))
        else:
            marker = find_rules_marker(lines)
            if marker is None:
                lines.extend([RULES_SECTION_MARKER, encode_rule(rule)])
            else:
                lines.insert(marker + 1, encode_rule(rule))
        self._write_lines(lines)
        return parse_rules_text("\n".join(lines))

    def toggle_rule(self, index: int) -> Rule:
        lines = self._read_text().splitlines()
        positions = rule_line_positions(lines)
        rules = toggle_rule(parse_rules_text("\n".join(lines)), index)
        toggled = rules[index - 1]
        line = lines[positions[index - 1]]
        indent = line[: len(line) - len(line.lstrip())]
        lines[positions[index - 1]] = f"{indent}{encode_rule(toggled)}"
        self._write_lines(lines)
        return toggled

    def remove_rule(self, index: int) -> Rule:
        lines = self._read_text().splitlines()
        positions = rule_line_positions(lines)
        rules = parse_rules_text("\n".join(lines))
        remove_rule(rules, index)
        del lines[positions[index - 1]]
        self._write_lines(lines)
        return rules[index - 1]

    def _read_text(self) -> str:
        if not self._path.exists():
            raise ValidationError(f"Rule file not found: {self._path}")
        return self._path.read_text(encoding="utf-8")

    def _write_lines(self, lines: list[str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text("\n".join(lines) + "\n", encoding="utf-8")
