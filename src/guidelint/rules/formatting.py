"""
Formatting rules (F-series).

Line-oriented layout checks. Lines inside multi-line string literals are
skipped because their whitespace is content.
"""

from __future__ import annotations

from typing import List

from guidelint.config import Settings
from guidelint.rules.base import Rule, Severity, Violation
from guidelint.scanner.languages import get_profile
from guidelint.scanner.lexer import TokenType
from guidelint.scanner.structure import DeclKind, SourceUnit


def literal_lines(unit: SourceUnit) -> set[int]:
    """Line numbers that are continuation lines of multi-line string literals."""
    result: set[int] = set()
    for tok in unit.tokens:
        if tok.type == TokenType.STRING and tok.end_line > tok.line:
            result.update(range(tok.line + 1, tok.end_line + 1))
    return result


class LineLengthRule(Rule):
    rule_id = "F001"
    name = "line-length"
    description = "Lines are at most max_line_length characters"

    def check(self, unit: SourceUnit, settings: Settings) -> List[Violation]:
        limit = settings.formatting.max_line_length
        violations = []
        for line_no, line in enumerate(unit.lines, start=1):
            if len(line) <= limit:
                continue
            # Long URLs cannot be wrapped
            if "://" in line:
                continue
            violations.append(self.violation(
                unit, line_no, limit + 1,
                f"Line is {len(line)} characters long (limit {limit})",
                suggestion="Wrap the line",
            ))
        return violations


class TrailingWhitespaceRule(Rule):
    rule_id = "F002"
    name = "trailing-whitespace"
    severity = Severity.INFO
    description = "Lines have no trailing whitespace"

    def check(self, unit: SourceUnit, settings: Settings) -> List[Violation]:
        skip = literal_lines(unit)
        violations = []
        for line_no, line in enumerate(unit.lines, start=1):
            if line_no in skip:
                continue
            stripped = line.rstrip()
            if stripped != line:
                violations.append(self.violation(
                    unit, line_no, len(stripped) + 1,
                    "Trailing whitespace",
                    suggestion="Remove trailing spaces and tabs",
                ))
        return violations


class IndentationRule(Rule):
    rule_id = "F003"
    name = "indentation"
    description = "Indentation uses the configured character (spaces or tabs)"

    def check(self, unit: SourceUnit, settings: Settings) -> List[Violation]:
        use_tabs = settings.formatting.indent == "tabs"
        skip = literal_lines(unit)
        violations = []
        for line_no, line in enumerate(unit.lines, start=1):
            if line_no in skip or not line.strip():
                continue
            body = line.lstrip(" \t")
            leading = line[:len(line) - len(body)]
            if not leading:
                continue
            if not use_tabs and "\t" in leading:
                violations.append(self.violation(
                    unit, line_no, 1,
                    "Indentation contains tabs",
                    suggestion="Indent with spaces",
                ))
            elif use_tabs and leading.startswith(" ") and not body.startswith("*"):
                violations.append(self.violation(
                    unit, line_no, 1,
                    "Indentation starts with spaces",
                    suggestion="Indent with tabs",
                ))
        return violations


class FinalNewlineRule(Rule):
    rule_id = "F004"
    name = "final-newline"
    severity = Severity.INFO
    description = "Files end with exactly one newline"

    def check(self, unit: SourceUnit, settings: Settings) -> List[Violation]:
        text = unit.text.replace("\r\n", "\n")
        if not text:
            return []
        last = max(len(unit.lines), 1)
        if not text.endswith("\n"):
            return [self.violation(unit, last, 0, "File does not end with a newline",
                                   suggestion="Add a newline at end of file")]
        if text.endswith("\n\n"):
            return [self.violation(unit, last, 0, "File ends with blank lines",
                                   suggestion="Remove trailing blank lines")]
        return []


class BlankLinesRule(Rule):
    rule_id = "F005"
    name = "blank-lines"
    severity = Severity.INFO
    description = "At most max_blank_lines consecutive blank lines"

    def check(self, unit: SourceUnit, settings: Settings) -> List[Violation]:
        limit = settings.formatting.max_blank_lines
        skip = literal_lines(unit)
        violations = []
        run = 0
        for line_no, line in enumerate(unit.lines, start=1):
            if line.strip() or line_no in skip:
                run = 0
                continue
            run += 1
            if run == limit + 1:
                violations.append(self.violation(
                    unit, line_no, 0,
                    f"More than {limit} consecutive blank lines",
                    suggestion="Remove extra blank lines",
                ))
        return violations


class BraceStyleRule(Rule):
    """Opening braces are placed per the language's brace style."""

    rule_id = "F006"
    name = "brace-style"
    description = "Opening braces follow brace_style (same_line or next_line)"

    def check(self, unit: SourceUnit, settings: Settings) -> List[Violation]:
        style = settings.brace_style(get_profile(unit.language))
        if style == "same_line":
            return self._check_same_line(unit)
        return self._check_next_line(unit)

    def _check_same_line(self, unit: SourceUnit) -> List[Violation]:
        code_lines = unit.code_lines
        violations = []
        for line_no, line in enumerate(unit.lines, start=1):
            if line.strip() == "{" and line_no in code_lines:
                violations.append(self.violation(
                    unit, line_no, line.index("{") + 1,
                    "Opening brace should be on the same line as its declaration",
                    suggestion="Move '{' to the end of the previous line",
                ))
        return violations

    def _check_next_line(self, unit: SourceUnit) -> List[Violation]:
        violations = []
        seen: set[int] = set()
        for decl in unit.declarations:
            if decl.kind not in (DeclKind.TYPE, DeclKind.FUNCTION) or decl.line in seen:
                continue
            code = unit.get_line(decl.line).split("//")[0].rstrip()
            if code.endswith("{") and code.strip() != "{":
                seen.add(decl.line)
                violations.append(self.violation(
                    unit, decl.line, len(code),
                    "Opening brace should be on its own line",
                    suggestion="Move '{' to the next line",
                ))
        return violations


class BraceBalanceRule(Rule):
    """Braces balance; otherwise declaration scopes cannot be trusted."""

    rule_id = "F007"
    name = "brace-balance"
    severity = Severity.ERROR
    description = "Every '{' has a matching '}'"

    def check(self, unit: SourceUnit, settings: Settings) -> List[Violation]:
        if not unit.unbalanced_braces:
            return []
        return [self.violation(
            unit, 1, 0,
            "Unbalanced braces; declaration scopes may be misreported",
        )]
