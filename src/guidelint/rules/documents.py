"""
Document rules (D-series) for Markdown style guides.

A style guide is only useful if its examples are real code, so snippets
in fenced blocks are checked against the language they claim to be.
"""

from __future__ import annotations

import ast
import json
from typing import List, Optional, Tuple

import yaml

from guidelint.config import Settings
from guidelint.rules.base import Rule, Severity, Violation
from guidelint.scanner.languages import get_profile
from guidelint.scanner.lexer import Lexer, LexerError, TokenType
from guidelint.scanner.markdown import DocumentUnit, Fence

# (1-based line within the snippet, message) or None when the snippet is fine
SnippetProblem = Optional[Tuple[int, str]]

_PAIRS = {")": "(", "]": "[", "}": "{"}


class UnclosedFenceRule(Rule):
    rule_id = "D001"
    name = "unclosed-fence"
    severity = Severity.ERROR
    target = "document"
    description = "Every opened code fence is closed"

    def check(self, unit: DocumentUnit, settings: Settings) -> List[Violation]:
        return [
            self.violation(
                unit, fence.line, 1,
                f"Code fence '{fence.marker}' is never closed",
                suggestion=f"Add a closing '{fence.marker}' line",
            )
            for fence in unit.fences
            if not fence.closed
        ]


class EmptySectionRule(Rule):
    rule_id = "D002"
    name = "empty-section"
    target = "document"
    description = "Every heading is followed by guidance text"

    def check(self, unit: DocumentUnit, settings: Settings) -> List[Violation]:
        violations = []
        for heading in unit.headings:
            body = unit.section_body(heading)
            if any(line.strip() for line in body):
                continue
            title = heading.title or "(untitled)"
            violations.append(self.violation(
                unit, heading.line, 1,
                f"Section '{title}' has no body",
                suggestion="Add guidance text or remove the heading",
            ))
        return violations


# =============================================================================
# Snippet checkers
# =============================================================================

def check_python(code: str) -> SnippetProblem:
    try:
        ast.parse(code)
    except SyntaxError as exc:
        return (exc.lineno or 1, f"Python snippet does not parse: {exc.msg}")
    return None


def check_json(code: str) -> SnippetProblem:
    try:
        json.loads(code)
    except json.JSONDecodeError as exc:
        return (exc.lineno, f"JSON snippet does not parse: {exc.msg}")
    return None


def check_yaml(code: str) -> SnippetProblem:
    try:
        list(yaml.safe_load_all(code))
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        line = mark.line + 1 if mark is not None else 1
        problem = getattr(exc, "problem", None) or str(exc)
        return (line, f"YAML snippet does not parse: {problem}")
    return None


def check_c_family(code: str, language: str) -> SnippetProblem:
    """Lex the snippet with its profile and verify bracket balance."""
    profile = get_profile(language)
    try:
        tokens = Lexer(code, nested_comments=profile.nested_block_comments).tokenize_all()
    except LexerError as exc:
        return (exc.line, f"{profile.name} snippet does not lex: {exc.message}")

    stack = []
    for tok in tokens:
        if tok.type != TokenType.PUNCT:
            continue
        if tok.value in "([{":
            stack.append(tok)
        elif tok.value in ")]}":
            if not stack or stack[-1].value != _PAIRS[tok.value]:
                return (tok.line, f"Unmatched '{tok.value}' in {profile.name} snippet")
            stack.pop()
    if stack:
        return (stack[-1].line, f"Unclosed '{stack[-1].value}' in {profile.name} snippet")
    return None


_CHECKERS = {
    "python": check_python,
    "py": check_python,
    "python3": check_python,
    "json": check_json,
    "yaml": check_yaml,
    "yml": check_yaml,
}


def check_snippet(fence: Fence) -> SnippetProblem:
    """Check one fenced snippet. Unknown languages are not checked."""
    language = fence.language
    if not language:
        return None
    checker = _CHECKERS.get(language)
    if checker is not None:
        return checker(fence.code)
    try:
        get_profile(language)
    except KeyError:
        return None
    return check_c_family(fence.code, language)


class SnippetSyntaxRule(Rule):
    rule_id = "D003"
    name = "snippet-syntax"
    severity = Severity.ERROR
    target = "document"
    description = "Fenced code snippets parse in their declared language"

    def check(self, unit: DocumentUnit, settings: Settings) -> List[Violation]:
        if not settings.docs.check_snippets:
            return []
        skip = {lang.lower() for lang in settings.docs.skip_languages}

        violations = []
        for fence in unit.fences:
            if not fence.closed or fence.language in skip:
                continue
            problem = check_snippet(fence)
            if problem is None:
                continue
            offset, message = problem
            violations.append(self.violation(
                unit, fence.line + offset, 1, message,
                suggestion="Fix the example or correct the fence language",
            ))
        return violations
