"""
Comment rules (C-series).

Comment density, doc comments on public API, TODO formatting and
commented-out code.
"""

from __future__ import annotations

import re
from typing import List

from guidelint.config import Settings
from guidelint.rules.base import Rule, Severity, Violation
from guidelint.scanner.structure import DeclKind, SourceUnit


class CommentDensityRule(Rule):
    """Files are neither undocumented nor buried in comments."""

    rule_id = "C001"
    name = "comment-density"
    severity = Severity.INFO
    description = "Comment lines per code line stay within [min_density, max_density]"

    def check(self, unit: SourceUnit, settings: Settings) -> List[Violation]:
        opts = settings.comments
        code_lines = unit.code_line_count
        if code_lines == 0 or code_lines < opts.min_code_lines:
            return []

        density = unit.comment_density
        if density < opts.min_density:
            return [self.violation(
                unit, 1, 0,
                f"Comment density {density:.1%} is below the minimum {opts.min_density:.1%} "
                f"({unit.comment_line_count} comment lines, {code_lines} code lines)",
                suggestion="Document non-obvious logic",
            )]
        if density > opts.max_density:
            return [self.violation(
                unit, 1, 0,
                f"Comment density {density:.1%} exceeds the maximum {opts.max_density:.1%} "
                f"({unit.comment_line_count} comment lines, {code_lines} code lines)",
                suggestion="Remove redundant or stale comments",
            )]
        return []


class MissingDocCommentRule(Rule):
    """Public types and functions carry a doc comment."""

    rule_id = "C002"
    name = "missing-doc-comment"
    description = "Declarations with a documented visibility have a /// or /** doc comment"

    KINDS = (DeclKind.TYPE, DeclKind.FUNCTION)

    def check(self, unit: SourceUnit, settings: Settings) -> List[Violation]:
        required = set(settings.comments.require_docs_for)
        violations = []
        for decl in unit.declarations:
            if decl.kind not in self.KINDS or decl.doc_comment:
                continue
            if not required.intersection(decl.modifiers):
                continue
            violations.append(self.violation(
                unit, decl.line, decl.column,
                f"{decl.kind.value.capitalize()} '{decl.name}' is {decl.visibility} but has no doc comment",
                suggestion="Add a /// or /** */ comment describing it",
            ))
        return violations


class TodoFormatRule(Rule):
    """TODO/FIXME markers name an owner: TODO(name): ..."""

    rule_id = "C003"
    name = "todo-format"
    description = "TODO and FIXME markers match todo_pattern"

    def check(self, unit: SourceUnit, settings: Settings) -> List[Violation]:
        opts = settings.comments
        if not opts.todo_markers:
            return []
        marker_rx = re.compile(r"\b(" + "|".join(re.escape(m) for m in opts.todo_markers) + r")\b")
        pattern = re.compile(opts.todo_pattern)

        violations = []
        for comment in unit.comments:
            for offset, raw in enumerate(comment.text.splitlines()):
                m = marker_rx.search(raw)
                if not m:
                    continue
                if pattern.match(raw[m.start():]):
                    continue
                line_no = comment.line + offset
                column = (comment.column if offset == 0 else 1) + m.start()
                violations.append(self.violation(
                    unit, line_no, column,
                    f"{m.group(1)} comment does not follow the required format",
                    suggestion=f"Write it as {m.group(1)}(owner): description",
                ))
        return violations


_CODE_START = re.compile(r"^(if|for|while|switch|when|return|catch)\s*\(|^(val|var|let|func|fun)\s+\w+")


class CommentedOutCodeRule(Rule):
    """Dead code is deleted, not commented out."""

    rule_id = "C004"
    name = "commented-out-code"
    description = "Line comments do not contain commented-out code"

    def check(self, unit: SourceUnit, settings: Settings) -> List[Violation]:
        violations = []
        for comment in unit.comments:
            if comment.is_block or comment.is_doc:
                continue
            body = comment.body
            if not body:
                continue
            if body.endswith((";", "{", "}")) or _CODE_START.match(body):
                violations.append(self.violation(
                    unit, comment.line, comment.column,
                    "Comment looks like commented-out code",
                    suggestion="Delete dead code; version control keeps history",
                ))
        return violations
