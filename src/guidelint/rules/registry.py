"""
Built-in rule registry.
"""

from __future__ import annotations

from typing import List, Type

from guidelint.rules.base import Rule
from guidelint.rules.comments import (
    CommentDensityRule,
    CommentedOutCodeRule,
    MissingDocCommentRule,
    TodoFormatRule,
)
from guidelint.rules.documents import EmptySectionRule, SnippetSyntaxRule, UnclosedFenceRule
from guidelint.rules.formatting import (
    BlankLinesRule,
    BraceBalanceRule,
    BraceStyleRule,
    FinalNewlineRule,
    IndentationRule,
    LineLengthRule,
    TrailingWhitespaceRule,
)
from guidelint.rules.naming import (
    ConstantNameRule,
    EnumCaseNameRule,
    ForbiddenPrefixRule,
    FunctionNameRule,
    NameLengthRule,
    PropertyNameRule,
    TypeNameRule,
    TypePrefixRule,
    VariableNameRule,
)

BUILTIN_RULES: List[Type[Rule]] = [
    # Naming
    TypeNameRule,
    FunctionNameRule,
    VariableNameRule,
    ConstantNameRule,
    EnumCaseNameRule,
    PropertyNameRule,
    TypePrefixRule,
    ForbiddenPrefixRule,
    NameLengthRule,
    # Comments
    CommentDensityRule,
    MissingDocCommentRule,
    TodoFormatRule,
    CommentedOutCodeRule,
    # Formatting
    LineLengthRule,
    TrailingWhitespaceRule,
    IndentationRule,
    FinalNewlineRule,
    BlankLinesRule,
    BraceStyleRule,
    BraceBalanceRule,
    # Documents
    UnclosedFenceRule,
    EmptySectionRule,
    SnippetSyntaxRule,
]


def builtin_rules() -> List[Rule]:
    """Fresh instances of every built-in rule."""
    return [cls() for cls in BUILTIN_RULES]


def get_rule(rule_id: str) -> Rule:
    """Instantiate a built-in rule by ID. Raises KeyError if unknown."""
    for cls in BUILTIN_RULES:
        if cls.rule_id == rule_id:
            return cls()
    raise KeyError(f"Unknown rule: {rule_id}")
