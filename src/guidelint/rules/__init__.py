"""
guidelint.rules - Rule Engine

Named style rules and the engine that evaluates them.
"""

from guidelint.rules.base import Rule, Severity, Violation
from guidelint.rules.engine import (
    PARSE_ERROR_ID,
    READ_ERROR_ID,
    RuleEngine,
    collect_suppressions,
    lint_document,
    lint_source,
    resolve_profile,
)
from guidelint.rules.registry import BUILTIN_RULES, builtin_rules, get_rule

__all__ = [
    "Rule",
    "Severity",
    "Violation",
    "RuleEngine",
    "PARSE_ERROR_ID",
    "READ_ERROR_ID",
    "collect_suppressions",
    "lint_document",
    "lint_source",
    "resolve_profile",
    "BUILTIN_RULES",
    "builtin_rules",
    "get_rule",
]
