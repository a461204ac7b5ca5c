"""
Naming rules (N-series).

Casing per declaration kind, required type prefixes, forbidden scope
prefixes and minimum name length.
"""

from __future__ import annotations

import re
from typing import List

from guidelint.config import Settings
from guidelint.rules.base import Rule, Severity, Violation
from guidelint.scanner.languages import get_profile
from guidelint.scanner.structure import DeclKind, SourceUnit


# =============================================================================
# Casing helpers
# =============================================================================

# Consecutive capitals are accepted so acronyms (URLSession, parseURL) pass
_STYLE_PATTERNS = {
    "pascal": re.compile(r"^[A-Z][A-Za-z0-9]*$"),
    "camel": re.compile(r"^[a-z][A-Za-z0-9]*$"),
    "upper_snake": re.compile(r"^[A-Z][A-Z0-9]*(?:_[A-Z0-9]+)*$"),
    "snake": re.compile(r"^[a-z][a-z0-9]*(?:_[a-z0-9]+)*$"),
}

STYLE_LABELS = {
    "pascal": "PascalCase",
    "camel": "camelCase",
    "upper_snake": "UPPER_SNAKE_CASE",
    "snake": "snake_case",
    "any": "any case",
}

_WORDS = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|\d+")

# Names fixed by a platform API rather than chosen by the author
EXEMPT_NAMES = frozenset({"serialVersionUID", "_"})


def _strip_private_underscore(name: str) -> str:
    if name.startswith("_") and not name.startswith("__"):
        return name[1:]
    return name


def matches_style(name: str, style: str) -> bool:
    """Check a name against a casing style. One leading underscore is tolerated."""
    if style == "any":
        return True
    bare = _strip_private_underscore(name)
    if not bare:
        return True
    return bool(_STYLE_PATTERNS[style].match(bare))


def split_words(name: str) -> list[str]:
    """Split any-cased name into lowercase words: parseURLString -> parse, url, string."""
    return [w.lower() for w in _WORDS.findall(name)]


def to_style(name: str, style: str) -> str:
    """Rewrite a name in the given style (used for suggestions)."""
    words = split_words(name)
    if not words or style == "any":
        return name
    if style == "pascal":
        return "".join(w.capitalize() for w in words)
    if style == "camel":
        return words[0] + "".join(w.capitalize() for w in words[1:])
    if style == "upper_snake":
        return "_".join(w.upper() for w in words)
    return "_".join(words)


# =============================================================================
# Casing rules
# =============================================================================

class _CasingRule(Rule):
    """Shared logic for the per-kind casing rules."""

    kind: DeclKind = DeclKind.TYPE
    label: str = "Type"

    def check(self, unit: SourceUnit, settings: Settings) -> List[Violation]:
        profile = get_profile(unit.language)
        style = settings.naming_style(self.kind.value, profile)
        violations = []

        for decl in unit.declarations_of(self.kind):
            if decl.name in EXEMPT_NAMES or matches_style(decl.name, style):
                continue
            violations.append(self.violation(
                unit, decl.line, decl.column,
                f"{self.label} name '{decl.name}' should be {STYLE_LABELS[style]}",
                suggestion=f"Rename to '{to_style(decl.name, style)}'",
            ))

        return violations


class TypeNameRule(_CasingRule):
    rule_id = "N001"
    name = "type-name-case"
    description = "Type names follow the type casing style"
    kind = DeclKind.TYPE
    label = "Type"


class FunctionNameRule(_CasingRule):
    rule_id = "N002"
    name = "function-name-case"
    description = "Function and method names follow the function casing style"
    kind = DeclKind.FUNCTION
    label = "Function"


class VariableNameRule(_CasingRule):
    rule_id = "N003"
    name = "variable-name-case"
    description = "Variable and field names follow the variable casing style"
    kind = DeclKind.VARIABLE
    label = "Variable"


class ConstantNameRule(_CasingRule):
    rule_id = "N004"
    name = "constant-name-case"
    description = "Constant names follow the constant casing style"
    kind = DeclKind.CONSTANT
    label = "Constant"


class EnumCaseNameRule(_CasingRule):
    rule_id = "N005"
    name = "enum-case-name-case"
    description = "Enum case names follow the enum-case casing style"
    kind = DeclKind.ENUM_CASE
    label = "Enum case"


class PropertyNameRule(_CasingRule):
    rule_id = "N006"
    name = "property-name-case"
    description = "Property names follow the property casing style"
    kind = DeclKind.PROPERTY
    label = "Property"


# =============================================================================
# Prefix and length rules
# =============================================================================

class TypePrefixRule(Rule):
    """Top-level types carry the project prefix (e.g. NYTArticle)."""

    rule_id = "N010"
    name = "type-prefix"
    description = "Top-level types start with the configured type_prefix"

    def check(self, unit: SourceUnit, settings: Settings) -> List[Violation]:
        prefix = settings.naming.type_prefix
        if not prefix:
            return []

        violations = []
        for decl in unit.declarations_of(DeclKind.TYPE):
            if not decl.is_top_level:
                continue
            rest = decl.name[len(prefix):]
            if decl.name.startswith(prefix) and rest and rest[0].isupper():
                continue
            violations.append(self.violation(
                unit, decl.line, decl.column,
                f"Type '{decl.name}' is missing the '{prefix}' prefix",
                suggestion=f"Rename to '{prefix}{decl.name}'",
            ))
        return violations


class ForbiddenPrefixRule(Rule):
    """Scope/Hungarian prefixes such as m_ or s_ are not used."""

    rule_id = "N011"
    name = "forbidden-prefix"
    description = "Declared names do not start with a forbidden prefix"

    def check(self, unit: SourceUnit, settings: Settings) -> List[Violation]:
        prefixes = settings.naming.forbidden_prefixes
        violations = []
        for decl in unit.declarations:
            for prefix in prefixes:
                if decl.name.startswith(prefix) and len(decl.name) > len(prefix):
                    violations.append(self.violation(
                        unit, decl.line, decl.column,
                        f"Name '{decl.name}' uses forbidden prefix '{prefix}'",
                        suggestion=f"Rename to '{decl.name[len(prefix):]}'",
                    ))
                    break
        return violations


class NameLengthRule(Rule):
    """Variables and constants have descriptive names."""

    rule_id = "N012"
    name = "name-length"
    severity = Severity.INFO
    description = "Variable, constant and property names meet the minimum length"

    KINDS = (DeclKind.VARIABLE, DeclKind.CONSTANT, DeclKind.PROPERTY)

    def check(self, unit: SourceUnit, settings: Settings) -> List[Violation]:
        min_length = settings.naming.min_length
        allowed = set(settings.naming.allowed_short_names)
        violations = []
        for decl in unit.declarations:
            if decl.kind not in self.KINDS or decl.name in allowed:
                continue
            if len(_strip_private_underscore(decl.name)) < min_length:
                violations.append(self.violation(
                    unit, decl.line, decl.column,
                    f"Name '{decl.name}' is shorter than {min_length} characters",
                    suggestion="Use a descriptive name",
                ))
        return violations
