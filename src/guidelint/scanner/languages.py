"""
Language profiles.

Each profile is PURE DATA describing how declarations look in one
C-family language and which conventions the guide recommends for it.
Edit this file to add a language or change a default style.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class LanguageProfile:
    """Keywords and default conventions for one language."""
    name: str
    extensions: tuple[str, ...]
    keywords: frozenset[str]
    type_keywords: frozenset[str]
    function_keywords: frozenset[str]
    variable_keywords: frozenset[str]
    modifiers: frozenset[str]
    # Any set fully present in (modifiers + keyword) makes a variable a constant
    constant_modifier_sets: tuple[frozenset[str], ...] = ()
    extension_keywords: frozenset[str] = frozenset()
    enum_case_keyword: Optional[str] = None
    implicit_declarations: bool = False
    brace_properties: bool = False
    nested_block_comments: bool = False
    brace_style: str = "same_line"
    naming_styles: dict[str, str] = field(default_factory=dict)
    fence_aliases: tuple[str, ...] = ()

    def is_keyword(self, word: str) -> bool:
        return word in self.keywords

    def is_declaration_keyword(self, word: str) -> bool:
        return (
            word in self.type_keywords
            or word in self.function_keywords
            or word in self.variable_keywords
            or word in self.extension_keywords
        )


# =============================================================================
# Control keywords shared by every profile
# =============================================================================

CONTROL_KEYWORDS = frozenset({
    "if", "else", "for", "while", "do", "switch", "case", "default",
    "return", "break", "continue", "throw", "try", "catch", "finally",
    "new", "in", "is", "as", "when", "guard", "repeat", "defer",
})


SWIFT = LanguageProfile(
    name="swift",
    extensions=(".swift",),
    keywords=CONTROL_KEYWORDS | frozenset({
        "class", "struct", "enum", "protocol", "extension", "func", "var", "let",
        "init", "deinit", "subscript", "typealias", "associatedtype", "import",
        "static", "public", "private", "fileprivate", "internal", "open", "final",
        "override", "mutating", "nonmutating", "lazy", "weak", "unowned",
        "convenience", "required", "dynamic", "optional", "indirect", "where",
        "self", "Self", "super", "true", "false", "nil", "inout", "some", "any",
        "async", "await", "throws", "rethrows", "operator", "actor",
    }),
    type_keywords=frozenset({"class", "struct", "enum", "protocol", "actor"}),
    function_keywords=frozenset({"func"}),
    variable_keywords=frozenset({"var", "let"}),
    modifiers=frozenset({
        "static", "public", "private", "fileprivate", "internal", "open", "final",
        "override", "mutating", "nonmutating", "lazy", "weak", "unowned",
        "convenience", "required", "dynamic", "optional", "indirect",
    }),
    constant_modifier_sets=(frozenset({"static", "let"}),),
    extension_keywords=frozenset({"extension"}),
    enum_case_keyword="case",
    nested_block_comments=True,
    naming_styles={
        "type": "pascal",
        "function": "camel",
        "variable": "camel",
        "constant": "camel",
        "enum_case": "camel",
    },
    fence_aliases=("swift",),
)


KOTLIN = LanguageProfile(
    name="kotlin",
    extensions=(".kt", ".kts"),
    keywords=CONTROL_KEYWORDS | frozenset({
        "class", "interface", "object", "fun", "val", "var", "typealias",
        "package", "import", "this", "super", "null", "true", "false",
        "public", "private", "protected", "internal", "open", "final",
        "abstract", "override", "const", "data", "enum", "sealed", "inner",
        "companion", "lateinit", "inline", "suspend", "operator", "infix",
        "annotation", "value", "constructor", "init", "by", "out", "vararg",
    }),
    type_keywords=frozenset({"class", "interface", "object"}),
    function_keywords=frozenset({"fun"}),
    variable_keywords=frozenset({"val", "var"}),
    modifiers=frozenset({
        "public", "private", "protected", "internal", "open", "final",
        "abstract", "override", "const", "data", "enum", "sealed", "inner",
        "companion", "lateinit", "inline", "suspend", "operator", "infix",
        "annotation", "value",
    }),
    constant_modifier_sets=(frozenset({"const"}),),
    nested_block_comments=True,
    naming_styles={
        "type": "pascal",
        "function": "camel",
        "variable": "camel",
        "constant": "upper_snake",
        "enum_case": "upper_snake",
    },
    fence_aliases=("kotlin", "kt"),
)


JAVA = LanguageProfile(
    name="java",
    extensions=(".java",),
    keywords=CONTROL_KEYWORDS | frozenset({
        "class", "interface", "enum", "record", "package", "import", "extends",
        "implements", "this", "super", "null", "true", "false", "void",
        "public", "private", "protected", "static", "final", "abstract",
        "synchronized", "native", "transient", "volatile", "strictfp",
        "default", "sealed", "throws", "instanceof", "assert",
    }),
    type_keywords=frozenset({"class", "interface", "enum", "record"}),
    function_keywords=frozenset(),
    variable_keywords=frozenset({"var"}),
    modifiers=frozenset({
        "public", "private", "protected", "static", "final", "abstract",
        "synchronized", "native", "transient", "volatile", "strictfp",
        "sealed",
    }),
    constant_modifier_sets=(frozenset({"static", "final"}),),
    implicit_declarations=True,
    naming_styles={
        "type": "pascal",
        "function": "camel",
        "variable": "camel",
        "constant": "upper_snake",
        "enum_case": "upper_snake",
    },
    fence_aliases=("java",),
)


CSHARP = LanguageProfile(
    name="csharp",
    extensions=(".cs",),
    keywords=CONTROL_KEYWORDS | frozenset({
        "class", "struct", "interface", "enum", "record", "namespace", "using",
        "this", "base", "null", "true", "false", "void", "var", "get", "set",
        "public", "private", "protected", "internal", "static", "readonly",
        "const", "abstract", "sealed", "virtual", "override", "async",
        "await", "partial", "extern", "unsafe", "volatile", "event",
        "operator", "implicit", "explicit", "ref", "out", "params", "where",
        "foreach", "typeof", "nameof", "lock", "checked", "unchecked",
    }),
    type_keywords=frozenset({"class", "struct", "interface", "enum", "record"}),
    function_keywords=frozenset(),
    variable_keywords=frozenset(),
    modifiers=frozenset({
        "public", "private", "protected", "internal", "static", "readonly",
        "const", "abstract", "sealed", "virtual", "override", "async",
        "partial", "extern", "unsafe", "volatile", "event", "new",
    }),
    constant_modifier_sets=(frozenset({"const"}), frozenset({"static", "readonly"})),
    implicit_declarations=True,
    brace_properties=True,
    brace_style="next_line",
    naming_styles={
        "type": "pascal",
        "function": "pascal",
        "variable": "camel",
        "constant": "pascal",
        "enum_case": "pascal",
        "property": "pascal",
    },
    fence_aliases=("csharp", "cs", "c#"),
)


PROFILES: dict[str, LanguageProfile] = {
    p.name: p for p in (SWIFT, KOTLIN, JAVA, CSHARP)
}


def get_profile(name: str) -> LanguageProfile:
    """Look up a profile by name or fence alias."""
    key = name.lower()
    if key in PROFILES:
        return PROFILES[key]
    for profile in PROFILES.values():
        if key in profile.fence_aliases:
            return profile
    raise KeyError(f"Unknown language: {name}")


def profile_for_path(path: Path) -> Optional[LanguageProfile]:
    """Pick the profile whose extensions claim this file, if any."""
    suffix = path.suffix.lower()
    for profile in PROFILES.values():
        if suffix in profile.extensions:
            return profile
    return None


def source_extensions() -> set[str]:
    return {ext for p in PROFILES.values() for ext in p.extensions}
