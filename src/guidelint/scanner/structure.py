"""
Source structure extraction.

Walks the lexer's token stream and records what the style rules care about:
declarations (with their kind, modifiers and doc comments), comments, and
identifier occurrences. It is not a full parser: it tracks
brace and parenthesis depth and recognizes declarations by keyword or, for
Java and C#, by the `Type name` shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from guidelint.scanner.languages import LanguageProfile
from guidelint.scanner.lexer import Lexer, Token, TokenType


class DeclKind(Enum):
    """Kinds of declarations the naming rules distinguish."""
    TYPE = "type"
    FUNCTION = "function"
    VARIABLE = "variable"
    CONSTANT = "constant"
    ENUM_CASE = "enum_case"
    PROPERTY = "property"


VISIBILITY_MODIFIERS = ("public", "open", "internal", "protected", "fileprivate", "private")

# Words that may precede a member name in Java/C# even though they are keywords
_TYPE_LIKE_KEYWORDS = frozenset({"void", "var"})


@dataclass
class Declaration:
    """A declared name."""
    kind: DeclKind
    name: str
    line: int
    column: int
    keyword: str = ""
    modifiers: tuple[str, ...] = ()
    container: Optional[str] = None
    depth: int = 0
    doc_comment: Optional[str] = None

    @property
    def visibility(self) -> Optional[str]:
        for mod in VISIBILITY_MODIFIERS:
            if mod in self.modifiers:
                return mod
        return None

    @property
    def is_top_level(self) -> bool:
        return self.container is None


@dataclass(frozen=True)
class Comment:
    """A line or block comment."""
    text: str
    line: int
    end_line: int
    column: int
    is_doc: bool = False
    is_block: bool = False

    @property
    def body(self) -> str:
        """Comment text with the comment delimiters removed."""
        text = self.text
        if self.is_block:
            text = text[2:-2] if text.endswith("*/") else text[2:]
            lines = [ln.strip().lstrip("*").strip() for ln in text.splitlines()]
            return "\n".join(ln for ln in lines if ln)
        return text.lstrip("/").strip()


@dataclass(frozen=True)
class Identifier:
    """An identifier occurrence (declaration or use)."""
    name: str
    line: int
    column: int


@dataclass
class SourceUnit:
    """Structural representation of one source file."""
    path: str
    language: str
    text: str
    lines: list[str]
    tokens: list[Token] = field(default_factory=list)
    declarations: list[Declaration] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    identifiers: list[Identifier] = field(default_factory=list)
    unbalanced_braces: bool = False

    @property
    def code_lines(self) -> set[int]:
        """Line numbers holding at least one non-comment token."""
        result: set[int] = set()
        for tok in self.tokens:
            if tok.is_comment or tok.type in (TokenType.NEWLINE, TokenType.EOF):
                continue
            result.update(range(tok.line, tok.end_line + 1))
        return result

    @property
    def comment_lines(self) -> set[int]:
        result: set[int] = set()
        for c in self.comments:
            result.update(range(c.line, c.end_line + 1))
        return result

    @property
    def code_line_count(self) -> int:
        return len(self.code_lines)

    @property
    def comment_line_count(self) -> int:
        return len(self.comment_lines)

    @property
    def comment_density(self) -> float:
        code = self.code_line_count
        if code == 0:
            return 0.0
        return self.comment_line_count / code

    def get_line(self, line_no: int) -> str:
        """Get line by 1-based line number."""
        if line_no <= 0 or line_no > len(self.lines):
            return ""
        return self.lines[line_no - 1]

    def declarations_of(self, kind: DeclKind) -> list[Declaration]:
        return [d for d in self.declarations if d.kind == kind]


@dataclass
class _Frame:
    """An open brace scope."""
    kind: str  # "type", "enum", "function", "block"
    name: Optional[str] = None
    members_started: bool = False


def _is_punct(tok: Optional[Token], chars: str) -> bool:
    return tok is not None and tok.type == TokenType.PUNCT and tok.value in chars


class StructureBuilder:
    """
    Builds a SourceUnit from source text.

    Usage:
        unit = StructureBuilder(text, "Foo.swift", SWIFT).build()
    """

    def __init__(self, text: str, path: str, profile: LanguageProfile):
        self.text = text
        self.path = path
        self.profile = profile

        self.tokens: list[Token] = []
        self.sig: list[Token] = []
        self.declarations: list[Declaration] = []
        self.identifiers: list[Identifier] = []

        self._stack: list[_Frame] = []
        self._pending_frame: Optional[_Frame] = None
        self._modifiers: list[str] = []
        self._pending_doc: Optional[Comment] = None
        self._paren_depth = 0
        self._unbalanced = False

    # -------------------------------------------------------------------------
    # Token helpers
    # -------------------------------------------------------------------------

    def _at(self, k: int) -> Optional[Token]:
        if 0 <= k < len(self.sig):
            return self.sig[k]
        return None

    def _is_name(self, tok: Optional[Token]) -> bool:
        return (
            tok is not None
            and tok.type == TokenType.IDENTIFIER
            and not self.profile.is_keyword(tok.value)
        )

    def _skip_angle_brackets(self, k: int) -> int:
        """If sig[k] opens a generic list, return the index after its close."""
        if not _is_punct(self._at(k), "<"):
            return k
        depth = 0
        while k < len(self.sig):
            tok = self.sig[k]
            if _is_punct(tok, "<"):
                depth += 1
            elif _is_punct(tok, ">"):
                depth -= 1
                if depth == 0:
                    return k + 1
            elif _is_punct(tok, "{;"):
                break
            k += 1
        return k

    def _skip_parens(self, k: int) -> int:
        if not _is_punct(self._at(k), "("):
            return k
        depth = 0
        while k < len(self.sig):
            tok = self.sig[k]
            if _is_punct(tok, "("):
                depth += 1
            elif _is_punct(tok, ")"):
                depth -= 1
                if depth == 0:
                    return k + 1
            k += 1
        return k

    # -------------------------------------------------------------------------
    # State helpers
    # -------------------------------------------------------------------------

    @property
    def _top(self) -> Optional[_Frame]:
        return self._stack[-1] if self._stack else None

    def _container(self) -> Optional[str]:
        for frame in reversed(self._stack):
            if frame.kind in ("type", "enum"):
                return frame.name
        return None

    def _is_constant(self, keyword: str) -> bool:
        bag = set(self._modifiers)
        if keyword:
            bag.add(keyword)
        return any(s <= bag for s in self.profile.constant_modifier_sets)

    def _add_decl(self, kind: DeclKind, tok: Token, keyword: str = "") -> Declaration:
        decl = Declaration(
            kind=kind,
            name=tok.value,
            line=tok.line,
            column=tok.column,
            keyword=keyword,
            modifiers=tuple(self._modifiers),
            container=self._container(),
            depth=len(self._stack),
            doc_comment=self._pending_doc.body if self._pending_doc else None,
        )
        self.declarations.append(decl)
        self.identifiers.append(Identifier(tok.value, tok.line, tok.column))
        self._modifiers = []
        self._pending_doc = None
        return decl

    def _reset_statement(self) -> None:
        self._modifiers = []
        self._pending_doc = None

    # -------------------------------------------------------------------------
    # Build
    # -------------------------------------------------------------------------

    def build(self) -> SourceUnit:
        """Tokenize and walk the source. Raises LexerError on bad input."""
        lexer = Lexer(self.text, self.path, nested_comments=self.profile.nested_block_comments)
        self.tokens = lexer.tokenize_all(include_comments=True)

        comments: list[Comment] = []
        docs_before: list[Optional[Comment]] = []
        last_doc: Optional[Comment] = None
        for tok in self.tokens:
            if tok.is_comment:
                comment = Comment(
                    text=tok.value,
                    line=tok.line,
                    end_line=tok.end_line,
                    column=tok.column,
                    is_doc=tok.is_doc,
                    is_block=tok.type == TokenType.BLOCK_COMMENT,
                )
                comments.append(comment)
                if comment.is_doc:
                    last_doc = comment
            elif tok.type != TokenType.EOF:
                self.sig.append(tok)
                docs_before.append(last_doc)
                last_doc = None

        k = 0
        while k < len(self.sig):
            if docs_before[k] is not None:
                self._pending_doc = docs_before[k]
            k = self._step(k)

        if self._stack:
            self._unbalanced = True

        return SourceUnit(
            path=self.path,
            language=self.profile.name,
            text=self.text,
            lines=self.text.splitlines(),
            tokens=self.tokens,
            declarations=self.declarations,
            comments=comments,
            identifiers=self.identifiers,
            unbalanced_braces=self._unbalanced,
        )

    def _step(self, k: int) -> int:
        """Process sig[k]; return the index of the next token to process."""
        tok = self.sig[k]
        if tok.type == TokenType.PUNCT:
            self._punct(tok)
            if tok.value == "@":
                # Annotation/attribute name is not a declaration
                return k + 2 if self._at(k + 1) and self._at(k + 1).type == TokenType.IDENTIFIER else k + 1
            return k + 1
        if tok.type != TokenType.IDENTIFIER:
            return k + 1
        return self._identifier(k)

    def _punct(self, tok: Token) -> None:
        ch = tok.value
        if ch in "([":
            self._paren_depth += 1
        elif ch in ")]":
            self._paren_depth = max(0, self._paren_depth - 1)
        elif ch == "{":
            self._stack.append(self._pending_frame or _Frame("block"))
            self._pending_frame = None
            self._reset_statement()
        elif ch == "}":
            if self._stack:
                self._stack.pop()
            else:
                self._unbalanced = True
            self._pending_frame = None
            self._reset_statement()
        elif ch == ";":
            top = self._top
            if top is not None and top.kind == "enum" and self._paren_depth == 0:
                top.members_started = True
            self._pending_frame = None
            self._reset_statement()

    def _identifier(self, k: int) -> int:
        profile = self.profile
        tok = self.sig[k]
        word = tok.value
        prev = self._at(k - 1)

        if self._paren_depth > 0 or _is_punct(prev, "."):
            self._record(tok)
            return k + 1

        if word in profile.type_keywords or word in profile.extension_keywords:
            return self._type_keyword(k)

        if word in profile.function_keywords:
            return self._function_keyword(k)

        if word in profile.variable_keywords:
            nxt = self._at(k + 1)
            if self._is_name(nxt):
                kind = DeclKind.CONSTANT if self._is_constant(word) else DeclKind.VARIABLE
                self._add_decl(kind, nxt, keyword=word)
                self._pending_frame = None
                return k + 2
            return k + 1

        top = self._top
        if profile.enum_case_keyword and word == profile.enum_case_keyword:
            if top is not None and top.kind == "enum":
                return self._enum_cases(k + 1)
            return k + 1

        if word in profile.modifiers:
            self._modifiers.append(word)
            return k + 1

        if profile.is_keyword(word) and word not in _TYPE_LIKE_KEYWORDS:
            # `public typealias`, `public init()`: the modifiers end here
            self._reset_statement()

        if (top is not None and top.kind == "enum" and not profile.enum_case_keyword
                and not top.members_started and _is_punct(prev, "{,")
                and self._is_name(tok)):
            self._add_decl(DeclKind.ENUM_CASE, tok)
            return k + 1

        if profile.implicit_declarations and self._is_name(tok) and self._is_type_position(k):
            consumed = self._implicit(k)
            if consumed:
                return k + 1

        self._record(tok)
        return k + 1

    def _record(self, tok: Token) -> None:
        if not self.profile.is_keyword(tok.value):
            self.identifiers.append(Identifier(tok.value, tok.line, tok.column))

    def _is_type_position(self, k: int) -> bool:
        """True when the token before sig[k] can end a type in `Type name`."""
        prev = self._at(k - 1)
        if prev is None:
            return False
        if prev.type == TokenType.IDENTIFIER:
            if prev.value in _TYPE_LIKE_KEYWORDS:
                return True
            return not self.profile.is_keyword(prev.value)
        if _is_punct(prev, "]"):
            return True
        if _is_punct(prev, ">"):
            return self._closes_generic(k - 1)
        if _is_punct(prev, "?"):
            # Nullable `int?` sits flush against its type, unlike `a ?? b`
            before = self._at(k - 2)
            return (
                before is not None
                and (before.type == TokenType.IDENTIFIER or _is_punct(before, ">]"))
                and before.line == prev.line
                and before.column + len(before.value) == prev.column
            )
        return False

    def _closes_generic(self, k: int) -> bool:
        """True when the `>` at sig[k] closes a `<...>` argument list."""
        depth = 0
        while k >= 0:
            tok = self.sig[k]
            if _is_punct(tok, ">"):
                depth += 1
            elif _is_punct(tok, "<"):
                depth -= 1
                if depth == 0:
                    return True
            elif tok.type != TokenType.IDENTIFIER and not _is_punct(tok, ",.?[]"):
                return False
            k -= 1
        return False

    def _type_keyword(self, k: int) -> int:
        profile = self.profile
        word = self.sig[k].value
        nxt = self._at(k + 1)

        # Swift `class func` / `class var`: the keyword acts as a modifier
        if (nxt is not None and nxt.type == TokenType.IDENTIFIER
                and profile.is_declaration_keyword(nxt.value)
                and nxt.value not in profile.type_keywords):
            self._modifiers.append(word)
            return k + 1

        if nxt is None or nxt.type != TokenType.IDENTIFIER or profile.is_keyword(nxt.value):
            # Anonymous `object {` / `companion object {`
            self._pending_frame = _Frame("type", "Companion" if "companion" in self._modifiers else None)
            self._reset_statement()
            return k + 1

        if word in profile.extension_keywords:
            self._pending_frame = _Frame("type", nxt.value)
            self._record(nxt)
            self._reset_statement()
            return k + 2

        is_enum = word == "enum" or "enum" in self._modifiers
        self._add_decl(DeclKind.TYPE, nxt, keyword=word)
        self._pending_frame = _Frame("enum" if is_enum else "type", nxt.value)
        return k + 2

    def _function_keyword(self, k: int) -> int:
        word = self.sig[k].value
        j = self._skip_angle_brackets(k + 1)
        name_tok: Optional[Token] = None
        while self._is_name(self._at(j)):
            name_tok = self.sig[j]
            j = self._skip_angle_brackets(j + 1)
            if _is_punct(self._at(j), ".") and self._is_name(self._at(j + 1)):
                j += 1
                continue
            break

        if name_tok is None:
            # Operator functions and the like
            self._pending_frame = _Frame("function")
            self._reset_statement()
            return k + 1

        self._add_decl(DeclKind.FUNCTION, name_tok, keyword=word)
        self._pending_frame = _Frame("function", name_tok.value)
        return j

    def _enum_cases(self, j: int) -> int:
        """Consume `a, b(Int), c = 3` after a Swift `case` keyword."""
        while self._is_name(self._at(j)):
            self._add_decl(DeclKind.ENUM_CASE, self.sig[j], keyword="case")
            j = self._skip_parens(j + 1)
            if _is_punct(self._at(j), "="):
                # Raw value runs to the next `,` on the same line
                line = self.sig[j].line
                j += 1
                while (self._at(j) is not None and self.sig[j].line == line
                       and not _is_punct(self._at(j), ",{}")):
                    j += 1
            if _is_punct(self._at(j), ",") and self._is_name(self._at(j + 1)):
                j += 1
                continue
            break
        return j

    def _implicit(self, k: int) -> bool:
        """Recognize Java/C# `Type name(`, `Type name =`, `Type Name {`."""
        tok = self.sig[k]
        nxt = self._at(k + 1)
        top = self._top
        at_member_level = top is not None and top.kind in ("type", "enum")

        if _is_punct(nxt, "(") and at_member_level:
            self._add_decl(DeclKind.FUNCTION, tok)
            self._pending_frame = _Frame("function", tok.value)
            return True

        if _is_punct(nxt, "=") and _is_punct(self._at(k + 2), ">") and at_member_level:
            self._add_decl(DeclKind.PROPERTY, tok)
            return True

        if _is_punct(nxt, "=;,"):
            kind = DeclKind.CONSTANT if self._is_constant("") else DeclKind.VARIABLE
            self._add_decl(kind, tok)
            return True

        if _is_punct(nxt, "{") and at_member_level and self.profile.brace_properties:
            # C# property with accessor block
            self._add_decl(DeclKind.PROPERTY, tok)
            return True

        return False


def build_unit(text: str, path: str, profile: LanguageProfile) -> SourceUnit:
    """Scan source text into a SourceUnit."""
    return StructureBuilder(text, path, profile).build()
