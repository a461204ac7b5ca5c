"""
C-family Source Lexer (Tokenizer)

Converts raw Swift/Kotlin/Java/C# source into a stream of tokens.
Handles: identifiers, strings, numbers, comments, punctuation.

The lexer only needs enough fidelity to find identifiers and comments
reliably, so operators are emitted one character at a time.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List, Optional


class TokenType(Enum):
    """Types of tokens in C-family source."""
    IDENTIFIER = auto()      # fooBar, FooBar, `default`
    STRING = auto()          # "text", """text""", @"text", 'c'
    NUMBER = auto()          # 42, 0x1F, 1_000, 3.14f
    PUNCT = auto()           # any single operator/punctuation character
    LINE_COMMENT = auto()    # // comment to end of line
    BLOCK_COMMENT = auto()   # /* comment */
    NEWLINE = auto()         # \n
    EOF = auto()             # End of file


@dataclass
class Token:
    """A single token from the lexer."""
    type: TokenType
    value: str
    line: int
    column: int
    end_line: int = 0

    def __post_init__(self):
        if not self.end_line:
            self.end_line = self.line

    @property
    def is_comment(self) -> bool:
        return self.type in (TokenType.LINE_COMMENT, TokenType.BLOCK_COMMENT)

    @property
    def is_doc(self) -> bool:
        """Doc comments start with /// or /** (but not the empty /**/)."""
        if self.type == TokenType.LINE_COMMENT:
            return self.value.startswith("///") and not self.value.startswith("////")
        if self.type == TokenType.BLOCK_COMMENT:
            return self.value.startswith("/**") and self.value != "/**/"
        return False

    def __repr__(self):
        if self.type == TokenType.NEWLINE:
            return f"Token({self.type.name}, '\\n', L{self.line}:{self.column})"
        return f"Token({self.type.name}, {self.value!r}, L{self.line}:{self.column})"


class LexerError(Exception):
    """Error during lexical analysis."""
    def __init__(self, message: str, line: int, column: int):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"Lexer error at line {line}, column {column}: {message}")


class Lexer:
    """
    Tokenizer for C-family source files.

    Usage:
        lexer = Lexer(source_text)
        tokens = list(lexer.tokenize(include_comments=True))
    """

    def __init__(self, source: str, filename: str = "<unknown>", nested_comments: bool = False):
        self.source = source
        self.filename = filename
        self.nested_comments = nested_comments
        self.pos = 0
        self.line = 1
        self.column = 1
        self.length = len(source)

    @staticmethod
    def _is_ident_start(ch: str) -> bool:
        return ch == '_' or ch == '$' or ch.isalpha()

    @staticmethod
    def _is_ident_cont(ch: str) -> bool:
        return ch == '_' or ch == '$' or ch.isalnum()

    def _current(self) -> Optional[str]:
        """Get current character or None if at end."""
        if self.pos >= self.length:
            return None
        return self.source[self.pos]

    def _peek(self, offset: int = 1) -> Optional[str]:
        """Peek ahead by offset characters."""
        pos = self.pos + offset
        if pos >= self.length:
            return None
        return self.source[pos]

    def _startswith(self, text: str) -> bool:
        return self.source.startswith(text, self.pos)

    def _advance(self) -> Optional[str]:
        """Advance one character and return it."""
        ch = self._current()
        if ch is not None:
            self.pos += 1
            if ch == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        return ch

    def _skip_whitespace(self) -> None:
        """Skip spaces, tabs and form feeds (but not newlines)."""
        while self._current() in (' ', '\t', '\r', '\f', '\v', '\ufeff'):
            self._advance()

    def _read_string(self, quote_char: str, start_line: int, start_col: int,
                     verbatim: bool = False) -> str:
        """Read a quoted string. Returns the raw text including quotes."""
        start = self.pos
        self._advance()  # opening quote

        while True:
            ch = self._current()
            if ch is None or (ch == '\n' and quote_char == "'"):
                raise LexerError("Unterminated string", start_line, start_col)
            if ch == '\n' and not verbatim:
                raise LexerError("Unterminated string", start_line, start_col)
            if ch == '\\' and not verbatim:
                self._advance()
                self._advance()
                continue
            if ch == quote_char:
                # C# verbatim strings escape quotes by doubling them
                if verbatim and self._peek() == quote_char:
                    self._advance()
                    self._advance()
                    continue
                self._advance()
                break
            self._advance()

        return self.source[start:self.pos]

    def _read_triple_string(self, start_line: int, start_col: int) -> str:
        """Read a triple-quoted (multi-line) string literal."""
        start = self.pos
        for _ in range(3):
            self._advance()
        while True:
            if self._current() is None:
                raise LexerError("Unterminated multi-line string", start_line, start_col)
            if self._current() == '\\':
                self._advance()
                self._advance()
                continue
            if self._startswith('"""'):
                for _ in range(3):
                    self._advance()
                break
            self._advance()
        return self.source[start:self.pos]

    def _read_identifier(self) -> str:
        result = []
        while True:
            ch = self._current()
            if ch is None or not self._is_ident_cont(ch):
                break
            result.append(ch)
            self._advance()
        return ''.join(result)

    def _read_number(self) -> str:
        """Read a numeric literal including hex, underscores and suffixes."""
        result = []
        while True:
            ch = self._current()
            if ch is None:
                break
            if ch.isalnum() or ch == '_':
                result.append(ch)
                self._advance()
            elif ch == '.' and self._peek() is not None and self._peek().isdigit():
                result.append(ch)
                self._advance()
            else:
                break
        return ''.join(result)

    def _read_line_comment(self) -> str:
        start = self.pos
        while self._current() is not None and self._current() != '\n':
            self._advance()
        return self.source[start:self.pos].rstrip('\r')

    def _read_block_comment(self, start_line: int, start_col: int) -> str:
        start = self.pos
        self._advance()
        self._advance()
        depth = 1
        while depth:
            if self._current() is None:
                raise LexerError("Unterminated block comment", start_line, start_col)
            if self._startswith('*/'):
                self._advance()
                self._advance()
                depth -= 1
            elif self.nested_comments and self._startswith('/*'):
                self._advance()
                self._advance()
                depth += 1
            else:
                self._advance()
        return self.source[start:self.pos]

    def tokenize(self, include_comments: bool = False, include_newlines: bool = False) -> Iterator[Token]:
        """
        Generate tokens from the source.

        Args:
            include_comments: If True, emit comment tokens. Otherwise skip them.
            include_newlines: If True, emit NEWLINE tokens. Otherwise skip them.
        """
        while True:
            self._skip_whitespace()

            ch = self._current()
            start_line = self.line
            start_col = self.column

            if ch is None:
                yield Token(TokenType.EOF, '', start_line, start_col)
                break

            if ch == '\n':
                self._advance()
                if include_newlines:
                    yield Token(TokenType.NEWLINE, '\n', start_line, start_col)
                continue

            # Comments
            if self._startswith('//'):
                value = self._read_line_comment()
                if include_comments:
                    yield Token(TokenType.LINE_COMMENT, value, start_line, start_col)
                continue

            if self._startswith('/*'):
                value = self._read_block_comment(start_line, start_col)
                if include_comments:
                    yield Token(TokenType.BLOCK_COMMENT, value, start_line, start_col,
                                end_line=self.line)
                continue

            # Strings
            if self._startswith('"""'):
                value = self._read_triple_string(start_line, start_col)
                yield Token(TokenType.STRING, value, start_line, start_col, end_line=self.line)
                continue

            if self._startswith('@"'):
                self._advance()
                value = '@' + self._read_string('"', start_line, start_col, verbatim=True)
                yield Token(TokenType.STRING, value, start_line, start_col, end_line=self.line)
                continue

            if ch == '"':
                value = self._read_string('"', start_line, start_col)
                yield Token(TokenType.STRING, value, start_line, start_col)
                continue

            if ch == "'":
                value = self._read_string("'", start_line, start_col)
                yield Token(TokenType.STRING, value, start_line, start_col)
                continue

            # Backtick-quoted identifiers (Swift/Kotlin)
            if ch == '`':
                self._advance()
                name = []
                while self._current() not in ('`', '\n', None):
                    name.append(self._advance())
                if self._current() != '`':
                    raise LexerError("Unterminated quoted identifier", start_line, start_col)
                self._advance()
                yield Token(TokenType.IDENTIFIER, ''.join(name), start_line, start_col)
                continue

            if ch.isdigit():
                value = self._read_number()
                yield Token(TokenType.NUMBER, value, start_line, start_col)
                continue

            if self._is_ident_start(ch):
                value = self._read_identifier()
                yield Token(TokenType.IDENTIFIER, value, start_line, start_col)
                continue

            # Everything else is single-character punctuation
            self._advance()
            yield Token(TokenType.PUNCT, ch, start_line, start_col)

    def tokenize_all(self, include_comments: bool = False, include_newlines: bool = False) -> List[Token]:
        """Convenience method to get all tokens as a list."""
        return list(self.tokenize(include_comments, include_newlines))


def read_source(filepath: str) -> str:
    """Read a source file, trying UTF-8 with BOM, then UTF-8, then latin-1."""
    for encoding in ['utf-8-sig', 'utf-8']:
        try:
            with open(filepath, 'r', encoding=encoding) as f:
                return f.read()
        except UnicodeDecodeError:
            continue
    with open(filepath, 'r', encoding='latin-1') as f:
        return f.read()


def tokenize_file(filepath: str, nested_comments: bool = False, **kwargs) -> List[Token]:
    """Tokenize a file and return all tokens."""
    source = read_source(filepath)
    lexer = Lexer(source, filename=filepath, nested_comments=nested_comments)
    return lexer.tokenize_all(**kwargs)
