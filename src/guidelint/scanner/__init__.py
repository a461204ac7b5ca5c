"""
guidelint.scanner - Source Scanner

Lexer and structure extraction for C-family source files, plus Markdown
scanning for style-guide documents.
"""

from guidelint.scanner.lexer import Lexer, Token, TokenType, LexerError, read_source, tokenize_file
from guidelint.scanner.languages import (
    LanguageProfile,
    PROFILES,
    SWIFT,
    KOTLIN,
    JAVA,
    CSHARP,
    get_profile,
    profile_for_path,
    source_extensions,
)
from guidelint.scanner.structure import (
    DeclKind,
    Declaration,
    Comment,
    Identifier,
    SourceUnit,
    StructureBuilder,
    build_unit,
)
from guidelint.scanner.markdown import (
    DOC_EXTENSIONS,
    DocumentUnit,
    Fence,
    Heading,
    scan_document,
)

__all__ = [
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "LexerError",
    "read_source",
    "tokenize_file",
    # Languages
    "LanguageProfile",
    "PROFILES",
    "SWIFT",
    "KOTLIN",
    "JAVA",
    "CSHARP",
    "get_profile",
    "profile_for_path",
    "source_extensions",
    # Structure
    "DeclKind",
    "Declaration",
    "Comment",
    "Identifier",
    "SourceUnit",
    "StructureBuilder",
    "build_unit",
    # Markdown
    "DOC_EXTENSIONS",
    "DocumentUnit",
    "Fence",
    "Heading",
    "scan_document",
]
