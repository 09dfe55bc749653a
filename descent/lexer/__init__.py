"""
descent Lexer Package

Implements the lexical analyzer (tokenizer) for arithmetic expressions.

Key Features:
- Numbers with an optional single decimal point (42, 3.14)
- Identifiers of letters, digits and underscores
- The four arithmetic operators and parentheses
- Exact character offsets on every token
- Errors returned as data, never raised

Author: xwest
"""

from .tokens import Token, TokenType, token_type_label, TOKEN_TYPE_LABELS
from .lexer import Lexer, TokenizeResult, tokenize
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "TokenizeResult",
    "tokenize",
    "token_type_label",
    "TOKEN_TYPE_LABELS",
    "Diagnostic",
    "LexerError",
]
