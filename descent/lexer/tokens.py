"""
Token definitions for the descent tokenizer.

This module defines the token types of the arithmetic expression language:
- Literals (numbers) and identifiers (variables)
- The four arithmetic operators
- Parentheses
- The end-of-input marker

Author: xwest
"""

from enum import Enum
from dataclasses import dataclass
from typing import Any, Dict


class TokenType(Enum):
    """
    Enumeration of all token types.

    Values are the plain type names so they can be handed to a
    presentation layer as strings.
    """

    # ========================================================================
    # Literals and Identifiers
    # ========================================================================
    NUMBER = "NUMBER"               # 42, 3.14, 7.
    ID = "ID"                       # x, foo, bar_2

    # ========================================================================
    # Operators
    # ========================================================================
    PLUS = "PLUS"                   # +
    MINUS = "MINUS"                 # -
    STAR = "STAR"                   # *
    SLASH = "SLASH"                 # /

    # ========================================================================
    # Punctuation
    # ========================================================================
    LPAREN = "LPAREN"               # (
    RPAREN = "RPAREN"               # )

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = "EOF"                     # End of input


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token of an arithmetic expression.

    `start` and `end` are character offsets into the input, `end` exclusive.
    """
    type: TokenType
    value: str                      # Raw text from source ("EOF" for the end marker)
    start: int
    end: int

    def __str__(self) -> str:
        return f"{self.type.name}({self.value!r})"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.start}, {self.end})"

    @property
    def is_operator(self) -> bool:
        """Check if this token is an arithmetic operator."""
        return self.type in ARITHMETIC_OPERATORS

    @property
    def is_eof(self) -> bool:
        return self.type == TokenType.EOF

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "value": self.value,
            "start": self.start,
            "end": self.end,
        }


# Lookup tables for token recognition

SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}

ARITHMETIC_OPERATORS = {
    TokenType.PLUS,
    TokenType.MINUS,
    TokenType.STAR,
    TokenType.SLASH,
}

EOF_VALUE = "EOF"

# Human-readable names shown next to each token in a token table
TOKEN_TYPE_LABELS = {
    TokenType.NUMBER: "Number",
    TokenType.ID: "Identifier",
    TokenType.PLUS: "Plus (+)",
    TokenType.MINUS: "Minus (−)",
    TokenType.STAR: "Multiply (×)",
    TokenType.SLASH: "Divide (÷)",
    TokenType.LPAREN: "Left Paren",
    TokenType.RPAREN: "Right Paren",
    TokenType.EOF: "End of Input",
}


def token_type_label(token_type) -> str:
    """
    Return a human-readable label for a token type.

    Accepts a `TokenType` or its string value; unknown strings are
    returned unchanged.
    """
    if isinstance(token_type, TokenType):
        return TOKEN_TYPE_LABELS[token_type]
    try:
        return TOKEN_TYPE_LABELS[TokenType(token_type)]
    except ValueError:
        return token_type
