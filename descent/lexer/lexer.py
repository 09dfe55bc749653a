"""
descent Lexer - turns an arithmetic expression into tokens

Single left-to-right pass over the input. The first character that cannot
start a token ends the scan; there is no recovery, the caller gets the
error back as data.

xwest
"""

import re
import logging
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from .tokens import Token, TokenType, SINGLE_CHAR_TOKENS, EOF_VALUE
from .errors import LexerError, create_invalid_character_error


logger = logging.getLogger(__name__)


@dataclass
class TokenizeResult:
    """
    Outcome of a tokenize call.

    On failure `tokens` is empty; whatever was scanned before the bad
    character is still available on `partial_tokens`.
    """
    tokens: List[Token]
    error: Optional[str] = None
    error_pos: Optional[int] = None
    diagnostic: Optional[LexerError] = None
    partial_tokens: List[Token] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    def has_errors(self) -> bool:
        """Check if the lexer hit an error."""
        return self.error is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tokens": [token.to_dict() for token in self.tokens],
            "error": self.error,
            "errorPos": self.error_pos,
        }


class Lexer:
    """
    Arithmetic expression lexical analyzer.

    Converts source text into NUMBER, ID, operator, parenthesis and EOF
    tokens.
    """

    # Digits with at most one decimal point; a second '.' is left for the next scan
    NUMBER_PATTERN = re.compile(r'[0-9]+(?:\.[0-9]*)?')
    IDENTIFIER_PATTERN = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')

    def __init__(self, source: str):
        """
        Initialize the lexer with source code.

        Args:
            source: Expression text
        """
        if not isinstance(source, str):
            raise TypeError(f"source must be a str, not {type(source).__name__}")
        self.source = source
        self.pos = 0
        self.tokens: List[Token] = []

    def tokenize(self) -> TokenizeResult:
        """
        Tokenize the entire source.

        Returns:
            TokenizeResult with the token list ending in EOF, or the error
        """
        self.pos = 0
        self.tokens = []

        while self.pos < len(self.source):
            char = self.source[self.pos]

            if char.isspace():
                self.pos += 1
                continue

            token_type = SINGLE_CHAR_TOKENS.get(char)
            if token_type is not None:
                self._emit(token_type, self.pos, self.pos + 1)
                continue

            if char in "0123456789":
                self._emit_match(self.NUMBER_PATTERN, TokenType.NUMBER)
                continue

            if char == "_" or ("a" <= char <= "z") or ("A" <= char <= "Z"):
                self._emit_match(self.IDENTIFIER_PATTERN, TokenType.ID)
                continue

            error = create_invalid_character_error(char, self.pos)
            logger.debug("lexical error: %s", error.message)
            return TokenizeResult(
                tokens=[],
                error=error.message,
                error_pos=error.position,
                diagnostic=error,
                partial_tokens=list(self.tokens),
            )

        self.tokens.append(Token(TokenType.EOF, EOF_VALUE, self.pos, self.pos))
        logger.debug("tokenized %d characters into %d tokens", len(self.source), len(self.tokens))

        return TokenizeResult(tokens=list(self.tokens))

    def _emit(self, token_type: TokenType, start: int, end: int):
        self.tokens.append(Token(token_type, self.source[start:end], start, end))
        self.pos = end

    def _emit_match(self, pattern, token_type: TokenType):
        match = pattern.match(self.source, self.pos)
        self._emit(token_type, match.start(), match.end())


def tokenize(source: str) -> TokenizeResult:
    """
    Tokenize an arithmetic expression.

    Args:
        source: Expression text

    Returns:
        TokenizeResult; never raises for bad input characters
    """
    return Lexer(source).tokenize()
