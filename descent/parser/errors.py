"""
Error handling for the descent parser.

Syntax errors travel back up the recursive descent as return values. Each
one carries the user-facing message, the offending token and its position,
and a `Diagnostic` with the error code and help text.

Author: xwest
"""

from typing import Optional, List
from dataclasses import dataclass

from ..lexer.tokens import Token, TokenType
from ..lexer.errors import Diagnostic


@dataclass(frozen=True)
class ParseError:
    """
    A syntax error found while parsing.

    `position` is the offending token's start offset, or -1 when the token
    has no position.
    """
    message: str
    position: int
    token: Optional[Token]
    diagnostic: Diagnostic

    def __str__(self) -> str:
        return str(self.diagnostic)


class ExpressionError(Exception):
    """
    Raised by the convenience helpers when an expression cannot be
    tokenized or parsed.
    """

    def __init__(self, message: str, position: Optional[int] = None, stage: Optional[str] = None):
        super().__init__(message)
        self.position = position
        self.stage = stage


class SyntaxErrorRecovery:
    """
    Suggestions attached to syntax errors.

    The parser never resumes after an error; these only feed the help text.
    """

    @staticmethod
    def suggest_missing_token(expected: str, found: Optional[Token]) -> List[str]:
        """Suggest what token might be missing."""
        suggestions = []

        if expected == "')'":
            suggestions.append("Add a closing parenthesis ')'")
        elif expected == "end of expression" and found is not None:
            if found.type in (TokenType.NUMBER, TokenType.ID, TokenType.LPAREN):
                suggestions.append("Insert an operator (+, -, *, /) between the operands")
            elif found.type == TokenType.RPAREN:
                suggestions.append("Remove the unmatched ')' or add a matching '('")
        elif found is not None and found.is_operator:
            suggestions.append("Each operator needs an operand on both sides")
        elif found is not None and found.type == TokenType.EOF:
            suggestions.append("The expression ends too early; add the missing operand")

        return suggestions


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P002": "Trailing input",
    "P003": "Expression nested too deeply",
}


def _describe_found(token: Token) -> str:
    return "end of input" if token.type == TokenType.EOF else f"'{token.value}'"


def _syntax_message(expected: str, token: Token) -> str:
    pos_info = f" at position {token.start}" if token.start >= 0 else ""
    return f"Syntax Error{pos_info}: Expected {expected}, but found {_describe_found(token)}"


# Helper functions for creating common parser errors

def create_unexpected_token_error(expected: str, found: Token) -> ParseError:
    """Create an error for a lookahead that matches no alternative."""
    message = _syntax_message(expected, found)
    return ParseError(
        message=message,
        position=found.start,
        token=found,
        diagnostic=Diagnostic(
            message=message,
            position=found.start,
            severity="error",
            code="P001",
            help_text=f"The parser expected {expected} here, but found {_describe_found(found)} instead.",
            suggestions=SyntaxErrorRecovery.suggest_missing_token(expected, found) or None,
        ),
    )


def create_trailing_input_error(found: Token) -> ParseError:
    """Create an error for tokens left over after a complete expression."""
    expected = "end of expression"
    message = _syntax_message(expected, found)
    return ParseError(
        message=message,
        position=found.start,
        token=found,
        diagnostic=Diagnostic(
            message=message,
            position=found.start,
            severity="error",
            code="P002",
            help_text="A complete expression was parsed, but more input follows it.",
            suggestions=SyntaxErrorRecovery.suggest_missing_token(expected, found) or None,
        ),
    )


def create_nesting_error(found: Token, limit: int) -> ParseError:
    """Create an error for parentheses nested deeper than `limit` levels."""
    pos_info = f" at position {found.start}" if found.start >= 0 else ""
    message = f"Syntax Error{pos_info}: Expression nested too deeply"
    return ParseError(
        message=message,
        position=found.start,
        token=found,
        diagnostic=Diagnostic(
            message=message,
            position=found.start,
            severity="error",
            code="P003",
            help_text=f"Parentheses may nest at most {limit} levels deep.",
        ),
    )
