"""
Error handling for the descent tokenizer.

Lexical errors are reported as values rather than raised: the tokenizer
hands back a `LexerError` describing the offending character together with
its position, and leaves it to the caller to decide what to do.

Author: xwest
"""

from typing import Optional, List
from dataclasses import dataclass


@dataclass(frozen=True)
class Diagnostic:
    """Base class for diagnostics (errors, warnings, info)."""
    message: str
    position: Optional[int]         # Character offset, None when positionless
    severity: str                   # "error", "warning", "info", "hint"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}\n"
        if self.position is not None and self.position >= 0:
            result += f"  --> position {self.position}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


@dataclass(frozen=True)
class LexerError:
    """
    A fatal lexical error.

    `message` is the user-facing text; `diagnostic` adds the error code and
    help text for richer reporting.
    """
    message: str
    position: int
    diagnostic: Diagnostic

    def __str__(self) -> str:
        return str(self.diagnostic)


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Invalid character",
}


# Characters people commonly type for arithmetic that the grammar lacks
_OPERATOR_ALTERNATIVES = {
    "×": ["*"],
    "·": ["*"],
    "÷": ["/"],
    "−": ["-"],
    "[": ["("],
    "]": [")"],
    "{": ["("],
    "}": [")"],
}


def create_invalid_character_error(char: str, position: int) -> LexerError:
    """Create an error for a character that does not start any token."""
    suggestions = _OPERATOR_ALTERNATIVES.get(char, [])
    if suggestions:
        help_text = f"Did you mean {', '.join(repr(s) for s in suggestions)}?"
    elif char.isprintable():
        help_text = f"The character '{char}' is not valid in an arithmetic expression."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    message = f"Unexpected character '{char}' at position {position}"
    return LexerError(
        message=message,
        position=position,
        diagnostic=Diagnostic(
            message=message,
            position=position,
            severity="error",
            code="L001",
            help_text=help_text,
            suggestions=suggestions or None,
        ),
    )
