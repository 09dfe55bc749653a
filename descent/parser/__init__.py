"""
descent Parser Package

Implements an LL(1) recursive descent parser for arithmetic expressions.
Produces a parse tree stored in a per-parse node arena together with an
ordered trace of every parsing action.

Key Features:
- One method per grammar nonterminal
- Step trace for replaying the derivation
- Syntax errors returned as values with the offending position
- No state shared between parse calls

Author: xwest
"""

from .grammar import (
    GRAMMAR_RULES, NONTERMINALS, EPSILON, OPERATOR_LABELS, Production,
)
from .tree import ParseTree, ParseTreeNode
from .steps import Step, StepKind
from .parser import (
    Parser, ParseContext, ParseResult, MAX_NESTING_DEPTH, parse, parse_string,
)
from .errors import ParseError, ExpressionError

__all__ = [
    # Core parser
    "Parser",
    "ParseContext",
    "ParseResult",
    "MAX_NESTING_DEPTH",
    "parse",
    "parse_string",

    # Trees and traces
    "ParseTree", "ParseTreeNode",
    "Step", "StepKind",

    # Grammar
    "GRAMMAR_RULES", "NONTERMINALS", "EPSILON", "OPERATOR_LABELS", "Production",

    # Error handling
    "ParseError", "ExpressionError",
]
