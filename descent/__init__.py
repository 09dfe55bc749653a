"""
descent - recursive descent parsing, step by step

Turns an arithmetic expression into a token stream, a parse tree, an
ordered trace of parsing actions, and layout coordinates for drawing the
tree. Each stage is a pure function of its input.

Architecture:
    descent/
    ├── lexer/           # Tokenization
    ├── parser/          # LL(1) recursive descent with step tracing
    ├── layout/          # Parse tree geometry
    ├── pipeline.py      # All three stages in one call
    └── cli.py           # JSON dump of a run

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__email__ = "dev@neuralscript.org"
__license__ = "MIT"

from .lexer import Token, TokenType, TokenizeResult, tokenize, token_type_label
from .parser import (
    ParseTree, ParseTreeNode, ParseResult, Step, StepKind, GRAMMAR_RULES,
    ExpressionError, parse, parse_string,
)
from .layout import LayoutConfig, LayoutNode, Edge, TreeLayout, compute_tree_layout
from .pipeline import AnalysisResult, analyze

__all__ = [
    # Stages
    "tokenize",
    "parse",
    "compute_tree_layout",
    "analyze",
    "parse_string",

    # Data
    "Token", "TokenType", "TokenizeResult", "token_type_label",
    "ParseTree", "ParseTreeNode", "ParseResult", "Step", "StepKind", "GRAMMAR_RULES",
    "LayoutConfig", "LayoutNode", "Edge", "TreeLayout",
    "AnalysisResult",
    "ExpressionError",

    # Version info
    "__version__",
    "__author__",
    "__email__",
    "__license__",
]
