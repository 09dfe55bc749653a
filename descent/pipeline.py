"""
End-to-end driver: text -> tokens -> parse tree + steps -> layout.

Author: xwest
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .lexer import Token, tokenize
from .parser import ParseTree, Step, parse
from .layout import LayoutConfig, TreeLayout, compute_tree_layout


logger = logging.getLogger(__name__)

EMPTY_INPUT_MESSAGE = "Please enter an expression to parse."


@dataclass
class AnalysisResult:
    """
    Everything produced for one expression.

    `stage` names where analysis stopped: "input" for blank text, "lexer",
    "parser", or None on success.
    """
    source: str
    tokens: List[Token] = field(default_factory=list)
    tree: Optional[ParseTree] = None
    steps: Tuple[Step, ...] = ()
    layout: TreeLayout = field(default_factory=TreeLayout)
    error: Optional[str] = None
    error_pos: Optional[int] = None
    stage: Optional[str] = None

    def has_errors(self) -> bool:
        """Check if any stage failed."""
        return self.error is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "tokens": [token.to_dict() for token in self.tokens],
            "tree": self.tree.to_dict() if self.tree is not None else None,
            "steps": [step.to_dict() for step in self.steps],
            "layout": self.layout.to_dict(),
            "error": self.error,
            "errorPos": self.error_pos,
            "stage": self.stage,
        }


def analyze(source: str, layout_config: Optional[LayoutConfig] = None) -> AnalysisResult:
    """
    Run tokenizer, parser and layout over an expression.

    A lexical error stops before parsing. A syntax error keeps the partial
    step trace. Blank input is rejected before tokenizing.
    """
    result = AnalysisResult(source=source)

    if not source.strip():
        result.error = EMPTY_INPUT_MESSAGE
        result.stage = "input"
        return result

    lexed = tokenize(source)
    if lexed.has_errors():
        logger.info("lexer rejected %r: %s", source, lexed.error)
        result.error = lexed.error
        result.error_pos = lexed.error_pos
        result.stage = "lexer"
        return result
    result.tokens = lexed.tokens

    parsed = parse(lexed.tokens)
    result.steps = parsed.steps
    if parsed.has_errors():
        logger.info("parser rejected %r: %s", source, parsed.error)
        result.error = parsed.error
        result.error_pos = parsed.error_pos
        result.stage = "parser"
        return result

    result.tree = parsed.tree
    result.layout = compute_tree_layout(parsed.tree, layout_config)
    return result
