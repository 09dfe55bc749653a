"""
The arithmetic expression grammar.

    E  → T E'
    E' → + T E' | - T E' | ε
    T  → F T'
    T' → * F T' | / F T' | ε
    F  → ( E ) | id | number

The grammar is LL(1): every choice is decided by the first token of the
alternative, and E' and T' fall back to ε when nothing else matches.

Author: xwest
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from ..lexer.tokens import TokenType


EXPR = "E"
EXPR_PRIME = "E'"
TERM = "T"
TERM_PRIME = "T'"
FACTOR = "F"

NONTERMINALS = (EXPR, EXPR_PRIME, TERM, TERM_PRIME, FACTOR)

EPSILON = "ε"

# Leaf labels drawn as operators (parentheses included)
OPERATOR_LABELS = ("+", "-", "*", "/", "(", ")")


@dataclass(frozen=True)
class Production:
    """One grammar rule with all of its alternatives."""
    lhs: str
    rhs: str
    description: str

    def __str__(self) -> str:
        return f"{self.lhs} → {self.rhs}"

    def to_dict(self) -> Dict[str, str]:
        return {"lhs": self.lhs, "rhs": self.rhs, "description": self.description}


GRAMMAR_RULES: Tuple[Production, ...] = (
    Production(EXPR, "T E'", "Expression = Term followed by Expression-prime"),
    Production(EXPR_PRIME, "+ T E' | - T E' | ε", "Addition or subtraction (or nothing)"),
    Production(TERM, "F T'", "Term = Factor followed by Term-prime"),
    Production(TERM_PRIME, "* F T' | / F T' | ε", "Multiplication or division (or nothing)"),
    Production(FACTOR, "( E ) | id | number", "Factor = parenthesized expr, identifier, or number"),
)

# Rule names recorded in the step trace
RULE_E = "E → T E'"
RULE_T = "T → F T'"
RULE_E_PRIME = {
    TokenType.PLUS: "E' → + T E'",
    TokenType.MINUS: "E' → - T E'",
}
RULE_T_PRIME = {
    TokenType.STAR: "T' → * F T'",
    TokenType.SLASH: "T' → / F T'",
}
RULE_E_PRIME_EPSILON = "E' → ε"
RULE_T_PRIME_EPSILON = "T' → ε"
RULE_F_PAREN = "F → ( E )"
RULE_F_NUMBER = "F → number"
RULE_F_ID = "F → id"
RULE_COMPLETE = "✓ Parse Complete"
RULE_ERROR = "✗ Parse Error"


def find_rule(symbol: str) -> Production:
    """Look up the production for a nonterminal."""
    for rule in GRAMMAR_RULES:
        if rule.lhs == symbol:
            return rule
    raise KeyError(symbol)


def is_nonterminal(label: str) -> bool:
    return label in NONTERMINALS
