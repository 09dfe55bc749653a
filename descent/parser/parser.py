"""
descent Recursive Descent Parser

Implements an LL(1) recursive descent parser for the arithmetic grammar in
`grammar.py`, one method per nonterminal. Besides the parse tree it records
every action it takes (entering a rule, matching a token, choosing ε) so a
front end can replay the derivation step by step.

All per-call state lives in a `ParseContext` that is created at the start of
every parse and threaded through the rule methods. Syntax errors are
returned, not raised: each rule method returns either the id of the node it
built or the `ParseError` that stopped it, and callers return errors
straight up the chain.

Author: xwest
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from ..lexer.tokens import Token, TokenType, EOF_VALUE
from .grammar import (
    EXPR, EXPR_PRIME, TERM, TERM_PRIME, FACTOR, EPSILON,
    RULE_E, RULE_T, RULE_E_PRIME, RULE_T_PRIME, RULE_E_PRIME_EPSILON,
    RULE_T_PRIME_EPSILON, RULE_F_PAREN, RULE_F_NUMBER, RULE_F_ID,
    RULE_COMPLETE, RULE_ERROR,
)
from .tree import ParseTree
from .steps import Step, StepKind
from .errors import (
    ParseError, ExpressionError, create_unexpected_token_error,
    create_trailing_input_error, create_nesting_error,
)


logger = logging.getLogger(__name__)

# Lookahead returned once the token list runs out without an EOF token
_POSITIONLESS_EOF = Token(TokenType.EOF, EOF_VALUE, -1, -1)

# Parentheses may nest this many levels; each level costs a few Python
# stack frames, so the limit stays well inside the default recursion limit
MAX_NESTING_DEPTH = 150

# A rule method yields the id of the node it built, or the error that stopped it
RuleResult = Union[int, ParseError]


@dataclass
class ParseResult:
    """
    Outcome of a parse call.

    `steps` is kept on failure too, so a caller can show how far parsing got.
    """
    tree: Optional[ParseTree]
    steps: Tuple[Step, ...]
    error: Optional[str] = None
    error_pos: Optional[int] = None
    diagnostic: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def has_errors(self) -> bool:
        """Check if parsing failed."""
        return self.error is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tree": self.tree.to_dict() if self.tree is not None else None,
            "steps": [step.to_dict() for step in self.steps],
            "error": self.error,
            "errorPos": self.error_pos,
        }


class ParseContext:
    """
    Scratch state for a single parse: token cursor, step log, node arena,
    rule depth and parenthesis depth.
    """

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = list(tokens)
        self.current = 0
        self.steps: List[Step] = []
        self.tree = ParseTree()
        self.depth = 0
        self.parens = 0

    def peek(self) -> Token:
        """Return the lookahead token without consuming it."""
        if self.current < len(self.tokens):
            return self.tokens[self.current]
        return _POSITIONLESS_EOF

    def check(self, token_type: TokenType) -> bool:
        return self.peek().type == token_type

    def advance(self) -> Token:
        token = self.peek()
        self.current += 1
        return token

    @contextmanager
    def descend(self):
        """Track one level of rule nesting for the duration of a rule method."""
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    def log(self, rule: str, action: str, kind: StepKind):
        token = self.peek()
        self.steps.append(Step(
            rule=rule,
            action=action,
            token=token.value,
            token_type=token.type.value,
            depth=self.depth,
            sequence_index=len(self.steps),
            kind=kind,
        ))

    def fail(self, error: ParseError) -> ParseError:
        """Record a failure step and hand the error back for returning."""
        self.log(RULE_ERROR, error.message, StepKind.ERROR)
        return error


class Parser:
    """
    Recursive descent parser for arithmetic expressions.

    The parser object only holds the token list; calling `parse` twice gives
    two independent results with node ids starting from 0 each time.
    """

    def __init__(self, tokens: Sequence[Token]):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: Tokens from the lexer, normally ending in EOF
        """
        self.tokens = tokens

    def parse(self) -> ParseResult:
        """
        Parse the token stream into a parse tree and step trace.

        Returns:
            ParseResult; syntax errors are reported in it, never raised
        """
        ctx = ParseContext(self.tokens)

        try:
            outcome = self._parse_expression(ctx)
        except RecursionError:
            # Only reachable when the caller's own stack is already deep
            ctx.depth = 0
            outcome = ctx.fail(create_nesting_error(ctx.peek(), MAX_NESTING_DEPTH))

        if not isinstance(outcome, ParseError) and not ctx.check(TokenType.EOF):
            outcome = ctx.fail(create_trailing_input_error(ctx.peek()))

        if isinstance(outcome, ParseError):
            logger.debug("parse failed after %d steps: %s", len(ctx.steps), outcome.message)
            return ParseResult(
                tree=None,
                steps=tuple(ctx.steps),
                error=outcome.message,
                error_pos=outcome.position,
                diagnostic=outcome,
            )

        ctx.log(RULE_COMPLETE, "Expression parsed successfully!", StepKind.SUCCESS)
        logger.debug("parsed %d tokens into %d nodes", len(ctx.tokens), len(ctx.tree))

        return ParseResult(tree=ctx.tree, steps=tuple(ctx.steps))

    # ------------------------------------------------------------------
    # Grammar rules
    # ------------------------------------------------------------------

    def _parse_expression(self, ctx: ParseContext) -> RuleResult:
        """E → T E'"""
        with ctx.descend():
            ctx.log(RULE_E, "Enter E", StepKind.ENTER)

            term = self._parse_term(ctx)
            if isinstance(term, ParseError):
                return term
            rest = self._parse_expression_prime(ctx)
            if isinstance(rest, ParseError):
                return rest

            node = ctx.tree.add(EXPR, (term, rest))
            ctx.log(RULE_E, "Exit E", StepKind.EXIT)
            return node

    def _parse_expression_prime(self, ctx: ParseContext) -> RuleResult:
        """
        E' → + T E' | - T E' | ε

        The right recursion runs as a loop. Each further `+ T` link is one
        level deeper in the trace, and the E' nodes are closed innermost
        first once the chain ends in ε.
        """
        links = []
        base_depth = ctx.depth
        try:
            while True:
                ctx.depth += 1
                token = ctx.peek()
                if token.type not in RULE_E_PRIME:
                    break

                ctx.log(RULE_E_PRIME[token.type], f"Match '{token.value}'", StepKind.MATCH)
                ctx.advance()
                operator = ctx.tree.add(token.value)

                term = self._parse_term(ctx)
                if isinstance(term, ParseError):
                    return term
                links.append((operator, term))

            ctx.log(RULE_E_PRIME_EPSILON, "Epsilon (no match needed)", StepKind.EPSILON)
        finally:
            ctx.depth = base_depth

        return self._close_chain(ctx, EXPR_PRIME, links)

    def _parse_term(self, ctx: ParseContext) -> RuleResult:
        """T → F T'"""
        with ctx.descend():
            ctx.log(RULE_T, "Enter T", StepKind.ENTER)

            factor = self._parse_factor(ctx)
            if isinstance(factor, ParseError):
                return factor
            rest = self._parse_term_prime(ctx)
            if isinstance(rest, ParseError):
                return rest

            node = ctx.tree.add(TERM, (factor, rest))
            ctx.log(RULE_T, "Exit T", StepKind.EXIT)
            return node

    def _parse_term_prime(self, ctx: ParseContext) -> RuleResult:
        """T' → * F T' | / F T' | ε, looped like E'."""
        links = []
        base_depth = ctx.depth
        try:
            while True:
                ctx.depth += 1
                token = ctx.peek()
                if token.type not in RULE_T_PRIME:
                    break

                ctx.log(RULE_T_PRIME[token.type], f"Match '{token.value}'", StepKind.MATCH)
                ctx.advance()
                operator = ctx.tree.add(token.value)

                factor = self._parse_factor(ctx)
                if isinstance(factor, ParseError):
                    return factor
                links.append((operator, factor))

            ctx.log(RULE_T_PRIME_EPSILON, "Epsilon (no match needed)", StepKind.EPSILON)
        finally:
            ctx.depth = base_depth

        return self._close_chain(ctx, TERM_PRIME, links)

    @staticmethod
    def _close_chain(ctx: ParseContext, label: str, links: List[Tuple[int, int]]) -> int:
        """Build the right-nested E'/T' nodes for a chain that ended in ε."""
        node = ctx.tree.add(label, (ctx.tree.add(EPSILON),))
        for operator, operand in reversed(links):
            node = ctx.tree.add(label, (operator, operand, node))
        return node

    def _parse_factor(self, ctx: ParseContext) -> RuleResult:
        """F → ( E ) | id | number"""
        with ctx.descend():
            token = ctx.peek()

            if token.type == TokenType.LPAREN:
                if ctx.parens >= MAX_NESTING_DEPTH:
                    return ctx.fail(create_nesting_error(token, MAX_NESTING_DEPTH))

                ctx.log(RULE_F_PAREN, "Match '('", StepKind.MATCH)
                ctx.advance()
                lparen = ctx.tree.add("(")

                ctx.parens += 1
                inner = self._parse_expression(ctx)
                ctx.parens -= 1
                if isinstance(inner, ParseError):
                    return inner

                if not ctx.check(TokenType.RPAREN):
                    return ctx.fail(create_unexpected_token_error("')'", ctx.peek()))
                ctx.log(RULE_F_PAREN, "Match ')'", StepKind.MATCH)
                ctx.advance()
                rparen = ctx.tree.add(")")

                return ctx.tree.add(FACTOR, (lparen, inner, rparen))

            if token.type == TokenType.NUMBER:
                ctx.log(RULE_F_NUMBER, f"Match number '{token.value}'", StepKind.MATCH)
                ctx.advance()
                return ctx.tree.add(FACTOR, (ctx.tree.add(token.value),))

            if token.type == TokenType.ID:
                ctx.log(RULE_F_ID, f"Match identifier '{token.value}'", StepKind.MATCH)
                ctx.advance()
                return ctx.tree.add(FACTOR, (ctx.tree.add(token.value),))

            return ctx.fail(create_unexpected_token_error('number, identifier, or "("', token))


def parse(tokens: Sequence[Token]) -> ParseResult:
    """
    Parse a token list into a parse tree and step trace.

    Args:
        tokens: Tokens from `tokenize`

    Returns:
        ParseResult
    """
    return Parser(tokens).parse()


def parse_string(source: str) -> ParseTree:
    """
    Convenience function to tokenize and parse a source string.

    Args:
        source: Expression text

    Returns:
        The parse tree

    Raises:
        ExpressionError: If tokenizing or parsing fails
    """
    from ..lexer import tokenize

    lexed = tokenize(source)
    if lexed.has_errors():
        raise ExpressionError(lexed.error, lexed.error_pos, stage="lexer")

    result = parse(lexed.tokens)
    if result.has_errors():
        raise ExpressionError(result.error, result.error_pos, stage="parser")

    return result.tree
