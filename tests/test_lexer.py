"""
Tests for the descent tokenizer.

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from descent.lexer import Lexer, Token, TokenType, tokenize, token_type_label
from descent.lexer.errors import ERROR_CODES


class TestTokenizer(unittest.TestCase):
    """Test tokenization of arithmetic expressions."""

    def _summary(self, tokens):
        return [(t.type, t.value, t.start, t.end) for t in tokens]

    def test_parenthesized_expression(self):
        """Test the token stream and offsets for a small expression."""
        result = tokenize("(3+5)*2")

        self.assertIsNone(result.error)
        self.assertIsNone(result.error_pos)
        self.assertEqual(self._summary(result.tokens), [
            (TokenType.LPAREN, "(", 0, 1),
            (TokenType.NUMBER, "3", 1, 2),
            (TokenType.PLUS, "+", 2, 3),
            (TokenType.NUMBER, "5", 3, 4),
            (TokenType.RPAREN, ")", 4, 5),
            (TokenType.STAR, "*", 5, 6),
            (TokenType.NUMBER, "2", 6, 7),
            (TokenType.EOF, "EOF", 7, 7),
        ])

    def test_empty_input(self):
        """Empty input is not an error for the tokenizer."""
        result = tokenize("")

        self.assertTrue(result.ok)
        self.assertEqual(self._summary(result.tokens), [(TokenType.EOF, "EOF", 0, 0)])

    def test_whitespace_only(self):
        result = tokenize("   \t ")

        self.assertTrue(result.ok)
        self.assertEqual(self._summary(result.tokens), [(TokenType.EOF, "EOF", 5, 5)])

    def test_whitespace_is_skipped(self):
        """Test offsets stay exact around whitespace."""
        result = tokenize("  x_1 + 42.5 ")

        self.assertEqual(self._summary(result.tokens), [
            (TokenType.ID, "x_1", 2, 5),
            (TokenType.PLUS, "+", 6, 7),
            (TokenType.NUMBER, "42.5", 8, 12),
            (TokenType.EOF, "EOF", 13, 13),
        ])

    def test_all_operators(self):
        result = tokenize("+-*/()")

        self.assertEqual([t.type for t in result.tokens], [
            TokenType.PLUS, TokenType.MINUS, TokenType.STAR,
            TokenType.SLASH, TokenType.LPAREN, TokenType.RPAREN, TokenType.EOF,
        ])

    def test_second_decimal_point_fails(self):
        """A second '.' ends the number and is then rejected on its own."""
        result = tokenize("1.2.3")

        self.assertEqual(result.error, "Unexpected character '.' at position 3")
        self.assertEqual(result.error_pos, 3)
        self.assertEqual(result.tokens, [])
        self.assertEqual(self._summary(result.partial_tokens), [
            (TokenType.NUMBER, "1.2", 0, 3),
        ])

    def test_trailing_decimal_point(self):
        result = tokenize("7.")

        self.assertTrue(result.ok)
        self.assertEqual(self._summary(result.tokens)[0], (TokenType.NUMBER, "7.", 0, 2))

    def test_leading_decimal_point_is_rejected(self):
        result = tokenize(".5")

        self.assertEqual(result.error, "Unexpected character '.' at position 0")

    def test_unexpected_character(self):
        result = tokenize("1$2")

        self.assertEqual(result.error, "Unexpected character '$' at position 1")
        self.assertEqual(result.error_pos, 1)
        self.assertEqual(result.tokens, [])
        self.assertTrue(result.has_errors())

    def test_error_diagnostic(self):
        """Test the structured diagnostic attached to a lexical error."""
        result = tokenize("2 × 3")

        self.assertEqual(result.error_pos, 2)
        self.assertEqual(result.diagnostic.diagnostic.code, "L001")
        self.assertIn("L001", ERROR_CODES)
        self.assertEqual(result.diagnostic.diagnostic.suggestions, ["*"])
        self.assertIn("position 2", str(result.diagnostic))

    def test_non_ascii_letters_rejected(self):
        result = tokenize("x²")

        self.assertEqual(result.error, "Unexpected character '²' at position 1")

    def test_identifiers(self):
        result = tokenize("_tmp rate2 A")

        self.assertEqual([(t.type, t.value) for t in result.tokens[:-1]], [
            (TokenType.ID, "_tmp"),
            (TokenType.ID, "rate2"),
            (TokenType.ID, "A"),
        ])

    def test_number_then_identifier(self):
        """Digits never continue into letters; '1a' is two tokens."""
        result = tokenize("1a")

        self.assertEqual([(t.type, t.value) for t in result.tokens[:-1]], [
            (TokenType.NUMBER, "1"),
            (TokenType.ID, "a"),
        ])

    def test_lexer_is_reusable(self):
        lexer = Lexer("a+b")
        first = lexer.tokenize()
        second = lexer.tokenize()

        self.assertEqual(first.tokens, second.tokens)

    def test_non_string_input(self):
        with self.assertRaises(TypeError):
            tokenize(42)

    def test_to_dict(self):
        result = tokenize("x")

        self.assertEqual(result.to_dict(), {
            "tokens": [
                {"type": "ID", "value": "x", "start": 0, "end": 1},
                {"type": "EOF", "value": "EOF", "start": 1, "end": 1},
            ],
            "error": None,
            "errorPos": None,
        })


class TestTokenTypes(unittest.TestCase):
    """Test token helpers."""

    def test_token_type_labels(self):
        self.assertEqual(token_type_label(TokenType.NUMBER), "Number")
        self.assertEqual(token_type_label("EOF"), "End of Input")
        self.assertEqual(token_type_label("SOMETHING"), "SOMETHING")

    def test_token_properties(self):
        plus = Token(TokenType.PLUS, "+", 0, 1)
        eof = Token(TokenType.EOF, "EOF", 1, 1)

        self.assertTrue(plus.is_operator)
        self.assertFalse(eof.is_operator)
        self.assertTrue(eof.is_eof)
        self.assertEqual(str(plus), "PLUS('+')")


if __name__ == '__main__':
    unittest.main()
