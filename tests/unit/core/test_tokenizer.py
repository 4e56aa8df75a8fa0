"""
Test cases for the assetjson lexer.

Tests focus on tokenization accuracy and on the errors raised for input that
is not valid JSON text.
"""

import unittest

from assetjson.core.tokenizer import Lexer, Position, TokenType
from assetjson.security.exceptions import MalformedDocumentError, UnexpectedEndOfInputError


class TestTokenizerAccuracy(unittest.TestCase):
    """Test tokenizer accuracy for various input patterns."""

    def _get_non_eof_tokens(self, text):
        """Helper to get tokens excluding EOF for easier testing."""
        lexer = Lexer(text)
        tokens = lexer.get_all_tokens()
        return [t for t in tokens if t.type != TokenType.EOF]

    def test_structural_tokens(self):
        """Test that every structural character becomes its own token."""
        tokens = self._get_non_eof_tokens("{}[]:,")
        self.assertEqual(
            [t.type for t in tokens],
            [
                TokenType.LBRACE, TokenType.RBRACE, TokenType.LBRACKET,
                TokenType.RBRACKET, TokenType.COLON, TokenType.COMMA,
            ],
        )

    def test_string_tokenization(self):
        """Test basic string tokenization."""
        tokens = self._get_non_eof_tokens('"hello"')
        self.assertEqual(len(tokens), 1)
        self.assertEqual(tokens[0].type, TokenType.STRING)
        self.assertEqual(tokens[0].value, "hello")

    def test_escape_sequence_tokenization(self):
        """Test that escape sequences are properly decoded."""
        tokens = self._get_non_eof_tokens('"line1\\nline2"')
        self.assertEqual(tokens[0].value, "line1\nline2")

        tokens = self._get_non_eof_tokens('"quote: \\"test\\""')
        self.assertEqual(tokens[0].value, 'quote: "test"')

        tokens = self._get_non_eof_tokens('"a\\/b\\\\c"')
        self.assertEqual(tokens[0].value, "a/b\\c")

    def test_unicode_escapes(self):
        """Test \\u escapes including surrogate pairs."""
        tokens = self._get_non_eof_tokens('"\\u00e9"')
        self.assertEqual(tokens[0].value, "é")

        tokens = self._get_non_eof_tokens('"\\ud83d\\ude00"')
        self.assertEqual(tokens[0].value, "\U0001F600")

    def test_lone_surrogate_is_replaced(self):
        """Test that unpaired surrogates decode to the replacement character."""
        tokens = self._get_non_eof_tokens('"\\ud83dx"')
        self.assertEqual(tokens[0].value, "\ufffdx")

        tokens = self._get_non_eof_tokens('"\\ude00"')
        self.assertEqual(tokens[0].value, "\ufffd")

    def test_number_tokenization(self):
        """Test number tokenization accuracy."""
        test_cases = [
            ("123", "123"),
            ("-456", "-456"),
            ("0", "0"),
            ("78.90", "78.90"),
            ("1.23e-4", "1.23e-4"),
            ("5E+2", "5E+2"),
        ]

        for input_num, expected_value in test_cases:
            with self.subTest(input_num=input_num):
                tokens = self._get_non_eof_tokens(input_num)
                self.assertEqual(len(tokens), 1)
                self.assertEqual(tokens[0].type, TokenType.NUMBER)
                self.assertEqual(tokens[0].value, expected_value)

    def test_keywords_and_identifiers(self):
        """Test bare word classification."""
        tokens = self._get_non_eof_tokens("true false null stone")
        self.assertEqual(
            [t.type for t in tokens],
            [TokenType.BOOLEAN, TokenType.BOOLEAN, TokenType.NULL, TokenType.IDENTIFIER],
        )
        self.assertEqual(tokens[3].value, "stone")

    def test_comments(self):
        """Test line and block comments become COMMENT tokens."""
        tokens = self._get_non_eof_tokens('// line\n/* block */ "x"')
        self.assertEqual(
            [t.type for t in tokens],
            [TokenType.COMMENT, TokenType.COMMENT, TokenType.STRING],
        )
        self.assertEqual(tokens[0].value, " line")
        self.assertEqual(tokens[1].value, " block ")

    def test_positions(self):
        """Test that tokens carry line and column positions."""
        tokens = self._get_non_eof_tokens('{\n  "a": 1\n}')
        self.assertEqual(tokens[0].position, Position(1, 1))
        self.assertEqual(tokens[1].position, Position(2, 3))
        self.assertEqual(tokens[-1].position, Position(3, 1))

    def test_eof_token_is_last(self):
        """Test that tokenize always ends with a single EOF token."""
        tokens = Lexer("").get_all_tokens()
        self.assertEqual(len(tokens), 1)
        self.assertEqual(tokens[0].type, TokenType.EOF)


class TestTokenizerErrors(unittest.TestCase):
    """Test errors raised for invalid lexical input."""

    def _tokenize(self, text):
        return Lexer(text).get_all_tokens()

    def test_unterminated_string(self):
        """Test that a string running to the end of input is truncation."""
        with self.assertRaises(UnexpectedEndOfInputError):
            self._tokenize('"abc')

    def test_invalid_escape(self):
        """Test that unknown escapes are malformed."""
        with self.assertRaises(MalformedDocumentError) as cm:
            self._tokenize('"\\x"')
        self.assertIn("Invalid escape sequence", str(cm.exception))

    def test_invalid_unicode_escape(self):
        """Test that short or non-hex \\u escapes are malformed."""
        with self.assertRaises(MalformedDocumentError):
            self._tokenize('"\\u12g4"')

    def test_control_character_in_string(self):
        """Test that raw control characters are rejected inside strings."""
        with self.assertRaises(MalformedDocumentError):
            self._tokenize('"a\nb"')

    def test_invalid_numbers(self):
        """Test numbers outside the JSON grammar."""
        for text in ("01", "1.", "1e", "-", ".5"):
            with self.subTest(text=text):
                with self.assertRaises(MalformedDocumentError):
                    self._tokenize(text)

    def test_single_quotes_rejected(self):
        """Test that single quoted strings are rejected with a hint."""
        with self.assertRaises(MalformedDocumentError) as cm:
            self._tokenize("'x'")
        self.assertTrue(any("double quotes" in s for s in cm.exception.suggestions))

    def test_unterminated_block_comment(self):
        """Test that an unclosed block comment is truncation."""
        with self.assertRaises(UnexpectedEndOfInputError):
            self._tokenize("/* never closed")

    def test_lone_slash(self):
        """Test that a slash not starting a comment is malformed."""
        with self.assertRaises(MalformedDocumentError):
            self._tokenize("/x")

    def test_error_position(self):
        """Test that errors point at the offending character."""
        with self.assertRaises(MalformedDocumentError) as cm:
            self._tokenize('{\n  "a": @\n}')
        self.assertEqual(cm.exception.position, Position(2, 8))


if __name__ == "__main__":
    unittest.main()
