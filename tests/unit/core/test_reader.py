"""
Test cases for the JSON token reader.

Tests focus on the token stream seen by converters, grammar enforcement,
leniency options and limits.
"""

import unittest

from assetjson.core.reader import JsonReader, JsonTokenType
from assetjson.security.exceptions import (
    MalformedDocumentError,
    SecurityError,
    UnexpectedEndOfInputError,
)
from assetjson.utils.config import CommentHandling, ParseLimits, SerializerOptions


def read_all(text, options=None):
    """Helper returning (token type, text) pairs for a whole document."""
    reader = JsonReader(text, options)
    result = []
    while reader.read():
        result.append((reader.token_type, reader.raw_value))
    return result


class TestJsonReaderTokens(unittest.TestCase):
    """Test the token sequence produced for valid documents."""

    def test_object_tokens(self):
        """Test that colons and commas are consumed internally."""
        tokens = read_all('{"a": "1", "b": [true, false, null, 2]}')
        self.assertEqual(
            [t for t, _ in tokens],
            [
                JsonTokenType.START_OBJECT,
                JsonTokenType.PROPERTY_NAME,
                JsonTokenType.STRING,
                JsonTokenType.PROPERTY_NAME,
                JsonTokenType.START_ARRAY,
                JsonTokenType.TRUE,
                JsonTokenType.FALSE,
                JsonTokenType.NULL,
                JsonTokenType.NUMBER,
                JsonTokenType.END_ARRAY,
                JsonTokenType.END_OBJECT,
            ],
        )
        self.assertEqual(tokens[1][1], "a")
        self.assertEqual(tokens[8][1], "2")

    def test_initial_state(self):
        """Test the reader state before the first read."""
        reader = JsonReader("{}")
        self.assertEqual(reader.token_type, JsonTokenType.NONE)
        self.assertEqual(reader.current_depth, 0)
        self.assertFalse(reader.is_exhausted)

    def test_exhaustion(self):
        """Test that read returns False after the end, repeatedly."""
        reader = JsonReader('"x"')
        self.assertTrue(reader.read())
        self.assertFalse(reader.read())
        self.assertFalse(reader.read())
        self.assertTrue(reader.is_exhausted)
        self.assertEqual(reader.token_type, JsonTokenType.NONE)

    def test_depth_tracking(self):
        """Test current_depth while walking nested containers."""
        reader = JsonReader('[{"a": []}]')
        depths = []
        while reader.read():
            depths.append(reader.current_depth)
        self.assertEqual(depths, [1, 2, 2, 3, 2, 1, 0])

    def test_accessors(self):
        """Test typed accessors on the current token."""
        reader = JsonReader('["s", 3, 2.5, true]')
        reader.read()
        reader.read()
        self.assertEqual(reader.get_string(), "s")
        reader.read()
        self.assertEqual(reader.get_int(), 3)
        self.assertEqual(reader.get_float(), 3.0)
        self.assertIsNone(reader.get_string())
        reader.read()
        self.assertEqual(reader.get_float(), 2.5)
        with self.assertRaises(MalformedDocumentError):
            reader.get_int()
        reader.read()
        self.assertTrue(reader.get_bool())

    def test_get_bool_on_string_fails(self):
        """Test that get_bool rejects non-boolean tokens."""
        reader = JsonReader('"true"')
        reader.read()
        with self.assertRaises(MalformedDocumentError):
            reader.get_bool()

    def test_bytes_input(self):
        """Test that bytes are decoded as UTF-8 with an optional BOM."""
        tokens = read_all(b'\xef\xbb\xbf{"k": "\xc3\xa9"}')
        self.assertEqual(tokens[2], (JsonTokenType.STRING, "é"))

    def test_skip_property_with_nested_value(self):
        """Test skipping a property name together with a nested value."""
        reader = JsonReader('{"a": {"b": [1, 2]}, "c": "x"}')
        reader.read()
        reader.read()
        reader.skip()
        self.assertEqual(reader.token_type, JsonTokenType.END_OBJECT)
        self.assertEqual(reader.current_depth, 1)
        reader.read()
        self.assertEqual(reader.get_string(), "c")

    def test_skip_scalar_property(self):
        """Test skipping a property with a scalar value."""
        reader = JsonReader('{"a": 1, "b": 2}')
        reader.read()
        reader.read()
        reader.skip()
        self.assertEqual(reader.token_type, JsonTokenType.NUMBER)
        reader.read()
        self.assertEqual(reader.get_string(), "b")

    def test_skip_truncated(self):
        """Test that skipping past the end of input is truncation."""
        reader = JsonReader('{"a": [1, 2')
        reader.read()
        reader.read()
        with self.assertRaises(UnexpectedEndOfInputError):
            reader.skip()


class TestJsonReaderGrammar(unittest.TestCase):
    """Test grammar errors."""

    def assertMalformed(self, text, fragment=None, options=None):
        with self.assertRaises(MalformedDocumentError) as cm:
            read_all(text, options)
        if fragment:
            self.assertIn(fragment, cm.exception.message)

    def test_missing_colon(self):
        self.assertMalformed('{"a" "b"}', "Expected ':'")

    def test_missing_comma(self):
        self.assertMalformed('["a" "b"]', "Expected ','")

    def test_unquoted_property_name(self):
        self.assertMalformed('{a: "b"}', "Expected a property name")

    def test_bare_word_value(self):
        self.assertMalformed('{"a": stone}', "Unexpected token 'stone'")

    def test_mismatched_brackets(self):
        self.assertMalformed("[}")
        self.assertMalformed("{]")

    def test_content_after_document(self):
        self.assertMalformed("{} {}", "after the end of the document")

    def test_leading_comma(self):
        self.assertMalformed("[,1]")

    def test_trailing_comma_rejected_by_default(self):
        self.assertMalformed('{"a": "1",}', "Trailing comma before '}'")
        self.assertMalformed("[1,]", "Trailing comma before ']'")

    def test_comments_rejected_by_default(self):
        self.assertMalformed('{"a": "1" // note\n}', "Comments are not allowed")

    def test_error_position(self):
        """Test that grammar errors point at the offending token."""
        with self.assertRaises(MalformedDocumentError) as cm:
            read_all('{\n  "a": "1",\n  "b" 2\n}')
        self.assertEqual(cm.exception.position.line, 3)
        self.assertEqual(cm.exception.position.column, 7)


class TestJsonReaderLeniency(unittest.TestCase):
    """Test trailing comma and comment options."""

    def test_trailing_commas_allowed(self):
        options = SerializerOptions(allow_trailing_commas=True)
        tokens = read_all('{"a": [1, 2,],}', options)
        self.assertEqual(tokens[-1][0], JsonTokenType.END_OBJECT)
        self.assertEqual(tokens[-2][0], JsonTokenType.END_ARRAY)

    def test_double_comma_still_rejected(self):
        options = SerializerOptions(allow_trailing_commas=True)
        with self.assertRaises(MalformedDocumentError):
            read_all("[1,,]", options)

    def test_comments_skipped(self):
        options = SerializerOptions(comment_handling=CommentHandling.SKIP)
        tokens = read_all('/* head */ {"a": /* inline */ "1" // tail\n}', options)
        self.assertNotIn(JsonTokenType.COMMENT, [t for t, _ in tokens])
        self.assertEqual(len(tokens), 4)

    def test_comments_surfaced(self):
        options = SerializerOptions(comment_handling=CommentHandling.ALLOW)
        reader = JsonReader('{"a": "1" // tail\n}', options)
        types = []
        while reader.read():
            types.append(reader.token_type)
            if reader.token_type is JsonTokenType.COMMENT:
                self.assertEqual(reader.get_string(), " tail")
        self.assertEqual(types[-2], JsonTokenType.COMMENT)


class TestJsonReaderLimits(unittest.TestCase):
    """Test that reading limits are enforced."""

    def _options(self, **limits):
        return SerializerOptions(limits=ParseLimits(**limits))

    def test_input_size(self):
        with self.assertRaises(SecurityError):
            JsonReader("[1, 2, 3]", self._options(max_input_size=5))

    def test_nesting_depth(self):
        with self.assertRaises(SecurityError):
            read_all("[[[1]]]", self._options(max_nesting_depth=2))
        self.assertEqual(len(read_all("[[1]]", self._options(max_nesting_depth=2))), 5)

    def test_string_length(self):
        with self.assertRaises(SecurityError):
            read_all('["abcd"]', self._options(max_string_length=3))
        with self.assertRaises(SecurityError):
            read_all('{"abcd": "a"}', self._options(max_string_length=3))


class TestJsonReaderTruncation(unittest.TestCase):
    """Test that unterminated documents simply run out of tokens."""

    def test_read_returns_false_inside_object(self):
        reader = JsonReader('{"a": "1"')
        while reader.read():
            pass
        self.assertEqual(reader.current_depth, 1)

    def test_raise_unexpected_end(self):
        reader = JsonReader("[")
        reader.read()
        self.assertFalse(reader.read())
        with self.assertRaises(UnexpectedEndOfInputError):
            reader.raise_unexpected_end("expected ']'")


if __name__ == "__main__":
    unittest.main()
