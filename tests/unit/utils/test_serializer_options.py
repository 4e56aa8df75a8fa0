"""
Test cases for serializer configuration.
"""

import dataclasses
import unittest

from assetjson.utils.config import CommentHandling, ParseLimits, SerializerOptions


class TestSerializerOptions(unittest.TestCase):
    """Test SerializerOptions defaults and presets."""

    def test_defaults_are_strict(self):
        options = SerializerOptions()
        self.assertFalse(options.allow_trailing_commas)
        self.assertEqual(options.comment_handling, CommentHandling.DISALLOW)
        self.assertFalse(options.ignore_null_values)
        self.assertIsNone(options.indent)
        self.assertEqual(options.limits, ParseLimits())

    def test_lenient_preset(self):
        options = SerializerOptions.lenient()
        self.assertTrue(options.allow_trailing_commas)
        self.assertEqual(options.comment_handling, CommentHandling.SKIP)

    def test_options_are_frozen(self):
        options = SerializerOptions()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            options.allow_trailing_commas = True

    def test_negative_indent_rejected(self):
        with self.assertRaises(ValueError):
            SerializerOptions(indent=-1)
        self.assertEqual(SerializerOptions(indent=0).indent, 0)


if __name__ == "__main__":
    unittest.main()
