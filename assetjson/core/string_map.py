"""
Tolerant string map codec.

A few resource packs write the values of string maps (block state conditions,
model texture tables) as native JSON booleans or null instead of strings,
e.g. ``{"up": true}`` where ``{"up": "true"}`` is meant. This converter reads
such maps and normalizes every value to a string:

    "text" -> "text"
    true   -> "true"
    false  -> "false"
    null   -> ""

Any other value (number, array, object) is rejected. Maps are always written
back with quoted string values, so one decode/encode pass normalizes a
document for good.
"""

import logging
from collections.abc import Mapping
from typing import Any

from ..security.exceptions import ErrorSuggestionEngine
from ..utils.config import SerializerOptions
from .constants import BOOLEAN_FALSE_TEXT, BOOLEAN_TRUE_TEXT, NULL_TEXT
from .interfaces import JsonConverter
from .reader import JsonReader, JsonTokenType
from .writer import JsonWriter

logger = logging.getLogger(__name__)

_COERCED_VALUES = {
    JsonTokenType.TRUE: BOOLEAN_TRUE_TEXT,
    JsonTokenType.FALSE: BOOLEAN_FALSE_TEXT,
    JsonTokenType.NULL: NULL_TEXT,
}


class StringMap(dict[str, str]):
    """Ordered mapping of string keys to string values."""

    def __repr__(self) -> str:
        return f"StringMap({dict.__repr__(self)})"


class StringMapConverter(JsonConverter[StringMap]):
    """Reads string maps whose values may be strings, booleans or null."""

    def read(
        self, reader: JsonReader, type_to_convert: Any, options: SerializerOptions
    ) -> StringMap:
        if reader.token_type is not JsonTokenType.START_OBJECT:
            reader.raise_malformed(
                f"Expected an object for a string map, got "
                f"{reader.token_type.value.lower()}"
            )

        return self.read_members(reader, StringMap())

    def read_members(self, reader: JsonReader, result: StringMap) -> StringMap:
        """Read entries into ``result`` until the end of the current object.

        The reader is positioned on the object's START_OBJECT token or on the
        last token of an entry that was already read.
        """
        while reader.read():
            if reader.token_type is JsonTokenType.END_OBJECT:
                return result
            if reader.token_type is JsonTokenType.COMMENT:
                continue

            key = reader.get_string() or ""
            if not reader.read():
                break
            while reader.token_type is JsonTokenType.COMMENT:
                if not reader.read():
                    reader.raise_unexpected_end(
                        f"Unexpected end of input, expected a value for '{key}'"
                    )
            result[key] = self.read_value(reader, key)

        reader.raise_unexpected_end(
            "Unexpected end of input, expected '}' to close string map",
            ErrorSuggestionEngine.suggest_for_unclosed_structure("object"),
        )

    def read_value(self, reader: JsonReader, key: str) -> str:
        """Normalize the value token the reader is positioned on."""
        token_type = reader.token_type
        if token_type is JsonTokenType.STRING:
            return reader.get_string() or ""

        if token_type in _COERCED_VALUES:
            logger.debug(
                f"Coerced {token_type.value.lower()} value of '{key}' to a string "
                f"at line {reader.token_position.line}"
            )
            return _COERCED_VALUES[token_type]

        raw = reader.raw_value
        reader.raise_malformed(
            f"Unsupported {token_type.value.lower()} value for '{key}' in string map",
            ErrorSuggestionEngine.suggest_for_invalid_value(raw),
        )

    def write(
        self, writer: JsonWriter, value: Mapping[str, str], options: SerializerOptions
    ) -> None:
        writer.write_start_object()
        for key, item in value.items():
            writer.write_property_name(key)
            writer.write_string_value(item)
        writer.write_end_object()
