"""
Module-level entry points mirroring the ``json`` module API.

Unlike ``json.loads`` every call names the record type to produce; the type
must be registered in the serialization context that is used.
"""

import io
from collections.abc import Mapping
from typing import Any, Optional, TextIO, TypeVar, Union

from ..core.reader import JsonReader, JsonTokenType
from ..core.string_map import StringMap, StringMapConverter
from ..core.writer import JsonWriter
from ..utils.config import SerializerOptions
from .context import JSON_CONTEXT, SerializationContext

T = TypeVar("T")

_STRING_MAP_CONVERTER = StringMapConverter()


def loads(
    s: Union[str, bytes, bytearray],
    tp: type[T],
    *,
    context: Optional[SerializationContext] = None,
) -> T:
    """
    Deserialize a JSON document to an instance of ``tp``.

    Parameters:
        s: JSON text; bytes are decoded as UTF-8
        tp: Registered type to produce
        context: Serialization context, JSON_CONTEXT by default

    Returns:
        The decoded record

    Raises:
        MalformedDocumentError: If the document violates the grammar or the type
        UnexpectedEndOfInputError: If the document is truncated
        NotSerializableError: If ``tp`` is not registered in the context
    """
    return (context or JSON_CONTEXT).deserialize(s, tp)


def load(
    fp: TextIO,
    tp: type[T],
    *,
    context: Optional[SerializationContext] = None,
) -> T:
    """Same as loads() but reads from a file-like object."""
    return loads(fp.read(), tp, context=context)


def dumps(
    obj: Any,
    tp: Optional[type] = None,
    *,
    context: Optional[SerializationContext] = None,
    indent: Optional[int] = None,
) -> str:
    """
    Serialize a registered record to a JSON string.

    ``tp`` defaults to the type of ``obj``. ``indent`` overrides the indent
    of the context options.
    """
    return (context or JSON_CONTEXT).serialize(obj, tp, indent=indent)


def dump(
    obj: Any,
    fp: TextIO,
    tp: Optional[type] = None,
    *,
    context: Optional[SerializationContext] = None,
    indent: Optional[int] = None,
) -> None:
    """Same as dumps() but writes to a file-like object."""
    (context or JSON_CONTEXT).serialize_to(obj, fp, tp, indent=indent)


def decode_string_map(
    text: Union[str, bytes, bytearray], options: Optional[SerializerOptions] = None
) -> StringMap:
    """Decode a standalone string map document with the tolerant codec."""
    if options is None:
        return JSON_CONTEXT.deserialize(text, StringMap)

    reader = JsonReader(text, options)
    while True:
        if not reader.read():
            reader.raise_unexpected_end("Empty document, expected a string map")
        if reader.token_type is not JsonTokenType.COMMENT:
            break
    result = _STRING_MAP_CONVERTER.read(reader, StringMap, options)
    while reader.read():
        if reader.token_type is not JsonTokenType.COMMENT:
            reader.raise_malformed("Unexpected content after the end of the document")
    return result


def encode_string_map(mapping: Mapping[str, str], indent: Optional[int] = None) -> str:
    """Encode any ``str -> str`` mapping as a JSON object."""
    stream = io.StringIO()
    writer = JsonWriter(stream, indent)
    _STRING_MAP_CONVERTER.write(writer, StringMap(mapping), SerializerOptions())
    return stream.getvalue()
