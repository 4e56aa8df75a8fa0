"""
Serialization contexts: the static registry of serializable types.

A context is built once from a closed list of root types and a table of
converter bindings. Construction resolves a converter for every root type and
for every type reachable from their fields; afterwards the context is
read-only and can be shared between threads without locking.
"""

import io
import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, Optional, TextIO, Union, get_origin

from ..core.interfaces import JsonConverter
from ..core.reader import JsonReader, JsonTokenType
from ..core.string_map import StringMap, StringMapConverter
from ..core.structural import ObjectConverter, create_converter
from ..core.writer import JsonWriter
from ..models import BlockState, Model, RegionInfo, TextureMeta, WorldInfo
from ..security.exceptions import NotSerializableError
from ..utils.config import SerializerOptions

logger = logging.getLogger(__name__)

# Annotations that are handled as if they were written StringMap
_STRING_MAP_ALIASES = (dict[str, str],)


class SerializationContext:
    """Closed set of serializable types with their converters and options."""

    def __init__(
        self,
        types: Iterable[type],
        *,
        converters: Optional[Mapping[Any, JsonConverter[Any]]] = None,
        options: Optional[SerializerOptions] = None,
    ) -> None:
        self._options = options or SerializerOptions()
        self._bindings = MappingProxyType(dict(converters or {}))
        self._types = frozenset(types)

        resolved: dict[Any, JsonConverter[Any]] = {}
        for tp in self._types:
            self._resolve(tp, resolved)
        self._converters = MappingProxyType(resolved)

        logger.debug(
            f"Serialization context built for {len(self._types)} types, "
            f"{len(self._converters)} converters, {len(self._bindings)} bindings"
        )

    @property
    def options(self) -> SerializerOptions:
        return self._options

    @property
    def serializable_types(self) -> frozenset[type]:
        return self._types

    @property
    def bindings(self) -> Mapping[Any, JsonConverter[Any]]:
        """Custom converters that replace the structural codec for their type."""
        return self._bindings

    def is_serializable(self, tp: Any) -> bool:
        return tp in self._types

    def get_converter(self, tp: Any) -> JsonConverter[Any]:
        """Converter for a registered type."""
        if tp not in self._types:
            raise NotSerializableError(
                f"{getattr(tp, '__name__', tp)} is not registered in this serialization context",
                suggestions=[
                    "Register the type when building the context: "
                    + ", ".join(sorted(t.__name__ for t in self._types))
                ],
            )
        return self._converters[tp]

    def deserialize(self, data: Union[str, bytes, bytearray], tp: type) -> Any:
        """Decode a complete document into an instance of ``tp``."""
        converter = self.get_converter(tp)
        reader = JsonReader(data, self._options)
        if not _read_content(reader):
            reader.raise_unexpected_end(f"Empty document, expected {tp.__name__}")

        value = converter.read(reader, tp, self._options)
        while reader.read():
            if reader.token_type is not JsonTokenType.COMMENT:
                reader.raise_malformed("Unexpected content after the end of the document")
        return value

    def serialize(
        self, value: Any, tp: Optional[type] = None, *, indent: Optional[int] = None
    ) -> str:
        """Encode ``value`` as a complete document."""
        stream = io.StringIO()
        self.serialize_to(value, stream, tp, indent=indent)
        return stream.getvalue()

    def serialize_to(
        self,
        value: Any,
        stream: TextIO,
        tp: Optional[type] = None,
        *,
        indent: Optional[int] = None,
    ) -> None:
        """Encode ``value`` directly into a text stream."""
        converter = self.get_converter(tp if tp is not None else type(value))
        writer = JsonWriter(stream, indent if indent is not None else self._options.indent)
        converter.write(writer, value, self._options)

    def _resolve(self, tp: Any, resolved: dict[Any, JsonConverter[Any]]) -> JsonConverter[Any]:
        if tp in _STRING_MAP_ALIASES:
            tp = StringMap
        if tp in resolved:
            return resolved[tp]

        def resolve(nested: Any) -> JsonConverter[Any]:
            return self._resolve(nested, resolved)

        if tp in self._bindings:
            converter = self._bindings[tp]
        elif get_origin(tp) is None and isinstance(tp, type) and "__json_converter__" in vars(tp):
            converter = vars(tp)["__json_converter__"](resolve)
        else:
            converter = create_converter(tp, resolve)

        resolved[tp] = converter
        if isinstance(converter, ObjectConverter):
            converter.bind(resolve)
        return converter


def _read_content(reader: JsonReader) -> bool:
    while reader.read():
        if reader.token_type is not JsonTokenType.COMMENT:
            return True
    return False


#: Types exchanged with the export pipeline
SERIALIZABLE_TYPES = (WorldInfo, RegionInfo, Model, BlockState, TextureMeta, StringMap)

#: The process-wide context: resource pack leniency and the tolerant string map codec
JSON_CONTEXT = SerializationContext(
    SERIALIZABLE_TYPES,
    converters={StringMap: StringMapConverter()},
    options=SerializerOptions.lenient(),
)
