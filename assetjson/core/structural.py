"""
Default structural converters.

These converters serialize primitives, lists, string-keyed dicts, enums and
dataclasses field by field. They are built from type annotations once, when a
serialization context is constructed; reading and writing never inspects
annotations again.
"""

import dataclasses
import types
import typing
from enum import Enum, IntEnum
from typing import Any, Optional, Union, get_args, get_origin

from ..security.exceptions import NotSerializableError
from ..utils.config import SerializerOptions
from .interfaces import ConverterFactory, JsonConverter, Resolver
from .reader import JsonReader, JsonTokenType
from .writer import JsonWriter

_NONE_TYPE = type(None)


def _expect(reader: JsonReader, token_type: JsonTokenType, what: str) -> None:
    if reader.token_type is not token_type:
        reader.raise_malformed(
            f"Expected {what}, got {reader.token_type.value.lower().replace('_', ' ')}"
        )


def read_next(reader: JsonReader, structure: str) -> None:
    """Advance to the next non-comment token, failing on end of input."""
    while True:
        if not reader.read():
            reader.raise_unexpected_end(
                f"Unexpected end of input, expected the end of the {structure}"
            )
        if reader.token_type is not JsonTokenType.COMMENT:
            return


class StringConverter(JsonConverter[str]):
    def read(self, reader: JsonReader, type_to_convert: Any, options: SerializerOptions) -> str:
        _expect(reader, JsonTokenType.STRING, "a string")
        return reader.get_string() or ""

    def write(self, writer: JsonWriter, value: str, options: SerializerOptions) -> None:
        writer.write_string_value(value)


class IntConverter(JsonConverter[int]):
    def read(self, reader: JsonReader, type_to_convert: Any, options: SerializerOptions) -> int:
        return reader.get_int()

    def write(self, writer: JsonWriter, value: int, options: SerializerOptions) -> None:
        writer.write_number_value(value)


class FloatConverter(JsonConverter[float]):
    def read(self, reader: JsonReader, type_to_convert: Any, options: SerializerOptions) -> float:
        return reader.get_float()

    def write(self, writer: JsonWriter, value: float, options: SerializerOptions) -> None:
        writer.write_number_value(value)


class BoolConverter(JsonConverter[bool]):
    def read(self, reader: JsonReader, type_to_convert: Any, options: SerializerOptions) -> bool:
        return reader.get_bool()

    def write(self, writer: JsonWriter, value: bool, options: SerializerOptions) -> None:
        writer.write_boolean_value(value)


class EnumConverter(JsonConverter[Enum]):
    """Enums by value: numbers for IntEnum, strings otherwise."""

    def __init__(self, enum_type: type[Enum]) -> None:
        self.enum_type = enum_type
        self.numeric = issubclass(enum_type, IntEnum)

    def read(self, reader: JsonReader, type_to_convert: Any, options: SerializerOptions) -> Enum:
        raw: Any = reader.get_int() if self.numeric else reader.get_string()
        if raw is None:
            reader.raise_malformed(f"Expected a string for {self.enum_type.__name__}")
        try:
            return self.enum_type(raw)
        except ValueError:
            reader.raise_malformed(f"Invalid {self.enum_type.__name__} value {raw!r}")

    def write(self, writer: JsonWriter, value: Enum, options: SerializerOptions) -> None:
        if self.numeric:
            writer.write_number_value(int(value.value))
        else:
            writer.write_string_value(value.value)


class NullableConverter(JsonConverter[Optional[Any]]):
    """Maps null to None and delegates everything else."""

    def __init__(self, inner: JsonConverter[Any]) -> None:
        self.inner = inner

    def read(self, reader: JsonReader, type_to_convert: Any, options: SerializerOptions) -> Any:
        if reader.token_type is JsonTokenType.NULL:
            return None
        return self.inner.read(reader, type_to_convert, options)

    def write(self, writer: JsonWriter, value: Any, options: SerializerOptions) -> None:
        if value is None:
            writer.write_null_value()
        else:
            self.inner.write(writer, value, options)


class ListConverter(JsonConverter[list[Any]]):
    def __init__(self, item_converter: JsonConverter[Any]) -> None:
        self.item_converter = item_converter

    def read(self, reader: JsonReader, type_to_convert: Any, options: SerializerOptions) -> list[Any]:
        _expect(reader, JsonTokenType.START_ARRAY, "an array")
        result = []
        while True:
            read_next(reader, "array")
            if reader.token_type is JsonTokenType.END_ARRAY:
                return result
            result.append(self.item_converter.read(reader, type_to_convert, options))

    def write(self, writer: JsonWriter, value: list[Any], options: SerializerOptions) -> None:
        writer.write_start_array()
        for item in value:
            self.item_converter.write(writer, item, options)
        writer.write_end_array()


class DictConverter(JsonConverter[dict[str, Any]]):
    def __init__(self, value_converter: JsonConverter[Any]) -> None:
        self.value_converter = value_converter

    def read(
        self, reader: JsonReader, type_to_convert: Any, options: SerializerOptions
    ) -> dict[str, Any]:
        _expect(reader, JsonTokenType.START_OBJECT, "an object")
        result = {}
        while True:
            read_next(reader, "object")
            if reader.token_type is JsonTokenType.END_OBJECT:
                return result
            key = reader.get_string() or ""
            read_next(reader, "object")
            result[key] = self.value_converter.read(reader, type_to_convert, options)

    def write(self, writer: JsonWriter, value: dict[str, Any], options: SerializerOptions) -> None:
        writer.write_start_object()
        for key, item in value.items():
            writer.write_property_name(key)
            self.value_converter.write(writer, item, options)
        writer.write_end_object()


@dataclasses.dataclass
class PropertyInfo:
    """How one dataclass field maps to a JSON property."""

    attr_name: str
    json_name: str
    converter: JsonConverter[Any]
    required: bool


class ObjectConverter(JsonConverter[Any]):
    """Reads and writes a dataclass field by field.

    The JSON name of a field is taken from ``metadata["json"]`` and defaults
    to the attribute name. Unknown properties are skipped and missing ones
    keep their defaults.
    """

    def __init__(self, cls: type) -> None:
        self.cls = cls
        self.properties: list[PropertyInfo] = []
        self._by_json_name: dict[str, PropertyInfo] = {}

    def bind(self, resolve: Resolver) -> None:
        """Resolve field converters. Called once, after registration of the converter."""
        hints = typing.get_type_hints(self.cls)
        for field in dataclasses.fields(self.cls):
            if not field.init:
                continue
            factory: Optional[ConverterFactory] = field.metadata.get("converter")
            converter = factory(resolve) if factory else resolve(hints[field.name])
            required = (
                field.default is dataclasses.MISSING
                and field.default_factory is dataclasses.MISSING
            )
            info = PropertyInfo(
                attr_name=field.name,
                json_name=field.metadata.get("json", field.name),
                converter=converter,
                required=required,
            )
            self.properties.append(info)
            self._by_json_name[info.json_name] = info

    def read(self, reader: JsonReader, type_to_convert: Any, options: SerializerOptions) -> Any:
        _expect(reader, JsonTokenType.START_OBJECT, f"an object for {self.cls.__name__}")
        values: dict[str, Any] = {}
        while True:
            read_next(reader, "object")
            if reader.token_type is JsonTokenType.END_OBJECT:
                break

            info = self._by_json_name.get(reader.get_string() or "")
            if info is None:
                reader.skip()
                continue
            read_next(reader, "object")
            values[info.attr_name] = info.converter.read(reader, type_to_convert, options)

        missing = [p.json_name for p in self.properties if p.required and p.attr_name not in values]
        if missing:
            reader.raise_malformed(
                f"Missing required properties for {self.cls.__name__}: {', '.join(missing)}"
            )
        return self.cls(**values)

    def write(self, writer: JsonWriter, value: Any, options: SerializerOptions) -> None:
        writer.write_start_object()
        for info in self.properties:
            item = getattr(value, info.attr_name)
            if item is None and options.ignore_null_values:
                continue
            writer.write_property_name(info.json_name)
            info.converter.write(writer, item, options)
        writer.write_end_object()


_PRIMITIVES: dict[type, type[JsonConverter[Any]]] = {
    str: StringConverter,
    int: IntConverter,
    float: FloatConverter,
    bool: BoolConverter,
}


def _is_union(origin: Any) -> bool:
    if origin is Union:
        return True
    union_type = getattr(types, "UnionType", None)
    return union_type is not None and origin is union_type


def create_converter(tp: Any, resolve: Resolver) -> JsonConverter[Any]:
    """Build the structural converter for a type annotation.

    Dataclass converters are returned unbound; the caller registers them
    before calling ``bind`` so that self-referencing types resolve.
    """
    origin = get_origin(tp)
    args = get_args(tp)

    if _is_union(origin):
        members = [arg for arg in args if arg is not _NONE_TYPE]
        if len(members) == 1 and len(args) == 2:
            return NullableConverter(resolve(members[0]))
        raise NotSerializableError(f"Unsupported union type {tp!r}")

    if origin is list:
        return ListConverter(resolve(args[0] if args else Any))

    if origin is dict:
        if args and args[0] is not str:
            raise NotSerializableError(f"Dictionary keys must be str in {tp!r}")
        return DictConverter(resolve(args[1] if args else Any))

    is_class = origin is None and isinstance(tp, type)
    if is_class and tp in _PRIMITIVES:
        return _PRIMITIVES[tp]()

    if is_class and issubclass(tp, Enum):
        return EnumConverter(tp)

    if is_class and dataclasses.is_dataclass(tp):
        return ObjectConverter(tp)

    raise NotSerializableError(f"No converter available for {tp!r}")
