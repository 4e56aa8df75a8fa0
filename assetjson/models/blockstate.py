"""
Block state definitions (assets/<namespace>/blockstates/*.json).

A block state either selects models through ``variants``, keyed by property
selectors such as ``"facing=north,half=top"``, or combines models through
``multipart`` entries guarded by ``when`` conditions. Conditions are string
maps and are the usual place where packs write ``true`` instead of ``"true"``.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from ..core.interfaces import JsonConverter, Resolver
from ..core.reader import JsonReader, JsonTokenType
from ..core.structural import read_next
from ..core.string_map import StringMap, StringMapConverter
from ..core.writer import JsonWriter
from ..security.exceptions import NotSerializableError
from ..utils.config import SerializerOptions

OR_KEY = "OR"


class VariantListConverter(JsonConverter[Optional[list["BlockStateVariant"]]]):
    """A single variant object or an array of variants."""

    def __init__(self, resolve: Resolver) -> None:
        self.variant_converter = resolve(BlockStateVariant)

    def read(
        self, reader: JsonReader, type_to_convert: Any, options: SerializerOptions
    ) -> Optional[list["BlockStateVariant"]]:
        if reader.token_type is JsonTokenType.NULL:
            return None
        if reader.token_type is JsonTokenType.START_OBJECT:
            return [self.variant_converter.read(reader, BlockStateVariant, options)]
        if reader.token_type is not JsonTokenType.START_ARRAY:
            reader.raise_malformed("Expected a variant object or an array of variants")

        variants = []
        while True:
            read_next(reader, "variant array")
            if reader.token_type is JsonTokenType.END_ARRAY:
                return variants
            variants.append(self.variant_converter.read(reader, BlockStateVariant, options))

    def write(
        self,
        writer: JsonWriter,
        value: Optional[list["BlockStateVariant"]],
        options: SerializerOptions,
    ) -> None:
        if value is None:
            writer.write_null_value()
            return
        writer.write_start_array()
        for variant in value:
            self.variant_converter.write(writer, variant, options)
        writer.write_end_array()


class BlockStateVariantsConverter(JsonConverter["BlockStateVariants"]):
    def __init__(self, resolve: Resolver) -> None:
        self.list_converter = VariantListConverter(resolve)

    def read(
        self, reader: JsonReader, type_to_convert: Any, options: SerializerOptions
    ) -> "BlockStateVariants":
        if reader.token_type is not JsonTokenType.START_OBJECT:
            reader.raise_malformed("Expected an object for block state variants")

        variants = BlockStateVariants()
        while True:
            read_next(reader, "variants object")
            if reader.token_type is JsonTokenType.END_OBJECT:
                return variants
            selector = reader.get_string() or ""
            read_next(reader, "variants object")
            variants[selector] = self.list_converter.read(reader, type_to_convert, options) or []

    def write(
        self, writer: JsonWriter, value: "BlockStateVariants", options: SerializerOptions
    ) -> None:
        writer.write_start_object()
        for selector, variants in value.items():
            writer.write_property_name(selector)
            self.list_converter.write(writer, variants, options)
        writer.write_end_object()


class BlockStateWhenConverter(JsonConverter["BlockStateWhen"]):
    """Reads a plain condition object or an ``{"OR": [...]}`` object."""

    def __init__(self, resolve: Resolver) -> None:
        converter = resolve(StringMap)
        if not isinstance(converter, StringMapConverter):
            raise NotSerializableError(
                "Block state conditions need a StringMapConverter for StringMap"
            )
        self.map_converter = converter

    def read(
        self, reader: JsonReader, type_to_convert: Any, options: SerializerOptions
    ) -> "BlockStateWhen":
        if reader.token_type is not JsonTokenType.START_OBJECT:
            reader.raise_malformed("Expected an object for a multipart condition")

        when = BlockStateWhen()
        read_next(reader, "condition")
        if reader.token_type is JsonTokenType.END_OBJECT:
            return when

        name = reader.get_string() or ""
        read_next(reader, "condition")
        if name != OR_KEY:
            condition = StringMap()
            condition[name] = self.map_converter.read_value(reader, name)
            when.append(self.map_converter.read_members(reader, condition))
            return when

        if reader.token_type is not JsonTokenType.START_ARRAY:
            reader.raise_malformed(f"Expected an array of conditions for '{OR_KEY}'")
        while True:
            read_next(reader, "condition array")
            if reader.token_type is JsonTokenType.END_ARRAY:
                break
            when.append(self.map_converter.read(reader, StringMap, options))

        read_next(reader, "condition")
        if reader.token_type is not JsonTokenType.END_OBJECT:
            reader.raise_malformed(f"'{OR_KEY}' must be the only property of a condition")
        return when

    def write(
        self, writer: JsonWriter, value: "BlockStateWhen", options: SerializerOptions
    ) -> None:
        if len(value) == 1:
            self.map_converter.write(writer, value[0], options)
            return

        writer.write_start_object()
        if value:
            writer.write_property_name(OR_KEY)
            writer.write_start_array()
            for condition in value:
                self.map_converter.write(writer, condition, options)
            writer.write_end_array()
        writer.write_end_object()


@dataclass
class BlockStateVariant:
    model: str = ""
    x: float = 0.0
    y: float = 0.0
    uv_lock: bool = field(default=False, metadata={"json": "uvlock"})
    weight: float = 1.0


class BlockStateVariants(dict[str, list[BlockStateVariant]]):
    """Variant lists keyed by property selector."""

    __json_converter__ = BlockStateVariantsConverter

    def get_variants_by_properties(
        self, properties: Optional[Mapping[str, str]]
    ) -> list[BlockStateVariant]:
        """Variants of the first selector matched by ``properties``.

        A selector matches when every ``name=value`` pair in it equals the
        block's property; the empty selector matches any block.
        """
        for selector, variants in self.items():
            pairs = [part.split("=", 1) for part in selector.split(",") if "=" in part]
            if all(
                properties is not None and properties.get(name) == value
                for name, value in pairs
            ):
                return variants
        return []


class BlockStateWhen(list[StringMap]):
    """Multipart condition: matches if any of its condition maps matches."""

    __json_converter__ = BlockStateWhenConverter

    def check(self, properties: Optional[Mapping[str, str]]) -> bool:
        if not self:
            return True
        return any(_condition_matches(condition, properties) for condition in self)


def _condition_matches(
    condition: Mapping[str, str], properties: Optional[Mapping[str, str]]
) -> bool:
    for name, expected in condition.items():
        value = properties.get(name) if properties is not None else None
        # Alternatives are separated by '|', e.g. "north|south"
        if value is None or value not in expected.split("|"):
            return False
    return True


@dataclass
class BlockStateMultipart:
    apply: Optional[list[BlockStateVariant]] = field(
        default=None, metadata={"converter": VariantListConverter}
    )
    when: Optional[BlockStateWhen] = None

    def applies_to(self, properties: Optional[Mapping[str, str]]) -> bool:
        return self.when is None or self.when.check(properties)


@dataclass
class BlockState:
    variants: Optional[BlockStateVariants] = None
    multipart: Optional[list[BlockStateMultipart]] = None

    def select_variants(
        self, properties: Optional[Mapping[str, str]]
    ) -> list[list[BlockStateVariant]]:
        """Candidate variant lists for a block with the given properties.

        With ``variants`` this is the matched list; with ``multipart`` every
        part whose condition holds contributes its ``apply`` list.
        """
        result = []
        if self.variants is not None:
            result.append(self.variants.get_variants_by_properties(properties))
        if self.multipart is not None:
            for part in self.multipart:
                if part.apply and part.applies_to(properties):
                    result.append(part.apply)
        return result
