"""
Core interfaces for the converter system.

A converter reads one value from a JsonReader positioned on the value's first
token, leaving the reader on the value's last token, and writes one value to a
JsonWriter.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, TypeVar

from ..utils.config import SerializerOptions
from .reader import JsonReader
from .writer import JsonWriter

T = TypeVar("T")


class JsonConverter(ABC, Generic[T]):
    """Paired read/write logic for one value type."""

    @abstractmethod
    def read(self, reader: JsonReader, type_to_convert: Any, options: SerializerOptions) -> T:
        """Read a value; the reader is positioned on its first token."""

    @abstractmethod
    def write(self, writer: JsonWriter, value: T, options: SerializerOptions) -> None:
        """Write a value."""


# Resolves a type annotation to the converter that handles it
Resolver = Callable[[Any], JsonConverter[Any]]

# Builds a converter once the resolver for nested types is known
ConverterFactory = Callable[[Resolver], JsonConverter[Any]]
