"""
Token writer for assetjson - emits JSON tokens as text.
"""

import json
import math
from typing import Optional, TextIO, Union


class JsonWriter:
    """Writes JSON tokens directly to a text stream.

    The writer inserts separators and, when ``indent`` is set, line breaks and
    indentation. It does not buffer: every call writes to the stream.
    """

    def __init__(self, stream: TextIO, indent: Optional[int] = None) -> None:
        self.stream = stream
        self.indent = indent
        # One entry per open container: number of items written so far
        self._counts: list[int] = []
        self._after_name = False

    @property
    def current_depth(self) -> int:
        """Number of containers currently open."""
        return len(self._counts)

    def write_start_object(self) -> None:
        self._before_value()
        self.stream.write("{")
        self._counts.append(0)

    def write_end_object(self) -> None:
        self._write_end("}")

    def write_start_array(self) -> None:
        self._before_value()
        self.stream.write("[")
        self._counts.append(0)

    def write_end_array(self) -> None:
        self._write_end("]")

    def write_property_name(self, name: str) -> None:
        """Write an object property name followed by a colon."""
        if not isinstance(name, str):
            raise TypeError(f"Property names must be str, not {type(name).__name__}")
        if not self._counts:
            raise ValueError("Property names can only be written inside an object")
        self._before_item()
        self.stream.write(json.dumps(name, ensure_ascii=False))
        self.stream.write(": " if self.indent is not None else ":")
        self._after_name = True

    def write_string_value(self, value: str) -> None:
        """Write a quoted string value."""
        if not isinstance(value, str):
            raise TypeError(f"String values must be str, not {type(value).__name__}")
        self._before_value()
        self.stream.write(json.dumps(value, ensure_ascii=False))

    def write_number_value(self, value: Union[int, float]) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"Number values must be int or float, not {type(value).__name__}")
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError(f"Out of range float values are not JSON compliant: {value!r}")
        self._before_value()
        self.stream.write(json.dumps(value))

    def write_boolean_value(self, value: bool) -> None:
        self._before_value()
        self.stream.write("true" if value else "false")

    def write_null_value(self) -> None:
        self._before_value()
        self.stream.write("null")

    def _before_value(self) -> None:
        if self._after_name:
            self._after_name = False
            return
        if self._counts:
            self._before_item()

    def _before_item(self) -> None:
        if self._counts[-1] > 0:
            self.stream.write(",")
        self._counts[-1] += 1
        self._newline(len(self._counts))

    def _write_end(self, char: str) -> None:
        count = self._counts.pop()
        if count > 0:
            self._newline(len(self._counts))
        self.stream.write(char)

    def _newline(self, depth: int) -> None:
        if self.indent is not None:
            self.stream.write("\n" + " " * (self.indent * depth))
