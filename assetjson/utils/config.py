"""
Configuration and limits for assetjson serialization.

This module defines the parsing leniency policy and the security limits
applied to every document read through a serialization context.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class CommentHandling(Enum):
    """How comments inside a document are treated by the reader."""

    DISALLOW = "disallow"  # Raise MalformedDocumentError
    SKIP = "skip"  # Drop comments silently
    ALLOW = "allow"  # Surface comments as COMMENT tokens


@dataclass(frozen=True)
class ParseLimits:
    """Security limits for document reading to prevent abuse."""

    max_input_size: int = 10 * 1024 * 1024
    max_string_length: int = 1024 * 1024
    max_nesting_depth: int = 64

    def __post_init__(self) -> None:
        if self.max_input_size <= 0:
            raise ValueError("max_input_size must be positive")
        if self.max_string_length <= 0:
            raise ValueError("max_string_length must be positive")
        if self.max_nesting_depth <= 0:
            raise ValueError("max_nesting_depth must be positive")


@dataclass(frozen=True)
class SerializerOptions:
    """Options shared by every read and write through a context."""

    allow_trailing_commas: bool = False
    comment_handling: CommentHandling = CommentHandling.DISALLOW
    ignore_null_values: bool = False
    indent: Optional[int] = None
    limits: ParseLimits = field(default_factory=ParseLimits)

    def __post_init__(self) -> None:
        if self.indent is not None and self.indent < 0:
            raise ValueError("indent must not be negative")

    @classmethod
    def lenient(cls) -> "SerializerOptions":
        """Options used for resource pack documents: trailing commas, comments skipped."""
        return cls(
            allow_trailing_commas=True,
            comment_handling=CommentHandling.SKIP,
        )
