"""
Exceptions and error reporting for assetjson.

Every failure raised while reading a document carries the line and column of
the offending token, an excerpt of the source line and, where one exists, a
list of suggestions for fixing the document.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..core.tokenizer import Position


@dataclass
class ErrorContext:
    """Source excerpt around an error position."""

    text: str
    position: "Position"
    context_before: str
    context_after: str
    error_char: str
    line_text: str
    column_indicator: str


class AssetJsonError(Exception):
    """Base exception for all assetjson errors."""

    def __init__(
        self,
        message: str,
        position: Optional["Position"] = None,
        context: Optional[ErrorContext] = None,
        suggestions: Optional[list[str]] = None,
    ):
        self.message = message
        self.position = position
        self.context = context
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = self.message
        if self.position:
            msg += f" at line {self.position.line}, column {self.position.column}"

        parts = [msg]
        if self.context:
            parts.append(f"Context: {self.context.line_text}")
            parts.append(f"         {self.context.column_indicator}")

        if self.suggestions:
            parts.append("Suggestions:")
            parts.extend(f"  - {suggestion}" for suggestion in self.suggestions)

        return "\n".join(parts)


class ParseError(AssetJsonError):
    """Raised when a document cannot be decoded."""


class MalformedDocumentError(ParseError):
    """Raised when a token cannot be interpreted at its position."""


class UnexpectedEndOfInputError(ParseError):
    """Raised when the input ends before the current structure is closed."""


class SecurityError(AssetJsonError):
    """Raised when a document exceeds the configured limits."""


class NotSerializableError(AssetJsonError, TypeError):
    """Raised when a type is not known to a serialization context."""


class ErrorReporter:
    """Builds errors with source context for a given document text."""

    def __init__(self, text: str, context_width: int = 20):
        self.text = text
        self.lines = text.split("\n")
        self.context_width = context_width

    def create_parse_error(
        self,
        message: str,
        position: "Position",
        suggestions: Optional[list[str]] = None,
        error_cls: type[ParseError] = ParseError,
    ) -> ParseError:
        """Create a parse error of the given class with source context."""
        context = self._build_context(position)
        return error_cls(message, position, context, suggestions)

    def create_security_error(
        self, message: str, position: Optional["Position"] = None
    ) -> SecurityError:
        """Create a SecurityError, with context when a position is known."""
        context = self._build_context(position) if position else None
        return SecurityError(message, position, context)

    def _build_context(self, position: "Position") -> ErrorContext:
        line_index = min(max(position.line - 1, 0), max(len(self.lines) - 1, 0))
        line_text = self.lines[line_index] if self.lines else ""
        column = min(max(position.column, 1), len(line_text) + 1)

        before = line_text[: column - 1]
        after = line_text[column - 1 :]
        return ErrorContext(
            text=self.text,
            position=position,
            context_before=before[-self.context_width :],
            context_after=after[: self.context_width],
            error_char=after[:1],
            line_text=line_text,
            column_indicator=" " * (column - 1) + "^",
        )


class ErrorSuggestionEngine:
    """Produces human readable hints for common resource pack mistakes."""

    @staticmethod
    def suggest_for_unexpected_token(token: str) -> list[str]:
        """Suggestions for a token that is not valid at its position."""
        suggestions = []
        if token in ("'", "`"):
            suggestions.append("Use double quotes for strings")
        elif token in ("}", "]"):
            suggestions.append("Check for a missing value or an extra closing bracket")
        elif token == ",":
            suggestions.append("Remove the extra comma or enable trailing commas")
        elif token.startswith("/"):
            suggestions.append("Comments are not allowed with the current options")
        else:
            suggestions.append("Check for missing quotes, commas or colons")
        return suggestions

    @staticmethod
    def suggest_for_unclosed_structure(structure_type: str) -> list[str]:
        """Suggestions for an object or array that is never closed."""
        if structure_type == "object":
            return ["Add the missing '}' to close the object"]
        if structure_type == "array":
            return ["Add the missing ']' to close the array"]
        return [f"Close the {structure_type}"]

    @staticmethod
    def suggest_for_invalid_value(value: str) -> list[str]:
        """Suggestions for a value that does not fit the expected type."""
        suggestions = []
        if value in ("True", "False", "TRUE", "FALSE"):
            suggestions.append(f"Use lowercase '{value.lower()}' for booleans")
        elif value in ("None", "NULL", "nil"):
            suggestions.append("Use 'null' for missing values")
        elif value and (value[0].isdigit() or value[0] == "-"):
            suggestions.append(f'Quote the number as a string: "{value}"')
        elif value in ("{", "["):
            suggestions.append("Nested objects and arrays are not allowed here")
        return suggestions
