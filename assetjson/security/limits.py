"""
Document limits for assetjson readers.

Resource packs come from untrusted sources; every reader checks the size of
its input, the length of each string and the depth of nested containers
against the configured ParseLimits.
"""

from typing import TYPE_CHECKING, NoReturn, Optional

from ..utils.config import ParseLimits
from .exceptions import ErrorReporter, SecurityError

if TYPE_CHECKING:
    from ..core.tokenizer import Position


class LimitValidator:
    """Checks one document against ParseLimits, tracking the open container depth."""

    def __init__(self, limits: ParseLimits, reporter: Optional[ErrorReporter] = None):
        self.limits = limits
        self.reporter = reporter
        self.nesting_depth = 0

    def validate_input_size(self, text: str) -> None:
        size = len(text)
        if size > self.limits.max_input_size:
            raise SecurityError(
                f"Input size {size} exceeds limit {self.limits.max_input_size}",
                suggestions=["Raise ParseLimits.max_input_size for large documents"],
            )

    def validate_string_length(
        self, string: str, position: Optional["Position"] = None
    ) -> None:
        """Reject property names and string values above max_string_length."""
        if len(string) > self.limits.max_string_length:
            self._fail(
                f"String length {len(string)} exceeds limit {self.limits.max_string_length}",
                position,
            )

    def enter_structure(self, position: Optional["Position"] = None) -> None:
        """Count an opened object or array."""
        self.nesting_depth += 1
        if self.nesting_depth > self.limits.max_nesting_depth:
            self._fail(
                f"Nesting depth {self.nesting_depth} exceeds limit "
                f"{self.limits.max_nesting_depth}",
                position,
            )

    def exit_structure(self) -> None:
        if self.nesting_depth > 0:
            self.nesting_depth -= 1

    def _fail(self, message: str, position: Optional["Position"]) -> NoReturn:
        if self.reporter is not None:
            raise self.reporter.create_security_error(message, position)
        raise SecurityError(message, position)
