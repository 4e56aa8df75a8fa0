"""
Token reader for assetjson - turns lexical tokens into JSON tokens.

The reader is a positioned cursor: it starts before the first token and every
call to read() moves it one JSON token forward. Colons and commas are checked
and consumed internally, so converters only ever see structural starts and
ends, property names and scalar values.
"""

from collections.abc import Iterator
from enum import Enum
from typing import NoReturn, Optional, Union

from ..security.exceptions import (
    ErrorReporter,
    ErrorSuggestionEngine,
    MalformedDocumentError,
    UnexpectedEndOfInputError,
)
from ..security.limits import LimitValidator
from ..utils.config import CommentHandling, SerializerOptions
from .tokenizer import Lexer, Position, Token, TokenType


class JsonTokenType(Enum):
    """JSON token types surfaced by JsonReader."""

    NONE = "NONE"
    START_OBJECT = "START_OBJECT"
    END_OBJECT = "END_OBJECT"
    START_ARRAY = "START_ARRAY"
    END_ARRAY = "END_ARRAY"
    PROPERTY_NAME = "PROPERTY_NAME"
    STRING = "STRING"
    NUMBER = "NUMBER"
    TRUE = "TRUE"
    FALSE = "FALSE"
    NULL = "NULL"
    COMMENT = "COMMENT"


class _Expect(Enum):
    """What the grammar accepts next."""

    VALUE = "VALUE"
    VALUE_OR_END = "VALUE_OR_END"
    NAME = "NAME"
    NAME_OR_END = "NAME_OR_END"
    COLON = "COLON"
    COMMA_OR_END = "COMMA_OR_END"
    DONE = "DONE"


_OBJECT = "object"
_ARRAY = "array"


class JsonReader:
    """Forward-only cursor over the JSON tokens of a single document."""

    def __init__(
        self,
        text: Union[str, bytes, bytearray],
        options: Optional[SerializerOptions] = None,
    ) -> None:
        if isinstance(text, (bytes, bytearray)):
            text = text.decode("utf-8-sig")

        self.options = options or SerializerOptions()
        self.text = text
        self.validator = LimitValidator(self.options.limits)
        self.validator.validate_input_size(text)
        self._reporter = ErrorReporter(text)
        self.validator.reporter = self._reporter

        self._tokens: Iterator[Token] = Lexer(text).tokenize()
        self._stack: list[str] = []
        self._expect = _Expect.VALUE
        self._token_type = JsonTokenType.NONE
        self._token: Optional[Token] = None
        self._last_position = Position(1, 1)
        self._after_comma = False
        self._exhausted = False

    @property
    def token_type(self) -> JsonTokenType:
        """Type of the current token (NONE before the first read and after the end)."""
        return self._token_type

    @property
    def token_position(self) -> Position:
        """Position of the current token, or of the last token seen."""
        if self._token is not None:
            return self._token.position
        return self._last_position

    @property
    def raw_value(self) -> str:
        """Source text of the current token (decoded text for strings)."""
        if self._token is None:
            return ""
        return self._token.value

    @property
    def current_depth(self) -> int:
        """Number of containers currently open."""
        return len(self._stack)

    @property
    def is_exhausted(self) -> bool:
        """Whether the end of the input has been reached."""
        return self._exhausted

    def read(self) -> bool:
        """Advance to the next JSON token. Returns False once the input is exhausted."""
        if self._exhausted:
            return False

        while True:
            token = next(self._tokens)
            self._last_position = token.position

            if token.type is TokenType.COMMENT:
                if self._accept_comment(token):
                    return True
                continue

            if token.type is TokenType.EOF:
                self._token = None
                self._token_type = JsonTokenType.NONE
                self._exhausted = True
                return False

            if self._consume_punctuation(token):
                continue

            self._token = token
            self._token_type = self._dispatch(token)
            return True

    def skip(self) -> None:
        """Skip the current value, or the current property name and its value."""
        if self._token_type is JsonTokenType.PROPERTY_NAME:
            self._read_or_fail()
            while self._token_type is JsonTokenType.COMMENT:
                self._read_or_fail()

        if self._token_type in (JsonTokenType.START_OBJECT, JsonTokenType.START_ARRAY):
            depth = self.current_depth
            while True:
                self._read_or_fail()
                if (
                    self._token_type in (JsonTokenType.END_OBJECT, JsonTokenType.END_ARRAY)
                    and self.current_depth < depth
                ):
                    break

    def get_string(self) -> Optional[str]:
        """Text of a STRING, PROPERTY_NAME or COMMENT token; None for other tokens."""
        if self._token is not None and self._token_type in (
            JsonTokenType.STRING,
            JsonTokenType.PROPERTY_NAME,
            JsonTokenType.COMMENT,
        ):
            return self._token.value
        return None

    def get_int(self) -> int:
        """Value of the current NUMBER token as an integer."""
        raw = self._number_text()
        if "." in raw or "e" in raw.lower():
            self.raise_malformed(
                f"Expected an integer, got {raw}",
                ["Remove the fractional part of the number"],
            )
        return int(raw)

    def get_float(self) -> float:
        """Value of the current NUMBER token as a float."""
        return float(self._number_text())

    def get_bool(self) -> bool:
        """Value of the current TRUE or FALSE token."""
        if self._token_type is JsonTokenType.TRUE:
            return True
        if self._token_type is JsonTokenType.FALSE:
            return False
        self.raise_malformed(f"Expected a boolean, got {self._describe_current()}")

    def raise_malformed(
        self, message: str, suggestions: Optional[list[str]] = None
    ) -> NoReturn:
        """Raise MalformedDocumentError at the current token."""
        raise self._reporter.create_parse_error(
            message, self.token_position, suggestions, MalformedDocumentError
        )

    def raise_unexpected_end(
        self, message: str, suggestions: Optional[list[str]] = None
    ) -> NoReturn:
        """Raise UnexpectedEndOfInputError at the last token seen."""
        raise self._reporter.create_parse_error(
            message, self.token_position, suggestions, UnexpectedEndOfInputError
        )

    def _read_or_fail(self) -> None:
        if not self.read():
            structure = self._stack[-1] if self._stack else "value"
            self.raise_unexpected_end(
                f"Unexpected end of input while skipping {structure}",
                ErrorSuggestionEngine.suggest_for_unclosed_structure(structure),
            )

    def _number_text(self) -> str:
        if self._token is None or self._token_type is not JsonTokenType.NUMBER:
            self.raise_malformed(f"Expected a number, got {self._describe_current()}")
        return self._token.value

    def _describe_current(self) -> str:
        return self._token_type.value.lower().replace("_", " ")

    def _accept_comment(self, token: Token) -> bool:
        handling = self.options.comment_handling
        if handling is CommentHandling.SKIP:
            return False
        if handling is CommentHandling.ALLOW:
            self._token = token
            self._token_type = JsonTokenType.COMMENT
            return True
        self._token = token
        self.raise_malformed(
            "Comments are not allowed",
            ErrorSuggestionEngine.suggest_for_unexpected_token("/"),
        )

    def _consume_punctuation(self, token: Token) -> bool:
        """Handle colons and commas. Returns True when the token was consumed."""
        if token.type is TokenType.COLON:
            if self._expect is not _Expect.COLON:
                self._unexpected(token)
            self._expect = _Expect.VALUE
            return True

        if token.type is TokenType.COMMA:
            if self._expect is not _Expect.COMMA_OR_END:
                self._unexpected(token)
            self._after_comma = True
            trailing = self.options.allow_trailing_commas
            if self._stack[-1] == _OBJECT:
                self._expect = _Expect.NAME_OR_END if trailing else _Expect.NAME
            else:
                self._expect = _Expect.VALUE_OR_END if trailing else _Expect.VALUE
            return True

        if self._expect is _Expect.COLON:
            self._token = token
            self.raise_malformed(
                "Expected ':' after property name",
                ["Property names must be followed by a colon"],
            )
        return False

    def _dispatch(self, token: Token) -> JsonTokenType:
        expect = self._expect
        after_comma = self._after_comma
        self._after_comma = False
        self._token = token

        if after_comma and token.type in (TokenType.RBRACE, TokenType.RBRACKET):
            if expect in (_Expect.NAME, _Expect.VALUE):
                self.raise_malformed(
                    f"Trailing comma before '{token.value}' is not allowed",
                    ["Remove the trailing comma or enable allow_trailing_commas"],
                )

        if expect is _Expect.DONE:
            self.raise_malformed(
                "Unexpected content after the end of the document",
                ["Remove trailing content or wrap multiple values in an array"],
            )

        if token.type is TokenType.RBRACE:
            if expect in (_Expect.NAME_OR_END, _Expect.COMMA_OR_END) and self._stack[-1] == _OBJECT:
                return self._close()
            self._unexpected(token)

        if token.type is TokenType.RBRACKET:
            if expect in (_Expect.VALUE_OR_END, _Expect.COMMA_OR_END) and self._stack[-1] == _ARRAY:
                return self._close()
            self._unexpected(token)

        if expect in (_Expect.NAME, _Expect.NAME_OR_END):
            if token.type is not TokenType.STRING:
                self.raise_malformed(
                    "Expected a property name",
                    ["Property names must be double-quoted strings"],
                )
            self.validator.validate_string_length(token.value, token.position)
            self._expect = _Expect.COLON
            return JsonTokenType.PROPERTY_NAME

        if expect is _Expect.COMMA_OR_END:
            self.raise_malformed(
                f"Expected ',' or closing bracket, got {token.type.value.lower()}",
                ["Separate values with commas"],
            )

        return self._value(token)

    def _value(self, token: Token) -> JsonTokenType:
        if token.type is TokenType.LBRACE:
            self._open(_OBJECT, token)
            self._expect = _Expect.NAME_OR_END
            return JsonTokenType.START_OBJECT

        if token.type is TokenType.LBRACKET:
            self._open(_ARRAY, token)
            self._expect = _Expect.VALUE_OR_END
            return JsonTokenType.START_ARRAY

        if token.type is TokenType.STRING:
            self.validator.validate_string_length(token.value, token.position)
            result = JsonTokenType.STRING
        elif token.type is TokenType.NUMBER:
            result = JsonTokenType.NUMBER
        elif token.type is TokenType.BOOLEAN:
            result = JsonTokenType.TRUE if token.value == "true" else JsonTokenType.FALSE
        elif token.type is TokenType.NULL:
            result = JsonTokenType.NULL
        else:
            self.raise_malformed(
                f"Unexpected token '{token.value}'",
                ErrorSuggestionEngine.suggest_for_invalid_value(token.value)
                or ErrorSuggestionEngine.suggest_for_unexpected_token(token.value),
            )

        self._after_value()
        return result

    def _open(self, structure: str, token: Token) -> None:
        self.validator.enter_structure(token.position)
        self._stack.append(structure)

    def _close(self) -> JsonTokenType:
        structure = self._stack.pop()
        self.validator.exit_structure()
        self._after_value()
        if structure == _OBJECT:
            return JsonTokenType.END_OBJECT
        return JsonTokenType.END_ARRAY

    def _after_value(self) -> None:
        self._expect = _Expect.COMMA_OR_END if self._stack else _Expect.DONE

    def _unexpected(self, token: Token) -> NoReturn:
        self._token = token
        self.raise_malformed(
            f"Unexpected '{token.value}'",
            ErrorSuggestionEngine.suggest_for_unexpected_token(token.value),
        )
