"""
Lexer for assetjson - tokenizes document text for the token reader.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, NoReturn, Optional

from ..security.exceptions import (
    ErrorReporter,
    ErrorSuggestionEngine,
    MalformedDocumentError,
    ParseError,
    UnexpectedEndOfInputError,
)
from .constants import DECIMAL_DIGITS, HEX_DIGITS, JSON_ESCAPE_MAP, JSON_WHITESPACE


def _is_digit(char: str) -> bool:
    return char in DECIMAL_DIGITS


class TokenType(Enum):
    """Lexical token types."""

    LBRACE = "LBRACE"
    RBRACE = "RBRACE"
    LBRACKET = "LBRACKET"
    RBRACKET = "RBRACKET"
    COLON = "COLON"
    COMMA = "COMMA"

    STRING = "STRING"
    NUMBER = "NUMBER"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"
    IDENTIFIER = "IDENTIFIER"

    COMMENT = "COMMENT"
    EOF = "EOF"


_STRUCTURAL_TOKENS = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
}


@dataclass
class Position:
    """Position in source text (line and column)."""

    line: int
    column: int


class Token(NamedTuple):
    """Token with type, value and position information."""

    type: TokenType
    value: str
    position: Position


class Lexer:
    """Lexical analyzer for JSON documents with comments."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1
        self._reporter: Optional[ErrorReporter] = None

    def current_position(self) -> Position:
        """Get current position in the text."""
        return Position(self.line, self.column)

    def peek(self, offset: int = 0) -> str:
        """Peek at character at given offset without consuming it."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return ""
        return self.text[pos]

    def advance(self) -> str:
        """Advance position and return the current character."""
        if self.pos >= len(self.text):
            return ""

        char = self.text[self.pos]
        self.pos += 1

        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def skip_whitespace(self) -> None:
        """Skip whitespace characters (space, tab, carriage return, newline)."""
        while self.pos < len(self.text) and self.text[self.pos] in JSON_WHITESPACE:
            self.advance()

    def read_string(self, start: Position) -> str:
        """Read a double quoted string with escape sequence handling."""
        result = ""
        self.advance()

        while self.pos < len(self.text):
            char = self.peek()

            if char == '"':
                self.advance()
                return result
            if char == "\\":
                escape_pos = self.current_position()
                self.advance()
                next_char = self.peek()
                if next_char == "u":
                    result += self._read_unicode_escape(escape_pos)
                elif next_char in JSON_ESCAPE_MAP:
                    result += JSON_ESCAPE_MAP[next_char]
                    self.advance()
                elif next_char:
                    self._error(
                        MalformedDocumentError,
                        f"Invalid escape sequence '\\{next_char}'",
                        escape_pos,
                    )
            elif ord(char) < 0x20:
                self._error(
                    MalformedDocumentError,
                    "Control character in string",
                    self.current_position(),
                    ["Escape control characters, e.g. '\\n' for a line break"],
                )
            else:
                result += self.advance()

        self._error(
            UnexpectedEndOfInputError,
            "Unterminated string",
            start,
            ["Add the missing closing '\"'"],
        )

    def read_number(self, start: Position) -> str:
        """Read a numeric literal following the JSON number grammar."""
        result = ""

        if self.peek() == "-":
            result += self.advance()

        if self.peek() == "0":
            result += self.advance()
            if _is_digit(self.peek()):
                self._error(MalformedDocumentError, "Leading zeros are not allowed", start)
        elif _is_digit(self.peek()):
            result += self._read_digits()
        else:
            self._error(MalformedDocumentError, "Invalid number", start)

        if self.peek() == ".":
            result += self.advance()
            if not _is_digit(self.peek()):
                self._error(MalformedDocumentError, "Expected digits after '.'", start)
            result += self._read_digits()

        if self.peek() in ("e", "E"):
            result += self.advance()
            if self.peek() in ("+", "-"):
                result += self.advance()
            if not _is_digit(self.peek()):
                self._error(MalformedDocumentError, "Expected digits in exponent", start)
            result += self._read_digits()

        return result

    def _read_digits(self) -> str:
        result = ""
        while self.pos < len(self.text) and _is_digit(self.peek()):
            result += self.advance()
        return result

    def read_identifier(self) -> str:
        """Read a bare word (keyword or unsupported identifier)."""
        result = ""
        while self.pos < len(self.text):
            char = self.peek()
            if char.isalnum() or char in "_$":
                result += self.advance()
            else:
                break
        return result

    def read_comment(self, start: Position) -> str:
        """Read a line or block comment and return its text."""
        self.advance()
        if self.peek() == "/":
            self.advance()
            result = ""
            while self.pos < len(self.text) and self.peek() != "\n":
                result += self.advance()
            return result

        if self.peek() == "*":
            self.advance()
            result = ""
            while self.pos < len(self.text):
                if self.peek() == "*" and self.peek(1) == "/":
                    self.advance()
                    self.advance()
                    return result
                result += self.advance()
            self._error(
                UnexpectedEndOfInputError,
                "Unterminated block comment",
                start,
                ["Close the comment with '*/'"],
            )

        self._error(
            MalformedDocumentError,
            "Unexpected character '/'",
            start,
            ErrorSuggestionEngine.suggest_for_unexpected_token("/"),
        )

    def _read_unicode_escape(self, escape_pos: Position) -> str:
        """Read a Unicode escape sequence, the cursor being on the 'u'."""
        self.advance()
        code_point = self._read_hex_quad(escape_pos)
        if 0xD800 <= code_point <= 0xDBFF:
            return self._handle_high_surrogate(code_point)
        if 0xDC00 <= code_point <= 0xDFFF:
            return "\ufffd"  # Unicode replacement character
        return chr(code_point)

    def _read_hex_quad(self, escape_pos: Position) -> int:
        """Read exactly 4 hexadecimal digits."""
        hex_digits = ""
        for _ in range(4):
            char = self.peek()
            if char in HEX_DIGITS:
                hex_digits += self.advance()
            else:
                self._error(
                    MalformedDocumentError, "Invalid unicode escape sequence", escape_pos
                )
        return int(hex_digits, 16)

    def _handle_high_surrogate(self, code_point: int) -> str:
        """Handle high surrogate pair."""
        low_surrogate = self._read_low_surrogate()
        if low_surrogate is not None:
            high = code_point - 0xD800
            low = low_surrogate - 0xDC00
            return chr(0x10000 + (high << 10) + low)
        return "\ufffd"

    def _read_low_surrogate(self) -> Optional[int]:
        """Read the low surrogate of a pair, restoring the cursor if absent."""
        if self.peek() != "\\" or self.peek(1) != "u":
            return None

        hex_digits = self.text[self.pos + 2 : self.pos + 6]
        if len(hex_digits) != 4 or any(c not in HEX_DIGITS for c in hex_digits):
            return None

        code_point = int(hex_digits, 16)
        if not 0xDC00 <= code_point <= 0xDFFF:
            return None

        for _ in range(6):
            self.advance()
        return code_point

    def tokenize(self) -> Iterator[Token]:
        """Tokenize the input text into a sequence of tokens."""
        while True:
            self.skip_whitespace()

            if self.pos >= len(self.text):
                break

            char = self.peek()
            pos = self.current_position()

            if char in _STRUCTURAL_TOKENS:
                self.advance()
                yield Token(_STRUCTURAL_TOKENS[char], char, pos)
            elif char == '"':
                yield Token(TokenType.STRING, self.read_string(pos), pos)
            elif _is_digit(char) or char == "-":
                yield Token(TokenType.NUMBER, self.read_number(pos), pos)
            elif char == "/":
                yield Token(TokenType.COMMENT, self.read_comment(pos), pos)
            elif char.isalpha() or char == "_":
                yield self._identifier_token(pos)
            else:
                self._error(
                    MalformedDocumentError,
                    f"Unexpected character '{char}'",
                    pos,
                    ErrorSuggestionEngine.suggest_for_unexpected_token(char),
                )

        yield Token(TokenType.EOF, "", self.current_position())

    def _identifier_token(self, pos: Position) -> Token:
        identifier = self.read_identifier()
        if identifier in {"true", "false"}:
            return Token(TokenType.BOOLEAN, identifier, pos)
        if identifier == "null":
            return Token(TokenType.NULL, identifier, pos)
        return Token(TokenType.IDENTIFIER, identifier, pos)

    def get_all_tokens(self) -> list[Token]:
        """Get all tokens as a list."""
        return list(self.tokenize())

    def _error(
        self,
        error_cls: type[ParseError],
        message: str,
        position: Position,
        suggestions: Optional[list[str]] = None,
    ) -> NoReturn:
        if self._reporter is None:
            self._reporter = ErrorReporter(self.text)
        raise self._reporter.create_parse_error(message, position, suggestions, error_cls)
