"""
Character classes and literal texts shared by the lexer and the converters.
"""

# Escapes allowed after a backslash inside a string, with their decoded text
JSON_ESCAPE_MAP = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
DECIMAL_DIGITS = frozenset("0123456789")
JSON_WHITESPACE = frozenset(" \t\r\n")

# String map values written in place of native tokens
BOOLEAN_TRUE_TEXT = "true"
BOOLEAN_FALSE_TEXT = "false"
NULL_TEXT = ""
