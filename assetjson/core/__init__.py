"""
Core tokenizing, reading, writing and converter machinery.
"""

from .interfaces import ConverterFactory, JsonConverter, Resolver
from .reader import JsonReader, JsonTokenType
from .string_map import StringMap, StringMapConverter
from .tokenizer import Lexer, Position, Token, TokenType
from .writer import JsonWriter

__all__ = [
    "ConverterFactory", "JsonConverter", "Resolver",
    "JsonReader", "JsonTokenType", "JsonWriter",
    "Lexer", "Position", "Token", "TokenType",
    "StringMap", "StringMapConverter",
]
