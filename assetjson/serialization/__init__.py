"""
Serialization contexts and the json-style entry points.
"""

from .context import JSON_CONTEXT, SERIALIZABLE_TYPES, SerializationContext
from .engine import decode_string_map, dump, dumps, encode_string_map, load, loads

__all__ = [
    "JSON_CONTEXT", "SERIALIZABLE_TYPES", "SerializationContext",
    "decode_string_map", "dump", "dumps", "encode_string_map", "load", "loads",
]
