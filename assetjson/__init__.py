"""
assetjson - Typed JSON serialization for voxel world export assets.

assetjson reads and writes the JSON documents shared by a world exporter and
its viewer: world and region descriptors, block states, block models and
texture metadata. Every document is decoded into a dataclass record through a
serialization context that is built once, up front, for a closed set of types.

Resource packs are not always well formed. String maps such as model texture
tables and block state conditions sometimes carry native booleans or null
where strings are expected; the tolerant string map codec normalizes them.

Key Features:
- json-style loads(), load(), dumps() and dump() with an explicit record type
- Tolerant string maps: true -> "true", false -> "false", null -> ""
- Trailing commas and comments accepted in resource pack documents
- Security limits on input size, string length and nesting depth
- Error reporting with line/column position, context and suggestions

Quick Start:
    import assetjson
    model = assetjson.loads('{"textures": {"all": "block/stone"}}', assetjson.Model)
    text = assetjson.dumps(model)

    # Standalone string maps
    from assetjson import decode_string_map
    decode_string_map('{"up": true, "side": null}')  # {'up': 'true', 'side': ''}
"""

from .core.string_map import StringMap, StringMapConverter
from .models import BlockState, Model, RegionInfo, TextureMeta, WorldInfo
from .security.exceptions import (
    AssetJsonError,
    MalformedDocumentError,
    NotSerializableError,
    ParseError,
    SecurityError,
    UnexpectedEndOfInputError,
)
from .serialization import (
    JSON_CONTEXT,
    SerializationContext,
    decode_string_map,
    dump,
    dumps,
    encode_string_map,
    load,
    loads,
)
from .utils.config import CommentHandling, ParseLimits, SerializerOptions

__version__ = "0.1.0"
__author__ = "assetjson contributors"

__all__ = [
    # json-style functions
    "loads", "load", "dumps", "dump", "decode_string_map", "encode_string_map",
    # Serialization context
    "SerializationContext", "JSON_CONTEXT", "StringMap", "StringMapConverter",
    # Record types
    "WorldInfo", "RegionInfo", "Model", "BlockState", "TextureMeta",
    # Configuration classes
    "SerializerOptions", "ParseLimits", "CommentHandling",
    # Exception classes
    "AssetJsonError", "ParseError", "MalformedDocumentError",
    "UnexpectedEndOfInputError", "SecurityError", "NotSerializableError",
]
