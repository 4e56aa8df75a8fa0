"""
Configuration for assetjson serialization.
"""

from .config import CommentHandling, ParseLimits, SerializerOptions

__all__ = ["CommentHandling", "ParseLimits", "SerializerOptions"]
