"""
assetjson error taxonomy and document limits.
"""

from .exceptions import (
    AssetJsonError,
    ErrorReporter,
    MalformedDocumentError,
    NotSerializableError,
    ParseError,
    SecurityError,
    UnexpectedEndOfInputError,
)
from .limits import LimitValidator

__all__ = [
    'AssetJsonError', 'ParseError', 'MalformedDocumentError',
    'UnexpectedEndOfInputError', 'SecurityError', 'NotSerializableError',
    'ErrorReporter', 'LimitValidator',
]
