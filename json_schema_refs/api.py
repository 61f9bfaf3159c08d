"""
Error codes and exceptions for JSON Schema reference resolution.
"""

from enum import Enum, auto
from typing import Optional

SCHEMA_MEDIA_TYPE = "application/schema+json"


class ErrorCode(Enum):
    """Enumeration of resolution error codes."""
    NOT_A_REFERENCE = auto()
    INVALID_POINTER = auto()
    URI_PARSE_FAILED = auto()
    CIRCULAR_REFERENCE = auto()
    POINTER_RESOLUTION_FAILED = auto()
    FETCH_FAILED = auto()
    MEDIA_TYPE_MISMATCH = auto()
    DOCUMENT_DECODING_FAILED = auto()


class ResolutionError(Exception):
    """
    Base class for every error raised while resolving references.

    Attributes:
        code: The error code identifying the kind of failure
        message: Human-readable error message
        uri: The URI or reference string involved, when known
    """
    code: ErrorCode

    def __init__(self, message: str, uri: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.uri = uri

    def __str__(self) -> str:
        return self.message


class NotAReferenceError(ResolutionError):
    """The node is not an object carrying a `$ref` property."""
    code = ErrorCode.NOT_A_REFERENCE


class InvalidPointerError(ResolutionError):
    """The `$ref` is not a string or its pointer does not start with '/'."""
    code = ErrorCode.INVALID_POINTER


class UriParseError(ResolutionError):
    """A URI could not be parsed."""
    code = ErrorCode.URI_PARSE_FAILED


class CircularReferenceError(ResolutionError):
    """A reference was resolved while it was already being resolved."""
    code = ErrorCode.CIRCULAR_REFERENCE


class PointerResolutionError(ResolutionError):
    """A pointer does not lead to an object inside the target document."""
    code = ErrorCode.POINTER_RESOLUTION_FAILED


class FetchError(ResolutionError):
    """A document could not be retrieved."""
    code = ErrorCode.FETCH_FAILED


class MediaTypeError(ResolutionError):
    """A document was served with an unexpected media type."""
    code = ErrorCode.MEDIA_TYPE_MISMATCH


class DocumentDecodingError(ResolutionError):
    """A retrieved document is not valid JSON."""
    code = ErrorCode.DOCUMENT_DECODING_FAILED
