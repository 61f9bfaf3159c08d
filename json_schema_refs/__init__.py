#!/usr/bin/env python3
"""
JSON Schema Reference Resolver

This package replaces the `$ref` references of a JSON schema with the objects
they point to, following JSON Pointers (RFC 6901) and references across
documents.
"""

import logging

from .api import (
    CircularReferenceError,
    DocumentDecodingError,
    ErrorCode,
    FetchError,
    InvalidPointerError,
    MediaTypeError,
    NotAReferenceError,
    PointerResolutionError,
    ResolutionError,
    UriParseError,
)
from .reference import Reference, ReferenceState
from .resolver import RefResolver
from .retriever import UriRetriever
from .uri import UriResolver
from .utils import JsonPointer
from .version import __version__

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger("json_schema_refs")

# Export public classes and functions
__all__ = [
    "RefResolver",
    "Reference",
    "ReferenceState",
    "UriResolver",
    "UriRetriever",
    "JsonPointer",
    "ErrorCode",
    "ResolutionError",
    "NotAReferenceError",
    "InvalidPointerError",
    "UriParseError",
    "CircularReferenceError",
    "PointerResolutionError",
    "FetchError",
    "MediaTypeError",
    "DocumentDecodingError",
]
