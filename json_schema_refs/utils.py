"""
Utility classes and functions for JSON Schema reference resolution.
"""

import re
from typing import List
from urllib.parse import unquote


class JsonPointer:
    """
    Utility class for handling JSON Pointers (RFC 6901).

    JSON Pointers are used to reference specific locations within a JSON document.
    Pointers taken from a URI fragment are additionally percent-encoded.
    """

    SEPARATOR = "/"
    LAST_ELEMENT = "-"

    _ESCAPES = {"~1": "/", "~0": "~"}
    _ESCAPE_PATTERN = re.compile(r"~[01]")

    @staticmethod
    def unescape_part(part: str) -> str:
        """
        Unescape a JSON Pointer path segment.

        Both escape sequences are replaced in a single pass, so `~01`
        becomes `~1` and not `/`.

        Args:
            part: Escaped path segment

        Returns:
            Unescaped path segment
        """
        return JsonPointer._ESCAPE_PATTERN.sub(lambda m: JsonPointer._ESCAPES[m.group(0)], part)

    @staticmethod
    def decode_part(part: str) -> str:
        """
        Decode a path segment taken from a URI fragment.

        Args:
            part: Percent-encoded, escaped path segment

        Returns:
            The literal key or index
        """
        return JsonPointer.unescape_part(unquote(part))

    @staticmethod
    def to_parts(pointer: str) -> List[str]:
        """
        Split a JSON Pointer into its component parts.

        Args:
            pointer: JSON Pointer string

        Returns:
            List of path segments

        Raises:
            ValueError: If a non-empty pointer does not start with '/'
        """
        if not pointer:
            return []

        if not pointer.startswith(JsonPointer.SEPARATOR):
            raise ValueError(f"Invalid JSON Pointer: {pointer}")

        # Skip the leading empty segment produced by the first /
        parts = pointer.split(JsonPointer.SEPARATOR)[1:]

        return [JsonPointer.decode_part(part) for part in parts]


class SchemaKeywords:
    """Constants for the JSON Schema keywords that matter for reference resolution."""

    REF = "$ref"
    ID = "id"

    # Properties holding a single schema
    SCHEMA_PROPERTIES = (
        "additionalItems",
        "additionalProperties",
        "extends",
        "items",
    )

    # Properties that may hold an array of schemas
    SCHEMA_ARRAY_PROPERTIES = (
        "disallow",
        "extends",
        "items",
        "type",
        "allOf",
        "anyOf",
        "oneOf",
    )

    # Properties holding an object whose values are schemas
    SCHEMA_MAP_PROPERTIES = (
        "definitions",
        "dependencies",
        "patternProperties",
        "properties",
    )
