"""
A `$ref` reference in a JSON schema.

JSON Pointers (RFC 6901) in the reference fragment are resolved here as well.
"""

import logging
import re
from enum import Enum
from typing import TYPE_CHECKING, Any, List, MutableMapping, MutableSequence, Optional, Union

from .api import (
    CircularReferenceError,
    InvalidPointerError,
    NotAReferenceError,
    PointerResolutionError,
)
from .uri import UriResolver
from .utils import JsonPointer, SchemaKeywords

if TYPE_CHECKING:
    from .resolver import RefResolver

logger = logging.getLogger("json_schema_refs")

Container = Union[MutableMapping[str, Any], MutableSequence[Any]]

_ARRAY_INDEX = re.compile(r"^(0|[1-9][0-9]*)$")


class ReferenceState(Enum):
    """Lifecycle of a reference."""
    UNPARSED = "unparsed"
    UNRESOLVED = "unresolved"
    RESOLVING = "resolving"
    RESOLVED = "resolved"


class Reference:
    """
    A single `$ref` node of a schema.

    While the reference is pending, the slot that held the `$ref` node holds
    the Reference itself, so anything walking the tree in the meantime meets
    the reference instead of the raw `{"$ref": ...}` literal. Once resolved,
    the slot holds the target node.
    """

    REF = SchemaKeywords.REF

    def __init__(
        self,
        ref_resolver: "RefResolver",
        source_uri: Optional[str],
        referenced_object: Any = None,
        container: Optional[Container] = None,
        key: Union[str, int, None] = None
    ):
        """
        Initialize a new reference.

        Args:
            ref_resolver: Resolver used to fetch the target document
            source_uri: Resolution scope in effect where the reference was found
            referenced_object: The `$ref` node; parsed immediately when given
            container: Dict or list holding the `$ref` node
            key: Key or index of the `$ref` node inside the container

        Raises:
            NotAReferenceError: If the node has no `$ref` property
            InvalidPointerError: If the reference pointer is malformed
        """
        self.ref_resolver = ref_resolver
        self.source_uri = source_uri
        self.state = ReferenceState.UNPARSED
        self.ref_string: Optional[str] = None
        self.uri: Optional[str] = None
        self.parts: List[str] = []
        self.resolved_object: Any = None
        self._container = container
        self._key = key

        if referenced_object is not None:
            self.set_referenced_object(referenced_object, container, key)

    @classmethod
    def is_reference(cls, node: Any) -> bool:
        """
        Check whether a node is a `$ref` node.

        Args:
            node: Any document node

        Returns:
            True if the node is an object with a `$ref` property
        """
        return isinstance(node, dict) and cls.REF in node

    def set_referenced_object(
        self,
        referenced_object: Any,
        container: Optional[Container] = None,
        key: Union[str, int, None] = None
    ) -> None:
        """
        Attach and parse the `$ref` node.

        Args:
            referenced_object: The `$ref` node
            container: Dict or list holding the node
            key: Key or index of the node inside the container
        """
        self._parse_referenced_object(referenced_object)

        if container is not None:
            self._container = container
            self._key = key
            container[key] = self

    def resolve(self) -> Any:
        """
        Resolve the reference to the object it points to.

        Returns:
            The referenced object

        Raises:
            CircularReferenceError: If the reference is already being resolved
            PointerResolutionError: If the pointer does not lead to an object
        """
        if self.state is ReferenceState.UNPARSED:
            raise RuntimeError("Trying to resolve a reference that is not yet parsed")
        if self.state is ReferenceState.UNRESOLVED:
            return self._do_resolve()
        if self.state is ReferenceState.RESOLVING:
            raise CircularReferenceError(
                f"Impossible to resolve reference $ref: {self.ref_string}", uri=self.ref_string)
        return self.resolved_object

    def _parse_referenced_object(self, referenced_object: Any) -> None:
        if not isinstance(referenced_object, dict):
            raise NotAReferenceError("Not an object")
        if self.REF not in referenced_object:
            raise NotAReferenceError("Not a reference")

        ref = referenced_object[self.REF]
        if not isinstance(ref, str):
            raise InvalidPointerError(f"Reference is not a string: {ref!r}")

        self.ref_string = ref.strip()
        self.uri = ""
        self.parts = []

        if self.ref_string:
            pointer = self._parse_ref_string()
            self.parts = JsonPointer.to_parts(pointer)

        self.state = ReferenceState.UNRESOLVED

    def _parse_ref_string(self) -> str:
        """Split the reference into location and pointer, validating the pointer."""
        resolver = UriResolver()
        self.uri = resolver.extract_location(self.ref_string)
        pointer = resolver.extract_fragment(self.ref_string)

        if not pointer:
            return ""

        if not pointer.startswith(JsonPointer.SEPARATOR):
            raise InvalidPointerError(
                f"Pointer starts with invalid character {pointer[0]}", uri=self.ref_string)

        return pointer

    def _do_resolve(self) -> Any:
        # Fetching may resolve this reference through a nested queue drain,
        # so the state only changes once the document is at hand
        schema = self.ref_resolver.fetch_ref(self.uri, self.source_uri)
        if self.state is ReferenceState.RESOLVED:
            return self.resolved_object

        self.state = ReferenceState.RESOLVING
        try:
            resolved = self._resolve_pointer(schema)
            if not isinstance(resolved, dict):
                raise PointerResolutionError(
                    f"Pointer {self.ref_string} was not an object", uri=self.ref_string)
        except Exception:
            self.state = ReferenceState.UNRESOLVED
            raise

        self.resolved_object = resolved
        if self._container is not None:
            self._container[self._key] = resolved
        self.state = ReferenceState.RESOLVED
        logger.debug(f"Resolved reference '{self.ref_string}' from scope '{self.source_uri}'")

        return resolved

    def _resolve_pointer(self, schema: Any) -> Any:
        """
        Walk the pointer parts through the document.

        Args:
            schema: The target document

        Returns:
            The node the pointer leads to
        """
        node = schema
        remaining = list(self.parts)

        while True:
            # Chained references resolve first
            if isinstance(node, Reference):
                node = node.resolve()

            if not remaining:
                return node

            part = remaining.pop(0)

            if isinstance(node, dict) and part in node:
                node = node[part]
                continue

            if isinstance(node, list):
                if part == JsonPointer.LAST_ELEMENT and node:
                    node = node[-1]
                    continue
                if _ARRAY_INDEX.match(part) and int(part) < len(node):
                    node = node[int(part)]
                    continue

            document_id = ""
            if isinstance(node, dict) and isinstance(node.get(SchemaKeywords.ID), str):
                document_id = f" {node[SchemaKeywords.ID]}"
            raise PointerResolutionError(
                f"Failed to resolve pointer {self.ref_string} from document id{document_id}",
                uri=self.ref_string
            )

    def __str__(self) -> str:
        """String representation of the reference."""
        return f"Reference(ref='{self.ref_string}', state={self.state.value})"

    def __repr__(self) -> str:
        """Detailed representation of the reference."""
        return self.__str__()
