"""
Resolution of all `$ref` references of a JSON schema.
"""

import logging
from collections import deque
from typing import Any, Deque, Dict, List, Optional

from .api import FetchError
from .reference import Container, Reference
from .uri import UriResolver
from .utils import SchemaKeywords

logger = logging.getLogger("json_schema_refs")


class RefResolver:
    """
    Takes a JSON schema and replaces every `$ref` node with the object it
    points to.

    References are collected by a depth-first walk over the schema-bearing
    properties and resolved afterwards in discovery order, so a reference may
    point at any node of the document, including ones found later. Documents
    referenced by URI are fetched once per location through the URI
    retriever and resolved in turn before they are used.
    """

    SELF_REF_LOCATION = "#"

    def __init__(self, retriever: Any = None, verbose: bool = False):
        """
        Initialize a new reference resolver.

        Args:
            retriever: Object with a `retrieve(uri)` method returning a parsed
                document; a UriRetriever is created on first use if omitted
            verbose: If True, log each reference and fetched document
        """
        self.uri_retriever = retriever
        self.schemas: Dict[str, Any] = {}
        self.references: Deque[Reference] = deque()

        if verbose:
            logger.setLevel(logging.DEBUG)

    def get_uri_retriever(self) -> Any:
        """
        Get the URI retriever, creating a default one if none was set.

        Returns:
            The retriever used to fetch external documents
        """
        if self.uri_retriever is None:
            from .retriever import UriRetriever
            self.set_uri_retriever(UriRetriever())

        return self.uri_retriever

    def set_uri_retriever(self, retriever: Any) -> "RefResolver":
        """
        Set the URI retriever.

        Args:
            retriever: Object with a `retrieve(uri)` method

        Returns:
            This resolver, for chaining
        """
        self.uri_retriever = retriever
        return self

    def reset(self) -> None:
        """Forget all cached documents and pending references."""
        self.schemas = {}
        self.references.clear()

    def resolve(self, schema: Any, source_uri: Optional[str] = None) -> Any:
        """
        Resolve all references of a schema.

        The schema is modified in place and becomes the target of
        same-document references such as "#/definitions/a". Documents cached
        and references queued by earlier calls are discarded first.

        Args:
            schema: Parsed JSON schema
            source_uri: URI the schema was loaded from

        Returns:
            The resolved schema; differs from `schema` only when the root
            itself is a `$ref` node
        """
        self.reset()
        return self._resolve_document(schema, source_uri, [self.SELF_REF_LOCATION])

    def _resolve_document(self, schema: Any, source_uri: Optional[str], keys: Optional[List[str]] = None) -> Any:
        """Resolve a schema and cache it under `keys` and its source location."""
        holder: List[Any] = [schema]
        keys = list(keys or [])
        location = UriResolver().extract_location(source_uri)
        if location:
            keys.append(location)
        self._cache(keys, schema)

        self.find_references(holder, 0, source_uri)
        self._cache(keys, holder[0])

        self.resolve_references()
        self._cache(keys, holder[0])

        return holder[0]

    def fetch_ref(self, ref: Optional[str], source_uri: Optional[str]) -> Any:
        """
        Retrieve the document a reference points to.

        Args:
            ref: Reference URI, relative or absolute
            source_uri: Resolution scope the reference was found in

        Returns:
            The referenced document, with its own references resolved

        Raises:
            FetchError: If the document cannot be retrieved
        """
        resolver = UriResolver()
        uri = resolver.resolve(ref, source_uri)

        if resolver.extract_fragment(uri):
            reference = Reference(self, None, {Reference.REF: uri})
            return reference.resolve()

        location = resolver.extract_location(uri)
        if not location:
            if self.SELF_REF_LOCATION not in self.schemas:
                raise FetchError("No root schema to resolve a same-document reference against", uri=uri)
            return self.schemas[self.SELF_REF_LOCATION]

        if location in self.schemas:
            return self.schemas[location]

        logger.debug(f"Fetching schema {location}")
        schema = self.get_uri_retriever().retrieve(location)

        return self._resolve_document(schema, location)

    def find_references(self, container: Container, key: Any, source_uri: Optional[str]) -> None:
        """
        Collect the references below a node.

        Args:
            container: Dict or list holding the node
            key: Key or index of the node
            source_uri: Resolution scope of the enclosing schema
        """
        schema = container[key]
        if not isinstance(schema, dict):
            return

        scope = self._enter_resolution_scope(schema, source_uri)

        # A $ref replaces the whole schema, its siblings are not schemas
        if Reference.is_reference(schema):
            self.create_ref(container, key, scope)
            return

        # These properties are just schemas
        for property_name in SchemaKeywords.SCHEMA_PROPERTIES:
            self.resolve_property(schema, property_name, scope)

        # These are all potentially arrays that contain schema objects
        for property_name in SchemaKeywords.SCHEMA_ARRAY_PROPERTIES:
            self.resolve_array_of_schemas(schema, property_name, scope)

        # These are all objects whose values are schemas
        for property_name in SchemaKeywords.SCHEMA_MAP_PROPERTIES:
            self.resolve_object_of_schemas(schema, property_name, scope)

    def resolve_property(self, schema: Dict[str, Any], property_name: str, source_uri: Optional[str]) -> None:
        """Collect references of a property holding a single schema."""
        if property_name in schema:
            self.find_references(schema, property_name, source_uri)

    def resolve_array_of_schemas(self, schema: Dict[str, Any], property_name: str,
                                 source_uri: Optional[str]) -> None:
        """Collect references of a property holding an array of schemas."""
        items = schema.get(property_name)
        if not isinstance(items, list):
            return

        for index in range(len(items)):
            self.find_references(items, index, source_uri)

    def resolve_object_of_schemas(self, schema: Dict[str, Any], property_name: str,
                                  source_uri: Optional[str]) -> None:
        """Collect references of a property whose values are schemas."""
        members = schema.get(property_name)
        if not isinstance(members, dict):
            return

        for name in list(members):
            self.find_references(members, name, source_uri)

    def create_ref(self, container: Container, key: Any, source_uri: Optional[str]) -> Reference:
        """
        Register the `$ref` node held at `container[key]`.

        Args:
            container: Dict or list holding the `$ref` node
            key: Key or index of the node
            source_uri: Resolution scope the node was found in

        Returns:
            The queued reference
        """
        reference = Reference(self, source_uri, container[key], container, key)
        self.references.append(reference)
        logger.debug(f"Found reference '{reference.ref_string}' in scope '{source_uri}'")

        return reference

    def resolve_references(self) -> None:
        """Resolve queued references in the order they were found."""
        while self.references:
            reference = self.references.popleft()
            reference.resolve()

    def _enter_resolution_scope(self, schema: Dict[str, Any], source_uri: Optional[str]) -> Optional[str]:
        """
        Get the resolution scope of a schema.

        A non-empty `id` is resolved against the enclosing scope. A schema
        identified this way is remembered under its location, so references
        to it do not trigger a fetch.
        """
        schema_id = schema.get(SchemaKeywords.ID)
        if not isinstance(schema_id, str) or not schema_id.strip():
            return source_uri

        resolver = UriResolver()
        scope = resolver.resolve(schema_id.strip(), source_uri)

        location = resolver.extract_location(scope)
        if location and location not in self.schemas and not Reference.is_reference(schema):
            self.schemas[location] = schema

        return scope

    def _cache(self, keys: List[str], schema: Any) -> None:
        for key in keys:
            self.schemas[key] = schema
