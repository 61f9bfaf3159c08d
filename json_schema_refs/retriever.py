"""
Loading of schema documents by URI.
"""

import json
import logging
from typing import Any, Dict, Iterable, Optional

from .api import SCHEMA_MEDIA_TYPE, DocumentDecodingError, MediaTypeError
from .retrievers import Retriever, SchemeRetriever
from .uri import UriResolver

logger = logging.getLogger("json_schema_refs")

DEFAULT_MEDIA_TYPES = (SCHEMA_MEDIA_TYPE, "application/json")

# json-schema.org serves its meta-schemas with a wrong content type
JSON_SCHEMA_ORG = "http://json-schema.org/"


class UriRetriever:
    """
    Retrieves and decodes JSON schemas by URI.

    Raw documents are cached by location, so each document is downloaded
    at most once per retriever. Every call decodes a fresh tree, because
    resolving references modifies the tree in place.
    """

    def __init__(
        self,
        retriever: Optional[Retriever] = None,
        allowed_media_types: Iterable[str] = DEFAULT_MEDIA_TYPES,
        verbose: bool = False
    ):
        """
        Initialize a new URI retriever.

        Args:
            retriever: Transport retriever; a SchemeRetriever is created on
                first use if omitted
            allowed_media_types: Media types accepted for retrieved documents
            verbose: If True, log each loaded document
        """
        self.uri_retriever = retriever
        self.allowed_media_types = {media_type.lower() for media_type in allowed_media_types}
        self.schema_cache: Dict[str, str] = {}

        if verbose:
            logger.setLevel(logging.DEBUG)

    def get_uri_retriever(self) -> Retriever:
        """
        Get the transport retriever, creating a default one if none was set.

        Returns:
            The transport retriever
        """
        if self.uri_retriever is None:
            self.set_uri_retriever(SchemeRetriever())

        return self.uri_retriever

    def set_uri_retriever(self, retriever: Retriever) -> "UriRetriever":
        """
        Set the transport retriever.

        Args:
            retriever: Transport retriever

        Returns:
            This URI retriever, for chaining
        """
        self.uri_retriever = retriever
        return self

    def confirm_media_type(self, retriever: Retriever, uri: str) -> bool:
        """
        Make sure the last retrieved document had an acceptable media type.

        Args:
            retriever: Transport retriever that loaded the document
            uri: URI of the document

        Returns:
            True if the media type is acceptable

        Raises:
            MediaTypeError: If the media type is not acceptable
        """
        content_type = retriever.get_content_type()

        # Transports without media types, such as files
        if content_type is None:
            return True

        media_type = content_type.split(";", 1)[0].strip().lower()
        if media_type in self.allowed_media_types:
            return True

        if uri.startswith(JSON_SCHEMA_ORG):
            return True

        expected = " or ".join(sorted(self.allowed_media_types))
        raise MediaTypeError(f"Media type {expected} expected, got {content_type} for {uri}", uri=uri)

    def retrieve(self, uri: str, base_uri: Optional[str] = None) -> Any:
        """
        Retrieve a schema.

        Args:
            uri: Schema URI, relative to `base_uri` if given
            base_uri: Base URI to resolve `uri` against

        Returns:
            The decoded schema document
        """
        resolver = UriResolver()
        fetch_uri = resolver.extract_location(resolver.resolve(uri, base_uri))

        return self.load_schema(fetch_uri)

    def load_schema(self, fetch_uri: str) -> Any:
        """
        Fetch a schema, using the cache when possible, and decode it.

        Args:
            fetch_uri: Absolute URI without fragment

        Returns:
            The decoded schema document

        Raises:
            FetchError: If the document cannot be loaded
            MediaTypeError: If the document has an unexpected media type
            DocumentDecodingError: If the document is not valid JSON
        """
        contents = self.schema_cache.get(fetch_uri)
        if contents is None:
            retriever = self.get_uri_retriever()
            contents = retriever.retrieve(fetch_uri)
            self.confirm_media_type(retriever, fetch_uri)
            logger.debug(f"Loaded schema {fetch_uri}")
            self.schema_cache[fetch_uri] = contents

        try:
            schema = json.loads(contents)
        except json.JSONDecodeError as e:
            raise DocumentDecodingError(f"Failed to parse JSON in {fetch_uri}: {e.msg}", uri=fetch_uri) from e

        return schema
