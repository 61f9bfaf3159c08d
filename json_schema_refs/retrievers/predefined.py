"""
Retriever serving documents from memory.
"""

import json
from typing import Any, Mapping, Optional

from .base import Retriever
from ..api import SCHEMA_MEDIA_TYPE, FetchError


class PredefinedRetriever(Retriever):
    """
    Serves a fixed set of documents keyed by URI.

    Useful to resolve references offline, for example against bundled copies
    of well-known meta-schemas.
    """

    def __init__(self, schemas: Mapping[str, Any], content_type: Optional[str] = SCHEMA_MEDIA_TYPE):
        """
        Initialize a new predefined retriever.

        Args:
            schemas: URI to document mapping; values are JSON text or
                JSON-serializable objects
            content_type: Media type reported for every document
        """
        super().__init__()
        self.schemas = dict(schemas)
        self.default_content_type = content_type

    def retrieve(self, uri: str) -> str:
        """
        Look up a document.

        Args:
            uri: Document URI

        Returns:
            The document text

        Raises:
            FetchError: If no document is registered for the URI
        """
        if uri not in self.schemas:
            raise FetchError(f"Schema {uri} is not predefined", uri=uri)

        self.content_type = self.default_content_type
        document = self.schemas[uri]
        if isinstance(document, str):
            return document

        return json.dumps(document)
