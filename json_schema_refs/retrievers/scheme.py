"""
Retriever dispatching on the URI scheme.
"""

from typing import Dict, Optional
from urllib.parse import urlsplit

from .base import Retriever
from .file import FileRetriever
from .http import HttpRetriever
from ..api import FetchError


class SchemeRetriever(Retriever):
    """
    Delegates to a retriever registered for the URI scheme.

    URIs without a scheme are treated as file paths.
    """

    def __init__(self, retrievers: Optional[Dict[str, Retriever]] = None, timeout: float = 30):
        """
        Initialize a new scheme retriever.

        Args:
            retrievers: Scheme to retriever mapping; defaults to files and HTTP(S)
            timeout: Timeout for the default HTTP retriever
        """
        super().__init__()
        if retrievers is None:
            http = HttpRetriever(timeout=timeout)
            files = FileRetriever()
            retrievers = {"http": http, "https": http, "file": files, "": files}
        self.retrievers = retrievers

    def register(self, scheme: str, retriever: Retriever) -> None:
        """
        Register a retriever for a scheme.

        Args:
            scheme: URI scheme, lowercase
            retriever: Retriever handling that scheme
        """
        self.retrievers[scheme] = retriever

    def retrieve(self, uri: str) -> str:
        """
        Load a document with the retriever for its scheme.

        Args:
            uri: Document URI

        Returns:
            The document text

        Raises:
            FetchError: If the scheme is unsupported or loading fails
        """
        scheme = urlsplit(uri).scheme.lower()
        # A Windows drive letter parses as a one-letter scheme
        if len(scheme) == 1:
            scheme = ""

        retriever = self.retrievers.get(scheme)
        if retriever is None:
            raise FetchError(f"Unsupported URI scheme: {scheme}", uri=uri)

        try:
            return retriever.retrieve(uri)
        finally:
            self.content_type = retriever.get_content_type()
