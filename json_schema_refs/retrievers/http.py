"""
Retriever for HTTP and HTTPS URIs.
"""

import logging
from typing import Optional

import requests

from .base import Retriever
from ..api import FetchError

logger = logging.getLogger("json_schema_refs")

ACCEPT = "application/schema+json, application/json;q=0.9, */*;q=0.1"


class HttpRetriever(Retriever):
    """Loads documents over HTTP(S) with `requests`."""

    def __init__(self, timeout: float = 30, session: Optional[requests.Session] = None):
        """
        Initialize a new HTTP retriever.

        Args:
            timeout: Seconds to wait for the server before giving up
            session: Session to reuse connections with; plain requests if omitted
        """
        super().__init__()
        self.timeout = timeout
        self.session = session

    def retrieve(self, uri: str) -> str:
        """
        Download a document.

        Args:
            uri: `http://` or `https://` URI

        Returns:
            The response body

        Raises:
            FetchError: On connection errors, timeouts and 4XX/5XX responses
        """
        get = self.session.get if self.session is not None else requests.get
        self.content_type = None

        try:
            response = get(uri, headers={"Accept": ACCEPT}, timeout=self.timeout)
            # Raises an HTTPError if the response status code is 4XX/5XX
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(f"Failed to download {uri}: {e}", uri=uri) from e

        self.content_type = response.headers.get("Content-Type")
        logger.debug(f"Downloaded {uri} ({self.content_type})")

        return response.text
