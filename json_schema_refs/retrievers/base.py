"""
Base retriever class.
"""

from abc import ABC, abstractmethod
from typing import Optional


class Retriever(ABC):
    """
    Abstract base class for transport retrievers.

    A retriever loads the raw text of a document and remembers the media
    type reported for it, if the transport knows one.
    """

    def __init__(self):
        """Initialize a new retriever."""
        self.content_type: Optional[str] = None

    @abstractmethod
    def retrieve(self, uri: str) -> str:
        """
        Load the document at a URI.

        Args:
            uri: Absolute URI or file path without fragment

        Returns:
            The raw document text

        Raises:
            FetchError: If the document cannot be loaded
        """
        pass

    def get_content_type(self) -> Optional[str]:
        """
        Get the media type of the last retrieved document.

        Returns:
            Media type string, or None if the transport has no notion of one
        """
        return self.content_type
