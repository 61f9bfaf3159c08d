"""
Retriever for local files.
"""

import os
from pathlib import Path
from urllib.parse import unquote, urlsplit

from .base import Retriever
from ..api import FetchError


class FileRetriever(Retriever):
    """Loads documents from `file://` URIs and plain file paths."""

    def retrieve(self, uri: str) -> str:
        """
        Read a local file.

        Args:
            uri: `file://` URI or file path

        Returns:
            The file contents

        Raises:
            FetchError: If the file cannot be read
        """
        path = self.to_path(uri)
        self.content_type = None

        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FetchError(f"Failed to read {path}: {e}", uri=uri) from e

    @staticmethod
    def to_path(uri: str) -> Path:
        """
        Convert a `file://` URI or plain path to a filesystem path.

        Args:
            uri: `file://` URI or file path

        Returns:
            Path object
        """
        parts = urlsplit(uri)
        if parts.scheme != "file":
            return Path(uri)

        file_path = unquote(parts.path)
        if parts.netloc and parts.netloc != "localhost":
            file_path = f"//{parts.netloc}{file_path}"
        # A file URI on Windows starts with '/' before the drive letter
        if os.name == "nt" and file_path.startswith("/") and file_path[2:3] == ":":
            file_path = file_path[1:]

        return Path(file_path)
