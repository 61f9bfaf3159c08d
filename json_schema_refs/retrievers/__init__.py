"""
Transport retrievers that load the raw text of a schema document.
"""

from .base import Retriever
from .file import FileRetriever
from .http import HttpRetriever
from .predefined import PredefinedRetriever
from .scheme import SchemeRetriever

__all__ = [
    "Retriever",
    "FileRetriever",
    "HttpRetriever",
    "PredefinedRetriever",
    "SchemeRetriever",
]
