"""Live retrieval of official source pages."""

from plaingov.retrieval.client import DocumentRetriever
from plaingov.retrieval.extract import extract_text

__all__ = ["DocumentRetriever", "extract_text"]
