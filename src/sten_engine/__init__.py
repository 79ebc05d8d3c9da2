"""STEN Engine - embed and extract pipelines."""
from .embed import embed
from .extract import extract
from .scan import HeaderScanner, find_header

__all__ = ["embed", "extract", "HeaderScanner", "find_header"]
