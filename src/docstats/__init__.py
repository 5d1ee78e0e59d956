"""
DocStats - document statistics for PDF and DOCX files.

Extracts the text of a document, counts its embedded images and reports
character, whitespace and word counts.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .analyzer import (
    AnalysisError,
    AnalysisResult,
    DocumentAnalyzer,
    MalformedDocumentError,
    Statistics,
    SupportedFormat,
    UnsupportedFormatError,
    calculate_statistics,
    classify_format,
)
from .session import AnalysisSession, SessionState
from .utils.logging import get_logger

__all__ = [
    "get_logger",
    # Analyzer
    "DocumentAnalyzer",
    "AnalysisResult",
    "Statistics",
    "SupportedFormat",
    "calculate_statistics",
    "classify_format",
    "AnalysisError",
    "UnsupportedFormatError",
    "MalformedDocumentError",
    # Session
    "AnalysisSession",
    "SessionState",
]
