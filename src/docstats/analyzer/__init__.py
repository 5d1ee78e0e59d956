"""Analyzer module for document text and image statistics."""

from .analyzer import AnalysisResult, DocumentAnalyzer
from .cancellation import CancellationToken
from .errors import (
    AnalysisCancelledError,
    AnalysisError,
    FileTooLargeError,
    MalformedDocumentError,
    UnsupportedFormatError,
)
from .extractors import (
    BaseExtractor,
    DOCXExtractor,
    ExtractedContent,
    PDFExtractor,
    build_extractors,
)
from .formats import SupportedFormat, classify_format, get_supported_extensions
from .providers import (
    ContainerReader,
    DocxPackage,
    DrawingOp,
    PDFContentProvider,
    PDFDocument,
    PDFPage,
    ProviderError,
    PyMuPDFProvider,
    ZipContainerReader,
)
from .statistics import Statistics, calculate_statistics

__all__ = [
    "DocumentAnalyzer",
    "AnalysisResult",
    "CancellationToken",
    "Statistics",
    "calculate_statistics",
    "SupportedFormat",
    "classify_format",
    "get_supported_extensions",
    "ExtractedContent",
    "BaseExtractor",
    "PDFExtractor",
    "DOCXExtractor",
    "build_extractors",
    "AnalysisError",
    "UnsupportedFormatError",
    "MalformedDocumentError",
    "AnalysisCancelledError",
    "FileTooLargeError",
    "ProviderError",
    "DrawingOp",
    "PDFContentProvider",
    "PDFDocument",
    "PDFPage",
    "ContainerReader",
    "DocxPackage",
    "PyMuPDFProvider",
    "ZipContainerReader",
]
