"""Error taxonomy for document analysis."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .formats import SupportedFormat


class AnalysisError(Exception):
    """Base class for every failure surfaced by the analyzer."""

    pass


class UnsupportedFormatError(AnalysisError):
    """Raised when a file name does not carry a supported extension."""

    def __init__(self, file_name: str, extension: str | None = None):
        self.file_name = file_name
        self.extension = extension
        if extension:
            message = (
                f"Unsupported file type '.{extension}' for {file_name}. "
                "Please use a PDF or DOCX file."
            )
        else:
            message = f"File {file_name} has no extension. Please use a PDF or DOCX file."
        super().__init__(message)


class MalformedDocumentError(AnalysisError):
    """Raised when bytes cannot be parsed as the claimed container format."""

    def __init__(self, document_format: "SupportedFormat", reason: str = ""):
        self.format = document_format
        self.reason = reason
        message = f"Could not read the file as a valid {document_format.name} document"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class AnalysisCancelledError(AnalysisError):
    """Raised when an analysis is cancelled through its token."""

    def __init__(self):
        super().__init__("Analysis was cancelled")


class FileTooLargeError(AnalysisError):
    """Raised when a file on disk exceeds the configured size limit."""

    def __init__(self, size_bytes: int, limit_bytes: int):
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        super().__init__(
            f"File too large: {size_bytes / 1024 / 1024:.1f}MB exceeds limit of "
            f"{limit_bytes / 1024 / 1024:.0f}MB"
        )
