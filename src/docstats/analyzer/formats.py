"""Format classification by file extension."""

from enum import Enum
from pathlib import PurePath

from .errors import UnsupportedFormatError


class SupportedFormat(str, Enum):
    """Document container formats the analyzer understands."""

    PDF = "pdf"
    DOCX = "docx"


def get_supported_extensions() -> set[str]:
    """Get all supported file extensions (lowercase, without dot)."""
    return {fmt.value for fmt in SupportedFormat}


def classify_format(file_name: str) -> SupportedFormat:
    """
    Infer the document format from a file name.

    Only the text after the last dot is used, compared case-insensitively,
    so ``report.v2.PDF`` is a PDF. The content itself is never sniffed.

    Args:
        file_name: Name (or path) of the file

    Returns:
        The matching SupportedFormat

    Raises:
        UnsupportedFormatError: If the extension is missing or not supported
    """
    name = PurePath(file_name).name if file_name else ""
    if "." not in name:
        raise UnsupportedFormatError(file_name)

    extension = name.rsplit(".", 1)[1].lower()
    try:
        return SupportedFormat(extension)
    except ValueError:
        raise UnsupportedFormatError(file_name, extension) from None
