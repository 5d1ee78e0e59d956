"""Document analyzer: format dispatch and statistics."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..utils.logging import get_logger
from .cancellation import CancellationToken
from .errors import AnalysisError, FileTooLargeError
from .extractors import DEFAULT_MEDIA_DIR, BaseExtractor, build_extractors
from .formats import SupportedFormat, classify_format
from .statistics import Statistics, calculate_statistics

logger = get_logger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Statistics for one analyzed file, ready for display."""

    file_name: str
    file_size_bytes: int
    statistics: Statistics


class DocumentAnalyzer:
    """
    Computes text and image statistics for PDF and DOCX documents.

    Each format is handled by exactly one extractor. The analyzer keeps no
    state between calls, so analyzing the same bytes twice gives equal
    statistics.
    """

    def __init__(
        self,
        extractors: Optional[dict[SupportedFormat, BaseExtractor]] = None,
        max_file_size_mb: float = 100,
        media_dir: str = DEFAULT_MEDIA_DIR,
    ):
        """
        Initialize the analyzer.

        Args:
            extractors: Extractor per format. Defaults to the PyMuPDF and
                python-docx backed extractors.
            max_file_size_mb: Size limit applied by ``analyze_file``
            media_dir: DOCX folder counted for images (default extractors only)
        """
        self.extractors = extractors or build_extractors(media_dir=media_dir)
        missing = set(SupportedFormat) - set(self.extractors)
        if missing:
            raise ValueError(f"No extractor for formats: {sorted(f.value for f in missing)}")
        self.max_file_size_bytes = int(max_file_size_mb * 1024 * 1024)

    @classmethod
    def from_config(cls, config) -> "DocumentAnalyzer":
        """Create an analyzer from a DocStatsConfig."""
        return cls(
            max_file_size_mb=config.analysis.max_file_size_mb,
            media_dir=config.analysis.media_dir,
        )

    def analyze(
        self,
        file_bytes: bytes,
        file_name: str,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Statistics:
        """
        Analyze an in-memory document.

        Args:
            file_bytes: Raw document bytes
            file_name: File name used to pick the format
            cancel_token: Optional token to stop a long extraction

        Returns:
            Statistics for the document

        Raises:
            UnsupportedFormatError: If the file name has no supported extension
            MalformedDocumentError: If the bytes cannot be parsed
            AnalysisCancelledError: If the token was cancelled
        """
        document_format = classify_format(file_name)
        extractor = self.extractors[document_format]

        try:
            content = extractor.extract(file_bytes, cancel_token)
        except AnalysisError as e:
            logger.error(f"Analysis failed for {file_name}: {e}")
            raise

        statistics = calculate_statistics(content.text, content.image_count)
        logger.info(
            f"Analyzed {file_name}: {statistics.word_count} words, "
            f"{statistics.image_count} images, {len(file_bytes)} bytes"
        )
        return statistics

    def read_document(self, file_path: Path) -> bytes:
        """
        Read a supported document from disk, enforcing the size limit.

        The format is checked before the file is touched.

        Raises:
            UnsupportedFormatError: If the file name has no supported extension
            FileTooLargeError: If the file exceeds the size limit
            OSError: If the file cannot be read
        """
        file_path = Path(file_path)
        classify_format(file_path.name)

        size_bytes = file_path.stat().st_size
        if size_bytes > self.max_file_size_bytes:
            raise FileTooLargeError(size_bytes, self.max_file_size_bytes)

        return file_path.read_bytes()

    def analyze_file(
        self, file_path: Path, cancel_token: Optional[CancellationToken] = None
    ) -> AnalysisResult:
        """
        Read a document from disk and analyze it.

        Args:
            file_path: Path to the document
            cancel_token: Optional token to stop a long extraction

        Returns:
            AnalysisResult with file name, size and statistics

        Raises:
            OSError: If the file cannot be read
            FileTooLargeError: If the file exceeds the size limit
            AnalysisError: Any failure raised by ``analyze``
        """
        file_path = Path(file_path)
        file_bytes = self.read_document(file_path)
        statistics = self.analyze(file_bytes, file_path.name, cancel_token)
        return AnalysisResult(
            file_name=file_path.name,
            file_size_bytes=len(file_bytes),
            statistics=statistics,
        )
