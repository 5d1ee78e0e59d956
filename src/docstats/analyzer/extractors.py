"""Text and image extractors for the supported document formats."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ..utils.logging import get_logger
from .cancellation import CancellationToken
from .errors import MalformedDocumentError
from .formats import SupportedFormat
from .providers import (
    ContainerReader,
    PDFContentProvider,
    PyMuPDFProvider,
    ZipContainerReader,
)

logger = get_logger(__name__)

DEFAULT_MEDIA_DIR = "word/media/"


@dataclass(frozen=True)
class ExtractedContent:
    """Text and image count pulled out of one document."""

    text: str
    image_count: int = 0

    def __post_init__(self):
        if self.image_count < 0:
            raise ValueError(f"image_count must be non-negative, got {self.image_count}")


class BaseExtractor(ABC):
    """Base class for format extractors."""

    @property
    @abstractmethod
    def format(self) -> SupportedFormat:
        """Return the format this extractor handles."""
        pass

    @abstractmethod
    def extract(
        self, data: bytes, cancel_token: Optional[CancellationToken] = None
    ) -> ExtractedContent:
        """
        Extract text and count images from a document buffer.

        Args:
            data: Raw document bytes
            cancel_token: Optional token checked between pages or entries

        Returns:
            ExtractedContent for the document

        Raises:
            MalformedDocumentError: If the buffer cannot be parsed
            AnalysisCancelledError: If the token is cancelled mid-extraction
        """
        pass


class PDFExtractor(BaseExtractor):
    """Extractor for PDF files."""

    def __init__(self, provider: Optional[PDFContentProvider] = None):
        self.provider = provider or PyMuPDFProvider()

    @property
    def format(self) -> SupportedFormat:
        return SupportedFormat.PDF

    def extract(
        self, data: bytes, cancel_token: Optional[CancellationToken] = None
    ) -> ExtractedContent:
        try:
            document = self.provider.open_document(data)
        except Exception as e:
            raise MalformedDocumentError(SupportedFormat.PDF, str(e)) from e

        page_texts: list[str] = []
        image_count = 0

        with document:
            for page_number in range(1, document.page_count + 1):
                if cancel_token is not None:
                    cancel_token.raise_if_cancelled()

                try:
                    page = document.get_page(page_number)
                    runs = page.get_text_runs()
                    ops = page.get_drawing_ops()
                except Exception as e:
                    raise MalformedDocumentError(SupportedFormat.PDF, str(e)) from e

                # Pages are joined with a space even when a word spans the break
                page_texts.append(" ".join(runs) + " ")
                page_images = sum(1 for op in ops if op.is_image)
                image_count += page_images

                logger.debug(
                    f"Page {page_number}: {len(runs)} text runs, {page_images} images"
                )

        text = "".join(page_texts)
        logger.debug(f"Extracted {len(text)} chars and {image_count} images from PDF")
        return ExtractedContent(text=text, image_count=image_count)


class DOCXExtractor(BaseExtractor):
    """Extractor for DOCX files."""

    def __init__(
        self,
        reader: Optional[ContainerReader] = None,
        media_dir: str = DEFAULT_MEDIA_DIR,
    ):
        self.reader = reader or ZipContainerReader()
        self.media_dir = media_dir

    @property
    def format(self) -> SupportedFormat:
        return SupportedFormat.DOCX

    def extract(
        self, data: bytes, cancel_token: Optional[CancellationToken] = None
    ) -> ExtractedContent:
        try:
            package = self.reader.open_package(data)
        except Exception as e:
            raise MalformedDocumentError(SupportedFormat.DOCX, str(e)) from e

        with package:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()

            try:
                text = package.extract_raw_text()
                entries = package.list_entries_under(self.media_dir)
            except Exception as e:
                raise MalformedDocumentError(SupportedFormat.DOCX, str(e)) from e

            image_count = 0
            for entry in entries:
                if cancel_token is not None:
                    cancel_token.raise_if_cancelled()
                image_count += 1
                logger.debug(f"Media entry: {entry}")

        logger.debug(f"Extracted {len(text)} chars and {image_count} images from DOCX")
        return ExtractedContent(text=text, image_count=image_count)


def build_extractors(
    pdf_provider: Optional[PDFContentProvider] = None,
    container_reader: Optional[ContainerReader] = None,
    media_dir: str = DEFAULT_MEDIA_DIR,
) -> dict[SupportedFormat, BaseExtractor]:
    """
    Build the extractor for every supported format.

    Args:
        pdf_provider: PDF backend (PyMuPDF by default)
        container_reader: DOCX backend (zipfile/python-docx by default)
        media_dir: Package folder whose entries are counted as images

    Returns:
        Mapping with exactly one extractor per SupportedFormat
    """
    return {
        SupportedFormat.PDF: PDFExtractor(pdf_provider),
        SupportedFormat.DOCX: DOCXExtractor(container_reader, media_dir),
    }
