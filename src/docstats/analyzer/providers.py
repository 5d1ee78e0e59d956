"""Content providers: the parsing backends the extractors depend on."""

import io
import zipfile
from abc import ABC, abstractmethod
from enum import Enum

from ..utils.logging import get_logger

logger = get_logger(__name__)


class ProviderError(Exception):
    """Raised when a backend cannot open or read a document."""

    pass


class DrawingOp(str, Enum):
    """Page-painting operations reported by a PDF provider."""

    PAINT_IMAGE_XOBJECT = "paint_image_xobject"
    PAINT_INLINE_IMAGE = "paint_inline_image"
    SHOW_TEXT = "show_text"
    PATH = "path"
    OTHER = "other"

    @property
    def is_image(self) -> bool:
        """Whether this operation paints an image."""
        return self in (DrawingOp.PAINT_IMAGE_XOBJECT, DrawingOp.PAINT_INLINE_IMAGE)


class PDFPage(ABC):
    """A single page of an opened PDF."""

    @abstractmethod
    def get_text_runs(self) -> list[str]:
        """Return the page's text runs in the provider's reading order."""
        pass

    @abstractmethod
    def get_drawing_ops(self) -> list[DrawingOp]:
        """Return the page's drawing operations."""
        pass


class PDFDocument(ABC):
    """An opened PDF document."""

    @property
    @abstractmethod
    def page_count(self) -> int:
        pass

    @abstractmethod
    def get_page(self, number: int) -> PDFPage:
        """
        Load a page.

        Args:
            number: 1-based page number

        Raises:
            ProviderError: If the page cannot be loaded
        """
        pass

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class PDFContentProvider(ABC):
    """Opens PDF byte buffers."""

    @abstractmethod
    def open_document(self, data: bytes) -> PDFDocument:
        """
        Open a PDF from memory.

        Raises:
            ProviderError: If the buffer is not a readable PDF
        """
        pass


class DocxPackage(ABC):
    """An opened OOXML word-processing package."""

    @abstractmethod
    def extract_raw_text(self) -> str:
        """Return the main document text with paragraphs separated by whitespace."""
        pass

    @abstractmethod
    def list_entries_under(self, path: str) -> list[str]:
        """Return archive entry names under a folder, or an empty list if it is absent."""
        pass

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class ContainerReader(ABC):
    """Opens DOCX byte buffers."""

    @abstractmethod
    def open_package(self, data: bytes) -> DocxPackage:
        """
        Open a DOCX package from memory.

        Raises:
            ProviderError: If the buffer is not a readable ZIP archive
        """
        pass


class PyMuPDFPage(PDFPage):
    """Page backed by a PyMuPDF (fitz) page."""

    def __init__(self, page):
        self._page = page

    def get_text_runs(self) -> list[str]:
        import fitz  # PyMuPDF

        try:
            # Text-only flags keep image bytes out of the page dictionary
            page_dict = self._page.get_text("dict", flags=fitz.TEXTFLAGS_TEXT)
        except Exception as e:
            raise ProviderError(f"Failed to read text on page {self._page.number + 1}: {e}") from e

        runs: list[str] = []
        for block in page_dict.get("blocks", []):
            # type 1 blocks are images
            if block.get("type") != 0:
                continue
            for line in block.get("lines", []):
                for span in line.get("spans", []):
                    runs.append(span.get("text", ""))
        return runs

    def get_drawing_ops(self) -> list[DrawingOp]:
        try:
            image_infos = self._page.get_image_info(xrefs=True)
        except Exception as e:
            raise ProviderError(
                f"Failed to read drawing operations on page {self._page.number + 1}: {e}"
            ) from e

        # One entry per image paint; inline images have no xref
        return [
            DrawingOp.PAINT_IMAGE_XOBJECT if info.get("xref", 0) else DrawingOp.PAINT_INLINE_IMAGE
            for info in image_infos
        ]


class PyMuPDFDocument(PDFDocument):
    """Document backed by a PyMuPDF (fitz) document."""

    def __init__(self, doc):
        self._doc = doc

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    def get_page(self, number: int) -> PDFPage:
        try:
            return PyMuPDFPage(self._doc.load_page(number - 1))
        except Exception as e:
            raise ProviderError(f"Failed to load page {number}: {e}") from e

    def close(self):
        self._doc.close()


class PyMuPDFProvider(PDFContentProvider):
    """PDF provider using PyMuPDF (fitz)."""

    def open_document(self, data: bytes) -> PDFDocument:
        try:
            import fitz  # PyMuPDF
        except ImportError:
            raise ProviderError(
                "PyMuPDF (fitz) is not installed. Install with: pip install pymupdf"
            )

        if not data:
            raise ProviderError("Empty PDF buffer")

        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except Exception as e:
            raise ProviderError(f"Failed to open PDF: {e}") from e

        if doc.needs_pass:
            doc.close()
            raise ProviderError("PDF is encrypted")
        if doc.page_count == 0:
            doc.close()
            raise ProviderError("PDF has no pages")

        logger.debug(f"Opened PDF with {doc.page_count} pages")
        return PyMuPDFDocument(doc)


class OOXMLPackage(DocxPackage):
    """DOCX package read with zipfile and python-docx."""

    def __init__(self, data: bytes, archive: zipfile.ZipFile):
        self._data = data
        self._archive = archive

    def extract_raw_text(self) -> str:
        try:
            from docx import Document
            from docx.oxml.ns import qn
            from docx.text.paragraph import Paragraph
        except ImportError:
            raise ProviderError(
                "python-docx is not installed. Install with: pip install python-docx"
            )

        try:
            document = Document(io.BytesIO(self._data))
            body = document.element.body
            # Body paragraphs in document order, including those inside tables
            paragraphs = [Paragraph(p, document) for p in body.iter(qn("w:p"))]
            return "".join(paragraph.text + "\n\n" for paragraph in paragraphs)
        except Exception as e:
            raise ProviderError(f"Failed to read document text: {e}") from e

    def list_entries_under(self, path: str) -> list[str]:
        prefix = path if path.endswith("/") else f"{path}/"
        return [
            name for name in self._archive.namelist() if name.startswith(prefix) and name != prefix
        ]

    def close(self):
        self._archive.close()


class ZipContainerReader(ContainerReader):
    """Container reader for ZIP-based OOXML packages."""

    def open_package(self, data: bytes) -> DocxPackage:
        try:
            archive = zipfile.ZipFile(io.BytesIO(data))
        except (zipfile.BadZipFile, ValueError) as e:
            raise ProviderError(f"Not a valid ZIP archive: {e}") from e

        logger.debug(f"Opened package with {len(archive.namelist())} entries")
        return OOXMLPackage(data, archive)
