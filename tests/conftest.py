"""Shared fixtures: in-memory documents and fake content providers."""

import io
import zipfile

import pytest

from docstats.analyzer.providers import (
    ContainerReader,
    DocxPackage,
    DrawingOp,
    PDFContentProvider,
    PDFDocument,
    PDFPage,
    ProviderError,
)


def _png_bytes(shade: int) -> bytes:
    import fitz

    pix = fitz.Pixmap(fitz.csRGB, fitz.IRect(0, 0, 4, 4), False)
    pix.clear_with(shade)
    return pix.tobytes("png")


def build_pdf(pages: list[str], images_per_page: list[int] | None = None) -> bytes:
    """Create a PDF with one page per text entry, optionally with images."""
    import fitz

    images_per_page = images_per_page or [0] * len(pages)
    doc = fitz.open()
    for page_text, image_count in zip(pages, images_per_page):
        page = doc.new_page()
        if page_text:
            page.insert_text((72, 72), page_text)
        for n in range(image_count):
            top = 120 + n * 60
            page.insert_image(fitz.Rect(72, top, 122, top + 50), stream=_png_bytes(40 + n * 50))
    data = doc.tobytes()
    doc.close()
    return data


def build_docx(
    paragraphs: list[str], table_cells: list[str] | None = None, pictures: int = 0
) -> bytes:
    """Create a DOCX with paragraphs, an optional one-row table and pictures."""
    from docx import Document
    from docx.shared import Inches

    document = Document()
    for text in paragraphs:
        document.add_paragraph(text)
    if table_cells:
        table = document.add_table(rows=1, cols=len(table_cells))
        for cell, text in zip(table.rows[0].cells, table_cells):
            cell.text = text
    for n in range(pictures):
        document.add_picture(io.BytesIO(_png_bytes(30 + n * 60)), width=Inches(0.5))

    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def add_zip_entries(data: bytes, entries: list[str]) -> bytes:
    """Copy a ZIP archive and add placeholder entries to it."""
    source = zipfile.ZipFile(io.BytesIO(data))
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as target:
        for item in source.infolist():
            target.writestr(item, source.read(item.filename))
        for name in entries:
            target.writestr(name, b"\x89PNG fake")
    return buffer.getvalue()


class FakePDFPage(PDFPage):
    def __init__(self, runs: list[str], ops: list[DrawingOp] | None = None, fail: bool = False):
        self.runs = runs
        self.ops = ops or []
        self.fail = fail

    def get_text_runs(self) -> list[str]:
        if self.fail:
            raise ProviderError("truncated content stream")
        return list(self.runs)

    def get_drawing_ops(self) -> list[DrawingOp]:
        return list(self.ops)


class FakePDFDocument(PDFDocument):
    def __init__(self, pages: list[FakePDFPage]):
        self.pages = pages
        self.requested: list[int] = []
        self.closed = False

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def get_page(self, number: int) -> PDFPage:
        self.requested.append(number)
        return self.pages[number - 1]

    def close(self):
        self.closed = True


class FakePDFProvider(PDFContentProvider):
    def __init__(self, pages: list[FakePDFPage] | None = None, error: str | None = None):
        self.pages = pages or []
        self.error = error
        self.opened: list[FakePDFDocument] = []

    def open_document(self, data: bytes) -> PDFDocument:
        if self.error:
            raise ProviderError(self.error)
        document = FakePDFDocument(self.pages)
        self.opened.append(document)
        return document


class FakeDocxPackage(DocxPackage):
    def __init__(self, text: str, entries: dict[str, list[str]]):
        self.text = text
        self.entries = entries
        self.closed = False

    def extract_raw_text(self) -> str:
        return self.text

    def list_entries_under(self, path: str) -> list[str]:
        return list(self.entries.get(path, []))

    def close(self):
        self.closed = True


class FakeContainerReader(ContainerReader):
    def __init__(
        self,
        text: str = "",
        entries: dict[str, list[str]] | None = None,
        error: str | None = None,
    ):
        self.text = text
        self.entries = entries or {}
        self.error = error
        self.opened: list[FakeDocxPackage] = []

    def open_package(self, data: bytes) -> DocxPackage:
        if self.error:
            raise ProviderError(self.error)
        package = FakeDocxPackage(self.text, self.entries)
        self.opened.append(package)
        return package


@pytest.fixture
def fake_pdf_provider():
    """Factory for fake PDF providers."""
    return FakePDFProvider


@pytest.fixture
def fake_pdf_page():
    """Factory for fake PDF pages."""
    return FakePDFPage


@pytest.fixture
def fake_container_reader():
    """Factory for fake DOCX container readers."""
    return FakeContainerReader


@pytest.fixture
def pdf_factory():
    """Factory building real PDF bytes with PyMuPDF."""
    pytest.importorskip("fitz")
    return build_pdf


@pytest.fixture
def docx_factory():
    """Factory building real DOCX bytes with python-docx."""
    pytest.importorskip("docx")
    pytest.importorskip("fitz")
    return build_docx


@pytest.fixture
def zip_editor():
    """Helper that rewrites ZIP archives."""
    return add_zip_entries


@pytest.fixture(autouse=True)
def reset_config_manager():
    """Drop the cached global config manager between tests."""
    import docstats.config.manager as manager

    manager._config_manager = None
    yield
    manager._config_manager = None
