import asyncio
import base64
import io

import docx
import pytest

from syllabus_auditor.interfaces.converter_interface import TextConverterInterface
from syllabus_auditor.models.document_models import InlineBinaryPayload, TextPayload
from syllabus_auditor.models.errors import (
    DependencyUnavailableError,
    DocumentConversionError,
    UnsupportedFormatError,
)
from syllabus_auditor.services.document_extractor import (
    DOCX_MARKER,
    DOCX_MIME_TYPE,
    DocumentExtractor,
)
from syllabus_auditor.services.docx_converter import DocxTextConverter


class StubConverter(TextConverterInterface):
    def __init__(self, available=True, text="converted", error=None):
        self._available = available
        self.text = text
        self.error = error

    @property
    def available(self) -> bool:
        return self._available

    def convert(self, data: bytes) -> str:
        if self.error:
            raise self.error
        return self.text


def test_pdf_is_inline_base64(tmp_path) -> None:
    path = tmp_path / "syllabus.pdf"
    path.write_bytes(b"%PDF-1.4 fake")
    payload = asyncio.run(DocumentExtractor().extract(str(path)))
    assert payload == InlineBinaryPayload(
        data=base64.b64encode(b"%PDF-1.4 fake").decode("ascii"),
        mime_type="application/pdf",
    )


def test_plain_text_from_file_object() -> None:
    handle = io.BytesIO("Course: Intro to Algorithms.".encode("utf-8"))
    payload = asyncio.run(DocumentExtractor().extract(handle, "text/plain"))
    assert payload == TextPayload("Course: Intro to Algorithms.")


def test_plain_text_latin1_fallback() -> None:
    payload = asyncio.run(DocumentExtractor().extract(io.BytesIO("café".encode("latin-1")), "text/plain"))
    assert payload.text == "café"


def test_docx_text_is_marked() -> None:
    extractor = DocumentExtractor(StubConverter(text="Week 1: Sorting"))
    payload = asyncio.run(extractor.extract(io.BytesIO(b"PK"), DOCX_MIME_TYPE))
    assert payload == TextPayload(DOCX_MARKER + "Week 1: Sorting")


def test_docx_without_converter_is_dependency_unavailable() -> None:
    with pytest.raises(DependencyUnavailableError):
        asyncio.run(DocumentExtractor().extract(io.BytesIO(b"PK"), DOCX_MIME_TYPE))
    with pytest.raises(DependencyUnavailableError):
        asyncio.run(DocumentExtractor(StubConverter(available=False)).extract(io.BytesIO(b"PK"), DOCX_MIME_TYPE))


def test_docx_converter_failure_is_prefixed() -> None:
    extractor = DocumentExtractor(StubConverter(error=ValueError("not a zip file")))
    with pytest.raises(DocumentConversionError, match="Failed to process DOCX file: not a zip file"):
        asyncio.run(extractor.extract(io.BytesIO(b"junk"), DOCX_MIME_TYPE))


def test_unsupported_type_names_the_type() -> None:
    with pytest.raises(UnsupportedFormatError, match="image/png") as excinfo:
        asyncio.run(DocumentExtractor().extract(io.BytesIO(b""), "image/png"))
    assert excinfo.value.mime_type == "image/png"


def test_real_docx_conversion(tmp_path) -> None:
    document = docx.Document()
    document.add_paragraph("Course: Data Structures")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Week 1"
    table.rows[0].cells[1].text = "Arrays"
    path = tmp_path / "outline.docx"
    document.save(str(path))

    payload = asyncio.run(DocumentExtractor(DocxTextConverter()).extract(str(path)))
    assert payload.text.startswith(DOCX_MARKER)
    assert "Course: Data Structures" in payload.text
    assert "Week 1 | Arrays" in payload.text


def test_media_type_parameters_are_ignored() -> None:
    handle = io.BytesIO("Week 1: Sorting".encode("utf-8"))
    payload = asyncio.run(DocumentExtractor().extract(handle, "Text/Plain; charset=utf-8"))
    assert payload == TextPayload("Week 1: Sorting")


def test_pdf_media_type_is_normalized_in_payload() -> None:
    payload = asyncio.run(DocumentExtractor().extract(io.BytesIO(b"%PDF"), "application/pdf ; name=x.pdf"))
    assert payload.mime_type == "application/pdf"
