"""Document extractor service"""

import asyncio
import base64
import logging
import mimetypes
import os
from typing import BinaryIO, Optional, Union

from ..interfaces.converter_interface import TextConverterInterface
from ..models.document_models import DocumentPayload, InlineBinaryPayload, TextPayload
from ..models.errors import (
    DependencyUnavailableError,
    DocumentConversionError,
    UnsupportedFormatError,
)

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"
TEXT_MIME_TYPE = "text/plain"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOCX_MARKER = "[Extracted Content from DOCX]:\n"

DocumentSource = Union[str, os.PathLike, BinaryIO]


def _read_bytes(source: DocumentSource) -> bytes:
    if isinstance(source, (str, os.PathLike)):
        with open(source, "rb") as f:
            return f.read()
    if hasattr(source, "seek"):
        source.seek(0)
    return source.read()


def _decode_text(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def _media_type(value: Optional[str]) -> Optional[str]:
    """Drop parameters such as charset: `text/plain; charset=utf-8` -> `text/plain`"""
    if not value:
        return None
    return value.split(";", 1)[0].strip().lower() or None


def guess_mime_type(source: DocumentSource) -> Optional[str]:
    """Guess a media type from a path or a file object's name"""
    name = source if isinstance(source, (str, os.PathLike)) else getattr(source, "name", None)
    if not isinstance(name, (str, os.PathLike)):
        return None
    if str(name).lower().endswith(".docx"):
        return DOCX_MIME_TYPE
    return mimetypes.guess_type(str(name))[0]


class DocumentExtractor:
    """Turns an uploaded syllabus into a payload the model can consume"""

    def __init__(self, converter: Optional[TextConverterInterface] = None):
        self.converter = converter

    async def extract(self, source: DocumentSource, mime_type: Optional[str] = None) -> DocumentPayload:
        """Read ``source`` and convert it according to its media type.

        PDF is passed through as base64 inline data, plain text is decoded,
        and DOCX is converted to text locally.

        Raises:
            UnsupportedFormatError: for any other media type
            DependencyUnavailableError: when no DOCX converter is loaded
            DocumentConversionError: when the DOCX converter fails
        """
        mime_type = _media_type(mime_type) or guess_mime_type(source)
        logger.info("Extracting document content (type: %s)", mime_type)

        if mime_type == PDF_MIME_TYPE:
            data = await asyncio.to_thread(_read_bytes, source)
            return InlineBinaryPayload(data=base64.b64encode(data).decode("ascii"), mime_type=mime_type)

        if mime_type == TEXT_MIME_TYPE:
            data = await asyncio.to_thread(_read_bytes, source)
            return TextPayload(text=_decode_text(data))

        if mime_type == DOCX_MIME_TYPE:
            if self.converter is None or not self.converter.available:
                raise DependencyUnavailableError(
                    "Document processor (python-docx) not loaded. Install it and retry."
                )
            data = await asyncio.to_thread(_read_bytes, source)
            try:
                text = await asyncio.to_thread(self.converter.convert, data)
            except Exception as e:
                raise DocumentConversionError(f"Failed to process DOCX file: {e}") from e
            logger.info("Extracted %d characters from DOCX", len(text))
            return TextPayload(text=DOCX_MARKER + text)

        raise UnsupportedFormatError(mime_type)
