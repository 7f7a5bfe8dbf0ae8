"""DOCX to text converter backed by python-docx"""

from io import BytesIO

from ..interfaces.converter_interface import TextConverterInterface

try:
    import docx
except ImportError:
    docx = None


class DocxTextConverter(TextConverterInterface):
    """Extracts paragraph and table text from word-processing documents"""

    @property
    def available(self) -> bool:
        return docx is not None

    def convert(self, data: bytes) -> str:
        document = docx.Document(BytesIO(data))
        lines = [paragraph.text for paragraph in document.paragraphs]
        for table in document.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    lines.append(" | ".join(cells))
        return "\n".join(lines)
