"""Error types raised by the syllabus analysis pipeline"""


class SyllabusAuditorError(Exception):
    """Base class for pipeline errors"""


class UnsupportedFormatError(SyllabusAuditorError):
    """The uploaded document has a media type the pipeline cannot read"""

    def __init__(self, mime_type: str):
        self.mime_type = mime_type
        super().__init__(
            f"Unsupported file type: {mime_type or 'unknown'}. Please upload PDF, DOCX, or TXT."
        )


class DependencyUnavailableError(SyllabusAuditorError):
    """A local document processor is not installed or not loaded"""


class DocumentConversionError(SyllabusAuditorError):
    """The document-to-text converter failed on the given document"""


class StageTimeoutError(SyllabusAuditorError):
    """An upstream model call did not finish within its stage budget"""
