"""Interface for document-to-text converters"""

from abc import ABC, abstractmethod


class TextConverterInterface(ABC):
    """Abstract base class for local document-to-text converters"""

    @property
    @abstractmethod
    def available(self) -> bool:
        """Whether the converter's backing library is loaded"""
        pass

    @abstractmethod
    def convert(self, data: bytes) -> str:
        """Extract plain text from a binary document

        Args:
            data: Raw document bytes

        Returns:
            Extracted plain text
        """
        pass
