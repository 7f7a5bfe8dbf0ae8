"""Interface for LLM clients"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from ..models.document_models import DocumentPayload


@dataclass
class Citation:
    """Search grounding source attached to a response"""
    uri: Optional[str] = None
    title: Optional[str] = None


@dataclass
class GenerationResponse:
    """Text returned by the model plus any grounding citations"""
    text: str = ""
    citations: List[Citation] = field(default_factory=list)


class LLMInterface(ABC):
    """Abstract base class for LLM clients"""

    @abstractmethod
    async def generate(
        self,
        parts: Sequence[DocumentPayload],
        *,
        response_schema: Optional[Any] = None,
        json_output: bool = False,
        use_search: bool = False,
    ) -> GenerationResponse:
        """Execute a single generation request

        Args:
            parts: Content parts, inline documents or text
            response_schema: Output schema the response must follow
            json_output: Request a JSON response without a schema
            use_search: Enable the web search tool; cannot be combined
                with a response schema

        Returns:
            GenerationResponse with the response text and citations
        """
        pass
