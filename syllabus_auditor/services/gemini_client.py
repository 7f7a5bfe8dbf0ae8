"""Gemini client implementation using google-genai library"""

import base64
import logging
from typing import Any, List, Optional, Sequence

from google import genai
from google.genai import types

from ..interfaces.llm_interface import Citation, GenerationResponse, LLMInterface
from ..models.analysis_models import AnalysisConfig
from ..models.document_models import DocumentPayload, InlineBinaryPayload

logger = logging.getLogger(__name__)


class GeminiClient(LLMInterface):
    """Client for Gemini API using google-genai.

    One instance is created per process and shared by every stage.
    """

    def __init__(self, api_key: str, config: AnalysisConfig):
        self.client = genai.Client(api_key=api_key)
        self.config = config

    def _to_part(self, payload: DocumentPayload) -> types.Part:
        if isinstance(payload, InlineBinaryPayload):
            return types.Part.from_bytes(
                data=base64.b64decode(payload.data),
                mime_type=payload.mime_type,
            )
        return types.Part.from_text(text=payload.text)

    def _build_config(
        self,
        response_schema: Optional[Any],
        json_output: bool,
        use_search: bool,
    ) -> types.GenerateContentConfig:
        if use_search and (response_schema is not None or json_output):
            raise ValueError("Search grounding cannot be combined with JSON output")

        options = {
            "temperature": self.config.temperature,
            "automatic_function_calling": types.AutomaticFunctionCallingConfig(disable=True),
        }
        if use_search:
            options["tools"] = [types.Tool(google_search=types.GoogleSearch())]
        if response_schema is not None or json_output:
            options["response_mime_type"] = "application/json"
        if response_schema is not None:
            options["response_schema"] = response_schema
        return types.GenerateContentConfig(**options)

    @staticmethod
    def _citations(response: Any) -> List[Citation]:
        citations = []
        for candidate in (getattr(response, "candidates", None) or [])[:1]:
            metadata = getattr(candidate, "grounding_metadata", None)
            for chunk in getattr(metadata, "grounding_chunks", None) or []:
                web = getattr(chunk, "web", None)
                if web is not None:
                    citations.append(Citation(uri=web.uri, title=web.title))
        return citations

    async def generate(
        self,
        parts: Sequence[DocumentPayload],
        *,
        response_schema: Optional[Any] = None,
        json_output: bool = False,
        use_search: bool = False,
    ) -> GenerationResponse:
        generation_config = self._build_config(response_schema, json_output, use_search)
        logger.debug(
            "Gemini request: model=%s parts=%d search=%s schema=%s",
            self.config.model_name, len(parts), use_search, response_schema is not None,
        )

        response = await self.client.aio.models.generate_content(
            model=self.config.model_name,
            contents=[types.Content(role="user", parts=[self._to_part(p) for p in parts])],
            config=generation_config,
        )

        text = response.text or ""
        logger.debug("Gemini response: %s...", text[:100])
        return GenerationResponse(text=text, citations=self._citations(response))
