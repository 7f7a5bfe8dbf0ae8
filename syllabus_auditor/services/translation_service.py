"""Report translation service"""

import json
import logging
from typing import Any, Dict

from ..interfaces.llm_interface import LLMInterface
from ..models.analysis_models import (
    DEFAULT_COURSE_TITLE,
    NO_MISSING_COMPONENTS,
    NO_REVISED_ILOS,
    NO_STRENGTHS,
    NO_WEAKNESSES,
    AnalysisConfig,
    AnalysisResult,
    Language,
)
from ..models.document_models import TextPayload
from ..utils.response_parser import ResponseParser
from ..utils.timeout import with_timeout

logger = logging.getLogger(__name__)

_PLACEHOLDERS = {DEFAULT_COURSE_TITLE, NO_MISSING_COMPONENTS, NO_WEAKNESSES, NO_STRENGTHS, NO_REVISED_ILOS}


def _json_kind(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return "null"


def _is_blank(value: Any) -> bool:
    """True for values that carry no report content: empty or placeholder text, or containers of those"""
    if isinstance(value, str):
        return not value.strip() or value in _PLACEHOLDERS
    if isinstance(value, list):
        return all(_is_blank(item) for item in value)
    if isinstance(value, dict):
        return all(_is_blank(item) for item in value.values())
    return False


def merge_translation(original: Dict[str, Any], translated: Any) -> Dict[str, Any]:
    """Overlay the translated top-level keys onto the original report.

    Keys the translation dropped keep their original value, and so do
    keys whose translated value no longer has the original JSON type or
    was emptied out while the original had content. Objects such as
    ``gapAnalysis`` are merged key by key under the same rules.
    """
    merged = dict(original)
    if not isinstance(translated, dict):
        return merged
    for key, value in translated.items():
        if key not in original or _json_kind(value) != _json_kind(original[key]):
            continue
        if _is_blank(value) and not _is_blank(original[key]):
            continue
        if isinstance(value, dict):
            merged[key] = merge_translation(original[key], value)
        else:
            merged[key] = value
    return merged


class TranslationService:
    """Translates every string value of a finished report"""

    def __init__(self, llm_client: LLMInterface, config: AnalysisConfig):
        self.llm = llm_client
        self.config = config
        self.parser = ResponseParser()

    def _create_translation_prompt(self, data: Dict[str, Any], language: Language) -> str:
        return f"""Translate ALL string values in the following JSON object to {language.display_name}.

IMPORTANT:
1. PRESERVE the exact JSON structure and Keys. ONLY translate the Values.
2. Do NOT translate "score" numbers or proper names if they are better kept in original (but translate University names if common).
3. Ensure the output is valid JSON.

JSON:
{json.dumps(data, ensure_ascii=False)}
"""

    async def translate(self, result: AnalysisResult, language: Language) -> AnalysisResult:
        """Translate ``result``; timeouts and transport errors propagate"""
        language = Language.from_code(language)
        logger.info("Translating report '%s' to %s", result.course_title, language.display_name)

        original = result.to_dict()
        request = self.llm.generate(
            [TextPayload(self._create_translation_prompt(original, language))],
            json_output=True,
        )
        response = await with_timeout(request, self.config.translation_timeout, "Translation timed out.")

        translated = self.parser.parse_json(response.text)
        merged = merge_translation(original, translated)
        kept = [key for key in original if merged[key] is original[key]]
        if kept:
            logger.info("Translation kept original values for: %s", ", ".join(kept))
        return AnalysisResult.from_dict(merged)
