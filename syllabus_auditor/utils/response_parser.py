"""Utility for parsing JSON out of LLM responses"""

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")
_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")
_FENCE_PATTERN = re.compile(r"```(?:json)?\s*", re.IGNORECASE)


class ResponseParser:
    """Utility class for parsing LLM responses."""

    def parse_json(self, text: Any) -> Any:
        """
        Parse JSON from model output that may be wrapped in prose or markdown.

        Tries, in order: the whole text, the outermost {...} object, the
        outermost [...] array, and the text with code fences removed.
        Returns an empty dict when nothing parses.
        """
        if not isinstance(text, str) or not text.strip():
            return {}

        candidates = [text.strip()]
        for pattern in (_OBJECT_PATTERN, _ARRAY_PATTERN):
            match = pattern.search(text)
            if match:
                candidates.append(match.group(0))
        candidates.append(_FENCE_PATTERN.sub("", text).strip())

        for candidate in candidates:
            try:
                return json.loads(candidate)
            except ValueError:
                continue

        logger.warning("JSON parse failed, returning empty object. Raw response: %s...", text[:200])
        return {}
