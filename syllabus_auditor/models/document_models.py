"""Payloads handed from the document extractor to the model provider"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class InlineBinaryPayload:
    """Document the model ingests natively, base64 encoded"""
    data: str
    mime_type: str


@dataclass(frozen=True)
class TextPayload:
    """Plain text content (native text, converted text or a prompt)"""
    text: str


DocumentPayload = Union[InlineBinaryPayload, TextPayload]
