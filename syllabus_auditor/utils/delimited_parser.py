"""Parser for the ITEM-delimited record format used by search prompts.

Search-grounded requests cannot be combined with a JSON response schema,
so those prompts ask the model for blocks like::

    BENCHMARK_ITEM
    University: MIT
    Comparison: MIT covers dynamic programming, yours does not...
    END_ITEM

Parsing is done in two passes: the text is cut into blocks at marker
tokens, wherever they sit (after a list bullet, or at the end of a value
line), then each block is scanned line by line for ``Key: value`` pairs.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

_MARKER_PATTERN = re.compile(
    r"(?:^[ \t>#*\-•]*(?:\d+[.)][ \t]*)?[*_]*)?(?<![A-Za-z0-9])(?:([A-Z][A-Z0-9]*)_)?ITEM(?!\w)[*_:]*",
    re.MULTILINE,
)
_END_PREFIX = "END"
_EMPHASIS = "*"


@dataclass(frozen=True)
class RecordSchema:
    """Keys of one record type, in prompt order"""
    name: str
    keys: Tuple[str, ...]
    primary_key: str
    defaults: Mapping[str, str] = field(default_factory=dict)


def _clean(value: str) -> str:
    return value.replace(_EMPHASIS, "").strip()


class DelimitedRecordParser:
    """Extract records of one schema from free-form model text"""

    def __init__(self, schema: RecordSchema):
        self.schema = schema
        self._last_key = schema.keys[-1].lower()
        names = "|".join(re.escape(key) for key in schema.keys)
        self._key_pattern = re.compile(
            rf"^[\s>#*_\-•]*(?:\d+[.)]\s*)?(?P<key>{names})[\s*_]*:[\s*]*(?P<value>.*)$",
            re.IGNORECASE,
        )

    def parse(self, text: str) -> List[Dict[str, str]]:
        """Return one dict per accepted block, keyed by lower-case key name"""
        records = []
        for block in self._split_blocks(text or ""):
            record = self._build_record(self._scan_block(block))
            if record is not None:
                records.append(record)
        return records

    def _split_blocks(self, text: str) -> Iterator[List[str]]:
        start: Optional[int] = None
        for marker in _MARKER_PATTERN.finditer(text):
            if start is not None:
                yield text[start:marker.start()].splitlines()
            # text between END_ITEM and the next start marker is chatter
            start = None if marker.group(1) == _END_PREFIX else marker.end()
        if start is not None:
            yield text[start:].splitlines()

    def _scan_block(self, lines: List[str]) -> Dict[str, List[str]]:
        values: Dict[str, List[str]] = {}
        current = None
        for line in lines:
            match = self._key_pattern.match(line)
            key = match.group("key").lower() if match else None
            if key is not None and key not in values:
                values[key] = [match.group("value")]
                current = key
            elif current == self._last_key:
                # only the last key may span several lines
                values[current].append(line)
        return values

    def _build_record(self, values: Dict[str, List[str]]) -> Optional[Dict[str, str]]:
        record = {}
        for key in self.schema.keys:
            name = key.lower()
            lines = [_clean(line) for line in values.get(name, [])]
            record[name] = "\n".join(line for line in lines if line)
        if not record[self.schema.primary_key.lower()]:
            return None
        for key, default in self.schema.defaults.items():
            if not record.get(key.lower()):
                record[key.lower()] = default
        return record
