"""Result type returned by the best-effort search stages"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class StageResult:
    """Outcome of a stage: either a value or the error that stopped it"""
    value: Any = None
    error: Optional[BaseException] = None

    @classmethod
    def success(cls, value: Any) -> "StageResult":
        return cls(value=value)

    @classmethod
    def failure(cls, error: BaseException) -> "StageResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, fallback: Any) -> Any:
        """Return the value, or ``fallback`` if the stage failed"""
        return self.value if self.ok else fallback
