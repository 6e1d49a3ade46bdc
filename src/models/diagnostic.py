"""
One issue reported by a remote validator.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Diagnostic:
    """A single validator message with its source line."""

    line: int
    message: str
    subtype: Optional[str] = None   # e.g. "network-error", "warning", "fatal"
    kind: Optional[str] = None      # "error" | "info" | "non-document-error"

    @property
    def is_error(self) -> bool:
        return self.kind in (None, "error", "non-document-error")

    def to_dict(self) -> dict:
        return {
            "line": self.line,
            "message": self.message,
            "subtype": self.subtype,
            "kind": self.kind,
        }

    def __str__(self) -> str:
        return f"{self.line}: {self.message}"
