"""
Request and result types for one round trip to a remote validator.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple

from src.models.diagnostic import Diagnostic


@dataclass(frozen=True)
class ValidationRequest:
    """Input of one validation attempt: inline content or a file reference."""

    content: Optional[str] = None
    file_reference: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.content is None) == (self.file_reference is None):
            raise ValueError("exactly one of content or file_reference must be set")


@dataclass(frozen=True)
class ValidationResult:
    """Structured answer of a remote validator, consumed once per file."""

    valid: bool
    diagnostics: Tuple[Diagnostic, ...] = field(default=())

    @property
    def errors(self) -> Tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.is_error)
