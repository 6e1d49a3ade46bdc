"""
Typed Pydantic models for the validator's I/O contracts.

Covers the optional JSON settings record that drives a run and the run
summary produced at the end, so neither travels as a plain dict.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.config.constants import CSS_FILES_PATTERN, HTML_FILES_PATTERN, IGNORE_PATTERNS
from src.models.diagnostic import Diagnostic


# =============================================================================
# Verdicts
# =============================================================================


class FileVerdict(str, Enum):
    VALID = "valid"
    VALID_SVG = "valid_svg"
    INVALID = "invalid"
    EXHAUSTED = "exhausted"
    READ_ERROR = "read_error"

    @property
    def passed(self) -> bool:
        return self in (FileVerdict.VALID, FileVerdict.VALID_SVG)


@dataclass(frozen=True)
class ClassifiedResult:
    """Classifier output: a verdict plus the diagnostics worth showing."""

    verdict: FileVerdict
    diagnostics: Tuple[Diagnostic, ...] = field(default=())

    @property
    def valid(self) -> bool:
        return self.verdict.passed


# =============================================================================
# Settings record (settings.json)
# =============================================================================


class ValidatorSettings(BaseModel):
    """
    External settings record.

    Keys follow the camelCase names of the JSON file (``htmlFiles``,
    ``cssFiles``, ``ignore``); missing keys fall back to the pinned constants.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    html_files: str = Field(HTML_FILES_PATTERN, alias="htmlFiles")
    css_files: str = Field(CSS_FILES_PATTERN, alias="cssFiles")
    ignore: Tuple[str, ...] = Field(tuple(IGNORE_PATTERNS))

    @field_validator("html_files", "css_files")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("glob pattern must not be empty")
        return v

    @field_validator("ignore")
    @classmethod
    def validate_ignore(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        # An empty rule would match every path.
        return tuple(rule for rule in v if rule)


# =============================================================================
# Run summary
# =============================================================================


class FileReport(BaseModel):
    """Terminal state of one file."""

    path: str
    verdict: FileVerdict
    attempts: int = Field(0, ge=0)
    diagnostics: List[str] = Field(default_factory=list)
    error: Optional[str] = None


class PhaseSummary(BaseModel):
    """All files of one phase (``HTML`` or ``CSS``)."""

    kind: str
    files: List[FileReport] = Field(default_factory=list)
    halted: bool = False

    def count(self, verdict: FileVerdict) -> int:
        return sum(1 for f in self.files if f.verdict == verdict)

    @property
    def passed(self) -> int:
        return sum(1 for f in self.files if f.verdict.passed)

    @property
    def failed(self) -> int:
        return len(self.files) - self.passed


class RunSummary(BaseModel):
    phases: List[PhaseSummary] = Field(default_factory=list)
    halted_by: Optional[str] = Field(None, description="'invalid' | 'exhausted' | None")

    @property
    def ok(self) -> bool:
        return self.halted_by is None and all(p.failed == 0 for p in self.phases)

    def phase(self, kind: str) -> Optional[PhaseSummary]:
        for p in self.phases:
            if p.kind == kind:
                return p
        return None
