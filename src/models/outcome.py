"""
Tagged outcomes of the retry ladder.

An AttemptOutcome is what a single call to a validator produced; the retry
controller only looks at its ``kind``.  A RetryOutcome is the terminal value
for one file: the last attempt's outcome plus how many attempts were spent.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.models.validation import ValidationResult


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    RATE_LIMITED = "rate_limited"
    NETWORK_ERROR = "network_error"
    GENUINE_INVALID = "genuine_invalid"
    FAILED = "failed"


TRANSIENT_KINDS = frozenset({OutcomeKind.RATE_LIMITED, OutcomeKind.NETWORK_ERROR})


@dataclass(frozen=True)
class AttemptOutcome:
    """Result of one validator call, tagged by kind."""

    kind: OutcomeKind
    result: Optional[ValidationResult] = None
    message: str = ""

    @property
    def is_transient(self) -> bool:
        return self.kind in TRANSIENT_KINDS

    @classmethod
    def success(cls, result: ValidationResult) -> "AttemptOutcome":
        return cls(OutcomeKind.SUCCESS, result=result)

    @classmethod
    def invalid(cls, result: ValidationResult) -> "AttemptOutcome":
        return cls(OutcomeKind.GENUINE_INVALID, result=result)

    @classmethod
    def rate_limited(cls, message: str = "") -> "AttemptOutcome":
        return cls(OutcomeKind.RATE_LIMITED, message=message)

    @classmethod
    def network_error(cls, message: str = "") -> "AttemptOutcome":
        return cls(OutcomeKind.NETWORK_ERROR, message=message)

    @classmethod
    def failed(cls, message: str) -> "AttemptOutcome":
        return cls(OutcomeKind.FAILED, message=message)


@dataclass(frozen=True)
class RetryOutcome:
    """Terminal value of the retry controller for one file."""

    outcome: Optional[AttemptOutcome]
    attempts: int
    exhausted: bool = False

    @property
    def result(self) -> Optional[ValidationResult]:
        if self.exhausted or self.outcome is None:
            return None
        return self.outcome.result

    @property
    def succeeded(self) -> bool:
        return self.result is not None
