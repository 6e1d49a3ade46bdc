"""
Retry Controller — fixed-delay retry ladder around one validator call.

    attempt 1 ─ transient? ─ wait delays[0] ─ attempt 2 ─ transient? ─
    wait delays[1] ─ attempt 3 ─ transient? ─ exhausted

"Transient" means the remote service rate-limited us or the network failed;
a genuinely invalid document is a terminal answer and is never retried.
The controller is the only place that sleeps; ``sleep`` is injected so the
ladder can be driven without real timers.
"""
import logging
import time
from typing import Callable, Optional, Sequence

import requests

from src.config.constants import (
    DEFAULT_RATE_LIMIT_MESSAGE,
    HTTP_TOO_MANY_REQUESTS,
    NETWORK_ERROR_SUBTYPE,
    RATE_LIMIT_MARKER,
    RETRY_DELAYS,
)
from src.models.outcome import AttemptOutcome, OutcomeKind, RetryOutcome
from src.models.validation import ValidationResult
from src.validation.clients import ValidatorHTTPError

logger = logging.getLogger(__name__)


# ======================================================================
# Failure classification
# ======================================================================

def has_validation_error(result: ValidationResult) -> bool:
    """True if the result carries a network-error or a 429 message."""
    return any(
        d.subtype == NETWORK_ERROR_SUBTYPE or RATE_LIMIT_MARKER in d.message
        for d in result.diagnostics
    )


def get_error_message(result: ValidationResult) -> str:
    """Message of the first network-error diagnostic, or the default 429 text."""
    for d in result.diagnostics:
        if d.subtype == NETWORK_ERROR_SUBTYPE:
            return d.message
    return DEFAULT_RATE_LIMIT_MESSAGE


def outcome_from_result(result: ValidationResult) -> AttemptOutcome:
    if has_validation_error(result):
        message = get_error_message(result)
        if any(d.subtype == NETWORK_ERROR_SUBTYPE for d in result.diagnostics):
            return AttemptOutcome.network_error(message)
        return AttemptOutcome.rate_limited(message)
    if result.valid:
        return AttemptOutcome.success(result)
    return AttemptOutcome.invalid(result)


def run_attempt(call: Callable[[], ValidationResult]) -> AttemptOutcome:
    """
    Execute one validator call and tag what happened.

    HTTP 429 → RATE_LIMITED, connection failures and timeouts →
    NETWORK_ERROR, any other exception → FAILED with its message.
    """
    try:
        result = call()
    except ValidatorHTTPError as exc:
        if exc.status_code == HTTP_TOO_MANY_REQUESTS:
            return AttemptOutcome.rate_limited(str(exc))
        return AttemptOutcome.failed(str(exc))
    except (requests.ConnectionError, requests.Timeout) as exc:
        return AttemptOutcome.network_error(str(exc))
    except Exception as exc:  # noqa: BLE001
        return AttemptOutcome.failed(str(exc) or exc.__class__.__name__)
    return outcome_from_result(result)


def is_transient(outcome: AttemptOutcome) -> bool:
    return outcome.is_transient


# ======================================================================
# Ladder
# ======================================================================

def with_retries(
    attempt_fn: Callable[[], AttemptOutcome],
    is_retryable: Callable[[AttemptOutcome], bool] = is_transient,
    delays: Sequence[float] = RETRY_DELAYS,
    *,
    sleep: Callable[[float], None] = time.sleep,
    log: Optional[logging.Logger] = None,
    label: str = "",
) -> RetryOutcome:
    """
    Run *attempt_fn* up to ``len(delays) + 1`` times.

    Args:
        attempt_fn:   One validation attempt, returning a tagged outcome.
        is_retryable: Decides whether an outcome earns another attempt.
        delays:       Fixed wait before each retry, in seconds.
        sleep:        Timer used for the waits.
        log:          Logger for attempt/retry lines (module logger if None).
        label:        What is being validated, for log lines.

    Returns:
        RetryOutcome with the last non-retryable outcome, or ``exhausted``
        when every attempt was retryable.
    """
    log = log or logger
    max_attempts = len(delays) + 1
    outcome: Optional[AttemptOutcome] = None

    for attempt in range(1, max_attempts + 1):
        log.debug("Attempt %d/%d for %s", attempt, max_attempts, label)
        outcome = attempt_fn()

        if not is_retryable(outcome):
            if attempt > 1 and outcome.kind != OutcomeKind.FAILED:
                log.info("Attempt %d for %s succeeded", attempt, label)
            return RetryOutcome(outcome=outcome, attempts=attempt)

        if attempt == max_attempts:
            break

        delay = delays[attempt - 1]
        log.warning(
            "Attempt %d/%d for %s hit a validator problem (%s: %s); retrying in %gs",
            attempt, max_attempts, label, outcome.kind.value, outcome.message, delay,
        )
        sleep(delay)

    log.error(
        "Validation of %s failed after %d attempts: request limit exceeded, try again later",
        label, max_attempts,
    )
    return RetryOutcome(outcome=outcome, attempts=max_attempts, exhausted=True)
