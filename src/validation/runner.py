"""
Batch Runner — HTML phase then CSS phase, one file at a time.

Per file:
    1. Read the file (read errors are reported, never retried)
    2. Run the validator call through the retry ladder
    3. Classify (CSS) and report
    4. Apply the batch policy (stop on invalid / on exhausted)

Files are processed in sorted order and every line of a file's report is
printed before the next file starts.
"""
import logging
import os
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from src.config import settings as env
from src.config.constants import (
    DEFAULT_MAX_MESSAGE_LEN,
    ON_EXHAUSTED_CONTINUE,
    ON_EXHAUSTED_POLICIES,
    ON_EXHAUSTED_STOP_PHASE,
    ON_EXHAUSTED_STOP_RUN,
)
from src.models.outcome import OutcomeKind, RetryOutcome
from src.models.report_io import (
    ClassifiedResult,
    FileReport,
    FileVerdict,
    PhaseSummary,
    RunSummary,
    ValidatorSettings,
)
from src.models.validation import ValidationRequest
from src.validation.classifier import classify
from src.validation.clients import CssValidatorClient, HtmlValidatorClient
from src.validation.file_selector import select_files
from src.validation.reporter import Reporter
from src.validation.retry import run_attempt, with_retries

logger = logging.getLogger(__name__)

HTML = "HTML"
CSS = "CSS"


@dataclass(frozen=True)
class BatchPolicy:
    """What a failing file does to the rest of the run."""

    stop_on_invalid: bool = False
    on_exhausted: str = ON_EXHAUSTED_CONTINUE
    delays: Tuple[float, ...] = field(default=())
    tests_scoped: bool = False
    max_message_len: int = DEFAULT_MAX_MESSAGE_LEN

    def __post_init__(self) -> None:
        if self.on_exhausted not in ON_EXHAUSTED_POLICIES:
            raise ValueError(
                f"on_exhausted must be one of {ON_EXHAUSTED_POLICIES}, got '{self.on_exhausted}'"
            )

    @classmethod
    def from_env(cls) -> "BatchPolicy":
        return cls(
            stop_on_invalid=env.STOP_ON_INVALID,
            on_exhausted=env.ON_EXHAUSTED,
            delays=(env.FIRST_RETRY_DELAY_S, env.SECOND_RETRY_DELAY_S),
            tests_scoped=env.TESTS_SCOPED_SELECTION,
            max_message_len=env.MAX_MESSAGE_LEN,
        )


class ValidationRunner:
    def __init__(
        self,
        settings: ValidatorSettings,
        policy: Optional[BatchPolicy] = None,
        html_client: Optional[HtmlValidatorClient] = None,
        css_client: Optional[CssValidatorClient] = None,
        reporter: Optional[Reporter] = None,
        root: str = ".",
        sleep: Callable[[float], None] = time.sleep,
        log: Optional[logging.Logger] = None,
    ) -> None:
        self.settings = settings
        self.policy = policy or BatchPolicy.from_env()
        self.html_client = html_client or HtmlValidatorClient()
        self.css_client = css_client or CssValidatorClient()
        self.reporter = reporter or Reporter()
        self.root = root
        self.sleep = sleep
        self.log = log or logger

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _select(self, pattern: str) -> List[str]:
        return select_files(
            pattern, self.settings.ignore, self.root, tests_scoped=self.policy.tests_scoped
        )

    def _read(self, path: str) -> str:
        with open(os.path.join(self.root, path), encoding="utf-8", errors="replace") as f:
            return f.read()

    def _retry(self, call: Callable[[], object], label: str) -> RetryOutcome:
        kwargs = {"sleep": self.sleep, "log": self.log, "label": label}
        if self.policy.delays:
            kwargs["delays"] = self.policy.delays
        return with_retries(lambda: run_attempt(call), **kwargs)

    def _terminal_failure(self, kind: str, path: str, retry: RetryOutcome) -> FileReport:
        outcome = retry.outcome
        if retry.exhausted:
            if kind == CSS and outcome is not None and outcome.kind == OutcomeKind.RATE_LIMITED:
                self.reporter.display_rate_limit_error()
            else:
                self.reporter.report_exhausted(path, kind, outcome)
        else:
            self.log.error("%s validation of %s failed: %s", kind, path, outcome.message)
            self.reporter.display_error(f"{kind} validation error", Exception(outcome.message))
        return FileReport(
            path=path,
            verdict=FileVerdict.EXHAUSTED,
            attempts=retry.attempts,
            error=outcome.message if outcome is not None else None,
        )

    # ------------------------------------------------------------------
    # Per file
    # ------------------------------------------------------------------

    def validate_html_file(self, path: str) -> FileReport:
        try:
            self._read(path)
        except OSError as exc:
            self.log.error("Failed to read HTML file %s: %s", path, exc)
            self.reporter.display_error(f"Error reading HTML file {path}", exc)
            return FileReport(path=path, verdict=FileVerdict.READ_ERROR, error=str(exc))

        self.log.debug("Validating file %s...", path)
        request = ValidationRequest(file_reference=os.path.join(self.root, path))
        retry = self._retry(lambda: self.html_client.validate(request), path)
        if not retry.succeeded:
            return self._terminal_failure(HTML, path, retry)

        result = retry.result
        self.reporter.report_html(
            path, result, continue_on_fail=True, max_message_len=self.policy.max_message_len
        )
        return FileReport(
            path=path,
            verdict=FileVerdict.VALID if result.valid else FileVerdict.INVALID,
            attempts=retry.attempts,
            diagnostics=[str(d) for d in result.errors],
        )

    def validate_css_file(self, path: str) -> FileReport:
        try:
            content = self._read(path)
        except OSError as exc:
            self.log.error("Failed to read CSS file %s: %s", path, exc)
            self.reporter.display_error(f"Error reading CSS file {path}", exc)
            return FileReport(path=path, verdict=FileVerdict.READ_ERROR, error=str(exc))

        retry = self._retry(lambda: self.css_client.validate_text(content), path)
        if not retry.succeeded:
            return self._terminal_failure(CSS, path, retry)

        classified: ClassifiedResult = classify(retry.result, path)
        self.reporter.report(path, classified)
        return FileReport(
            path=path,
            verdict=classified.verdict,
            attempts=retry.attempts,
            diagnostics=[str(d) for d in classified.diagnostics],
        )

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def run_phase(
        self,
        kind: str,
        files: Sequence[str],
        validate_file: Callable[[str], FileReport],
        summary: RunSummary,
    ) -> PhaseSummary:
        phase = PhaseSummary(kind=kind)
        summary.phases.append(phase)

        self.reporter.print_title(len(files), kind)
        if not files:
            return phase

        for path in files:
            report = validate_file(path)
            phase.files.append(report)

            if report.verdict == FileVerdict.INVALID and self.policy.stop_on_invalid:
                self.log.warning("%s is invalid, stopping the run", path)
                phase.halted = True
                summary.halted_by = "invalid"
                break

            if report.verdict == FileVerdict.EXHAUSTED:
                if self.policy.on_exhausted == ON_EXHAUSTED_STOP_RUN:
                    self.log.warning("Validator unavailable for %s, stopping the run", path)
                    phase.halted = True
                    summary.halted_by = "exhausted"
                    break
                if self.policy.on_exhausted == ON_EXHAUSTED_STOP_PHASE:
                    self.log.warning("Validator unavailable for %s, skipping rest of %s", path, kind)
                    phase.halted = True
                    break

        self.reporter.console.print("\n")
        return phase

    def html_validation(self, summary: RunSummary) -> PhaseSummary:
        files = self._select(self.settings.html_files)
        return self.run_phase(HTML, files, self.validate_html_file, summary)

    def css_validation(self, summary: RunSummary) -> PhaseSummary:
        files = self._select(self.settings.css_files)
        return self.run_phase(CSS, files, self.validate_css_file, summary)

    def run(self) -> RunSummary:
        summary = RunSummary()
        self.reporter.console.print()

        self.html_validation(summary)
        if summary.halted_by is None:
            self.css_validation(summary)

        self.reporter.print_summary(summary)
        return summary
