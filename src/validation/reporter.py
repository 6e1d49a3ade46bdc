"""
Reporter — console rendering of per-file outcomes.

Pure formatting: it receives classifier output or raw HTML results and never
retries or classifies anything itself.  The rich Console is injected so the
same reporter can write to a terminal or to a buffer.
"""
from typing import Optional

from rich.console import Console
from rich.markup import escape

from src.config.constants import DEFAULT_MAX_MESSAGE_LEN
from src.models.outcome import AttemptOutcome, OutcomeKind
from src.models.report_io import ClassifiedResult, FileVerdict, RunSummary
from src.models.validation import ValidationResult

BANNER = " ----- Testing file... ----- "


class HtmlValidationFailure(Exception):
    """Raised by report_html when a document fails and continue_on_fail is off."""

    def __init__(self, path: str, error_count: int) -> None:
        self.path = path
        self.error_count = error_count
        super().__init__(f"HTML validation failed: {path} ({error_count} errors)")


def _truncate(message: str, max_len: int) -> str:
    if max_len and len(message) > max_len:
        return message[: max_len - 1] + "…"
    return message


class Reporter:
    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(highlight=False)
        # Only used to separate a failed file from the next one.
        self._previous_had_errors = False

    def _start_file(self, failed: bool) -> None:
        if self._previous_had_errors:
            self.console.print()
        self._previous_had_errors = failed

    # ------------------------------------------------------------------
    # Phase headers
    # ------------------------------------------------------------------

    def print_title(self, count: int, kind: str) -> None:
        if count:
            self.console.print(f"[white on blue] Testing {count} {kind} files [/]")
            self.console.print()
        else:
            self.console.print(f"[reverse] No {kind} files, validation skipped [/]")

    # ------------------------------------------------------------------
    # Per file
    # ------------------------------------------------------------------

    def report(self, path: str, classified: ClassifiedResult) -> None:
        """Banner, colored verdict tag, one ``Line N: message`` per diagnostic."""
        name = escape(path)
        self._start_file(not classified.valid)
        self.console.print(BANNER)

        if classified.verdict == FileVerdict.VALID:
            self.console.print(f" [bold green]{name}[/] [black on green] Valid [/] ")
            return

        if classified.verdict == FileVerdict.VALID_SVG:
            self.console.print(f" [bold green]{name}[/] [black on green] Valid (SVG) [/] ")
            self.console.print(
                "[blue]File contains SVG properties; valid as CSS3 + SVG.[/]"
            )
            return

        self.console.print(f" [bold red]{name}[/] [white on red] NOT valid [/] ")
        for d in classified.diagnostics:
            self.console.print(f"[red]Line {d.line}: {escape(d.message)}[/]")

    def report_html(
        self,
        path: str,
        result: ValidationResult,
        continue_on_fail: bool = True,
        max_message_len: int = DEFAULT_MAX_MESSAGE_LEN,
    ) -> None:
        """Render a Nu checker result: status line plus one line per message."""
        name = escape(path)
        errors = result.errors
        self._start_file(not result.valid)
        if result.valid:
            self.console.print(f"[green]html-validator ✔ pass[/] [bold]{name}[/]")
        else:
            self.console.print(
                f"[red]html-validator ✘ fail[/] [bold]{name}[/] "
                f"[red]({len(errors)} errors)[/]"
            )

        for d in result.diagnostics:
            text = escape(_truncate(d.message, max_message_len))
            if d.is_error:
                self.console.print(f"  [red]HTML error:[/] line {d.line}: {text}")
            else:
                self.console.print(f"  [yellow]HTML {d.subtype or 'info'}:[/] line {d.line}: {text}")

        if not result.valid and not continue_on_fail:
            raise HtmlValidationFailure(path, len(errors))

    def report_exhausted(self, path: str, kind: str, outcome: Optional[AttemptOutcome] = None) -> None:
        if outcome is not None and outcome.kind == OutcomeKind.NETWORK_ERROR:
            reason = "validator unreachable on every attempt"
        else:
            reason = "request limit exceeded on every attempt"
        detail = f" ({outcome.message})" if outcome is not None and outcome.message else ""

        self.console.print(f"\n[bold red]{kind} validation error:[/]")
        self.console.print(f"[red]{escape(path)}: {reason}{escape(detail)}. Try again later.[/]")

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def display_error(self, message: str, error: Optional[BaseException]) -> None:
        self.console.print(f"\n[bold red]{escape(message)}:[/]")
        detail = str(error) if error is not None else ""
        self.console.print(f"[red]{escape(detail or 'Unknown error')}[/]")

    def display_rate_limit_error(self) -> None:
        self.console.print("\n[bold yellow]CSS validation error:[/]")
        self.console.print(
            "[yellow]Request limit of the validation server exceeded (Too Many Requests).[/]"
        )
        self.console.print("[yellow]Please wait a few minutes and try again.[/]")

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    def print_summary(self, summary: RunSummary) -> None:
        for phase in summary.phases:
            if not phase.files:
                continue
            line = (
                f"{phase.kind}: {phase.passed} passed, "
                f"{phase.count(FileVerdict.INVALID)} invalid, "
                f"{phase.count(FileVerdict.EXHAUSTED)} exhausted, "
                f"{phase.count(FileVerdict.READ_ERROR)} unreadable"
            )
            style = "green" if phase.failed == 0 else "red"
            self.console.print(f"[{style}]{line}[/]")
        if summary.halted_by:
            self.console.print(f"[bold red]Run stopped early ({summary.halted_by}).[/]")
