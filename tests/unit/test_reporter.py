"""
Unit tests for src.validation.reporter.
"""
import pytest

from src.models.diagnostic import Diagnostic
from src.models.outcome import AttemptOutcome
from src.models.report_io import ClassifiedResult, FileReport, FileVerdict, PhaseSummary, RunSummary
from src.models.validation import ValidationResult
from src.validation.reporter import BANNER, HtmlValidationFailure


class TestTitle:
    def test_with_files(self, reporter, console_buffer):
        reporter.print_title(3, "CSS")
        assert "Testing 3 CSS files" in console_buffer.getvalue()

    def test_without_files(self, reporter, console_buffer):
        reporter.print_title(0, "HTML")
        assert "No HTML files, validation skipped" in console_buffer.getvalue()


class TestReport:
    def test_valid(self, reporter, console_buffer):
        reporter.report("a.css", ClassifiedResult(FileVerdict.VALID))
        out = console_buffer.getvalue()
        assert BANNER.strip() in out
        assert "a.css" in out and "Valid" in out
        assert "NOT valid" not in out

    def test_valid_svg_tag(self, reporter, console_buffer):
        reporter.report("SVG-main/a.css", ClassifiedResult(FileVerdict.VALID_SVG))
        assert "Valid (SVG)" in console_buffer.getvalue()

    def test_invalid_lists_diagnostics(self, reporter, console_buffer):
        classified = ClassifiedResult(
            FileVerdict.INVALID,
            (Diagnostic(3, "Parse Error [x]"), Diagnostic(9, "Unknown property")),
        )
        reporter.report("b.css", classified)
        out = console_buffer.getvalue()
        assert "NOT valid" in out
        assert "Line 3: Parse Error [x]" in out
        assert "Line 9: Unknown property" in out

    def test_blank_line_after_failed_file(self, reporter, console_buffer):
        reporter.report("b.css", ClassifiedResult(FileVerdict.INVALID, (Diagnostic(1, "x"),)))
        reporter.report("c.css", ClassifiedResult(FileVerdict.VALID))
        lines = console_buffer.getvalue().splitlines()
        second_banner = [i for i, l in enumerate(lines) if l.strip() == BANNER.strip()][1]
        assert lines[second_banner - 1] == ""


class TestReportHtml:
    def test_pass(self, reporter, console_buffer, valid_result):
        reporter.report_html("index.html", valid_result)
        assert "pass" in console_buffer.getvalue()

    def test_fail_truncates_messages(self, reporter, console_buffer):
        result = ValidationResult(
            valid=False,
            diagnostics=(Diagnostic(4, "x" * 50, kind="error"),),
        )
        reporter.report_html("index.html", result, max_message_len=10)
        out = console_buffer.getvalue()
        assert "fail" in out
        assert "x" * 9 + "…" in out
        assert "x" * 11 not in out

    def test_info_messages_are_not_errors(self, reporter, console_buffer):
        result = ValidationResult(
            valid=True,
            diagnostics=(Diagnostic(1, "Consider adding a lang attribute", subtype="warning", kind="info"),),
        )
        reporter.report_html("index.html", result)
        assert "HTML warning:" in console_buffer.getvalue()

    def test_stop_on_fail_raises(self, reporter):
        result = ValidationResult(valid=False, diagnostics=(Diagnostic(1, "bad", kind="error"),))
        with pytest.raises(HtmlValidationFailure) as exc_info:
            reporter.report_html("index.html", result, continue_on_fail=False)
        assert exc_info.value.error_count == 1


class TestErrors:
    def test_display_error_uses_message(self, reporter, console_buffer):
        reporter.display_error("CSS validation error", RuntimeError("boom"))
        out = console_buffer.getvalue()
        assert "CSS validation error:" in out
        assert "boom" in out

    def test_display_error_unknown(self, reporter, console_buffer):
        reporter.display_error("CSS validation error", None)
        assert "Unknown error" in console_buffer.getvalue()

    def test_rate_limit(self, reporter, console_buffer):
        reporter.display_rate_limit_error()
        assert "Too Many Requests" in console_buffer.getvalue()


def test_summary(reporter, console_buffer):
    summary = RunSummary(
        phases=[
            PhaseSummary(
                kind="CSS",
                files=[
                    FileReport(path="a.css", verdict=FileVerdict.VALID),
                    FileReport(path="b.css", verdict=FileVerdict.EXHAUSTED),
                ],
            )
        ],
        halted_by="exhausted",
    )
    reporter.print_summary(summary)
    out = console_buffer.getvalue()
    assert "CSS: 1 passed, 0 invalid, 1 exhausted, 0 unreadable" in out
    assert "Run stopped early (exhausted)" in out


class TestReportExhausted:
    def test_network_error_reason(self, reporter, console_buffer):
        outcome = AttemptOutcome.network_error("Read timed out")
        reporter.report_exhausted("index.html", "HTML", outcome)
        out = console_buffer.getvalue()
        assert "validator unreachable on every attempt (Read timed out)" in out
        assert "request limit" not in out

    def test_rate_limit_reason(self, reporter, console_buffer):
        reporter.report_exhausted("index.html", "HTML", AttemptOutcome.rate_limited("429 Too Many Requests"))
        assert "request limit exceeded on every attempt (429 Too Many Requests)" in console_buffer.getvalue()
