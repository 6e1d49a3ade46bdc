"""
Shared test fixtures for the validator test suite.
"""
import io

import pytest
from rich.console import Console

from src.models.diagnostic import Diagnostic
from src.models.validation import ValidationResult
from src.validation.reporter import Reporter


# ==========================================================================
# Fakes
# ==========================================================================

class RecordingSleep:
    """Stands in for time.sleep and remembers every requested delay."""

    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)

    @property
    def total(self):
        return sum(self.calls)


class ScriptedCall:
    """
    Callable returning (or raising) the scripted items in order.
    The last item repeats once the script runs out.
    """

    def __init__(self, *items):
        self.items = list(items)
        self.calls = 0

    def __call__(self, *args, **kwargs):  # noqa: ARG002
        item = self.items[min(self.calls, len(self.items) - 1)]
        self.calls += 1
        if isinstance(item, BaseException):
            raise item
        return item


class FakeResponse:
    def __init__(self, status_code=200, payload=None, reason="OK"):
        self.status_code = status_code
        self._payload = payload
        self.reason = reason

    def json(self):
        if self._payload is None:
            raise ValueError("no JSON")
        return self._payload


class FakeSession:
    """Minimal requests.Session stub recording post() calls."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.posts = []

    def post(self, url, **kwargs):
        self.posts.append((url, kwargs))
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, BaseException):
            raise item
        return item


# ==========================================================================
# Fixtures
# ==========================================================================

@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def console_buffer():
    return io.StringIO()


@pytest.fixture
def reporter(console_buffer):
    console = Console(file=console_buffer, force_terminal=False, color_system=None, width=200)
    return Reporter(console)


@pytest.fixture
def valid_result():
    return ValidationResult(valid=True)


@pytest.fixture
def rate_limited_result():
    return ValidationResult(
        valid=False,
        diagnostics=(Diagnostic(line=0, message="429 Too Many Requests", subtype="fatal"),),
    )


@pytest.fixture
def network_error_result():
    return ValidationResult(
        valid=False,
        diagnostics=(
            Diagnostic(line=0, message="getaddrinfo ENOTFOUND validator.w3.org", subtype="network-error"),
        ),
    )


@pytest.fixture
def svg_diagnostics():
    return (
        Diagnostic(line=3, message='Property "fill" doesn\'t exist : #fff', kind="error"),
        Diagnostic(line=4, message='Property "stroke" doesn\'t exist : red', kind="error"),
    )


@pytest.fixture
def project_tree(tmp_path):
    """A small site: two own stylesheets, one vendored, one page."""
    (tmp_path / "bootstrap").mkdir()
    (tmp_path / "a.css").write_text("body { color: red; }\n", encoding="utf-8")
    (tmp_path / "c.css").write_text("p { margin: 0; }\n", encoding="utf-8")
    (tmp_path / "bootstrap" / "b.css").write_text(".btn { }\n", encoding="utf-8")
    (tmp_path / "index.html").write_text(
        "<!DOCTYPE html><html lang=\"en\"><head><title>t</title></head><body></body></html>\n",
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def scripted():
    """Factory: scripted(item, ...) → ScriptedCall."""
    return ScriptedCall


@pytest.fixture
def fake_session():
    """Factory: fake_session(response, ...) → FakeSession."""
    return FakeSession


@pytest.fixture
def fake_response():
    return FakeResponse
