"""
Remote validator clients — W3C CSS validator and Nu HTML checker over HTTP.

Both clients return a ValidationResult or raise:
- ValidatorHTTPError      the service answered with a non-2xx status
                          (429 means rate limiting);
- ValidatorResponseError  the body did not match the expected JSON schema;
- requests.RequestException for connection failures and timeouts.
"""
import logging
from typing import Any, Dict, Optional

import requests
from jsonschema import ValidationError, validate

from src.config.constants import DEFAULT_CSS_VALIDATOR_OPTIONS
from src.config.schemas import CSS_VALIDATOR_RESPONSE_SCHEMA, HTML_VALIDATOR_RESPONSE_SCHEMA
from src.config.settings import CSS_VALIDATOR_URL, HTML_VALIDATOR_URL, VALIDATOR_TIMEOUT_MS
from src.models.diagnostic import Diagnostic
from src.models.validation import ValidationRequest, ValidationResult

logger = logging.getLogger(__name__)

USER_AGENT = "w3c-batch-validator"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ValidatorError(Exception):
    """Base class for validator client failures."""


class ValidatorHTTPError(ValidatorError):
    """Raised when a validator answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str = "") -> None:
        self.status_code = status_code
        super().__init__(message or f"Validator responded with HTTP {status_code}")


class ValidatorResponseError(ValidatorError):
    """Raised when a validator response does not match its schema."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _to_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _read_json(response: requests.Response, schema: dict, service: str) -> dict:
    if response.status_code >= 400:
        raise ValidatorHTTPError(
            response.status_code,
            f"{service} responded with HTTP {response.status_code} {response.reason or ''}".strip(),
        )
    try:
        payload = response.json()
    except ValueError as exc:
        raise ValidatorResponseError(f"{service} returned a non-JSON body") from exc
    try:
        validate(instance=payload, schema=schema)
    except ValidationError as exc:
        raise ValidatorResponseError(f"{service} response schema mismatch: {exc.message}") from exc
    return payload


def _timeout_seconds(timeout_ms: Any) -> float:
    return _to_int(timeout_ms) / 1000.0 or VALIDATOR_TIMEOUT_MS / 1000.0


# ---------------------------------------------------------------------------
# CSS
# ---------------------------------------------------------------------------

class CssValidatorClient:
    """Client for the jigsaw CSS validator (``output=json``)."""

    def __init__(
        self,
        url: str = CSS_VALIDATOR_URL,
        session: Optional[requests.Session] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.url = url
        self.session = session or requests.Session()
        self.options = {**DEFAULT_CSS_VALIDATOR_OPTIONS, **(options or {})}

    def build_form(self, content: str, options: Dict[str, Any]) -> Dict[str, str]:
        return {
            "text": content,
            "profile": str(options.get("profile", "css3")),
            "usermedium": str(options.get("medium", "all")),
            "warning": str(options.get("warning", "no")),
            "lang": str(options.get("lang", "en")),
            "output": "json",
        }

    def validate_text(self, content: str, options: Optional[Dict[str, Any]] = None) -> ValidationResult:
        """Validate a stylesheet. Empty content is valid without a request."""
        if not content:
            return ValidationResult(valid=True)

        merged = {**self.options, **(options or {})}
        response = self.session.post(
            self.url,
            data=self.build_form(content, merged),
            headers={"User-Agent": USER_AGENT},
            timeout=_timeout_seconds(merged.get("timeout")),
        )
        payload = _read_json(response, CSS_VALIDATOR_RESPONSE_SCHEMA, "CSS validator")
        body = payload["cssvalidation"]

        diagnostics = tuple(
            Diagnostic(
                line=_to_int(err.get("line")),
                message=err["message"].strip(),
                subtype=err.get("type"),
                kind="error",
            )
            for err in body.get("errors", [])
        )
        logger.debug("CSS validator: validity=%s errors=%d", body["validity"], len(diagnostics))
        return ValidationResult(valid=bool(body["validity"]), diagnostics=diagnostics)

    def validate(self, request: ValidationRequest) -> ValidationResult:
        if request.content is not None:
            return self.validate_text(request.content)
        with open(request.file_reference, encoding="utf-8", errors="replace") as f:
            return self.validate_text(f.read())


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------

class HtmlValidatorClient:
    """Client for the Nu HTML checker (``out=json``)."""

    def __init__(
        self,
        url: str = HTML_VALIDATOR_URL,
        session: Optional[requests.Session] = None,
        timeout_ms: int = VALIDATOR_TIMEOUT_MS,
    ) -> None:
        self.url = url
        self.session = session or requests.Session()
        self.timeout_ms = timeout_ms

    def validate(self, request: ValidationRequest) -> ValidationResult:
        """Validate a document given inline or by file reference."""
        if request.content is not None:
            body = request.content.encode("utf-8")
        else:
            with open(request.file_reference, "rb") as f:
                body = f.read()

        response = self.session.post(
            self.url,
            params={"out": "json"},
            data=body,
            headers={
                "Content-Type": "text/html; charset=utf-8",
                "User-Agent": USER_AGENT,
            },
            timeout=self.timeout_ms / 1000.0,
        )
        payload = _read_json(response, HTML_VALIDATOR_RESPONSE_SCHEMA, "HTML validator")

        diagnostics = tuple(
            Diagnostic(
                line=_to_int(msg.get("lastLine")),
                message=msg.get("message", ""),
                subtype=msg.get("subType"),
                kind=msg["type"],
            )
            for msg in payload["messages"]
        )
        valid = not any(d.kind in ("error", "non-document-error") for d in diagnostics)
        return ValidationResult(valid=valid, diagnostics=diagnostics)
