"""
Constants used across the validator.
Pinned so that a run is reproducible without a settings file.
"""
from typing import Dict, List, Tuple

# =============================================================================
# File patterns
# =============================================================================
HTML_FILES_PATTERN: str = "./**/*.html"
CSS_FILES_PATTERN: str = "./**/*.css"

IGNORE_PATTERNS: List[str] = [
    "node_modules",
    "libs",
    "bootstrap",
    "bootstrap-5",
    "normalize.css",
    "bootstrap.",
    "reset.css",
]

# Dropped before any rule is applied when selection is scoped to tests/.
GLOBAL_IGNORE_DIRS: List[str] = ["node_modules"]

# Path segments that introduce a scoped project: tests/<project>/...
TESTS_ROOT_SEGMENT: str = "tests"
TESTS_SCOPED_FIRST_RULE_INDEX: int = 2

# =============================================================================
# Retry ladder (seconds)
# =============================================================================
DEFAULT_FIRST_RETRY_DELAY_S: float = 5.0
DEFAULT_SECOND_RETRY_DELAY_S: float = 10.0
RETRY_DELAYS: Tuple[float, ...] = (DEFAULT_FIRST_RETRY_DELAY_S, DEFAULT_SECOND_RETRY_DELAY_S)

HTTP_TOO_MANY_REQUESTS: int = 429
RATE_LIMIT_MARKER: str = "429 Too Many Requests"
NETWORK_ERROR_SUBTYPE: str = "network-error"
DEFAULT_RATE_LIMIT_MESSAGE: str = "Request limit exceeded (429 Too Many Requests)"

# =============================================================================
# CSS validator defaults
# =============================================================================
DEFAULT_CSS_VALIDATOR_OPTIONS: Dict[str, object] = {
    "medium": "all",
    "timeout": 5000,
    "profile": "css3",
    "warning": "no",
    "level": "css3",
    "output": "json",
    "lang": "en",
    "charset": "utf-8",
    "doctype": "HTML5",
}

# =============================================================================
# Noise filtering
# =============================================================================
CLIP_PATH_MARKER: str = "clip-path"
SVG_FILE_MARKER: str = "SVG-main"

# The CSS validator does not know SVG presentation properties.
SVG_PROPERTIES: List[str] = [
    'Property "fill" doesn\'t exist',
    'Property "stroke" doesn\'t exist',
    'Property "stroke-width" doesn\'t exist',
]

# =============================================================================
# Batch policy
# =============================================================================
ON_EXHAUSTED_CONTINUE: str = "continue"
ON_EXHAUSTED_STOP_PHASE: str = "stop_phase"
ON_EXHAUSTED_STOP_RUN: str = "stop_run"
ON_EXHAUSTED_POLICIES: Tuple[str, ...] = (
    ON_EXHAUSTED_CONTINUE,
    ON_EXHAUSTED_STOP_PHASE,
    ON_EXHAUSTED_STOP_RUN,
)

# HTML reporter
DEFAULT_MAX_MESSAGE_LEN: int = 200
