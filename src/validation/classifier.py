"""
Result Classifier — pass/fail from a raw CSS validator result.

The CSS validator reports false positives on ``clip-path`` values and on SVG
presentation properties (``fill``, ``stroke``, ...).  Those diagnostics are
filtered before judging validity; everything else is a real error.
"""
import logging

from src.config.constants import CLIP_PATH_MARKER, SVG_FILE_MARKER, SVG_PROPERTIES
from src.models.diagnostic import Diagnostic
from src.models.report_io import ClassifiedResult, FileVerdict
from src.models.validation import ValidationResult

logger = logging.getLogger(__name__)


def is_svg_file(file_path: str) -> bool:
    return SVG_FILE_MARKER in file_path


def is_svg_specific_error(diagnostic: Diagnostic) -> bool:
    return any(prop in diagnostic.message for prop in SVG_PROPERTIES)


def is_clip_path_noise(diagnostic: Diagnostic) -> bool:
    return CLIP_PATH_MARKER in diagnostic.message


def classify(result: ValidationResult, file_path: str) -> ClassifiedResult:
    """
    Decide the verdict for *file_path*.

    Layers, in order:
        1. A valid result stays valid.
        2. clip-path diagnostics are dropped; nothing left → VALID.
        3. On an SVG fixture, SVG-property diagnostics are dropped;
           nothing left → VALID_SVG.
        4. Otherwise INVALID with the remaining diagnostics.
    """
    if result.valid:
        return ClassifiedResult(FileVerdict.VALID)

    remaining = tuple(d for d in result.errors if not is_clip_path_noise(d))
    if not remaining:
        logger.debug("%s: only clip-path diagnostics, treated as valid", file_path)
        return ClassifiedResult(FileVerdict.VALID)

    if is_svg_file(file_path):
        remaining = tuple(d for d in remaining if not is_svg_specific_error(d))
        if not remaining:
            logger.debug("%s: only SVG-property diagnostics, treated as valid", file_path)
            return ClassifiedResult(FileVerdict.VALID_SVG)

    return ClassifiedResult(FileVerdict.INVALID, remaining)
