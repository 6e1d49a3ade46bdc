"""
File Selector — glob patterns + ignore rules → ordered candidate paths.

Two exclusion variants:
- plain: a path is dropped if it contains any rule as a substring;
- tests-scoped: only files under ``tests/`` are kept and rules are matched
  against the path segments after ``tests/<project>/``.
"""
import glob
import logging
import os
from typing import Iterable, List, Sequence

from src.config.constants import (
    GLOBAL_IGNORE_DIRS,
    TESTS_ROOT_SEGMENT,
    TESTS_SCOPED_FIRST_RULE_INDEX,
)

logger = logging.getLogger(__name__)


def expand_pattern(pattern: str, root: str = ".") -> List[str]:
    """Expand a (recursive) glob relative to *root*, normalised and unsorted."""
    matches = glob.glob(pattern, root_dir=root, recursive=True)
    return [os.path.normpath(m) for m in matches]


def _matches_any(text: str, rules: Iterable[str]) -> bool:
    return any(rule in text for rule in rules)


def _keep_tests_scoped(path: str, rules: Sequence[str], global_ignore: Sequence[str]) -> bool:
    if _matches_any(path, global_ignore):
        return False

    parts = path.split(os.sep)
    if parts[0] != TESTS_ROOT_SEGMENT:
        return False

    for part in parts[TESTS_SCOPED_FIRST_RULE_INDEX:]:
        if _matches_any(part, rules):
            return False
    return True


def exclude_files(
    files: Iterable[str],
    rules: Sequence[str],
    *,
    tests_scoped: bool = False,
    global_ignore: Sequence[str] = tuple(GLOBAL_IGNORE_DIRS),
) -> List[str]:
    """
    Sort *files* and drop those matched by *rules*.

    Args:
        files: Candidate paths.
        rules: Ignore substrings.
        tests_scoped: Use the ``tests/<project>/`` segment-aware variant.
        global_ignore: Substrings that always exclude a path in the
                       tests-scoped variant.

    Returns:
        Sorted list of kept paths.
    """
    ordered = sorted(files)
    if tests_scoped:
        return [f for f in ordered if _keep_tests_scoped(f, rules, global_ignore)]
    return [f for f in ordered if not _matches_any(f, rules)]


def select_files(
    pattern: str,
    ignore_rules: Sequence[str],
    root: str = ".",
    *,
    tests_scoped: bool = False,
) -> List[str]:
    """Expand *pattern* and return the sorted paths not matched by *ignore_rules*."""
    found = expand_pattern(pattern, root)
    selected = exclude_files(found, ignore_rules, tests_scoped=tests_scoped)
    logger.debug(
        "select_files(%s): %d found, %d selected", pattern, len(found), len(selected)
    )
    return selected
