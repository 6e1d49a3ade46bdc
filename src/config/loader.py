"""
Settings record loader — reads ``settings.json`` ({htmlFiles, cssFiles, ignore}).

A missing file is not an error: the pinned constants are used instead.
"""
import json
import logging
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from src.models.report_io import ValidatorSettings

logger = logging.getLogger(__name__)


class SettingsError(Exception):
    """Raised when the settings file exists but cannot be used."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid settings file '{path}': {reason}")


def load_validator_settings(path: Union[str, Path, None]) -> ValidatorSettings:
    if path is None:
        return ValidatorSettings()

    settings_path = Path(path)
    if not settings_path.is_file():
        logger.info("No settings file at %s, using built-in patterns", settings_path)
        return ValidatorSettings()

    try:
        with open(settings_path, encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as exc:
        raise SettingsError(str(settings_path), f"invalid JSON ({exc.msg})") from exc

    if not isinstance(raw, dict):
        raise SettingsError(str(settings_path), "top-level value must be an object")

    try:
        settings = ValidatorSettings.model_validate(raw)
    except ValidationError as exc:
        raise SettingsError(str(settings_path), str(exc)) from exc

    logger.info(
        "Settings loaded from %s (html=%s css=%s ignore=%d rules)",
        settings_path, settings.html_files, settings.css_files, len(settings.ignore),
    )
    return settings
