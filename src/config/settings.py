"""
Environment settings loaded from .env file.
"""
import os
from dotenv import load_dotenv

from src.config.constants import (
    DEFAULT_FIRST_RETRY_DELAY_S,
    DEFAULT_MAX_MESSAGE_LEN,
    DEFAULT_SECOND_RETRY_DELAY_S,
)

load_dotenv()


# --- Remote validators ---
CSS_VALIDATOR_URL: str = os.getenv("CSS_VALIDATOR_URL", "https://jigsaw.w3.org/css-validator/validator")
HTML_VALIDATOR_URL: str = os.getenv("HTML_VALIDATOR_URL", "https://validator.w3.org/nu/")
VALIDATOR_TIMEOUT_MS: int = int(os.getenv("VALIDATOR_TIMEOUT_MS", "5000"))

# --- Retry ladder ---
FIRST_RETRY_DELAY_S: float = float(os.getenv("FIRST_RETRY_DELAY_S", str(DEFAULT_FIRST_RETRY_DELAY_S)))
SECOND_RETRY_DELAY_S: float = float(os.getenv("SECOND_RETRY_DELAY_S", str(DEFAULT_SECOND_RETRY_DELAY_S)))

# --- Batch policy ---
STOP_ON_INVALID: bool = os.getenv("STOP_ON_INVALID", "false").lower() == "true"
ON_EXHAUSTED: str = os.getenv("ON_EXHAUSTED", "continue")
TESTS_SCOPED_SELECTION: bool = os.getenv("TESTS_SCOPED_SELECTION", "false").lower() == "true"

# --- Files ---
VALIDATOR_SETTINGS_FILE: str = os.getenv("VALIDATOR_SETTINGS_FILE", "settings.json")

# --- Output ---
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
MAX_MESSAGE_LEN: int = int(os.getenv("MAX_MESSAGE_LEN", str(DEFAULT_MAX_MESSAGE_LEN)))
