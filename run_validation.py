"""
Script di esecuzione del validatore W3C in batch.

Legge:
  - settings.json (opzionale): {htmlFiles, cssFiles, ignore}
  - .env: URL dei validatori, ritardi di retry, policy del batch

Valida in sequenza tutti i file HTML e poi tutti i file CSS.
"""
import logging
import sys

from src.config import settings as env
from src.config.loader import SettingsError, load_validator_settings
from src.validation.runner import BatchPolicy, ValidationRunner

# ---------------------------------------------------------------------------
# Setup logging
# ---------------------------------------------------------------------------
logger = logging.getLogger("run_validation")


def configure_logging(level: str = env.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        stream=sys.stderr,
    )


def main() -> int:
    configure_logging()

    try:
        settings = load_validator_settings(env.VALIDATOR_SETTINGS_FILE)
        runner = ValidationRunner(settings, policy=BatchPolicy.from_env())
        summary = runner.run()
    except SettingsError as exc:
        logger.error("%s", exc)
        return 0
    except Exception:  # noqa: BLE001
        logger.exception("Validation run aborted")
        return 0

    logger.info(
        "Run completato: %s",
        ", ".join(f"{p.kind} {p.passed}/{len(p.files)}" for p in summary.phases) or "nessun file",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
