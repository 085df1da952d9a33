"""Runtime settings read from the environment (optionally populated from .env)."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_LOCATIONS_FILE = "solarclock.cnf"
DEFAULT_REFRESH_SECONDS = 5.0
DEFAULT_LOG_LEVEL = "WARNING"

log = logging.getLogger(__name__)


def _float_env(name: str, default: float) -> float:
    """Numeric environment variable; an unparsable value falls back to ``default``."""
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        log.warning("Ignoring %s=%r, not a number; using %s", name, value, default)
        return default


@dataclass(frozen=True)
class Settings:
    """Process-wide settings. Built once at startup."""

    locations_path: Path  # Record list; a missing file is not an error
    refresh_seconds: float  # Day table rebuild interval in follow mode
    log_level: str

    @classmethod
    def from_env(cls) -> "Settings":
        """Read SOLARCLOCK_* variables, falling back to defaults.

        Call ``dotenv.load_dotenv()`` first to pick up a local .env file.
        """
        return cls(
            locations_path=Path(
                os.environ.get("SOLARCLOCK_LOCATIONS", DEFAULT_LOCATIONS_FILE)
            ),
            refresh_seconds=_float_env(
                "SOLARCLOCK_REFRESH_SECONDS", DEFAULT_REFRESH_SECONDS
            ),
            log_level=os.environ.get("SOLARCLOCK_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )
