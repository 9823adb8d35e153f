"""Environment-driven settings.

Read once from the process environment (after loading a local ``.env``):

    WAITINGLINE_CHECK_PRECONDITIONS   1/0, true/false, yes/no, on/off  (default: on)
    WAITINGLINE_LOG_LEVEL             DEBUG, INFO, WARNING, ...        (default: WARNING)

Empty-line checks on dequeue are not configurable; a kernel cannot produce
an entry it does not hold.
"""

from __future__ import annotations

import functools
import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from waitingline.result import Err, Ok, Result

logger = logging.getLogger(__name__)

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})
_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    check_preconditions: bool = True
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> Result["Settings", ValueError]:
        """Parse settings from the environment, loading ``.env`` first."""
        load_dotenv()
        raw_check = os.getenv("WAITINGLINE_CHECK_PRECONDITIONS")
        raw_level = os.getenv("WAITINGLINE_LOG_LEVEL")

        match raw_check:
            case None:
                check = True
            case str(s) if s.strip().lower() in _TRUE:
                check = True
            case str(s) if s.strip().lower() in _FALSE:
                check = False
            case _:
                return Err(
                    ValueError(
                        f"WAITINGLINE_CHECK_PRECONDITIONS must be a boolean, got {raw_check!r}"
                    )
                )

        match raw_level:
            case None:
                level = "WARNING"
            case str(s) if s.strip().upper() in _LEVELS:
                level = s.strip().upper()
            case _:
                return Err(
                    ValueError(
                        f"WAITINGLINE_LOG_LEVEL must be one of {', '.join(_LEVELS)}, got {raw_level!r}"
                    )
                )

        return Ok(cls(check_preconditions=check, log_level=level))


@functools.cache
def get_settings() -> Settings:
    """Cached process-wide settings; invalid values fall back to defaults."""
    match Settings.from_env():
        case Ok(settings):
            return settings
        case Err() as err:
            logger.warning("Ignoring invalid environment settings: %s", err.describe())
            return Settings()
