# stc_utils/logging_setup.py
import logging
from typing import Literal, Optional

Level = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def level_from_flags(
    quiet: bool = False, verbose: bool = False, default: Optional[str] = None
) -> str:
    """CLI flags win over the configured level; --verbose wins over --quiet."""
    if verbose:
        return "DEBUG"
    if quiet:
        return "WARNING"
    return (default or "INFO").upper()


def setup_logging(level: Level = "INFO") -> None:
    # force=True so repeated CLI invocations in one process pick up the new level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        force=True,
    )
