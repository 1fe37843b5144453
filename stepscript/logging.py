"""
Logging setup for stepscript.

Every module logs through the package logger. The sequencer traces each
dispatched step at DEBUG, so SequencerConfig.debug_logging decides whether
those traces are shown.
"""

import logging
from typing import IO, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .models.config import SequencerConfig

logger = logging.getLogger("stepscript")

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(
    config: Optional["SequencerConfig"] = None,
    stream: Optional[IO[str]] = None,
):
    """
    Install the package handler and apply the configured level.

    Calling it again replaces the handler instead of stacking another one.

    Args:
        config: Settings whose debug_logging flag selects DEBUG over WARNING
        stream: Destination for log records; stderr when omitted
    """
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))

    logger.handlers[:] = [handler]
    logger.propagate = False
    set_debug_enabled(bool(config and config.debug_logging))


def set_debug_enabled(enabled: bool):
    """Switch between tracing every step (DEBUG) and warnings only."""
    logger.setLevel(logging.DEBUG if enabled else logging.WARNING)


# Warnings only until the application loads its config
configure_logging()
