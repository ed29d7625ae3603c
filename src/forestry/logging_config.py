"""
Logging configuration for the forestry simulation.

All modules obtain their logger through get_logger() so that a single call to
setup_logging() controls verbosity for the whole package. Console output of
log records goes through rich; the literal menu and report text is printed by
the controller and never routed through logging.
"""
import logging
from typing import Iterable, Optional, Union

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "forestry"

DEFAULT_LEVEL = logging.WARNING


def setup_logging(level: Union[int, str] = DEFAULT_LEVEL,
                  console: Optional[Console] = None) -> logging.Logger:
    """Configure the package logger.

    Args:
        level: Logging level name or number (e.g. "INFO", logging.DEBUG)
        console: Optional rich Console to render log records on. Defaults to
            a console writing to stderr so records never mix with reports.

    Returns:
        The configured package logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = DEFAULT_LEVEL

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Replace any handler installed by an earlier call
    for handler in list(logger.handlers):
        if getattr(handler, "_forestry_handler", False):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler._forestry_handler = True
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger for a module, namespaced under the package logger."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def log_reap_summary(logger: logging.Logger, forest_name: Optional[str],
                     events: Iterable, threshold: float) -> None:
    """Log a one-line summary of a reap pass."""
    events = list(events)
    logger.info(
        f"Reap of forest {forest_name!r} above {threshold:.2f}: "
        f"{len(events)} tree(s) replaced"
    )
    for event in events:
        logger.debug(
            f"  #{event.index}: {event.reaped.height:.2f} -> "
            f"{event.replacement.height:.2f}"
        )


def log_growth_summary(logger: logging.Logger, forest_name: Optional[str],
                       tree_count: int, before: float, after: float) -> None:
    """Log average height change over one yearly growth step."""
    logger.info(
        f"Forest {forest_name!r} grew {tree_count} tree(s): "
        f"average height {before:.2f} -> {after:.2f}"
    )
