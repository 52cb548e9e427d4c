"""
Logging for layerguard.

Terminal output goes through a rich handler on stderr so stdout stays free
for reports (including ``--json``). An optional plain-text log file can be
attached to the ``layerguard`` logger.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "layerguard"

VERBOSITY_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

_FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def level_for(verbose: bool = False, quiet: bool = False) -> int:
    """Map CLI-style flags to a logging level. ``quiet`` wins over ``verbose``."""
    if quiet:
        return VERBOSITY_LEVELS["quiet"]
    if verbose:
        return VERBOSITY_LEVELS["verbose"]
    return VERBOSITY_LEVELS["normal"]


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Configure terminal (and optionally file) logging.

    The rich handler is installed on the root logger only if nothing else has
    configured logging yet; the level is always applied to the ``layerguard``
    logger.

    Args:
        verbose: Log at DEBUG, with source locations
        quiet: Log only errors
        log_file: Append log records to this file as well

    Returns:
        The ``layerguard`` logger
    """
    level = level_for(verbose, quiet)

    console_handler = RichHandler(
        console=Console(stderr=True),
        markup=False,
        rich_tracebacks=True,
        show_path=verbose,
        log_time_format="[%X]",
    )
    logging.basicConfig(level=level, format="%(message)s", handlers=[console_handler])

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    if log_file is not None:
        _attach_file_handler(logger, Path(log_file))

    return logger


def configure_for(verbosity: str, log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """Set up logging from a ``CheckConfig.verbosity`` value."""
    if verbosity not in VERBOSITY_LEVELS:
        raise ValueError(f"Unknown verbosity '{verbosity}'")
    return setup_logging(
        verbose=verbosity == "verbose", quiet=verbosity == "quiet", log_file=log_file
    )


def _attach_file_handler(logger: logging.Logger, path: Path) -> None:
    target = str(path.resolve())
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            return
    handler = logging.FileHandler(target, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``layerguard`` namespace (``engine`` -> ``layerguard.engine``)."""
    if not name or name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    if name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
