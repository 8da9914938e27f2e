import logging
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "primer_align"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# -v count -> level
VERBOSITY_LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


def level_for_verbosity(verbose_level: int, quiet: bool = False) -> int:
    """
    Map a ``-v`` count to a logging level.

    ``quiet`` keeps only errors; counts above 2 stay at DEBUG.
    """
    if quiet:
        return logging.ERROR
    return VERBOSITY_LEVELS.get(verbose_level, logging.DEBUG)


def setup_logger(
    name: str = PACKAGE_LOGGER,
    level: int = logging.INFO,
    log_file: Optional[str | Path] = None,
) -> logging.Logger:
    """
    Attach a stderr handler, and optionally a file handler, to a logger.

    Handlers installed by an earlier call are removed first, so a CLI run
    inside a long-lived process (or a test session) never logs twice.

    Parameters
    ----------
    name : str, optional
        Logger to configure. Configuring the package logger covers every
        module logger below it.
    level : int, optional
        Level applied to the logger and to each handler.
    log_file : str or Path, optional
        Append log records to this file as well; parent directories are
        created as needed.

    Returns
    -------
    logging.Logger
        The configured logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    # stdout is reserved for results (--json)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, mode='a', encoding='utf-8'))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        logger.addHandler(handler)

    if log_file:
        logger.debug(f"Logging to file: {log_file}")

    return logger


def set_log_level(logger: logging.Logger, level: int) -> None:
    """Change the level of `logger` and of every handler attached to it."""
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
