"""Logging for React Profiler.

Console output goes through a ``RichHandler`` on stderr so progress lines never
mix with reports piped from stdout. An optional log file always records at
DEBUG, whatever the console verbosity, so a quiet CI run still leaves the full
per-analyzer trace behind.

Loggers live under ``react_profiler``; each analyzer stage of a run logs to
``react_profiler.pipeline.<stage>`` (see ``stage_logger``).
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_ROOT = "react_profiler"
_FILE_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def _console_level(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """Install the console handler (and a file handler when ``log_file`` is set).

    Quiet wins over verbose. Calling this again replaces the previous handlers.
    Returns the ``react_profiler`` logger.
    """
    console_level = _console_level(verbose, quiet)

    # messages carry file paths and component names; never parse them as markup
    console_handler = RichHandler(
        console=Console(stderr=True),
        level=console_level,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        show_path=verbose,
    )
    handlers: list[logging.Handler] = [console_handler]
    root_level = console_level

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)
        root_level = logging.DEBUG

    logging.basicConfig(format="%(message)s", datefmt="[%X]", handlers=handlers, force=True)

    logger = logging.getLogger(_ROOT)
    logger.setLevel(root_level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for a module, placed under ``react_profiler`` when it is not already."""
    if name is None:
        return logging.getLogger(_ROOT)
    if name != _ROOT and not name.startswith(_ROOT + "."):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)


def stage_logger(stage: str) -> logging.Logger:
    """Logger for one analyzer stage of a run (``bundle``, ``rerenders``, ``memory``)."""
    return logging.getLogger(f"{_ROOT}.pipeline.{stage}")
