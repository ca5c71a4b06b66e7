# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import logging
import os
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from .config import CFG
from .error import VHError

# Prefix shared by the names of all vh loggers.
_ROOT_NAME = "vh_lib"


def get_logger(name: str, show_time: bool = False) -> logging.Logger:
    """
    Return a logger with unified formatting.

    Messages are printed to stderr using rich's RichHandler. The logger itself
    accepts all levels so that an attached run log file receives debug messages too.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    debug_mode = os.environ.get(CFG.env_vars.debug_mode) is not None

    console = Console(stderr=True)
    handler = RichHandler(
        console=console,
        rich_tracebacks=True,
        show_path=False,
        show_level=True,
        show_time=show_time or debug_mode,
        log_time_format=CFG.date_formats.standard,
        tracebacks_width=None,
        tracebacks_code_width=None,
    )

    handler.setLevel(logging.DEBUG if debug_mode else logging.INFO)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def _vh_loggers() -> list[logging.Logger]:
    """Collect all loggers created for vh modules."""
    return [
        obj
        for name, obj in logging.Logger.manager.loggerDict.items()
        if name.startswith(_ROOT_NAME) and isinstance(obj, logging.Logger)
    ]


def set_verbose(verbose: bool) -> None:
    """
    Switch console output of all vh loggers between INFO and DEBUG.
    """
    level = logging.DEBUG if verbose else logging.INFO
    for logger in _vh_loggers():
        for handler in logger.handlers:
            if isinstance(handler, RichHandler):
                handler.setLevel(level)


def attach_log_file(path: Path) -> logging.FileHandler:
    """
    Start writing messages of all vh loggers into a run log file.

    The file is truncated. Every message is prefixed with a timestamp.

    Args:
        path (Path): Path to the log file.

    Returns:
        logging.FileHandler: The attached handler, to be passed to `detach_log_file`.

    Raises:
        VHError: If the log file cannot be opened.
    """
    try:
        handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    except OSError as e:
        raise VHError(f"Could not open run log '{path}': {e}.") from e

    handler.setLevel(logging.DEBUG)
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] %(message)s", datefmt=CFG.date_formats.standard
        )
    )

    for logger in _vh_loggers():
        logger.addHandler(handler)

    return handler


def detach_log_file(handler: logging.FileHandler) -> None:
    """
    Stop writing into a run log file and close it.
    """
    for logger in _vh_loggers():
        logger.removeHandler(handler)
    handler.close()
