"""
    Logging utilities.
"""

import logging
from functools import wraps

from rich.console import Console
from rich.logging import RichHandler
from click import get_current_context


_RAW_LOGGING_FORMAT = "%(message)s"
_TASK_LOGGING_FORMAT = (
    "[bold light_yellow3][ %(project)s -[/bold light_yellow3]"
    " %(message)s [bold light_yellow3]][/bold light_yellow3]"
)
_TIME_FORMAT = lambda time: f"[{time:%H:%M:%S}.{time.microsecond//1000:03}]"

_apkbuild_logger = logging.getLogger("apkbuild")


# Use the same console for the logging handler and any other special cases like
# tables or progress output.
console = Console()


def get_verbosity(verbose):
    """Transform the given verbosity level into the corresponding logging level.

    Args:
        verbose (bool): Whether the logging should be verbose or not

    Returns:
        int: Logging level
    """
    return logging.DEBUG if verbose else logging.INFO


def _get_state():
    click_context = get_current_context(silent=True)
    return click_context.obj if click_context else None


def _configure_logger(logger, show_level=True):
    """Provide the given logger with the most basic configuration possible to be used.

    Args:
        logger (logging.Logger): Logger to be configured
        show_level (bool): Whether to display the logging level in the record. Defaults to True
    """
    state = _get_state()

    # Defaults to DEBUG if there is no click context (unit tests normally)
    level = state.verbosity if state is not None and state.verbosity is not None else logging.DEBUG
    logger.setLevel(level)

    logger.propagate = False

    handler = RichHandler(
        level=level,
        console=console,
        show_level=show_level,
        show_path=False,
        enable_link_path=False,
        markup=True,
        rich_tracebacks=True,
        log_time_format=_TIME_FORMAT,
    )

    logger.handlers = []
    logger.addHandler(handler)


def initialize_logger(log_func):
    """Decorator to initialize the global logger before logging a message if it wasn't already initialized."""

    @wraps(log_func)
    def wrapper(*args, **kwargs):
        if not _apkbuild_logger.handlers:
            _configure_logger(logger=_apkbuild_logger)
        log_func(*args, **kwargs)

    return wrapper


@initialize_logger
def debug(message):  # pragma: no cover
    """Utility debug function to ease logging."""
    _apkbuild_logger.debug(message)


@initialize_logger
def info(message):  # pragma: no cover
    """Utility info function to ease logging."""
    _apkbuild_logger.info(message)


@initialize_logger
def warning(message):  # pragma: no cover
    """Utility warning function to ease logging."""
    _apkbuild_logger.warning(message)


@initialize_logger
def error(message):  # pragma: no cover
    """Utility error function to ease logging."""
    _apkbuild_logger.error(message)


@initialize_logger
def critical(message):  # pragma: no cover
    """Utility critical function to ease logging."""
    _apkbuild_logger.critical(message)


@initialize_logger
def exception(message, exc_info=False):  # pragma: no cover
    """Utility exception function to ease logging."""
    _apkbuild_logger.exception(message, exc_info=exc_info)


class ProjectFilter(logging.Filter):
    """Filter class to add the name of the project being built to a log record."""

    def __init__(self, project=None):
        super().__init__()
        self._project = project

    def filter(self, record):
        if self._project is None:
            state = _get_state()
            self._project = state.project_name if state is not None and state.project_name else "apkbuild"

        record.project = self._project
        return True


def get_tasks_logger(project=None):
    """Provide a logger specially configured to display the status of tasks execution.

    Args:
        project (str, optional): Name shown in every record. Taken from the application state when not given.
    """
    logger = logging.getLogger("build")
    _configure_logger(logger=logger, show_level=False)

    logfilter = ProjectFilter(project=project)
    logger.handlers[0].addFilter(logfilter)

    formatter = logging.Formatter(_TASK_LOGGING_FORMAT)
    logger.handlers[0].setFormatter(formatter)

    return logger


def _raw_logger():
    """
    Provide a raw logger, for output of external tools that already comes formatted.
    """
    logger = logging.getLogger("raw")
    logger.setLevel(logging.INFO)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(_RAW_LOGGING_FORMAT)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


raw_logger = _raw_logger()
