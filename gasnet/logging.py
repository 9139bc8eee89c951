"""Logging setup for gasnet.

Every module logs through a child of the ``gasnet`` logger. A single stdout
handler is attached to that logger on import; the CLI picks its level from
``--verbose``/``--quiet``.
"""

import logging
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = "gasnet"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Handler owned by gasnet; None until setup_root_logger runs
_handler: Optional[logging.Handler] = None


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """Attach the gasnet handler to the ``gasnet`` logger.

    Does nothing while a handler is already attached; call ``reset_logging``
    first to install a different one.

    Args:
        level: Initial level of the ``gasnet`` logger.
        format_string: Record format, ``LOG_FORMAT`` when omitted.
        handler: Handler to install, a stdout ``StreamHandler`` when omitted.

    Returns:
        The ``gasnet`` logger.
    """
    global _handler

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is not None:
        return root

    _handler = handler or logging.StreamHandler(sys.stdout)
    _handler.setFormatter(logging.Formatter(format_string or LOG_FORMAT))
    root.addHandler(_handler)
    root.setLevel(level)
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``gasnet`` namespace.

    Names outside the namespace are prefixed with ``gasnet.`` so their
    records reach the gasnet handler.
    """
    setup_root_logger()
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_global_log_level(level: Union[int, str]) -> None:
    """Set the level of the ``gasnet`` logger and its handler.

    Args:
        level: A numeric level or a level name such as ``"debug"``.

    Raises:
        ValueError: If ``level`` is an unknown level name.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    root = setup_root_logger()
    root.setLevel(level)
    if _handler is not None:
        _handler.setLevel(level)


def level_for_flags(verbose: bool, quiet: bool) -> int:
    """Map the CLI ``--verbose``/``--quiet`` flags to a level.

    ``--verbose`` wins when both are given.
    """
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def reset_logging() -> None:
    """Detach the gasnet handler and clear the ``gasnet`` logger level."""
    global _handler

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is not None:
        root.removeHandler(_handler)
        _handler = None
    root.setLevel(logging.NOTSET)


setup_root_logger()
