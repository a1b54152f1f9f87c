"""Logging set-up shared by the library modules and the CLI."""

from __future__ import annotations

import logging
from typing import IO, Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
QUIET_LOGGERS = ("urllib3",)


def resolve_level(level: Union[int, str]) -> int:
    """Accept ``logging`` constants or names such as ``"debug"``."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: Union[int, str] = logging.INFO, stream: Optional[IO[str]] = None) -> None:
    """Install one formatted handler on the root logger.

    Placement evaluates many candidates per word, so those decisions log at
    DEBUG while pipeline milestones stay at INFO. HTTP connection chatter
    from the word source is held at WARNING unless DEBUG is requested.
    """

    numeric = resolve_level(level)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(numeric)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(numeric if numeric <= logging.DEBUG else logging.WARNING)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger, configuring defaults on first use."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "xwordgen")
