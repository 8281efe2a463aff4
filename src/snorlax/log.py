# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for snorlax."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("SNORLAX_LOG_LEVEL", "WARNING").upper()
LOGGER_NAME = "snorlax"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the ``snorlax`` namespace."""
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


class _InstanceLogger(logging.Logger):
    """Unregistered logger owned by one object; handlers come from its parent."""

    # Unregistered loggers miss the manager's cache invalidation, so skip the cache.
    def isEnabledFor(self, level: int) -> bool:
        if self.disabled or self.manager.disable >= level:
            return False
        return level >= self.getEffectiveLevel()


def instance_logger(name: str) -> logging.Logger:
    """
    Return a private child of ``snorlax.<name>``.

    Its level can be changed without touching other instances; with no level
    set it follows the shared parent logger.
    """
    parent = get_logger(name)
    logger = _InstanceLogger(parent.name)
    logger.parent = parent
    return logger


def resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.WARNING)


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging for script use."""
    effective_level = (level or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=resolve_level(effective_level),
        format="%(levelname)s %(name)s: %(message)s",
    )


__all__ = ["get_logger", "instance_logger", "resolve_level", "setup_logging"]
