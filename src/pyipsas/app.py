"""Application bootstrap and user-facing messages."""

from __future__ import annotations

import logging

_logger = logging.getLogger(__name__)

_MESSAGE_LEVELS: dict[str, int] = {
    "info": logging.INFO,
    "success": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO) -> None:
    """Root logging setup for scripts.  Library code never calls this."""
    logging.basicConfig(level=level, format=_LOG_FORMAT)


class App:
    """Client application shell.

    Holds the bits of UI state that are not rendering: whether a
    long-running operation is in progress, and the message channel.
    """

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        self._logger = logger or _logger
        self.initialized = False
        self.loading = False

    def init(self) -> None:
        self._logger.info("IPSAS System initialized")
        self.initialized = True

    def show_loading(self, show: bool) -> None:
        self.loading = bool(show)

    def show_message(self, message: str, type: str = "info") -> None:  # noqa: A002
        """Log ``[type] message`` at the level matching *type*."""
        level = _MESSAGE_LEVELS.get(type, logging.INFO)
        self._logger.log(level, "[%s] %s", type, message)
