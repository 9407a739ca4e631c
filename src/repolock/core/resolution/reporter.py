"""Progress reporting for the resolution engine.

The engine never writes to global logging state directly. It reports
through a ``Reporter`` passed to it, so tests can capture exactly what was
said and in what order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass, field
from typing import Protocol

logger = logging.getLogger("repolock")


class Reporter(Protocol):
    """Sink for engine progress messages."""

    def step(self, message: str) -> AbstractContextManager[None]:
        """Context manager bracketing a named unit of work."""
        ...

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...


class LoggingReporter:
    """Forward engine messages to the ``repolock`` logger."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger
        self._depth = 0

    @contextmanager
    def step(self, message: str) -> Iterator[None]:
        self._log.info("%s%s", "  " * self._depth, message)
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    def info(self, message: str) -> None:
        self._log.info("%s%s", "  " * self._depth, message)

    def warning(self, message: str) -> None:
        self._log.warning("%s%s", "  " * self._depth, message)


@dataclass
class RecordingReporter:
    """Keep engine messages in memory, as ``(level, message)`` pairs.

    Steps are recorded with level ``"step"`` when entered.
    """

    records: list[tuple[str, str]] = field(default_factory=list)

    @contextmanager
    def step(self, message: str) -> Iterator[None]:
        self.records.append(("step", message))
        yield

    def info(self, message: str) -> None:
        self.records.append(("info", message))

    def warning(self, message: str) -> None:
        self.records.append(("warning", message))

    def messages(self, level: str) -> list[str]:
        """Messages recorded at ``level``, in order."""
        return [message for lvl, message in self.records if lvl == level]
