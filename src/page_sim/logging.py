"""Simulation event log.

Every run of the replacement engine leaves a short audit trail behind:
when it started, which pages were evicted, and how it finished.  The
shell's ``log`` command prints it, and tests read it to check that a
rejected configuration never reached the step loop.

The log is a **ring buffer**: it holds at most ``capacity`` entries and
the oldest fall off the front as new ones arrive, the way a kernel's
``dmesg`` buffer does.  A long-lived engine (the web server keeps one
for its whole life) therefore never grows without bound.
"""

from collections import deque
from dataclasses import dataclass
from enum import IntEnum

DEFAULT_CAPACITY = 1000


class LogLevel(IntEnum):
    """Severity levels, ordered so ``<`` compares them."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """One engine event.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The component that generated the event (e.g. "engine").

    """

    level: LogLevel
    message: str
    source: str

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Bounded log buffer that keeps the most recent entries."""

    def __init__(
        self,
        *,
        min_level: LogLevel = LogLevel.DEBUG,
        capacity: int = DEFAULT_CAPACITY,
    ) -> None:
        """Create an empty logger.

        Args:
            min_level: Entries below this level are dropped on arrival.
            capacity: Maximum number of entries kept.

        Raises:
            ValueError: If capacity is less than 1.

        """
        if capacity < 1:
            msg = f"Log capacity must be at least 1, got {capacity}"
            raise ValueError(msg)
        self._min_level = min_level
        self._entries: deque[LogEntry] = deque(maxlen=capacity)
        self._dropped = 0

    @property
    def min_level(self) -> LogLevel:
        """Return the lowest level this logger records."""
        return self._min_level

    @property
    def capacity(self) -> int:
        """Return the maximum number of entries kept."""
        return self._entries.maxlen or 0

    @property
    def dropped(self) -> int:
        """Return how many old entries have been pushed out of the buffer."""
        return self._dropped

    @property
    def entries(self) -> list[LogEntry]:
        """Return the retained entries, oldest first."""
        return list(self._entries)

    def log(self, level: LogLevel, message: str, *, source: str) -> None:
        """Record an event, evicting the oldest entry if the buffer is full."""
        if level < self._min_level:
            return
        if len(self._entries) == self.capacity:
            self._dropped += 1
        self._entries.append(LogEntry(level=level, message=message, source=source))

    def clear(self) -> None:
        """Remove all entries and reset the dropped count."""
        self._entries.clear()
        self._dropped = 0
