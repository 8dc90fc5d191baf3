"""Tests for the simulation event log."""

import pytest

from page_sim.logging import DEFAULT_CAPACITY, LogEntry, Logger, LogLevel


class TestLogLevel:
    """Verify log level ordering."""

    def test_levels_are_ordered(self) -> None:
        """DEBUG < INFO < WARNING < ERROR."""
        assert LogLevel.DEBUG < LogLevel.INFO
        assert LogLevel.INFO < LogLevel.WARNING
        assert LogLevel.WARNING < LogLevel.ERROR


class TestLogEntry:
    """Verify log entry structure."""

    def test_entry_str(self) -> None:
        """String representation should include level, source, and message."""
        entry = LogEntry(level=LogLevel.WARNING, message="frames full", source="engine")
        assert str(entry) == "[WARNING] engine: frames full"


class TestLogger:
    """Verify the bounded log buffer."""

    def test_entries_in_order(self) -> None:
        """Entries should come back in the order they were logged."""
        logger = Logger()
        logger.log(LogLevel.INFO, "first", source="engine")
        logger.log(LogLevel.ERROR, "second", source="shell")
        assert [e.message for e in logger.entries] == ["first", "second"]

    def test_entries_returns_copy(self) -> None:
        """Mutating the returned list should not affect the log."""
        logger = Logger()
        logger.log(LogLevel.INFO, "kept", source="engine")
        logger.entries.clear()
        assert len(logger.entries) == 1

    def test_oldest_entries_fall_off_when_full(self) -> None:
        """A full buffer should keep only the newest entries."""
        capacity = 3
        logger = Logger(capacity=capacity)
        for n in range(5):
            logger.log(LogLevel.INFO, f"run {n}", source="engine")
        assert [e.message for e in logger.entries] == ["run 2", "run 3", "run 4"]
        expected_dropped = 2
        assert logger.dropped == expected_dropped

    def test_default_capacity(self) -> None:
        """A logger built without a capacity should use the default."""
        assert Logger().capacity == DEFAULT_CAPACITY

    def test_filtered_entries_do_not_count_as_dropped(self) -> None:
        """Entries below the minimum level never enter the buffer."""
        logger = Logger(min_level=LogLevel.WARNING, capacity=1)
        logger.log(LogLevel.DEBUG, "noise", source="engine")
        logger.log(LogLevel.INFO, "noise", source="engine")
        assert logger.entries == []
        assert logger.dropped == 0

    @pytest.mark.parametrize("capacity", [0, -1])
    def test_capacity_must_be_positive(self, capacity: int) -> None:
        """A capacity below 1 should be rejected."""
        with pytest.raises(ValueError, match="at least 1"):
            Logger(capacity=capacity)

    def test_min_level_drops_entries(self) -> None:
        """Entries below the logger's minimum level should not be stored."""
        logger = Logger(min_level=LogLevel.INFO)
        logger.log(LogLevel.DEBUG, "dropped", source="engine")
        logger.log(LogLevel.INFO, "kept", source="engine")
        assert [e.message for e in logger.entries] == ["kept"]
        assert logger.min_level is LogLevel.INFO

    def test_clear(self) -> None:
        """Clearing should remove every entry and reset the dropped count."""
        logger = Logger(capacity=1)
        logger.log(LogLevel.INFO, "gone", source="engine")
        logger.log(LogLevel.INFO, "also gone", source="engine")
        logger.clear()
        assert logger.entries == []
        assert logger.dropped == 0
