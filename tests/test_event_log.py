"""Tests for the bounded game event log."""

from geocoin.utils.event_log import EventLog


class TestEventLog:
    def test_sequence_numbers_increase(self):
        log = EventLog()
        a = log.record("collect", "Collected 3:-2#3", (3, -2))
        b = log.record("move", "Moved")
        assert (a.seq, b.seq) == (1, 2)
        assert b.cell is None

    def test_oldest_events_fall_off(self):
        log = EventLog(maxlen=3)
        for n in range(5):
            log.record("move", f"step {n}")
        assert [e.message for e in log.latest()] == ["step 2", "step 3", "step 4"]

    def test_since(self):
        log = EventLog()
        for n in range(4):
            log.record("move", f"step {n}")
        assert [e.seq for e in log.since(3)] == [3, 4]

    def test_latest_count(self):
        log = EventLog()
        for n in range(10):
            log.record("move", f"step {n}")
        assert len(log.latest(4)) == 4
        assert log.latest(4)[-1].seq == 10
