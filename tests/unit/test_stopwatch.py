"""
Unit tests for Stopwatch, the scoped duration logger.
"""

import logging
from datetime import timedelta

import pytest

from logsmith import Log, Stopwatch, StopwatchState


def records(caplog):
    return [(r.levelno, r.getMessage()) for r in caplog.records if r.name.startswith("logsmith_tests")]


def escalations(caplog):
    return [(level, msg) for level, msg in records(caplog) if level >= logging.WARNING]


@pytest.mark.unit
class TestStopwatchLifecycle:

    def test_start_message_goes_to_sink(self, log, clock, caplog):
        log.info.stopwatch("load", clock=clock)
        assert records(caplog) == [(logging.INFO, "load: started")]

    def test_finish_message(self, log, clock, caplog):
        sw = log.info.stopwatch("load", clock=clock)
        clock.advance(0.042)
        sw.close()

        assert records(caplog)[-1] == (logging.INFO, "load finished in 42 ms")

    def test_default_name(self, log, clock):
        sw = log.info.stopwatch(clock=clock)
        assert sw.name == "Stopwatch"

    def test_states(self, log, clock):
        sw = log.info.stopwatch("s", clock=clock)
        assert sw.state is StopwatchState.STARTED
        assert not sw.closed

        sw.close()
        assert sw.state is StopwatchState.FINISHED
        assert sw.closed

    def test_elapsed_freezes_on_close(self, log, clock):
        sw = log.info.stopwatch("s", clock=clock)
        clock.advance(1.5)
        assert sw.elapsed == timedelta(seconds=1.5)

        sw.close()
        clock.advance(10)
        assert sw.elapsed == timedelta(seconds=1.5)

    def test_second_close_emits_nothing(self, log, clock, caplog):
        sw = log.info.stopwatch("s", clock=clock).error_over(0)
        sw.close()
        count = len(records(caplog))

        sw.close()

        assert len(records(caplog)) == count

    def test_context_manager(self, log, clock, caplog):
        with log.info.stopwatch("ctx", clock=clock) as sw:
            assert isinstance(sw, Stopwatch)
            clock.advance(0.01)

        assert sw.closed
        assert records(caplog)[-1] == (logging.INFO, "ctx finished in 10 ms")

    def test_context_manager_closes_on_error(self, log, clock, caplog):
        with pytest.raises(RuntimeError, match="boom"):
            with log.info.stopwatch("ctx", clock=clock):
                raise RuntimeError("boom")

        assert records(caplog)[-1] == (logging.INFO, "ctx finished in 0 ms")

    def test_console_sink(self, log, clock, stdout):
        with log.cout.stopwatch("console", clock=clock):
            clock.advance(0.002)

        assert stdout.file.getvalue() == "console: started\nconsole finished in 2 ms\n"

    def test_disabled_sink_still_escalates(self, log, clock, caplog):
        with log.debug.stopwatch("quiet", clock=clock).warn_over(0.1):
            clock.advance(0.2)

        assert records(caplog) == [
            (logging.WARNING, "quiet: warning threshold was 100 ms, elapsed time was 200 ms, exceeded by 100 ms"),
        ]

    def test_repr(self, log, clock):
        assert repr(log.info.stopwatch("r", clock=clock)) == "Stopwatch('r', started)"


@pytest.mark.unit
class TestStopwatchThresholds:
    """Error is checked first and excludes the warning; both are inclusive."""

    @pytest.mark.parametrize(
        "elapsed, expected",
        [
            (0.1, []),
            (0.25, [logging.WARNING]),
            (0.4, [logging.WARNING]),
            (0.5, [logging.ERROR]),
            (0.8, [logging.ERROR]),
        ],
    )
    def test_escalation(self, log, clock, caplog, elapsed, expected):
        with log.info.stopwatch("job", clock=clock).warn_over(0.25).error_over(0.5):
            clock.advance(elapsed)

        assert [level for level, _ in escalations(caplog)] == expected

    def test_error_message(self, log, clock, caplog):
        with log.info.stopwatch("job", clock=clock).warn_over(0.25).error_over(0.5):
            clock.advance(0.8)

        assert escalations(caplog) == [
            (logging.ERROR, "job: error threshold was 500 ms, elapsed time was 800 ms, exceeded by 300 ms"),
        ]

    def test_warning_message(self, log, clock, caplog):
        with log.info.stopwatch("job", clock=clock).warn_over(timedelta(milliseconds=250)):
            clock.advance(0.3)

        assert escalations(caplog) == [
            (logging.WARNING, "job: warning threshold was 250 ms, elapsed time was 300 ms, exceeded by 50 ms"),
        ]

    def test_no_thresholds(self, log, clock, caplog):
        with log.info.stopwatch("job", clock=clock):
            clock.advance(100)
        assert escalations(caplog) == []

    def test_none_disables_threshold(self, log, clock, caplog):
        with log.info.stopwatch("job", clock=clock).warn_over(0.1).warn_over(None):
            clock.advance(1)
        assert escalations(caplog) == []

    def test_threshold_types(self, log, clock):
        sw = log.info.stopwatch("job", clock=clock).warn_over(2).error_over(timedelta(seconds=3))
        assert sw.warn_threshold == timedelta(seconds=2)
        assert sw.error_threshold == timedelta(seconds=3)

    def test_just_under_threshold_does_not_escalate(self, log, clock, caplog):
        with log.info.stopwatch("job", clock=clock).warn_over(timedelta(milliseconds=250)):
            clock.advance(0.2499996)
        assert escalations(caplog) == []

    def test_error_only(self, log, clock, caplog):
        with log.info.stopwatch("job", clock=clock).error_over(0.5):
            clock.advance(0.4)
        assert escalations(caplog) == []


@pytest.mark.unit
class TestStopwatchLogging:
    """Messages logged through a stopwatch are tagged with its name."""

    def test_messages_are_prefixed(self, log, clock, caplog):
        with log.info.stopwatch("sync", clock=clock) as sw:
            sw.info("%d rows", 3)
            sw.warn.format("slow {}", "disk")

        assert (logging.INFO, "sync: 3 rows") in records(caplog)
        assert (logging.WARNING, "sync: slow disk") in records(caplog)

    def test_parent_prefix_inside_name(self, log, clock, caplog):
        parent = log.with_prefix("P: ")
        with parent.info.stopwatch("job", clock=clock).error_over(0) as sw:
            sw.info("inside")

        assert records(caplog) == [
            (logging.INFO, "P: job: started"),
            (logging.INFO, "job: P: inside"),
            (logging.INFO, "P: job finished in 0 ms"),
            (logging.ERROR, "job: P: error threshold was 0 ms, elapsed time was 0 ms, exceeded by 0 ms"),
        ]

    def test_log_is_a_composed_handle(self, log, clock):
        sw = log.info.stopwatch("h", clock=clock)
        assert isinstance(sw.log, Log)
        assert sw.log.delegate is log.delegate
        assert sw.warn is sw.log.warn

    def test_unknown_attribute(self, log, clock):
        sw = log.info.stopwatch("h", clock=clock)
        with pytest.raises(AttributeError):
            sw.no_such_thing

    def test_records_point_at_the_caller(self, log, clock, caplog):
        with log.info.stopwatch("job", clock=clock).warn_over(0):
            pass
        sw = log.info.stopwatch("explicit", clock=clock)
        sw.close()

        func_names = {r.funcName for r in caplog.records if r.name.startswith("logsmith_tests")}
        assert func_names == {"test_records_point_at_the_caller"}
