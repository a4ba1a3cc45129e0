"""
Scoped duration logging.

A Stopwatch reports when it starts and how long it was open when it closes,
and escalates to a warning or an error when configured thresholds are reached.
"""

import time
from datetime import timedelta
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

if TYPE_CHECKING:
    from .log import Log
    from .sinks import LevelLogger

Threshold = Union[timedelta, int, float, None]

DEFAULT_NAME = "Stopwatch"


class StopwatchState(Enum):
    STARTED = "started"
    FINISHED = "finished"


def _as_duration(threshold: Threshold) -> Optional[timedelta]:
    if threshold is None or isinstance(threshold, timedelta):
        return threshold
    return timedelta(seconds=threshold)


def _millis(duration: timedelta) -> int:
    return duration // timedelta(milliseconds=1)


class Stopwatch:
    """Measures the time between its creation and ``close()``.

    Start and finish messages go to the sink that created the stopwatch.
    Anything else logged through the stopwatch (``sw.info(...)``,
    ``sw.warn.format(...)``) goes through ``sw.log``, a copy of the parent
    Log whose messages are prefixed with ``"<name>: "``.

    Use as a context manager::

        with log.info.stopwatch("sync").warn_over(timedelta(seconds=2)) as sw:
            sw.debug("syncing %d rows", len(rows))
    """

    def __init__(
        self,
        name: Optional[str],
        log: "Log",
        sink: "LevelLogger",
        clock: Callable[[], float] = time.perf_counter,
        stacklevel: int = 1,
    ):
        self.name = DEFAULT_NAME if name is None else name
        self.log = log.with_prefix(f"{self.name}: ")
        self.sink = sink
        self.warn_threshold: Optional[timedelta] = None
        self.error_threshold: Optional[timedelta] = None
        self._clock = clock
        self._seconds: Optional[float] = None
        self.state = StopwatchState.STARTED
        self._started = clock()
        sink.format("{}: started", self.name, stacklevel=stacklevel + 1)

    def __getattr__(self, name: str) -> Any:
        try:
            log = self.__dict__["log"]
        except KeyError:
            raise AttributeError(name) from None
        return getattr(log, name)

    def __repr__(self) -> str:
        return f"Stopwatch({self.name!r}, {self.state.value})"

    def warn_over(self, threshold: Threshold) -> "Stopwatch":
        """Log a warning on close if the elapsed time reaches ``threshold``.

        ``threshold`` is a timedelta or a number of seconds; None disables it.
        """
        self.warn_threshold = _as_duration(threshold)
        return self

    def error_over(self, threshold: Threshold) -> "Stopwatch":
        """Log an error on close if the elapsed time reaches ``threshold``.

        An error replaces the warning check for this stopwatch.
        """
        self.error_threshold = _as_duration(threshold)
        return self

    @property
    def elapsed(self) -> timedelta:
        return timedelta(seconds=self._elapsed_seconds())

    def _elapsed_seconds(self) -> float:
        if self._seconds is not None:
            return self._seconds
        return self._clock() - self._started

    @property
    def closed(self) -> bool:
        return self.state is StopwatchState.FINISHED

    def close(self, stacklevel: int = 1) -> None:
        """Report the elapsed time. Only the first call has any effect."""
        if self.closed:
            return
        self._seconds = seconds = self._elapsed_seconds()
        self.state = StopwatchState.FINISHED

        self.sink.format("{} finished in {} ms", self.name, _millis(self.elapsed), stacklevel=stacklevel + 1)
        if not self._check_threshold("error", seconds, self.error_threshold, self.log.error, stacklevel + 1):
            self._check_threshold("warning", seconds, self.warn_threshold, self.log.warn, stacklevel + 1)

    def _check_threshold(
        self,
        kind: str,
        seconds: float,
        threshold: Optional[timedelta],
        dest: "LevelLogger",
        stacklevel: int,
    ) -> bool:
        # compared in clock units, before timedelta rounds to microseconds
        if threshold is None or seconds < threshold.total_seconds():
            return False
        elapsed = timedelta(seconds=seconds)
        dest.format(
            "{} threshold was {} ms, elapsed time was {} ms, exceeded by {} ms",
            kind,
            _millis(threshold),
            _millis(elapsed),
            _millis(elapsed - threshold),
            stacklevel=stacklevel + 1,
        )
        return True

    def __enter__(self) -> "Stopwatch":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close(stacklevel=2)
