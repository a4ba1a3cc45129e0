"""
Single-level views of a Log.

Every level of a Log (and the three console channels) is exposed as a
LevelLogger. Code that logs through a LevelLogger can switch all of its calls
to another level by swapping one reference.

Every entry point checks ``is_enabled()`` before it formats anything or
evaluates a lazy message supplier.

Like ``logging.Logger``, entry points take a ``stacklevel`` so records name the
caller rather than this package. Internal helpers count it from their own
caller, one frame further out per layer.
"""

import collections.abc
import sys
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator, Optional, Union

from rich.console import Console

from .levels import Level
from .rendering import (
    default_throwable_message,
    format_message,
    percent_format,
    render_console,
    strip_markup,
)
from .stopwatch import Stopwatch

if TYPE_CHECKING:
    from .log import Log

Message = Union[str, Callable[[], Any], Iterable[Any]]


def _resolve(message: Any) -> Any:
    return message() if callable(message) else message


def _messages(message: Message) -> Iterator[str]:
    message = _resolve(message)
    if isinstance(message, (str, bytes, bytearray, collections.abc.Mapping)):
        yield str(message)
    elif isinstance(message, collections.abc.Iterable):
        for item in message:
            yield str(_resolve(item))
    else:
        yield str(message)


def exception_from(exc_info: Any) -> Optional[BaseException]:
    """Normalise a stdlib-style ``exc_info`` argument to an exception or None."""
    if not exc_info:
        return None
    if isinstance(exc_info, BaseException):
        return exc_info
    if isinstance(exc_info, tuple):
        return exc_info[1]
    return sys.exc_info()[1]


class LevelLogger:
    """Logs everything it receives to one level of its Log."""

    def __init__(self, log: "Log", level: Level):
        self._log = log
        self.level = level

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._log.name!r}, {self.level.name})"

    def is_enabled(self) -> bool:
        return self._log.is_enabled_for(self.level)

    def __call__(self, msg: Any, *args: Any, exc_info: Any = None, stacklevel: int = 1) -> None:
        """Log with stdlib semantics: ``log.info("took %s ms", ms)``."""
        self._log.log(self.level, msg, *args, exc_info=exc_info, stacklevel=stacklevel + 1)

    def print(self, message: Message, stacklevel: int = 1) -> "LevelLogger":
        """Log a string, the result of a zero-argument callable, or each item of an iterable."""
        if self.is_enabled():
            for text in _messages(message):
                self._write(text, stacklevel + 1)
        return self

    def format(self, fmt: Any, *args: Any, stacklevel: int = 1) -> "LevelLogger":
        """Log ``fmt.format(*args)``."""
        if self.is_enabled():
            self._write(format_message(_resolve(fmt), args), stacklevel + 1)
        return self

    def throwable(
        self, exc: BaseException, fmt: Any = None, *args: Any, stacklevel: int = 1
    ) -> "LevelLogger":
        """Log ``exc`` with its traceback and notify throwable observers.

        Without ``fmt`` the message is ``"<type>: <text>"`` of the exception.
        """
        if self.is_enabled():
            self._write_throwable(self._throwable_message(exc, fmt, args), exc, stacklevel + 1)
        return self

    def stopwatch(self, name: Optional[str] = None, stacklevel: int = 1, **kwargs: Any) -> Stopwatch:
        """Start a Stopwatch that reports its start and finish to this level."""
        return Stopwatch(name, self._log, self, stacklevel=stacklevel + 1, **kwargs)

    def _throwable_message(self, exc: BaseException, fmt: Any, args: tuple) -> str:
        if fmt is None:
            return default_throwable_message(exc)
        return format_message(_resolve(fmt), args)

    def _write(self, text: str, stacklevel: int) -> None:
        self._log._emit(self.level, text, stacklevel=stacklevel + 1)

    def _write_throwable(self, text: str, exc: BaseException, stacklevel: int) -> None:
        self._log._emit(self.level, text, exc, stacklevel=stacklevel + 1)


class ConsoleLevelLogger(LevelLogger):
    """Writes to a console and mirrors a plain-text record to a level of its Log.

    Console output is unconditional. The mirrored record, stripped of markup,
    reaches the facade only when the mirrored level is enabled; throwable
    observers follow the mirrored level too.
    """

    def __init__(self, log: "Log", level: Level, console: Console, style: Optional[str] = None):
        super().__init__(log, level)
        self.console = console
        self.style = style

    def is_enabled(self) -> bool:
        return True

    def __call__(self, msg: Any, *args: Any, exc_info: Any = None, stacklevel: int = 1) -> None:
        # the console needs the text now, so args are substituted eagerly
        text = percent_format(msg, args)
        exc = exception_from(exc_info)
        if exc is None:
            self._write(text, stacklevel + 1)
        else:
            self._write_throwable(text, exc, stacklevel + 1)

    def _write(self, text: str, stacklevel: int) -> None:
        render_console(self.console, text, self.style)
        self._log._emit(self.level, strip_markup(text), stacklevel=stacklevel + 1)

    def _write_throwable(self, text: str, exc: BaseException, stacklevel: int) -> None:
        render_console(self.console, text, self.style)
        self._log._emit(self.level, strip_markup(text), exc, stacklevel=stacklevel + 1)
