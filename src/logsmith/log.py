"""
The Log handle: a stdlib logger decorated with per-level sinks, console
channels, message prefixes and throwable observers.

Usage::

    log = Log.me()
    log.info("it is now %s", datetime.now())
    log.info.format("going to the {} logger", "info")
    log.cwarn.print("to the log and to stderr, in yellow")
    with log.debug.stopwatch("load").warn_over(0.25).error_over(0.5) as sw:
        sw.info("loading")
"""

import logging
from typing import Any, Optional, Union

from rich.console import Console

from .callers import stack_ancestor
from .exceptions import CallerOffsetError
from .levels import Level
from .observers import Observer, ObserverRegistry, global_observers
from .rendering import stderr_console, stdout_console
from .sinks import ConsoleLevelLogger, LevelLogger, exception_from

WARN_STYLE = "bold bright_yellow"
ERROR_STYLE = "bold bright_red"


class Log:
    """A named logging channel.

    Attributes:
        trace, debug, info, warn, error: LevelLogger for each severity.
            ``warning`` is an alias of ``warn``.
        cout: console channel to stdout, mirrored to info.
        cwarn: console channel to stderr in yellow, mirrored to warn.
        cerr: console channel to stderr in red, mirrored to error.
    """

    def __init__(
        self,
        delegate: logging.Logger,
        prefix: str = "",
        observers: Optional[ObserverRegistry] = None,
        stdout: Optional[Console] = None,
        stderr: Optional[Console] = None,
    ):
        self._delegate = delegate
        self._prefix = prefix
        self._global_observers = observers if observers is not None else global_observers
        self._observers = ObserverRegistry()
        self._stdout = stdout or stdout_console
        self._stderr = stderr or stderr_console

        self.trace = LevelLogger(self, Level.TRACE)
        self.debug = LevelLogger(self, Level.DEBUG)
        self.info = LevelLogger(self, Level.INFO)
        self.warn = LevelLogger(self, Level.WARN)
        self.error = LevelLogger(self, Level.ERROR)
        self.warning = self.warn

        self.cout = ConsoleLevelLogger(self, Level.INFO, self._stdout)
        self.cwarn = ConsoleLevelLogger(self, Level.WARN, self._stderr, WARN_STYLE)
        self.cerr = ConsoleLevelLogger(self, Level.ERROR, self._stderr, ERROR_STYLE)

    @classmethod
    def me(cls, offset: int = 0, **kwargs: Any) -> "Log":
        """Log named after the calling module, or class when called in one."""
        if offset < 0:
            raise CallerOffsetError(offset)
        return cls.named(stack_ancestor(offset + 1), **kwargs)

    @classmethod
    def named(cls, name: str, **kwargs: Any) -> "Log":
        return cls(logging.getLogger(name), **kwargs)

    @classmethod
    def for_class(cls, klass: type, **kwargs: Any) -> "Log":
        return cls.named(f"{klass.__module__}.{klass.__qualname__}", **kwargs)

    def with_prefix(self, prefix: str) -> "Log":
        """A Log on the same channel whose messages are prefixed with ``prefix``.

        Prefixes nest outermost first: ``log.with_prefix("A:").with_prefix("B:")``
        renders ``"m"`` as ``"B:A:m"``. The new Log starts with no
        handle-local throwable observers.
        """
        return type(self)(
            self._delegate,
            prefix + self._prefix,
            observers=self._global_observers,
            stdout=self._stdout,
            stderr=self._stderr,
        )

    @property
    def name(self) -> str:
        return self._delegate.name

    @property
    def delegate(self) -> logging.Logger:
        return self._delegate

    def __repr__(self) -> str:
        return f"Log({self.name!r})"

    def tweak(self, message: str) -> str:
        """Apply this Log's prefixes to ``message``."""
        return self._prefix + message

    def is_enabled_for(self, level: Union[Level, int, str]) -> bool:
        return self._delegate.isEnabledFor(Level.parse(level).value)

    def log(
        self,
        level: Union[Level, int, str],
        msg: Any,
        *args: Any,
        exc_info: Any = None,
        stacklevel: int = 1,
    ) -> None:
        """Log ``msg % args`` at ``level``.

        As with ``logging.Logger.log``, ``msg`` and ``args`` reach the record
        unformatted; handlers substitute them, and report bad arguments
        through ``Handler.handleError``.
        """
        level = Level.parse(level)
        if not self.is_enabled_for(level):
            return
        self._emit(level, msg, exception_from(exc_info), args, stacklevel=stacklevel + 1)

    def exception(self, msg: Any, *args: Any, stacklevel: int = 1) -> None:
        """Log at error level with the exception currently being handled."""
        self.log(Level.ERROR, msg, *args, exc_info=True, stacklevel=stacklevel + 1)

    def _emit(
        self,
        level: Level,
        message: Any,
        exc: Optional[BaseException] = None,
        args: tuple = (),
        stacklevel: int = 1,
    ) -> None:
        if not self.is_enabled_for(level):
            return
        if args:
            # prefixes are literal text inside a %-template
            template = self._prefix.replace("%", "%%") + str(message)
        else:
            template = self.tweak(str(message))
        self._delegate.log(level.value, template, *args, exc_info=exc, stacklevel=stacklevel + 1)
        if exc is not None:
            self._handle_throwable(exc)

    # throwable observers, for reporting to a server, uploading log files, etc.

    def _handle_throwable(self, exc: BaseException) -> None:
        self._global_observers.dispatch(exc)
        self._observers.dispatch(exc)

    @property
    def throwable_handlers(self) -> ObserverRegistry:
        return self._observers

    @property
    def global_throwable_handlers(self) -> ObserverRegistry:
        """The shared registry this Log notifies, ``global_observers`` unless injected."""
        return self._global_observers

    def add_throwable_handler(self, handler: Observer) -> "Log":
        self._observers.add(handler)
        return self

    def remove_throwable_handler(self, handler: Observer) -> "Log":
        self._observers.remove(handler)
        return self

    @staticmethod
    def add_global_throwable_handler(handler: Observer) -> None:
        """Add ``handler`` to the process registry, ``global_observers``.

        Logs built with their own ``observers=`` registry are not affected; use
        their ``global_throwable_handlers`` instead.
        """
        global_observers.add(handler)

    @staticmethod
    def remove_global_throwable_handler(handler: Observer) -> None:
        global_observers.remove(handler)


def get_log(name: Optional[str] = None, **kwargs: Any) -> Log:
    """Get a Log by name, or named after the caller when ``name`` is None."""
    if name is None:
        return Log.named(stack_ancestor(1), **kwargs)
    return Log.named(name, **kwargs)
