"""
logsmith: a decorator over the standard logging module.

- Log: named handles created by module, class or caller (``Log.me()``)
- per-level sinks (``log.info.format(...)``) that check enablement before
  formatting
- console channels cout, cwarn and cerr, coloured with rich and mirrored to
  the log
- composable prefixes (``log.with_prefix("db: ")``)
- global and per-Log throwable observers
- Stopwatch: a scoped duration logger with warning and error thresholds
"""

__version__ = "0.3.0"

from .callers import stack_ancestor, this_method
from .config import LoggingConfig, LoggingSettings, load_config
from .exceptions import CallerOffsetError, ConfigurationError, LogsmithError
from .formatters import StructuredFormatter
from .levels import TRACE, Level
from .log import Log, get_log
from .manager import LoggingManager, configure_logging, logging_manager
from .observers import ObserverRegistry, global_observers
from .sinks import ConsoleLevelLogger, LevelLogger
from .stopwatch import Stopwatch, StopwatchState

__all__ = [
    # Handles
    "Log",
    "get_log",
    "LevelLogger",
    "ConsoleLevelLogger",
    "Level",
    "TRACE",
    # Observers
    "ObserverRegistry",
    "global_observers",
    # Timing
    "Stopwatch",
    "StopwatchState",
    # Caller resolution
    "stack_ancestor",
    "this_method",
    # Configuration
    "LoggingConfig",
    "LoggingSettings",
    "load_config",
    "LoggingManager",
    "configure_logging",
    "logging_manager",
    "StructuredFormatter",
    # Errors
    "LogsmithError",
    "CallerOffsetError",
    "ConfigurationError",
]
