"""
Severity levels understood by logsmith.

The stdlib facade has no TRACE level, so one is registered below DEBUG.
"""

import logging
from enum import Enum
from typing import Union

TRACE = 5

logging.addLevelName(TRACE, "TRACE")


class Level(Enum):
    """The five standard severities and their stdlib numeric levels."""

    TRACE = TRACE
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, value: Union["Level", int, str]) -> "Level":
        """Resolve a Level from a Level, a stdlib numeric level or a name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            name = value.strip().upper()
            if name == "WARNING":
                return cls.WARN
            try:
                return cls[name]
            except KeyError:
                raise ValueError(f"unknown log level: {value!r}") from None
        raise ValueError(f"unknown log level: {value!r}")
