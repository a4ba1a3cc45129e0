"""
Caller resolution for automatically named loggers.

Python loggers are conventionally named after the module that owns them, so a
frame resolves to its module's ``__name__``, qualified with the class when the
frame belongs to a class body or a method.
"""

import inspect
import sys
from types import FrameType

from .exceptions import CallerOffsetError


def stack_ancestor(generations_back: int = 0) -> str:
    """Return the owner name of the frame ``generations_back`` above our caller.

    ``stack_ancestor(0)`` names the code that called this function,
    ``stack_ancestor(1)`` names whoever called that code, and so on.

    Raises:
        CallerOffsetError: if ``generations_back`` is negative (checked before
            the stack is touched) or deeper than the current stack.
    """
    if generations_back < 0:
        raise CallerOffsetError(generations_back)

    frame = inspect.currentframe()
    try:
        for _ in range(generations_back + 1):
            if frame is None:
                break
            frame = frame.f_back
        if frame is None:
            raise CallerOffsetError(
                generations_back,
                f"stack is not {generations_back + 1} frames deep",
            )
        return frame_owner(frame)
    finally:
        del frame


def this_method() -> str:
    """Name the owner of the function calling ``this_method()``."""
    return stack_ancestor(1)


def frame_owner(frame: FrameType) -> str:
    module = frame.f_globals.get("__name__", "__main__")
    f_locals = frame.f_locals

    # class body
    if "__module__" in f_locals and "__qualname__" in f_locals:
        return f"{module}.{f_locals['__qualname__']}"

    if sys.version_info >= (3, 11):
        owner, _, _ = frame.f_code.co_qualname.rpartition(".")
        if owner and not owner.endswith("<locals>"):
            return f"{module}.{owner}"
        return module

    code = frame.f_code
    if code.co_argcount and code.co_varnames[0] in ("self", "cls"):
        bound = f_locals.get(code.co_varnames[0])
        if bound is not None:
            klass = bound if isinstance(bound, type) else type(bound)
            return f"{klass.__module__}.{klass.__qualname__}"
    return module
