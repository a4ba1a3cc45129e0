"""
Message rendering: positional formatting, console markup and plain-text stripping.

Inline colour markup is rich console markup, e.g. ``"[bold blue]done[/]"``.
Markup supplied by the caller always wins over a sink's default style.
"""

import collections.abc
from typing import Any, Optional, Sequence, Union

from rich.console import Console
from rich.errors import MarkupError, StyleSyntaxError
from rich.markup import render as render_markup
from rich.style import Style
from rich.text import Text

ESCAPE = "\x1b"

stdout_console = Console(highlight=False, emoji=False)
stderr_console = Console(stderr=True, highlight=False, emoji=False)


def has_markup(text: str) -> bool:
    """True when ``text`` contains rich markup tags that all name valid styles.

    Bracketed words that are not styles, as in ``"job [nightly]"`` or a
    ``KeyError("[section] missing")``, leave the text plain.
    """
    try:
        spans = render_markup(text, emoji=False).spans
    except MarkupError:
        return False
    return bool(spans) and all(_is_style(span.style) for span in spans)


def _is_style(style: Union[str, Style]) -> bool:
    if isinstance(style, Style):
        return True
    try:
        Style.parse(style)
    except StyleSyntaxError:
        return False
    return True


def strip_markup(text: str) -> str:
    """Remove rich markup tags and raw ANSI escape sequences from ``text``."""
    plain = render_markup(text, emoji=False).plain if has_markup(text) else text
    if ESCAPE in plain:
        plain = Text.from_ansi(plain).plain
    return plain


def render_console(console: Console, text: str, style: Optional[str] = None) -> None:
    """Write ``text`` to ``console`` as a single line.

    Text carrying markup is rendered as written; anything else is decorated
    with ``style``. Colour is only emitted when the console supports it.
    """
    if has_markup(text):
        console.print(text, markup=True, soft_wrap=True)
    else:
        console.print(Text(text, style=style or ""), soft_wrap=True)


def format_message(fmt: Any, args: Sequence[Any] = ()) -> str:
    """Substitute positional ``args`` into ``fmt`` with ``str.format``.

    Without args the template is returned unchanged, so literal braces are
    safe in plain messages.
    """
    fmt = str(fmt)
    if not args:
        return fmt
    return fmt.format(*args)


def default_throwable_message(exc: BaseException) -> str:
    """``"<exception type>: <exception text>"``, as tracebacks print it."""
    exc_type = type(exc)
    name = exc_type.__qualname__
    if exc_type.__module__ not in ("builtins", "__main__"):
        name = f"{exc_type.__module__}.{name}"
    return f"{name}: {exc}"


def percent_format(msg: Any, args: Sequence[Any] = ()) -> str:
    """``msg % args`` with the substitution rules of ``logging.LogRecord``.

    A single non-empty mapping argument is used for ``%(name)s`` lookups.
    """
    msg = str(msg)
    if not args:
        return msg
    if len(args) == 1 and isinstance(args[0], collections.abc.Mapping) and args[0]:
        args = args[0]
    return msg % args
