"""Rich console and theme used by the renderers.

Output is captured in memory so renderers can return plain strings. Rich
drops color codes by itself when the output is not a terminal.
"""

from __future__ import annotations

from collections.abc import Callable
from io import StringIO

from rich.console import Console
from rich.theme import Theme

from ttrack.domain.events import EventKind

DEFAULT_WIDTH = 120

KIND_STYLES: dict[str, str] = {
    EventKind.START: "tt.kind.start",
    EventKind.STOP: "tt.kind.stop",
}

TT_THEME = Theme(
    {
        "tt.ok": "bold green",
        "tt.error": "bold red",
        "tt.op": "bold cyan",
        "tt.key": "dim",
        "tt.path": "dim",
        "tt.time": "bold",
        "tt.over": "bold magenta",
        "tt.description": "italic",
        KIND_STYLES[EventKind.START]: "green",
        KIND_STYLES[EventKind.STOP]: "yellow",
    }
)


def create_console(*, width: int | None = None, no_color: bool = False) -> Console:
    """A themed Console writing into a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=TT_THEME,
        highlight=False,
        no_color=no_color,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    """Text written so far to a console from :func:`create_console`."""
    buffer = console.file
    if not isinstance(buffer, StringIO):
        msg = "console does not write to a StringIO buffer"
        raise TypeError(msg)
    return buffer.getvalue()


def capture(draw: Callable[[Console], None], *, width: int | None = None) -> str:
    """Run *draw* against a fresh console and return what it printed."""
    console = create_console(width=width)
    draw(console)
    return get_output(console)


def style_for_kind(kind: str) -> str:
    return KIND_STYLES.get(kind, "")
