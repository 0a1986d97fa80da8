"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer. A renderer may
print nothing, e.g. for a refused transition whose reason is a warning.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.text import Text

from ttrack.output.console import capture, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from ttrack.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    renderer = _OP_RENDERERS.get(result.op, _render_generic) if result.ok else _render_error
    return capture(lambda console: renderer(result, console, verbose=verbose)).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    data = result.data
    if result.op == "list":
        return "\n".join(item["line"] for item in data.get("items", []))
    if result.op == "show":
        return str(data.get("text", ""))
    if result.op == "status":
        return "active" if data.get("active") else "inactive"
    if result.op == "path":
        return str(data.get("path", ""))
    if data.get("changed") is False:
        return ""
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _line(console: Console, *parts: Text | str) -> None:
    """Print one unwrapped line; descriptions are never parsed as markup."""
    texts = [Text(part) if isinstance(part, str) else part for part in parts]
    console.print(*texts, sep="", soft_wrap=True)


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    _line(console, Text("OK", style="tt.ok"), Text(f"  {result.op}", style="tt.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    style = "tt.path" if key == "path" else ""
    _line(console, Text(f"  {key}: ", style="tt.key"), Text(str(value), style=style))


def _event_line(item: dict[str, Any]) -> Text:
    """Style a human-readable event line by its kind."""
    kind = str(item.get("kind", ""))
    line = Text(str(item.get("line", "")))
    line.stylize(style_for_kind(kind), 0, len(kind))
    return line


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block (verbose only)."""
    if not result.meta:
        return
    console.print()
    _line(console, Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        _line(console, f"    {key}: {value}")


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    _line(
        console,
        Text("ERROR", style="tt.error"),
        Text(f"  {result.op}", style="tt.op"),
        " — ",
        msg,
    )

    if verbose and err and err.detail:
        _line(console, Text("  detail:", style="dim"))
        for key, value in err.detail.items():
            _line(console, f"    {key}: {value}")


# ── Tracking renderers ────────────────────────────────────────────────


def _render_tracking(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render start/stop/continue: the appended events, nothing when refused."""
    if not result.data.get("changed"):
        return
    _status_line(console, result)
    for item in result.data.get("events", []):
        _line(console, "  ", _event_line(item))
    if verbose:
        _render_meta(console, result)


# ── Report renderers ──────────────────────────────────────────────────


def _render_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render one human-readable line per event."""
    for item in result.data.get("items", []):
        _line(console, _event_line(item))
    if verbose:
        _line(console, Text(f"{result.data.get('count', 0)} events", style="dim"))
        _render_meta(console, result)


def _render_show(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render ``Work Time: …``, ``Remaining Work Time: …`` or the bare time."""
    data = result.data
    if data.get("rejected"):
        return
    style = "tt.over" if data.get("remaining") and str(data["text"]).startswith("-") else "tt.time"
    value = Text(str(data["text"]), style=style)
    if data.get("plain"):
        _line(console, value)
    elif data.get("remaining"):
        _line(console, "Remaining Work Time: ", value)
    else:
        _line(console, "Work Time: ", value)
    if verbose:
        _render_meta(console, result)


def _render_status(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the active flag, description and time of the last event."""
    event = result.data.get("event")
    if event is None:
        _line(console, "No Events found!")
        return
    active = bool(result.data.get("active"))
    _line(console, f"Active: {str(active).lower()}")
    if event.get("description") is not None:
        _line(console, "Description: ", Text(str(event["description"]), style="tt.description"))
    label = "Start" if active else "End"
    _line(console, f"{label} Time: ", Text(str(event["local_time"]), style="tt.time"))
    if verbose:
        _render_meta(console, result)


# ── Data renderers ────────────────────────────────────────────────────


def _render_path(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the bare data file path."""
    _line(console, str(result.data.get("path", "")))
    if verbose:
        _field(console, "format", result.data.get("format", ""))
        _field(console, "exists", result.data.get("exists", False))


def _render_transfer(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render export/import results."""
    _status_line(console, result)
    for key in ("path", "format", "count", "replaced"):
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Tracking
    "start": _render_tracking,
    "stop": _render_tracking,
    "continue": _render_tracking,
    # Reports
    "list": _render_list,
    "show": _render_show,
    "status": _render_status,
    # Data
    "path": _render_path,
    "export": _render_transfer,
    "import": _render_transfer,
}
