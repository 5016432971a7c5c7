"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from graphctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from graphctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    data = result.data
    if result.op == "cycles" and "cycles" not in data:
        return "true" if data.get("has_cycle") else "false"
    if result.op == "traverse":
        return "\n".join(str(v) for v in data.get("order", []))
    if result.op == "scc":
        return "\n".join(
            " ".join(str(m) for m in comp["members"]) for comp in data.get("components", [])
        )
    if result.op in ("cycles", "paths"):
        key = "cycles" if result.op == "cycles" else "paths"
        return "\n".join(" ".join(str(v) for v in seq) for seq in data.get(key, []))
    if result.op == "export":
        return str(data.get("content", ""))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="g.ok")
    op = Text(f"  {result.op}", style="g.op")
    console.print(label, op)


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    if isinstance(value, (dict, list)):
        rendered = json.dumps(value, separators=(",", ":"), default=str)
    else:
        rendered = str(value)
    console.print(Text.assemble((f"  {key}: ", "g.key"), rendered))


def _chain(vertices: list[Any], *, closed: bool = False) -> str:
    parts = [f"[g.vertex]{escape(str(v))}[/g.vertex]" for v in vertices]
    if closed and vertices:
        parts.append(parts[0])
    return " → ".join(parts)


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {span_data.get('name', '?')}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)
    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="g.error"),
        Text(f"  {result.op}", style="g.op"),
        Text(" — "),
        Text(msg),
    )
    if err:
        console.print(Text(f"  code: {err.code}", style="dim"))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Graph renderers ───────────────────────────────────────────────────


def _render_stats(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    data = result.data
    for key in ("type", "vertex_count", "edge_count", "version"):
        if key in data:
            _field(console, key, data[key])
    _field(console, "density", f"{data.get('density', 0.0):.4f}")
    if verbose:
        _render_meta(console, result)


def _render_dump(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    for line in result.data.get("lines", []):
        console.print(line, markup=False)
    console.print(f"\n{result.data.get('count', 0)} vertices")


def _render_cycles(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    if data.get("has_cycle"):
        console.print(f"[g.cycle]Cycle detected[/g.cycle] ({data.get('type', '')} graph)")
    else:
        console.print(f"No cycles ({data.get('type', '')} graph)")
    for idx, cycle in enumerate(data.get("cycles", []), start=1):
        console.print(f"  {idx}. {_chain(cycle, closed=True)}")
    if "count" in data:
        console.print(f"\n{data['count']} cycles")
    if verbose:
        _render_meta(console, result)


def _render_components(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    components = result.data.get("components", [])
    label = "strongly connected" if result.data.get("kind") == "strong" else "connected"
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("ID", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("Members", style="g.vertex")
    for comp in components:
        table.add_row(
            str(comp["component_id"]),
            str(comp["size"]),
            escape(", ".join(str(m) for m in comp["members"])),
        )
    console.print(table)
    console.print(f"{len(components)} {label} components")
    if verbose:
        _render_meta(console, result)


def _render_reverse(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    for vertex, preds in result.data.get("reverse", {}).items():
        if isinstance(preds, dict):
            rendered = ", ".join(
                f"{escape(str(p))} ([g.weight]{w}[/g.weight])" for p, w in preds.items()
            )
        else:
            rendered = ", ".join(escape(str(p)) for p in preds)
        console.print(f"[g.vertex]{escape(str(vertex))}[/g.vertex] ← {{{rendered}}}")


def _render_traverse(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    console.print(_chain(data.get("order", [])))
    console.print(f"\n{data.get('count', 0)} vertices visited ({data.get('strategy', '')})")


def _render_paths(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    paths = data.get("paths", [])
    if not paths:
        console.print("No path found.")
        return
    for path in paths:
        console.print(f"  {_chain(path)}")
    console.print(f"\n{data.get('count', len(paths))} of {data.get('total', len(paths))} paths")
    if verbose:
        _render_meta(console, result)


def _render_export(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    console.print(result.data.get("content", ""), markup=False)


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "stats": _render_stats,
    "dump": _render_dump,
    "cycles": _render_cycles,
    "scc": _render_components,
    "reverse": _render_reverse,
    "traverse": _render_traverse,
    "paths": _render_paths,
    "export": _render_export,
    "add_vertex": _render_mutation,
    "remove_vertex": _render_mutation,
    "add_edge": _render_mutation,
    "remove_edge": _render_mutation,
}
