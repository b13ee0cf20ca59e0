"""Human-readable rendering of validation results.

``validate`` results become a status line, an index/address/verdict
table, and a one-line tally. ``demo`` results keep the fixed
``Email: ... | Valid: ...`` line format. Under ``--verbose`` the
telemetry span tree follows as a Rich tree.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from mailgate.output.console import create_console, get_output, style_for_verdict

if TYPE_CHECKING:
    from rich.console import Console

    from mailgate.services.result import ServiceResult

_SLOW_SPAN_MS = 100.0


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* for a terminal; plain text when output is not a TTY."""
    console = create_console()
    if not result.ok:
        _print_failure(console, result)
    elif result.op == "demo":
        _print_demo_lines(console, result.data.get("items", []))
    else:
        _print_validation(console, result)

    if verbose and result.ok and result.meta and "telemetry" in result.meta:
        console.print(_span_tree(result.meta["telemetry"]))
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Passing addresses, one per line; a single ``ERROR:`` line on failure."""
    if not result.ok:
        message = result.error.message if result.error else "unknown error"
        return f"ERROR: {result.op}: {message}"
    return "\n".join(
        item["address"]
        for item in result.data.get("items", [])
        if item.get("valid") and item.get("address") is not None
    )


def _shown(address: str | None) -> str:
    return "<none>" if address is None else address


def _print_failure(console: Console, result: ServiceResult) -> None:
    line = Text.assemble(("ERROR", "mg.error"), "  ", (result.op, "mg.op"))
    if result.error:
        line.append(f": {result.error.message} ")
        line.append(f"[{result.error.code}]", style="mg.key")
    console.print(line)


def _print_validation(console: Console, result: ServiceResult) -> None:
    data = result.data
    console.print(Text.assemble(("OK", "mg.ok"), "  ", (result.op, "mg.op")))

    items = data.get("items", [])
    if items:
        table = Table(pad_edge=False)
        table.add_column("#", justify="right", style="mg.key")
        table.add_column("Address", style="mg.address", no_wrap=True)
        table.add_column("Valid")
        for item in items:
            valid = bool(item["valid"])
            table.add_row(
                str(item["index"]),
                Text(_shown(item["address"])),
                Text("yes" if valid else "no", style=style_for_verdict(valid)),
            )
        console.print(table)

    tally = Text("  ")
    tally.append(f"{data.get('valid_count', 0)} valid", style="mg.valid")
    tally.append(", ")
    tally.append(f"{data.get('invalid_count', 0)} invalid", style="mg.invalid")
    tally.append(f" of {data.get('count', 0)}")
    console.print(tally)


def _print_demo_lines(console: Console, items: list[dict[str, Any]]) -> None:
    for item in items:
        valid = bool(item["valid"])
        line = Text(f"Email: {_shown(item['address']):<25} | Valid: ")
        line.append("true" if valid else "false", style=style_for_verdict(valid))
        console.print(line)


def _span_label(span: dict[str, Any]) -> Text:
    duration = span.get("duration_ms", 0.0)
    label = Text(f"{span['name']} ")
    label.append(f"{duration:.2f}ms", style="mg.warning" if duration > _SLOW_SPAN_MS else "dim")
    annotations = span.get("annotations")
    if annotations:
        pairs = ", ".join(f"{key}={value}" for key, value in annotations.items())
        label.append(f"  {pairs}", style="mg.key")
    return label


def _span_tree(root: dict[str, Any]) -> Tree:
    tree = Tree(Text("telemetry", style="dim"))
    pending = [(tree, root)]
    while pending:
        parent, span = pending.pop()
        node = parent.add(_span_label(span))
        pending.extend((node, child) for child in reversed(span.get("children", [])))
    return tree
