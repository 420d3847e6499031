"""Rich terminal rendering of entries and spec listings."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rich.console import Console

    from gldoc.ref.entry import Entry
    from gldoc.services.registry import Registry


def render_entry(entry: Entry, console: Console) -> None:
    """Render *entry* as a header panel, a prototype list and a parameter table.

    Parameters
    ----------
    entry:
        The reference page to show.
    console:
        Rich Console instance for output.
    """
    from rich.markup import escape
    from rich.panel import Panel
    from rich.table import Table

    desc = escape(entry.desc) if entry.desc else "[dim]no description[/]"
    console.print(Panel(desc, title=escape(entry.name), border_style="blue"))

    for fn in entry.funcs:
        console.print(f"  [bold]{escape(fn.name)}[/]({escape(', '.join(fn.args))})")
    if entry.funcs:
        console.print()

    if entry.params:
        params = Table(title="Parameters", show_header=False, box=None, padding=(0, 1))
        params.add_column("name", style="cyan", no_wrap=True)
        params.add_column("description")
        for name, text in entry.params.items():
            params.add_row(escape(name), escape(text))
        console.print(params)
        console.print()

    if entry.errors:
        console.print(f"Errors:   {', '.join(entry.errors)}", markup=False)
    if entry.see_also:
        console.print(f"See also: {', '.join(entry.see_also)}", markup=False)


def render_index(registry: Registry, console: Console, subset: str | None = None) -> int:
    """Print one row per entry; return the number of rows."""
    from rich.markup import escape
    from rich.table import Table

    table = Table(title="Reference pages")
    table.add_column("spec", style="dim")
    table.add_column("entry", style="cyan")
    table.add_column("functions", justify="right")

    rows = 0
    for spec_name, entry in registry.entries():
        if subset is not None and spec_name != subset:
            continue
        table.add_row(spec_name, escape(entry.name), str(len(entry.funcs)))
        rows += 1
    console.print(table)
    return rows
