from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from .config import Settings
from .graph.dot import DIRECTIONS, render
from .graph.search import FilterOptions, search as search_rfcs
from .index.record import Record, RecordParseError
from .index.source import IndexFetchError, fetch_index, load_directory


app = typer.Typer(add_completion=False, help="RFC relationship explorer: search rfc-index.txt and emit Graphviz DOT.")
console = Console()
logger = logging.getLogger(__name__)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _index_path(index: Path | None) -> Path:
    return index if index is not None else Path(Settings().index_path)


def _load(index: Path | None) -> dict[int, Record]:
    path = _index_path(index)
    try:
        return load_directory(path)
    except FileNotFoundError as e:
        console.print(str(e), style="red", markup=False)
        console.print("Run: `rfcgraph fetch`", style="yellow", markup=False)
        raise typer.Exit(code=2)
    except RecordParseError as e:
        console.print(f"Malformed index {path}: {e}", style="red", markup=False)
        raise typer.Exit(code=1)


def _filters(
    include: str,
    exclude: str,
    from_: int | None,
    to: int | None,
    ancestors: bool,
    descendants: bool,
) -> FilterOptions:
    if not include:
        logger.warning("No --include given; nothing will match.")
    return FilterOptions(
        from_=from_,
        to=to,
        includes=include,
        excludes=exclude,
        search_ancestors=ancestors,
        search_descendants=descendants,
    )


@app.command()
def fetch(
    url: str | None = typer.Option(None, "--url", help="Index URL (default from settings)"),
    out: Path | None = typer.Option(None, "--out", help="Where to save rfc-index.txt"),
):
    """Download rfc-index.txt."""
    settings = Settings()
    src = url or settings.index_url
    dest = _index_path(out)

    try:
        path = fetch_index(src, dest, timeout_s=settings.fetch_timeout_s)
    except IndexFetchError as e:
        console.print(str(e), style="red", markup=False)
        raise typer.Exit(code=1)

    console.print(f"Saved {src} to {path}", markup=False)


@app.command()
def stats(
    index: Path | None = typer.Option(None, "--index", help="Path to rfc-index.txt"),
):
    """Show index stats."""
    directory = _load(index)

    table = Table(title="RFC Index Stats")
    table.add_column("Metric")
    table.add_column("Value")
    table.add_row("Records", str(len(directory)))
    if directory:
        nums = list(directory)
        newest = max(directory.values(), key=lambda r: r.published)
        table.add_row("Lowest number", str(min(nums)))
        table.add_row("Highest number", str(max(nums)))
        table.add_row("Newest", f"RFC{newest.number} ({newest.published // 100}-{newest.published % 100:02d})")
        table.add_row("With obsoletes", str(sum(1 for r in directory.values() if r.obsoletes)))
        table.add_row("With updates", str(sum(1 for r in directory.values() if r.updates)))
    console.print(table)


@app.command()
def show(
    number: int = typer.Argument(...),
    index: Path | None = typer.Option(None, "--index", help="Path to rfc-index.txt"),
):
    """Show one RFC and its relations."""
    directory = _load(index)
    rec = directory.get(number)
    if rec is None:
        console.print(f"RFC{number} is not in the index.", style="yellow")
        raise typer.Exit(code=2)

    console.print(f"RFC{rec.number}: {rec.title}", markup=False, style="bold")
    console.print(f"published: {rec.published}", markup=False)
    console.print(f"url: {rec.url}", markup=False)
    for label, nums in (
        ("obsoletes", rec.obsoletes),
        ("obsoleted by", rec.obsoleted_by),
        ("updates", rec.updates),
        ("updated by", rec.updated_by),
    ):
        if nums:
            console.print(f"{label}: {', '.join(f'RFC{n}' for n in nums)}", markup=False)


@app.command()
def search(
    index: Path | None = typer.Option(None, "--index", help="Path to rfc-index.txt"),
    include: str = typer.Option("", "--include", "-i", help="Comma-separated numbers or title words"),
    exclude: str = typer.Option("", "--exclude", "-x", help="Comma-separated numbers or title words to drop"),
    from_: int | None = typer.Option(None, "--from", help="Lowest RFC number to seed from"),
    to: int | None = typer.Option(None, "--to", help="Highest RFC number to seed from"),
    ancestors: bool = typer.Option(False, "--ancestors/--no-ancestors", help="Follow updates/obsoletes back"),
    descendants: bool = typer.Option(False, "--descendants/--no-descendants", help="Follow updated-by/obsoleted-by forward"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON"),
):
    """Find RFCs and their update/obsolete relations."""
    directory = _load(index)
    opts = _filters(include, exclude, from_, to, ancestors, descendants)
    res = search_rfcs(directory, opts)

    if as_json:
        console.print_json(json.dumps(res.to_dict()))
        return

    table = Table(title=f"{len(res.rfcs)} RFCs")
    table.add_column("RFC", justify="right")
    table.add_column("year", width=6)
    table.add_column("title")

    for num in res.rfcs:
        rec = directory.get(num)
        table.add_row(
            Text(str(num)),
            Text(rec.year if rec else "?"),
            Text(rec.title if rec else "(not in index)"),
        )

    console.print(table)
    console.print(f"update edges: {len(res.updates)}, obsolete edges: {len(res.obsoletes)}")


@app.command()
def dot(
    index: Path | None = typer.Option(None, "--index", help="Path to rfc-index.txt"),
    include: str = typer.Option("", "--include", "-i", help="Comma-separated numbers or title words"),
    exclude: str = typer.Option("", "--exclude", "-x", help="Comma-separated numbers or title words to drop"),
    from_: int | None = typer.Option(None, "--from", help="Lowest RFC number to seed from"),
    to: int | None = typer.Option(None, "--to", help="Highest RFC number to seed from"),
    ancestors: bool = typer.Option(False, "--ancestors/--no-ancestors", help="Follow updates/obsoletes back"),
    descendants: bool = typer.Option(False, "--descendants/--no-descendants", help="Follow updated-by/obsoleted-by forward"),
    direction: str | None = typer.Option(None, "--direction", help=f"Graph rankdir: {', '.join(DIRECTIONS)}"),
    out: Path | None = typer.Option(None, "--out", help="Write DOT here instead of stdout"),
):
    """Emit a Graphviz DOT graph of the matched RFCs."""
    rankdir = direction or Settings().direction or None
    if rankdir is not None and rankdir not in DIRECTIONS:
        raise typer.BadParameter(f"--direction must be one of {', '.join(DIRECTIONS)}")

    directory = _load(index)
    opts = _filters(include, exclude, from_, to, ancestors, descendants)
    text = render(search_rfcs(directory, opts), directory, direction=rankdir)

    if out is None:
        typer.echo(text, nl=False)
        return

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    console.print(f"Wrote {out}", markup=False)


@app.command()
def serve(
    index: Path | None = typer.Option(None, "--index", help="Path to rfc-index.txt"),
    host: str = typer.Option("127.0.0.1", "--host"),
    port: int = typer.Option(8000, "--port"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes (dev only)"),
):
    """Run the JSON API (FastAPI)."""
    try:
        import uvicorn
    except ImportError:
        console.print("Missing web dependencies. Install: `pip install -e '.[web]'`", style="red")
        raise typer.Exit(code=2)

    from .web.server import create_app

    app_ = create_app(default_index_path=str(_index_path(index)))
    uvicorn.run(app_, host=host, port=int(port), reload=bool(reload))


if __name__ == "__main__":
    app()
