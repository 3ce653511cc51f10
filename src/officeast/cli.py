"""Office AST renderer CLI."""

import json
from contextlib import contextmanager
from datetime import timedelta
from pathlib import Path
from typing import Generator, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from officeast.config import settings
from officeast.loader import load_document
from officeast.logger import configure_rich_logging
from officeast.models import ParsedDocument
from officeast.renderers import get_renderer_class, render_to_json, render_to_text

app = typer.Typer(
    name="officeast",
    help="Render parsed Office document trees to Markdown text or JSON",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, help="Log level (default from settings)"),
) -> None:
    """Configure logging for every command."""
    configure_rich_logging(log_level)


@contextmanager
def _document_errors(path: Path) -> Generator[None, None, None]:
    """Report missing or invalid documents and exit with code 1."""
    try:
        yield
    except FileNotFoundError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1)
    except ValidationError as exc:
        console.print(f"[bold red]Invalid document:[/bold red] {path}")
        console.print(f"[dim]{exc}[/dim]")
        raise typer.Exit(code=1)


def _load(path: Path) -> ParsedDocument:
    with _document_errors(path):
        return load_document(path)


def _emit(output: str, destination: Optional[Path]) -> None:
    if destination is None:
        console.print(output, markup=False, highlight=False, soft_wrap=True)
        return
    destination.write_text(output, encoding="utf-8")
    console.print(f"[green]Wrote[/green] {destination}")


@app.command()
def text(
    path: Path = typer.Argument(..., help="ParsedDocument JSON file"),
    delimiter: str = typer.Option("\n", help="Block delimiter"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to file"),
) -> None:
    """Render a document to Markdown text."""
    document = _load(path)
    _emit(render_to_text(document, delimiter=delimiter), output)


@app.command("json")
def json_command(
    path: Path = typer.Argument(..., help="ParsedDocument JSON file"),
    indent: int = typer.Option(2, help="JSON indentation"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to file"),
) -> None:
    """Render a document to its JSON projection."""
    document = _load(path)
    payload = json.dumps(render_to_json(document), ensure_ascii=False, indent=indent)
    _emit(payload, output)


@app.command()
def lines(
    path: Path = typer.Argument(..., help="ParsedDocument JSON file"),
    cache: bool = typer.Option(True, "--cache/--no-cache", help="Use the rendered-text cache"),
) -> None:
    """Print the search lines of a document."""
    from officeast.storage import close_db, get_session, init_db, read_document_lines

    with _document_errors(path):
        if cache:
            init_db()
            try:
                with get_session() as session:
                    result = read_document_lines(path, session)
            finally:
                close_db()
        else:
            result = read_document_lines(path)
    for line in result:
        console.print(line, markup=False, highlight=False, soft_wrap=True)


@app.command()
def info(
    path: Path = typer.Argument(..., help="ParsedDocument JSON file"),
) -> None:
    """Show a summary of a parsed document."""
    document = _load(path)

    table = Table(title=path.name)
    table.add_column("Property", style="bold blue")
    table.add_column("Value")
    table.add_row("Type", document.type)
    table.add_row("Renderer", get_renderer_class(document).__name__)
    table.add_row("Top-level nodes", str(len(document.content)))
    table.add_row("Total nodes", str(document.count_nodes()))
    table.add_row("Attachments", str(len(document.attachments)))
    for key, value in document.metadata.items():
        table.add_row(f"metadata.{key}", str(value))
    console.print(table)


@app.command("cache")
def cache_command(
    clear: bool = typer.Option(False, "--clear", help="Delete entries older than --max-age-days"),
    max_age_days: float = typer.Option(7.0, help="Maximum entry age in days"),
) -> None:
    """Show rendered-text cache statistics, optionally clearing old entries."""
    from officeast.storage import cache_stats, clear_cache, close_db, get_session, init_db

    init_db()
    try:
        with get_session() as session:
            if clear:
                removed = clear_cache(timedelta(days=max_age_days), session)
                console.print(f"[green]Removed[/green] {removed} cached entries")
            stats = cache_stats(session)
    finally:
        close_db()

    table = Table(title="Rendered-text cache")
    table.add_column("Property", style="bold blue")
    table.add_column("Value")
    table.add_row("Entries", str(stats["entries"]))
    table.add_row("Total lines", str(stats["total_lines"]))
    console.print(table)
    console.print(settings.database_url, style="dim", markup=False, highlight=False, soft_wrap=True)


if __name__ == "__main__":
    app()
