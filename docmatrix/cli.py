"""Document Matrix CLI — batch commands and an interactive shell.

Invariants:
    - Running with no subcommand starts the interactive shell
    - Every subcommand is also reachable from the shell by name or short alias
    - `validate` exits 1 for a structurally invalid document, 2 for an undecodable file
    - Rich styling is presentation only; the underlying text comes from core.render
"""

import asyncio
import logging
from decimal import Decimal
from pathlib import Path
from typing import Optional

import typer
import uvicorn
from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.tree import Tree

from docmatrix.config import get_settings
from docmatrix.core.codec import document_from_json
from docmatrix.core.document import Document, Horiz
from docmatrix.core.errors import DocMatrixError
from docmatrix.core.recursion_schemes import cata, iter_cells
from docmatrix.core.render import RenderFormat, SEPARATOR, render_html, render_json, render_stats
from docmatrix.core.result import Err, Ok
from docmatrix.core.samples import COMPLEX, SAMPLE
from docmatrix.infrastructure.observability import setup_logging
from docmatrix.services import document_service

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, invoke_without_command=True)
console = Console(width=120)


def build_rich_tree(doc: Document) -> Tree:
    """Rich Tree for a document, built bottom-up with cata."""
    def container(layer) -> Tree:
        label = "Horizontal" if isinstance(layer, Horiz) else "Vertical"
        node = Tree(Text(label, style="bold blue"))
        node.children.extend(layer.children)
        return node

    return cata(container, lambda value: Tree(Text(str(value), style="bold green")), doc)


def _heading(text: str) -> None:
    console.print(Text(f"\n{text}", style="cyan"))


# --- Shared command bodies ----------------------------------------------------

def show_sample() -> None:
    _heading("Sample Document:")
    console.print(build_rich_tree(SAMPLE))


def show_complex() -> None:
    _heading("Complex Document:")
    console.print(build_rich_tree(COMPLEX))
    console.print(Text(SEPARATOR, style="magenta"))
    console.print(Text(render_stats(COMPLEX), style="yellow"))


def show_stats() -> None:
    _heading("Document Statistics:")
    console.print(Text(render_stats(SAMPLE), style="yellow"))


def show_json() -> None:
    _heading("JSON Export:")
    console.print(render_json(SAMPLE), markup=False, highlight=False, soft_wrap=True)


def show_html() -> None:
    _heading("HTML Export:")
    console.print(render_html(SAMPLE), markup=False, highlight=False, soft_wrap=True)


def show_transform(operation: str = "upper") -> None:
    _heading(f"Document Transformation ({operation}):")
    console.print(build_rich_tree(document_service.transform_document(SAMPLE, operation)))


def show_pipeline(operation: str = "upper") -> None:
    _heading(f"Transformation Pipeline ({operation}):")
    console.print(build_rich_tree(asyncio.run(document_service.run_pipeline(SAMPLE, operation))))


def show_financial(rate: Decimal = Decimal("0.85"), currency: str = "EUR") -> None:
    report = asyncio.run(document_service.financial_report(rate, currency))
    _heading("Financial Statement:")
    console.print(build_rich_tree(report.original))
    _heading(f"Converted to {report.currency} at {report.rate}:")
    console.print(build_rich_tree(report.converted))
    total = sum(entry.amount for entry in iter_cells(report.converted))
    console.print(Text(f"Total: {total} {report.currency}", style="yellow"))


def show_validation(doc: Document = SAMPLE) -> bool:
    _heading("Document Validation:")
    match document_service.check_document(doc):
        case Ok():
            console.print(Text("✓ Document is valid", style="bold green"))
            return True
        case Err(error=violation):
            console.print(
                Text(f"✗ Validation failed: {violation.describe()}", style="bold red"),
            )
            return False


def show_help() -> None:
    lines = [
        ("sample", "s", "Show sample document tree"),
        ("complex", "c", "Show complex document example"),
        ("stats", "st", "Show document statistics"),
        ("json", "j", "Export as JSON"),
        ("html", "h", "Export as HTML table"),
        ("transform", "t", "Transform document values"),
        ("validate", "v", "Validate document structure"),
        ("pipeline", "p", "Run the transformation pipeline"),
        ("financial", "f", "Show the financial statement in EUR"),
        ("help", "?", "Show this help"),
        ("exit", "q", "Exit application"),
    ]
    help_text = Text("Available Commands:\n", style="cyan")
    for name, alias, description in lines:
        help_text.append(f"  {name:<10}", style="bold green")
        help_text.append(f"({alias}) - {description}\n")
    console.print(help_text)


SHELL_COMMANDS = {
    "sample": show_sample, "s": show_sample,
    "complex": show_complex, "c": show_complex,
    "stats": show_stats, "st": show_stats,
    "json": show_json, "j": show_json,
    "html": show_html, "h": show_html,
    "transform": show_transform, "t": show_transform,
    "validate": show_validation, "v": show_validation,
    "pipeline": show_pipeline, "p": show_pipeline,
    "financial": show_financial, "f": show_financial,
    "help": show_help, "?": show_help,
}
EXIT_COMMANDS = {"exit", "quit", "q"}


def handle_shell_command(line: str) -> bool:
    """Run one shell command. Returns False when the shell should stop."""
    command = line.strip().lower()
    if command in EXIT_COMMANDS:
        console.print(Text("Goodbye!", style="bold green"))
        return False
    SHELL_COMMANDS.get(command, show_help)()
    return True


def interactive_shell() -> None:
    console.print(Panel.fit(
        Text("Document Matrix CLI\nFunctional Document Processing", style="cyan"),
        border_style="green",
    ))
    show_help()
    while True:
        try:
            line = console.input("[cyan]> [/cyan]")
        except EOFError:
            break
        if not handle_shell_command(line):
            break


# --- Typer commands -----------------------------------------------------------

@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Enable logging at this level."),
) -> None:
    """Document Matrix — render, fold and validate cell documents."""
    if log_level:
        setup_logging(log_level, "text")
    if ctx.invoked_subcommand is None:
        interactive_shell()


@app.command()
def sample() -> None:
    """Show the sample document tree."""
    show_sample()


@app.command("complex")
def complex_() -> None:
    """Show the complex document with statistics."""
    show_complex()


@app.command()
def stats() -> None:
    """Show statistics for the sample document."""
    show_stats()


@app.command("json")
def json_() -> None:
    """Export the sample document as JSON."""
    show_json()


@app.command()
def html() -> None:
    """Export the sample document as an HTML table."""
    show_html()


@app.command()
def transform(
    operation: str = typer.Option("upper", help="upper | lower | title | strip | reverse"),
) -> None:
    """Transform every cell of the sample document."""
    try:
        show_transform(operation)
    except DocMatrixError as exc:
        console.print(Text(exc.message, style="bold red"))
        raise typer.Exit(code=1) from exc


@app.command()
def validate(
    path: Optional[Path] = typer.Argument(None, help="JSON document file; defaults to the sample."),
) -> None:
    """Validate a document's structure."""
    doc: Document = SAMPLE
    if path is not None:
        try:
            doc = document_from_json(path.read_text(encoding="utf-8"))
        except DocMatrixError as exc:
            console.print(Text(f"✗ {exc.message}", style="bold red"))
            raise typer.Exit(code=2) from exc
    if not show_validation(doc):
        raise typer.Exit(code=1)


@app.command()
def pipeline(
    operation: str = typer.Option("upper", help="upper | lower | title | strip | reverse"),
) -> None:
    """Validate, transform, enrich and finalize the sample document."""
    try:
        show_pipeline(operation)
    except DocMatrixError as exc:
        console.print(Text(exc.message, style="bold red"))
        raise typer.Exit(code=1) from exc


@app.command()
def financial(
    rate: float = typer.Option(0.85, help="Conversion rate applied to every amount."),
    currency: str = typer.Option("EUR", help="Target currency code."),
) -> None:
    """Show the financial statement and its currency conversion."""
    if rate <= 0:
        raise typer.BadParameter("must be positive", param_hint="--rate")
    show_financial(Decimal(str(rate)), currency.upper())


@app.command()
def show(
    name: str = typer.Argument(..., help="Sample name"),
    fmt: RenderFormat = typer.Option(RenderFormat.TREE, "--format", "-f"),
) -> None:
    """Render any sample document in any format."""
    try:
        doc = document_service.load_sample(name)
    except DocMatrixError as exc:
        console.print(Text(exc.message, style="bold red"))
        raise typer.Exit(code=1) from exc
    console.print(
        document_service.render_document(doc, fmt),
        markup=False, highlight=False, soft_wrap=True,
    )


@app.command()
def unfold(
    depth: int = typer.Option(3, min=0, max=8),
    branching: int = typer.Option(2, min=1, max=6),
    orientation: str = typer.Option("horiz", help="horiz | vert | alternate"),
    leaf: str = typer.Option("leaf"),
) -> None:
    """Grow a balanced document from a seed and show it."""
    doc = document_service.unfold_document(depth, branching, orientation, leaf)
    console.print(build_rich_tree(doc))


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (defaults to settings)."),
    port: Optional[int] = typer.Option(None, help="Port (defaults to settings)."),
) -> None:
    """Run the HTTP API with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "docmatrix.main:app",
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    app()
