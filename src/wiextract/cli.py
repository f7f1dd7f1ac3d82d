"""Work Instruction Extractor CLI."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from wiextract.config import settings
from wiextract.logging import configure_logging
from wiextract.models import Attachment, ConversionResult
from wiextract.pipeline import convert_attachment, process_directory, route_result

app = typer.Typer(
    name="wiextract",
    help="Extract grouped work instructions from Word documents",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, help="Logging level"),
) -> None:
    """Configure logging for every command."""
    configure_logging(log_level)


def _print_result(result: ConversionResult) -> None:
    style = {"Success": "green", "SuccessWithWarnings": "yellow", "Aborted": "red"}
    console.print(
        f"[bold]{escape(result.filename)}[/bold]: "
        f"[{style[result.status.value]}]{result.status.value}[/] "
        f"score {result.conversion_score}"
    )

    if result.instructions:
        table = Table(show_header=True, header_style="bold")
        table.add_column("#", justify="right")
        table.add_column("Group")
        table.add_column("Instruction")
        for i, item in enumerate(result.instructions, 1):
            table.add_row(str(i), escape(item.group_name), escape(item.text))
        console.print(table)

    for violation in result.rule_violations:
        level = "red" if violation.is_critical else "yellow"
        console.print(f"[{level}]{violation.rule}[/]: {escape(violation.message)}")


@app.command()
def process(
    doc_path: Path = typer.Argument(..., help="Path to .docx file to convert"),
    output_dir: Optional[Path] = typer.Option(
        None, help="Route the file and its result JSON into this directory"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Convert a single document."""
    if not doc_path.is_file():
        console.print(f"[red]File not found:[/red] {doc_path}")
        raise typer.Exit(code=2)

    attachment = Attachment.from_path(doc_path)
    result = convert_attachment(attachment)

    if as_json:
        console.print_json(result.to_json())
    else:
        _print_result(result)

    if output_dir is not None:
        routed = route_result(attachment, result, output_dir)
        console.print(f"[dim]Routed to {routed.parent}[/dim]")

    if result.aborted:
        raise typer.Exit(code=1)


@app.command()
def batch(
    directory: Path = typer.Argument(..., help="Directory containing .doc/.docx files"),
    output_dir: Optional[Path] = typer.Option(
        None, help="Root for status folders (default: the input directory)"
    ),
    workers: int = typer.Option(settings.max_workers, help="Number of parallel workers"),
) -> None:
    """Batch convert all documents in a directory."""
    if not directory.is_dir():
        console.print(f"[red]Not a directory:[/red] {directory}")
        raise typer.Exit(code=2)

    console.print(f"[bold blue]Batch processing:[/bold blue] {directory}")
    console.print(f"[dim]Workers: {workers}, Output: {output_dir or directory}[/dim]")

    summary = process_directory(directory, output_dir=output_dir, workers=workers)

    for error in summary.errors:
        console.print(f"[red]{escape(error)}[/red]")
    console.print(summary.summary_line())


if __name__ == "__main__":
    app()
