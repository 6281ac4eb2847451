"""CLI command for summarizing a text file."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel

from knowbase.cli.sources import configure_logging
from knowbase.errors import KnowledgeBaseError
from knowbase.ingestion.sources import read_file
from knowbase.summarization.summarizer import summarize as summarize_content

console = Console()


def summarize(
    path: Annotated[
        Path,
        typer.Argument(help="Text file to summarize"),
    ],
    sentences: Annotated[
        int,
        typer.Option("--sentences", "-s", help="Number of sentences to extract"),
    ] = 3,
    summary_type: Annotated[
        str,
        typer.Option("--type", help="extractive, key_points or structured"),
    ] = "extractive",
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
):
    """Summarize a text file by extracting sentences."""
    configure_logging(verbose)
    try:
        result = summarize_content(read_file(str(path)), sentence_count=sentences, summary_type=summary_type)
    except KnowledgeBaseError as e:
        console.print(f"[bold red]{e}[/bold red]")
        raise typer.Exit(1)

    console.print(Panel(result.summary, title=f"Summary ({result.extraction_method})"))
    console.print(
        f"[dim]{result.original_length} -> {result.summary_length} characters, "
        f"{result.original_sentence_count} sentences in source[/dim]"
    )
