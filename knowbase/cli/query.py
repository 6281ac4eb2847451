"""CLI command for querying a set of sources."""

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from knowbase.cli.sources import configure_logging, load_knowledge_base
from knowbase.errors import KnowledgeBaseError

console = Console()


def query(
    question: Annotated[
        str,
        typer.Argument(help="Natural language query"),
    ],
    files: Annotated[
        Optional[list[str]],
        typer.Option("--file", "-f", help="Local file to ingest (repeatable)"),
    ] = None,
    urls: Annotated[
        Optional[list[str]],
        typer.Option("--url", "-u", help="URL to fetch and ingest (repeatable)"),
    ] = None,
    texts: Annotated[
        Optional[list[str]],
        typer.Option("--text", "-t", help="Raw text to ingest (repeatable)"),
    ] = None,
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", help="Maximum number of results"),
    ] = 5,
    min_score: Annotated[
        float,
        typer.Option("--min-score", help="Minimum relevance score"),
    ] = 0.3,
    chunk_size: Annotated[
        int,
        typer.Option("--chunk-size", help="Characters per chunk"),
    ] = 300,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
):
    """Ingest sources into a fresh knowledge base and rank chunks for a query."""
    configure_logging(verbose)
    kb = load_knowledge_base(console, files, urls, texts, chunk_size=chunk_size)

    try:
        result = kb.query(question, limit=limit, min_relevance_score=min_score)
    except KnowledgeBaseError as e:
        console.print(f"[bold red]{e}[/bold red]")
        raise typer.Exit(1)

    if not result.results:
        console.print("[yellow]No relevant documents found.[/yellow]")
        return

    table = Table(title=f"{result.total_results} matching chunks for {question!r}")
    table.add_column("Score", justify="right", style="bold")
    table.add_column("Document")
    table.add_column("Chunk", justify="right")
    table.add_column("Source")
    table.add_column("Preview")
    for hit in result.results:
        table.add_row(
            f"{hit.score:.2f}",
            hit.document_id,
            str(hit.chunk_index),
            hit.source[:60],
            hit.content_preview,
        )
    console.print(table)
