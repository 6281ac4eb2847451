"""CLI command for listing ingested documents."""

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from knowbase.cli.sources import configure_logging, load_knowledge_base
from knowbase.errors import KnowledgeBaseError

console = Console()


def list_documents(
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
    tags: Annotated[
        Optional[list[str]],
        typer.Option("--tag", help="Tag attached to every ingested source (repeatable)"),
    ] = None,
    sort_by: Annotated[
        str,
        typer.Option("--sort-by", help="timestamp, source or content_length"),
    ] = "timestamp",
    order: Annotated[
        str,
        typer.Option("--order", help="asc or desc"),
    ] = "desc",
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", help="Maximum number of documents"),
    ] = 50,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
):
    """Ingest sources and list the resulting documents."""
    configure_logging(verbose)
    kb = load_knowledge_base(console, files, urls, texts, tags=tags)

    try:
        result = kb.list_documents(limit=limit, sort_by=sort_by, sort_order=order)
    except KnowledgeBaseError as e:
        console.print(f"[bold red]{e}[/bold red]")
        raise typer.Exit(1)

    table = Table(title=f"Documents ({result.stats.total_documents} stored, {result.stats.total_chunks} chunks)")
    table.add_column("Document", style="bold")
    table.add_column("Type")
    table.add_column("Source")
    table.add_column("Length", justify="right")
    table.add_column("Chunks", justify="right")
    table.add_column("Tags")
    for doc in result.documents:
        table.add_row(
            doc.document_id,
            doc.source_type.value,
            doc.source[:60],
            str(doc.content_length),
            str(doc.chunk_count),
            ", ".join(doc.tags),
        )
    console.print(table)
