"""Shared helpers for CLI commands that ingest sources before reading."""

import logging

import typer
from rich.console import Console

from config.settings import get_settings
from knowbase.errors import KnowledgeBaseError
from knowbase.logging_setup import setup_logging
from knowbase.service.knowledge_base import KnowledgeBase, build_knowledge_base

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    setup_logging(logging.INFO if verbose else logging.WARNING)


def load_knowledge_base(
    console: Console,
    files: list[str] | None,
    urls: list[str] | None,
    texts: list[str] | None,
    tags: list[str] | None = None,
    chunk_size: int | None = None,
) -> KnowledgeBase:
    """Build a fresh in-memory knowledge base and ingest the given sources.

    Exits with status 1 on the first source that fails to ingest.
    """
    kb = build_knowledge_base(get_settings())
    pending = (
        [("filepath", f) for f in files or []]
        + [("url", u) for u in urls or []]
        + [("raw_text", t) for t in texts or []]
    )
    if not pending:
        console.print("[bold red]No sources given.[/bold red] Use --file, --url or --text.")
        raise typer.Exit(1)

    for source_type, source in pending:
        try:
            result = kb.ingest_document(source_type, source, tags=tags, chunk_size=chunk_size)
        except KnowledgeBaseError as e:
            logger.error("Ingestion failed for %s: %s", source[:200], e)
            console.print(f"[bold red]{e}[/bold red]")
            raise typer.Exit(1)
        console.print(
            f"[dim]Ingested {result.document_id} ({result.content_length} chars, "
            f"{result.chunks_created} chunks)[/dim]"
        )
    return kb
