"""knowbase CLI entry point."""

import typer

from knowbase.cli.list_docs import list_documents
from knowbase.cli.query import query
from knowbase.cli.serve import serve
from knowbase.cli.summarize import summarize

app = typer.Typer(
    name="knowbase",
    help="In-process knowledge retrieval engine - ingest text, rank chunks, summarize.",
)

app.command(name="query")(query)
app.command(name="list")(list_documents)
app.command(name="summarize")(summarize)
app.command(name="serve")(serve)


if __name__ == "__main__":
    app()
