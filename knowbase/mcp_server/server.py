"""MCP server exposing knowledge base tools to an agent."""

import asyncio
import json
import logging

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from config.settings import get_settings
from knowbase.errors import KnowledgeBaseError
from knowbase.service.knowledge_base import KnowledgeBase, build_knowledge_base

logger = logging.getLogger(__name__)

server = Server("knowbase")
_knowledge_base: KnowledgeBase | None = None


def _get_knowledge_base() -> KnowledgeBase:
    global _knowledge_base
    if _knowledge_base is None:
        _knowledge_base = build_knowledge_base(get_settings())
    return _knowledge_base


def _json_content(payload: dict) -> list[TextContent]:
    return [TextContent(type="text", text=json.dumps(payload))]


def _error_content(error: KnowledgeBaseError) -> list[TextContent]:
    return _json_content({"error": error.code, "message": str(error)})


_SOURCE_TYPES = ["filepath", "url", "raw_text"]


@server.list_tools()
async def list_tools() -> list[Tool]:
    return [
        Tool(
            name="ingest_document",
            description=(
                "Read content from a file path, URL, or raw text and add it to the "
                "knowledge base for later retrieval."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "source_type": {"type": "string", "enum": _SOURCE_TYPES, "description": "The type of source to ingest from"},
                    "source": {"type": "string", "description": "File path, URL, or the raw text itself"},
                    "document_id": {"type": "string", "description": "Optional unique id; generated when omitted"},
                    "metadata": {"type": "object", "description": "Optional extra metadata (author, date, ...)"},
                    "chunk_size": {"type": "integer", "default": 300, "description": "Characters per chunk"},
                    "tags": {"type": "array", "items": {"type": "string"}, "description": "Tags for filtering"},
                },
                "required": ["source_type", "source"],
            },
        ),
        Tool(
            name="query_knowledge_base",
            description="Search the knowledge base for chunks relevant to a natural language query.",
            inputSchema={
                "type": "object",
                "properties": {
                    "query": {"type": "string", "description": "Natural language search query"},
                    "limit": {"type": "integer", "default": 5, "description": "Maximum number of results"},
                    "min_relevance_score": {"type": "number", "default": 0.3, "description": "Minimum relevance score"},
                    "tags": {"type": "array", "items": {"type": "string"}, "description": "Only documents with any of these tags"},
                    "source_type": {"type": "string", "enum": _SOURCE_TYPES, "description": "Only documents of this source type"},
                },
                "required": ["query"],
            },
        ),
        Tool(
            name="list_knowledge_base_documents",
            description="List documents stored in the knowledge base.",
            inputSchema={
                "type": "object",
                "properties": {
                    "source_type": {"type": "string", "enum": _SOURCE_TYPES},
                    "tags": {"type": "array", "items": {"type": "string"}},
                    "limit": {"type": "integer", "default": 50},
                    "sort_by": {"type": "string", "enum": ["timestamp", "source", "content_length"], "default": "timestamp"},
                    "sort_order": {"type": "string", "enum": ["asc", "desc"], "default": "desc"},
                },
            },
        ),
        Tool(
            name="summarize_document",
            description="Summarize document content by extracting key sentences.",
            inputSchema={
                "type": "object",
                "properties": {
                    "document_content": {"type": "string", "description": "The full content to summarize"},
                    "sentence_count": {"type": "integer", "default": 3, "description": "Number of sentences to extract"},
                    "summary_type": {"type": "string", "enum": ["extractive", "key_points", "structured"], "default": "extractive"},
                },
                "required": ["document_content"],
            },
        ),
        Tool(
            name="get_document",
            description="Retrieve the full content and metadata of an ingested document.",
            inputSchema={
                "type": "object",
                "properties": {
                    "document_id": {"type": "string", "description": "Unique document identifier"},
                },
                "required": ["document_id"],
            },
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    handlers = {
        "ingest_document": _handle_ingest_document,
        "query_knowledge_base": _handle_query,
        "list_knowledge_base_documents": _handle_list_documents,
        "summarize_document": _handle_summarize,
        "get_document": _handle_get_document,
    }
    handler = handlers.get(name)
    if handler is None:
        return [TextContent(type="text", text=f"Unknown tool: {name}")]
    try:
        return await handler(arguments or {})
    except KnowledgeBaseError as e:
        logger.warning("Tool %s failed: %s", name, e)
        return _error_content(e)


async def _handle_ingest_document(arguments: dict) -> list[TextContent]:
    kb = _get_knowledge_base()
    # Source resolution may block on file or network I/O.
    result = await asyncio.to_thread(
        kb.ingest_document,
        arguments.get("source_type", ""),
        arguments.get("source", ""),
        document_id=arguments.get("document_id") or None,
        metadata=arguments.get("metadata"),
        chunk_size=arguments.get("chunk_size"),
        tags=arguments.get("tags"),
    )
    payload = result.to_dict()
    payload["message"] = f"Document '{result.document_id}' from '{result.source}' ingested."
    return _json_content(payload)


async def _handle_query(arguments: dict) -> list[TextContent]:
    result = _get_knowledge_base().query(
        arguments.get("query", ""),
        limit=arguments.get("limit"),
        min_relevance_score=arguments.get("min_relevance_score"),
        tags=arguments.get("tags"),
        source_type=arguments.get("source_type"),
    )
    payload = result.to_dict()
    if result.results:
        payload["message"] = f"Found {result.total_results} relevant chunks."
    else:
        payload["message"] = "No relevant documents found."
    return _json_content(payload)


async def _handle_list_documents(arguments: dict) -> list[TextContent]:
    result = _get_knowledge_base().list_documents(
        source_type=arguments.get("source_type"),
        tags=arguments.get("tags"),
        limit=arguments.get("limit"),
        sort_by=arguments.get("sort_by", "timestamp"),
        sort_order=arguments.get("sort_order", "desc"),
    )
    return _json_content(result.to_dict())


async def _handle_summarize(arguments: dict) -> list[TextContent]:
    result = _get_knowledge_base().summarize(
        arguments.get("document_content", ""),
        sentence_count=arguments.get("sentence_count"),
        summary_type=arguments.get("summary_type", "extractive"),
    )
    return _json_content(result.to_dict())


async def _handle_get_document(arguments: dict) -> list[TextContent]:
    doc_id = arguments.get("document_id", "")
    if not doc_id:
        return _json_content({"error": "not_found", "message": "document_id is required"})
    result = _get_knowledge_base().get_document(doc_id)
    return _json_content(result.to_dict())


async def main():
    settings = get_settings()
    # stdout carries the MCP protocol; basicConfig logs to stderr.
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))
    logger.info("Starting knowbase MCP server on stdio")
    async with stdio_server() as (read, write):
        await server.run(read, write, server.create_initialization_options())


if __name__ == "__main__":
    asyncio.run(main())
