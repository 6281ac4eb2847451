"""Contract tests for the knowledge base MCP tool payloads."""

import asyncio
import json

import pytest

from config.settings import Settings
from knowbase.mcp_server import server
from knowbase.service.knowledge_base import build_knowledge_base


@pytest.fixture(autouse=True)
def fresh_knowledge_base(monkeypatch):
    """Give every test its own in-memory knowledge base."""
    kb = build_knowledge_base(Settings())
    monkeypatch.setattr(server, "_knowledge_base", kb)
    return kb


def _call(name, arguments):
    contents = asyncio.run(server.call_tool(name, arguments))
    assert len(contents) == 1
    return contents[0].text


def _call_json(name, arguments):
    return json.loads(_call(name, arguments))


class TestListTools:

    def test_exposes_one_tool_per_verb(self):
        tools = asyncio.run(server.list_tools())
        names = {tool.name for tool in tools}
        assert names == {
            "ingest_document",
            "query_knowledge_base",
            "list_knowledge_base_documents",
            "summarize_document",
            "get_document",
        }

    def test_required_arguments(self):
        tools = {tool.name: tool for tool in asyncio.run(server.list_tools())}
        assert tools["ingest_document"].inputSchema["required"] == ["source_type", "source"]
        assert tools["query_knowledge_base"].inputSchema["required"] == ["query"]


class TestIngestDocumentTool:

    def test_response_fields(self):
        payload = _call_json("ingest_document", {
            "source_type": "raw_text",
            "source": "The quick brown fox jumps.",
            "document_id": "d1",
            "chunk_size": 10,
        })
        assert payload["document_id"] == "d1"
        assert payload["content_length"] == 26
        assert payload["chunks_created"] == 3
        assert payload["source_type"] == "raw_text"
        assert "ingested" in payload["message"]

    def test_unsupported_source_type_error_payload(self):
        payload = _call_json("ingest_document", {"source_type": "ftp", "source": "x"})
        assert payload["error"] == "unsupported_source_type"
        assert "ftp" in payload["message"]

    def test_empty_content_error_payload(self):
        payload = _call_json("ingest_document", {"source_type": "raw_text", "source": "  "})
        assert payload["error"] == "empty_content"


class TestQueryTool:

    def test_response_schema(self):
        _call_json("ingest_document", {
            "source_type": "raw_text",
            "source": "The quick brown fox jumps.",
            "document_id": "d1",
            "tags": ["animals"],
        })
        payload = _call_json("query_knowledge_base", {"query": "fox"})

        assert payload["query"] == "fox"
        assert payload["total_results"] == 1
        hit = payload["results"][0]
        assert set(hit) == {
            "document_id", "chunk_index", "source", "source_type",
            "content_preview", "score", "tags",
        }
        assert hit["tags"] == ["animals"]
        assert isinstance(hit["score"], float)

    def test_no_results_is_not_an_error(self):
        payload = _call_json("query_knowledge_base", {"query": "zzzznotfound"})
        assert "error" not in payload
        assert payload["total_results"] == 0
        assert payload["results"] == []
        assert payload["message"] == "No relevant documents found."

    def test_invalid_limit_error_payload(self):
        payload = _call_json("query_knowledge_base", {"query": "fox", "limit": 0})
        assert payload["error"] == "validation_error"
        assert "limit" in payload["message"]


class TestListDocumentsTool:

    def test_response_schema(self):
        _call_json("ingest_document", {"source_type": "raw_text", "source": "first", "document_id": "d1"})
        payload = _call_json("list_knowledge_base_documents", {"sort_by": "source", "sort_order": "asc"})

        assert payload["total_documents"] == 1
        assert payload["stats"] == {"total_documents": 1, "total_chunks": 1}
        doc = payload["documents"][0]
        assert doc["document_id"] == "d1"
        assert doc["source"] == "raw_text"
        assert doc["content_preview"] == "first"
        assert "ingested_at" in doc

    def test_invalid_sort_error_payload(self):
        payload = _call_json("list_knowledge_base_documents", {"sort_by": "size"})
        assert payload["error"] == "validation_error"


class TestSummarizeTool:

    def test_response_schema(self):
        payload = _call_json("summarize_document", {
            "document_content": "A. B. C.",
            "sentence_count": 2,
        })
        assert payload == {
            "original_length": 8,
            "original_sentence_count": 3,
            "summary_length": 5,
            "summary": "A. B.",
            "extraction_method": "extractive",
        }

    def test_no_sentences_error_payload(self):
        payload = _call_json("summarize_document", {
            "document_content": "short.",
            "summary_type": "key_points",
        })
        assert payload["error"] == "no_sentences"


class TestGetDocumentTool:

    def test_returns_full_content(self):
        _call_json("ingest_document", {
            "source_type": "raw_text",
            "source": "Full document text about foxes.",
            "document_id": "d1",
            "chunk_size": 4,
        })
        payload = _call_json("get_document", {"document_id": "d1"})
        assert payload["content"] == "Full document text about foxes."
        assert payload["chunk_count"] == 8

    def test_not_found(self):
        assert _call_json("get_document", {"document_id": "missing"})["error"] == "not_found"
        assert _call_json("get_document", {})["error"] == "not_found"


class TestUnknownTool:

    def test_unknown_tool_message(self):
        assert _call("delete_everything", {}) == "Unknown tool: delete_everything"
