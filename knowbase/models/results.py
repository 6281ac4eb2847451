"""Result records returned by the knowledge base API.

Each record exposes ``to_dict()`` producing the JSON-ready shape used by the
MCP tools and the CLI.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from knowbase.models.enums import SourceType


@dataclass
class IngestResult:
    """Outcome of a single ingestion call."""

    document_id: str
    content_length: int
    chunks_created: int
    source: str
    source_type: SourceType

    def to_dict(self) -> dict:
        return {
            "document_id": self.document_id,
            "content_length": self.content_length,
            "chunks_created": self.chunks_created,
            "source": self.source,
            "source_type": self.source_type.value,
        }


@dataclass
class QueryHit:
    """A scored chunk as seen by a query caller."""

    document_id: str
    chunk_index: int
    source: str
    source_type: SourceType
    content_preview: str
    score: float
    tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "document_id": self.document_id,
            "chunk_index": self.chunk_index,
            "source": self.source,
            "source_type": self.source_type.value,
            "content_preview": self.content_preview,
            "score": round(self.score, 4),
            "tags": list(self.tags),
        }


@dataclass
class QueryResult:
    query: str
    total_results: int
    results: list[QueryHit] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "query": self.query,
            "total_results": self.total_results,
            "results": [hit.to_dict() for hit in self.results],
        }


@dataclass
class StoreStats:
    total_documents: int
    total_chunks: int

    def to_dict(self) -> dict:
        return {"total_documents": self.total_documents, "total_chunks": self.total_chunks}


@dataclass
class DocumentSummary:
    """One listed document, represented by its first chunk."""

    document_id: str
    source: str
    source_type: SourceType
    tags: list[str]
    ingested_at: datetime
    content_length: int
    chunk_count: int
    content_preview: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "document_id": self.document_id,
            "source": self.source,
            "source_type": self.source_type.value,
            "tags": list(self.tags),
            "ingested_at": self.ingested_at.isoformat(),
            "content_length": self.content_length,
            "chunk_count": self.chunk_count,
            "content_preview": self.content_preview,
            "metadata": dict(self.metadata),
        }


@dataclass
class ListResult:
    total_documents: int
    documents: list[DocumentSummary]
    stats: StoreStats

    def to_dict(self) -> dict:
        return {
            "total_documents": self.total_documents,
            "documents": [doc.to_dict() for doc in self.documents],
            "stats": self.stats.to_dict(),
        }


@dataclass
class DocumentContent:
    """A document reassembled from its chunks."""

    document_id: str
    source: str
    source_type: SourceType
    tags: list[str]
    ingested_at: datetime
    content: str
    chunk_count: int

    def to_dict(self) -> dict:
        return {
            "document_id": self.document_id,
            "source": self.source,
            "source_type": self.source_type.value,
            "tags": list(self.tags),
            "ingested_at": self.ingested_at.isoformat(),
            "content": self.content,
            "chunk_count": self.chunk_count,
        }


@dataclass
class SummaryResult:
    original_length: int
    original_sentence_count: int
    summary_length: int
    summary: str
    extraction_method: str

    def to_dict(self) -> dict:
        return {
            "original_length": self.original_length,
            "original_sentence_count": self.original_sentence_count,
            "summary_length": self.summary_length,
            "summary": self.summary,
            "extraction_method": self.extraction_method,
        }
