"""In-memory chunk store with lexical search.

Owns every document and chunk record. All reads go through a shared read
lock and all replacements through the exclusive write lock; callers only
ever receive copies.
"""

import logging
from dataclasses import dataclass

from knowbase.errors import EmptyContentError, NotInitializedError, ValidationError
from knowbase.ingestion.segmenter import chunk_text
from knowbase.models.chunk import Chunk
from knowbase.models.document import DocumentMetadata, normalize_tags
from knowbase.models.enums import SourceType
from knowbase.models.results import StoreStats
from knowbase.retrieval.scorer import score_chunk
from knowbase.store.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)


@dataclass
class SearchFilter:
    """Predicates applied by KnowledgeStore.search_all.

    ``tags`` matches a chunk whose document carries any of the given tags.
    """

    min_relevance_score: float = 0.0
    source_type: SourceType | None = None
    tags: tuple[str, ...] | None = None

    def __post_init__(self):
        if self.min_relevance_score < 0:
            raise ValidationError(
                "min_relevance_score", self.min_relevance_score, "must be >= 0"
            )
        if self.source_type is not None and not isinstance(self.source_type, SourceType):
            try:
                self.source_type = SourceType(self.source_type)
            except ValueError as e:
                raise ValidationError("source_type", self.source_type, "unknown source type") from e
        if self.tags is not None:
            self.tags = normalize_tags(self.tags) or None

    def accepts(self, metadata: DocumentMetadata) -> bool:
        if self.source_type is not None and metadata.source_type != self.source_type:
            return False
        if self.tags is not None and not metadata.has_any_tag(self.tags):
            return False
        return True


class KnowledgeStore:
    """Chunk storage keyed by document id.

    Documents iterate in ingestion order (a re-ingested document moves to the
    end) and chunks by index. Construct, then call ``initialize()`` before use.
    """

    def __init__(self):
        self._lock = ReadWriteLock()
        self._documents: dict[str, list[Chunk]] | None = None

    def initialize(self) -> "KnowledgeStore":
        with self._lock.write_locked():
            if self._documents is None:
                self._documents = {}
                logger.debug("Knowledge store initialized")
        return self

    @property
    def initialized(self) -> bool:
        return self._documents is not None

    def _require_initialized(self, operation: str) -> dict[str, list[Chunk]]:
        if self._documents is None:
            raise NotInitializedError(operation)
        return self._documents

    def ingest(
        self,
        document_id: str,
        content: str,
        source: str,
        source_type: SourceType,
        chunk_size: int,
        tags=None,
        extra: dict | None = None,
    ) -> list[Chunk]:
        """Replace all chunks of ``document_id`` with chunks of ``content``.

        Segmentation happens before the write lock is taken, so a failure
        leaves the previous version of the document in place.
        """
        self._require_initialized("ingest")
        if not content or not content.strip():
            raise EmptyContentError(source)

        metadata = DocumentMetadata(
            document_id=document_id,
            source=source,
            source_type=source_type,
            content_length=len(content),
            tags=tags or (),
            extra=dict(extra or {}),
        )
        chunks = [
            Chunk(document_id=document_id, chunk_index=idx, content=piece, metadata=metadata)
            for idx, piece in enumerate(chunk_text(content, chunk_size))
        ]

        with self._lock.write_locked():
            documents = self._require_initialized("ingest")
            replaced = documents.pop(document_id, None)
            documents[document_id] = chunks

        if replaced is not None:
            logger.info(
                "Replaced document %s: %d -> %d chunks", document_id, len(replaced), len(chunks)
            )
        else:
            logger.debug("Stored document %s: %d chunks", document_id, len(chunks))
        return [chunk.copy() for chunk in chunks]

    def search_all(
        self,
        query: str,
        search_filter: SearchFilter | None = None,
    ) -> list[tuple[Chunk, float]]:
        """Score every chunk against ``query`` and keep those passing the filter.

        Returns (chunk, score) pairs in store iteration order, unsorted.
        """
        search_filter = search_filter or SearchFilter()
        self._require_initialized("search_all")

        matches = []
        with self._lock.read_locked():
            for chunks in self._documents.values():
                if not chunks or not search_filter.accepts(chunks[0].metadata):
                    continue
                for chunk in chunks:
                    score = score_chunk(query, chunk.content, chunk.source)
                    if score >= search_filter.min_relevance_score:
                        matches.append((chunk.copy(), score))

        logger.debug("search_all(%r) matched %d chunks", query[:100], len(matches))
        return matches

    def get_document_chunks(self, document_id: str) -> list[Chunk]:
        """Retrieve all chunks for a specific document in index order."""
        self._require_initialized("get_document_chunks")
        with self._lock.read_locked():
            return [chunk.copy() for chunk in self._documents.get(document_id, [])]

    def stats(self) -> StoreStats:
        self._require_initialized("stats")
        with self._lock.read_locked():
            return StoreStats(
                total_documents=len(self._documents),
                total_chunks=sum(len(chunks) for chunks in self._documents.values()),
            )
