"""Knowledge base API: ingestion, querying, listing and summarization.

Orchestrates source resolution -> segmentation -> store insert for ingestion
and score -> filter -> dedup -> sort -> paginate for reads.
"""

import logging
import time
import uuid
from typing import Callable

from config.settings import Settings, get_settings
from knowbase.errors import (
    DocumentNotFoundError,
    EmptyContentError,
    UnsupportedSourceTypeError,
    ValidationError,
)
from knowbase.ingestion import sources
from knowbase.ingestion.segmenter import expected_chunk_count
from knowbase.models.chunk import Chunk
from knowbase.models.document import RAW_TEXT_SOURCE, normalize_tags
from knowbase.models.enums import SortField, SortOrder, SourceType, SummaryType
from knowbase.models.results import (
    DocumentContent,
    DocumentSummary,
    IngestResult,
    ListResult,
    QueryHit,
    QueryResult,
    SummaryResult,
)
from knowbase.store.memory_store import KnowledgeStore, SearchFilter
from knowbase.summarization.summarizer import summarize

logger = logging.getLogger(__name__)

ELLIPSIS = "..."

FileReader = Callable[[str], str]
UrlFetcher = Callable[..., str]


def generate_document_id() -> str:
    """Build an id like ``doc-1718000000000-3fa9c2``."""
    return f"doc-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


def preview(content: str, length: int) -> str:
    """First ``length`` characters, with an ellipsis marker when truncated."""
    if len(content) <= length:
        return content
    return content[:length] + ELLIPSIS


def _parse_enum(enum_cls, value, field: str):
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError as e:
        allowed = ", ".join(repr(member.value) for member in enum_cls)
        raise ValidationError(field, value, f"expected one of {allowed}") from e


def _check_limit(limit) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValidationError("limit", limit, "must be an integer >= 1")
    return limit


class KnowledgeBase:
    """Public API of the retrieval engine.

    Wraps a single initialized ``KnowledgeStore``. File reads and URL fetches
    are delegated to the injectable ``file_reader`` / ``url_fetcher``
    collaborators and always finish before the store is touched.
    """

    def __init__(
        self,
        store: KnowledgeStore,
        settings: Settings | None = None,
        file_reader: FileReader | None = None,
        url_fetcher: UrlFetcher | None = None,
    ):
        self.store = store
        self.settings = settings or get_settings()
        self._read_file = file_reader or sources.read_file
        self._fetch_url = url_fetcher or sources.fetch_url

    # -- ingestion -----------------------------------------------------

    def _resolve_content(self, source_type: SourceType, source: str, timeout: float | None) -> tuple[str, str]:
        """Return (content, stored source locator) for a source."""
        if source_type == SourceType.FILEPATH:
            return self._read_file(source), source
        if source_type == SourceType.URL:
            if timeout is None:
                timeout = self.settings.fetch_timeout
            content = self._fetch_url(
                source,
                timeout=timeout,
                clean_html=self.settings.knowbase_clean_html,
                user_agent=self.settings.knowbase_user_agent,
            )
            return content, source
        if source_type == SourceType.RAW_TEXT:
            return source, RAW_TEXT_SOURCE
        raise UnsupportedSourceTypeError(source_type)

    def ingest_document(
        self,
        source_type: SourceType | str,
        source: str,
        document_id: str | None = None,
        metadata: dict | None = None,
        chunk_size: int | None = None,
        tags: list[str] | None = None,
        timeout: float | None = None,
    ) -> IngestResult:
        """Resolve a source, chunk it, and store it under ``document_id``.

        Re-using an existing ``document_id`` replaces that document entirely.

        Args:
            source_type: filepath, url or raw_text.
            source: The path, URL, or the raw text itself.
            document_id: Optional id; generated when omitted.
            metadata: Optional caller metadata, kept as the document's
                extension map. A ``tags`` entry is merged into ``tags``.
            chunk_size: Characters per chunk (default from settings).
            tags: Tags used by query and list filters.
            timeout: Seconds allowed for a URL fetch.

        Raises:
            UnsupportedSourceTypeError, SourceReadError, SourceFetchError,
            EmptyContentError, ValidationError
        """
        try:
            kind = SourceType(source_type)
        except ValueError as e:
            raise UnsupportedSourceTypeError(source_type) from e

        if chunk_size is None:
            chunk_size = self.settings.chunk_size
        # Validate before any I/O happens.
        expected_chunk_count(0, chunk_size)

        logger.info("Ingesting document from %s: %s", kind.value, source[:200])
        content, locator = self._resolve_content(kind, source, timeout)
        if not content or not content.strip():
            logger.warning("Empty content from %s source %s", kind.value, locator[:200])
            raise EmptyContentError(locator)

        extra = dict(metadata or {})
        all_tags = normalize_tags(list(normalize_tags(tags)) + list(normalize_tags(extra.pop("tags", None))))
        doc_id = document_id or generate_document_id()

        chunks = self.store.ingest(
            document_id=doc_id,
            content=content,
            source=locator,
            source_type=kind,
            chunk_size=chunk_size,
            tags=all_tags,
            extra=extra,
        )

        logger.info("Document ingested successfully: %s (%d chunks)", doc_id, len(chunks))
        return IngestResult(
            document_id=doc_id,
            content_length=len(content),
            chunks_created=expected_chunk_count(len(content), chunk_size),
            source=locator,
            source_type=kind,
        )

    # -- reads ---------------------------------------------------------

    def query(
        self,
        query_text: str,
        limit: int | None = None,
        min_relevance_score: float | None = None,
        tags: list[str] | None = None,
        source_type: SourceType | str | None = None,
    ) -> QueryResult:
        """Rank chunks against ``query_text``.

        Results are sorted by score descending; equal scores keep store order.
        ``total_results`` counts every match before truncation to ``limit``.
        """
        limit = _check_limit(self.settings.knowbase_query_limit if limit is None else limit)
        if min_relevance_score is None:
            min_relevance_score = self.settings.knowbase_min_relevance_score
        search_filter = SearchFilter(
            min_relevance_score=min_relevance_score,
            source_type=_parse_enum(SourceType, source_type, "source_type"),
            tags=tags,
        )

        logger.info("Querying knowledge base for: %s", query_text[:200])
        matches = self.store.search_all(query_text, search_filter)

        hits = [self._to_hit(chunk, score) for chunk, score in matches]
        hits.sort(key=lambda hit: hit.score, reverse=True)

        if hits:
            logger.info("Found %d relevant chunks, returning %d", len(hits), min(len(hits), limit))
        else:
            logger.info("No relevant documents found for: %s", query_text[:200])
        return QueryResult(query=query_text, total_results=len(hits), results=hits[:limit])

    def _to_hit(self, chunk: Chunk, score: float) -> QueryHit:
        return QueryHit(
            document_id=chunk.document_id,
            chunk_index=chunk.chunk_index,
            source=chunk.source,
            source_type=chunk.metadata.source_type,
            content_preview=preview(chunk.content, self.settings.knowbase_preview_length),
            score=score,
            tags=list(chunk.metadata.tags),
        )

    def list_documents(
        self,
        source_type: SourceType | str | None = None,
        tags: list[str] | None = None,
        limit: int | None = None,
        sort_by: SortField | str = SortField.TIMESTAMP,
        sort_order: SortOrder | str = SortOrder.DESC,
    ) -> ListResult:
        """List one summary per document, sorted and truncated.

        Each document is represented by its chunk 0. Documents with equal
        sort keys are ordered by ``document_id`` ascending.
        """
        limit = _check_limit(self.settings.knowbase_list_limit if limit is None else limit)
        sort_field = _parse_enum(SortField, sort_by, "sort_by")
        order = _parse_enum(SortOrder, sort_order, "sort_order")
        search_filter = SearchFilter(
            min_relevance_score=0.0,
            source_type=_parse_enum(SourceType, source_type, "source_type"),
            tags=tags,
        )

        logger.info("Listing documents (sort_by=%s, order=%s)", sort_field.value, order.value)
        candidates = self.store.search_all("", search_filter)

        representatives: dict[str, Chunk] = {}
        chunk_counts: dict[str, int] = {}
        for chunk, _score in candidates:
            doc_id = chunk.document_id
            chunk_counts[doc_id] = chunk_counts.get(doc_id, 0) + 1
            current = representatives.get(doc_id)
            if current is None or (chunk.chunk_index == 0 and current.chunk_index != 0):
                representatives[doc_id] = chunk

        documents = [
            self._to_summary(chunk, chunk_counts[doc_id])
            for doc_id, chunk in representatives.items()
        ]
        documents = sort_documents(documents, sort_field, order)

        logger.info("Found %d documents", len(documents))
        return ListResult(
            total_documents=len(documents),
            documents=documents[:limit],
            stats=self.store.stats(),
        )

    def _to_summary(self, chunk: Chunk, chunk_count: int) -> DocumentSummary:
        meta = chunk.metadata
        return DocumentSummary(
            document_id=meta.document_id,
            source=meta.source,
            source_type=meta.source_type,
            tags=list(meta.tags),
            ingested_at=meta.ingested_at,
            content_length=meta.content_length,
            chunk_count=chunk_count,
            content_preview=preview(chunk.content, self.settings.knowbase_list_preview_length),
            metadata=dict(meta.extra),
        )

    def get_document(self, document_id: str) -> DocumentContent:
        """Reassemble a document's full content from its chunks."""
        chunks = self.store.get_document_chunks(document_id)
        if not chunks:
            raise DocumentNotFoundError(document_id)
        meta = chunks[0].metadata
        return DocumentContent(
            document_id=document_id,
            source=meta.source,
            source_type=meta.source_type,
            tags=list(meta.tags),
            ingested_at=meta.ingested_at,
            content="".join(chunk.content for chunk in chunks),
            chunk_count=len(chunks),
        )

    def summarize(
        self,
        document_content: str,
        sentence_count: int | None = None,
        summary_type: SummaryType | str = SummaryType.EXTRACTIVE,
    ) -> SummaryResult:
        if sentence_count is None:
            sentence_count = self.settings.knowbase_summary_sentences
        return summarize(document_content, sentence_count=sentence_count, summary_type=summary_type)


_SORT_KEYS = {
    SortField.TIMESTAMP: lambda doc: doc.ingested_at,
    SortField.SOURCE: lambda doc: doc.source,
    SortField.CONTENT_LENGTH: lambda doc: doc.content_length,
}


def sort_documents(
    documents: list[DocumentSummary],
    sort_by: SortField,
    sort_order: SortOrder,
) -> list[DocumentSummary]:
    """Sort by one field, breaking ties by document_id ascending.

    Two stable passes keep the tie-break ascending even for descending
    orders, which also makes re-sorting a sorted list a no-op.
    """
    ordered = sorted(documents, key=lambda doc: doc.document_id)
    return sorted(ordered, key=_SORT_KEYS[sort_by], reverse=sort_order == SortOrder.DESC)


def build_knowledge_base(
    settings: Settings | None = None,
    file_reader: FileReader | None = None,
    url_fetcher: UrlFetcher | None = None,
) -> KnowledgeBase:
    """Create a KnowledgeBase over a fresh, initialized in-memory store."""
    store = KnowledgeStore().initialize()
    return KnowledgeBase(store, settings=settings, file_reader=file_reader, url_fetcher=url_fetcher)
