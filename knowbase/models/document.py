"""Document metadata model."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from knowbase.models.enums import SourceType

# Stored as ``source`` for documents ingested from raw text.
RAW_TEXT_SOURCE = "raw_text"


def normalize_tags(tags) -> tuple[str, ...]:
    """De-duplicate tags, keeping first-seen order and dropping blanks."""
    if not tags:
        return ()
    if isinstance(tags, str):
        tags = [tags]
    seen: dict[str, None] = {}
    for tag in tags:
        tag = str(tag).strip()
        if tag:
            seen.setdefault(tag, None)
    return tuple(seen)


@dataclass(frozen=True)
class DocumentMetadata:
    """An ingested document, identified by ``document_id``.

    Every chunk of the document carries a copy of this record so the query
    path never needs a second lookup. Caller-supplied keys that are not part
    of the typed fields live in ``extra``.
    """

    document_id: str
    source: str
    source_type: SourceType
    content_length: int
    tags: tuple[str, ...] = ()
    ingested_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.source_type, SourceType):
            object.__setattr__(self, "source_type", SourceType(self.source_type))
        object.__setattr__(self, "tags", normalize_tags(self.tags))
        if not self.document_id:
            raise ValueError("document_id must not be empty")
        if self.content_length <= 0:
            raise ValueError("content_length must be > 0")

    def copy(self) -> "DocumentMetadata":
        return DocumentMetadata(
            document_id=self.document_id,
            source=self.source,
            source_type=self.source_type,
            content_length=self.content_length,
            tags=self.tags,
            ingested_at=self.ingested_at,
            extra=dict(self.extra),
        )

    def has_any_tag(self, tags) -> bool:
        """True when any of ``tags`` is attached to this document."""
        return any(tag in self.tags for tag in normalize_tags(tags))
