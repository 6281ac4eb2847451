"""Document chunk data model."""

from dataclasses import dataclass

from knowbase.models.document import DocumentMetadata


@dataclass(frozen=True)
class Chunk:
    """A contiguous slice of a document's content, the unit of scoring."""

    document_id: str
    chunk_index: int
    content: str
    metadata: DocumentMetadata
    # Opaque slot for a future embedding backend; scoring never reads it.
    embedding: bytes | None = None

    def __post_init__(self):
        if not self.content:
            raise ValueError("content must not be empty")
        if self.chunk_index < 0:
            raise ValueError("chunk_index must be >= 0")
        if self.metadata.document_id != self.document_id:
            raise ValueError(
                f"metadata belongs to {self.metadata.document_id!r}, not {self.document_id!r}"
            )

    @property
    def source(self) -> str:
        return self.metadata.source

    def copy(self) -> "Chunk":
        """Return a snapshot that shares no mutable state with this chunk."""
        return Chunk(
            document_id=self.document_id,
            chunk_index=self.chunk_index,
            content=self.content,
            metadata=self.metadata.copy(),
            embedding=self.embedding,
        )
