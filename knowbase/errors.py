"""Exceptions raised by the knowbase engine.

Every error carries a short stable ``code`` used in MCP error payloads and a
human-readable message that names the offending value.
"""


class KnowledgeBaseError(Exception):
    """Base class for all knowbase errors."""

    code = "knowledge_base_error"


class SourceReadError(KnowledgeBaseError):
    """Raised when a local file source cannot be read."""

    code = "source_read_error"

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read file {path}: {reason}")


class SourceFetchError(KnowledgeBaseError):
    """Raised when a URL source cannot be fetched."""

    code = "source_fetch_error"

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch content from URL {url}: {reason}")


class EmptyContentError(KnowledgeBaseError):
    """Raised when a resolved source has no content to ingest."""

    code = "empty_content"

    def __init__(self, source: str):
        self.source = source
        super().__init__(f"No content to ingest from source {source!r}")


class UnsupportedSourceTypeError(KnowledgeBaseError):
    code = "unsupported_source_type"

    def __init__(self, source_type):
        self.source_type = source_type
        super().__init__(
            f"Unsupported source type: {source_type!r}. "
            "Supported: 'filepath', 'url', 'raw_text'"
        )


class NotInitializedError(KnowledgeBaseError):
    """Raised when the store is used before ``initialize()``."""

    code = "not_initialized"

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Knowledge store is not initialized (attempted {operation})")


class NoSentencesError(KnowledgeBaseError):
    """Raised when segmentation leaves nothing to summarize."""

    code = "no_sentences"

    def __init__(self, summary_type: str):
        self.summary_type = summary_type
        super().__init__(f"No sentences available for a {summary_type} summary")


class ValidationError(KnowledgeBaseError):
    """Raised for malformed filter, sort, or size arguments."""

    code = "validation_error"

    def __init__(self, field: str, value, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}={value!r}: {reason}")


class DocumentNotFoundError(KnowledgeBaseError):
    code = "not_found"

    def __init__(self, document_id: str):
        self.document_id = document_id
        super().__init__(f"Document not found: {document_id!r}")
