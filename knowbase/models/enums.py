"""Enumeration types for knowbase data models."""

from enum import Enum


class SourceType(str, Enum):
    FILEPATH = "filepath"
    URL = "url"
    RAW_TEXT = "raw_text"


class SummaryType(str, Enum):
    EXTRACTIVE = "extractive"
    KEY_POINTS = "key_points"
    STRUCTURED = "structured"


class SortField(str, Enum):
    TIMESTAMP = "timestamp"
    SOURCE = "source"
    CONTENT_LENGTH = "content_length"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"
