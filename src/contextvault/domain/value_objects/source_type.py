"""Source type of the content a chunk was cut from."""

from enum import StrEnum


class SourceType(StrEnum):
    """Kinds of content that can be ingested into context memory."""

    DOCUMENT = "document"
    NOTE = "note"
    URL = "url"
    YOUTUBE = "youtube"
    CHAT = "chat"


_LABELS = {
    "document": "DOCUMENT",
    "note": "NOTEBOOK",
    "url": "WEB SOURCE",
    "chat": "CHAT HISTORY",
}


def source_label(source_type: str) -> str:
    """Readable block label for a source type, SOURCE for anything unmapped."""
    return _LABELS.get(source_type, "SOURCE")
