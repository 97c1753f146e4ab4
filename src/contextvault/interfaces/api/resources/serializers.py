"""JSON shapes for API responses."""

from contextvault.application.dto.ingestion_dto import IngestResult
from contextvault.domain.entities import ContextBundle, SearchResult


def search_result_to_dict(r: SearchResult) -> dict:
    return {
        "id": str(r.chunk.id),
        "content": r.content,
        "metadata": r.metadata,
        "similarity": round(r.similarity, 6),
        "context_weight": r.chunk.context_weight,
    }


def bundle_to_dict(bundle: ContextBundle) -> dict:
    return {
        "context_text": bundle.context_text,
        "sources": bundle.sources,
        "chunk_count": bundle.chunk_count,
        "context_chunks": [search_result_to_dict(r) for r in bundle.context_chunks],
        "selected_folders": bundle.selected_folders,
    }


def ingest_result_to_dict(result: IngestResult) -> dict:
    return {
        "source_type": result.source_type,
        "source_id": result.source_id,
        "total_chunks": result.total_chunks,
        "saved": result.saved,
        "skipped": result.skipped,
    }
