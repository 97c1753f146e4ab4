"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from contextvault.application.prompting.prompt_assembler import PromptAssembler
from contextvault.application.services.ingestion_dispatcher import IngestionDispatcher
from contextvault.application.use_cases.context.context_weight import (
    GetContextWeightUseCase,
    UpdateContextWeightUseCase,
)
from contextvault.application.use_cases.context.delete_source_chunks import (
    DeleteSourceChunksUseCase,
)
from contextvault.application.use_cases.ingestion.ingest_source import IngestSourceUseCase
from contextvault.application.use_cases.ingestion.populate_existing import (
    GetContextStatsUseCase,
    PopulateExistingUseCase,
)
from contextvault.application.use_cases.retrieval.query_context import QueryContextUseCase
from contextvault.application.use_cases.retrieval.retrieve_context import (
    RetrieveContextUseCase,
)
from contextvault.infrastructure.chunking.sentence_chunker import SentenceBoundaryChunker
from contextvault.interfaces.api.app import ApiResources, create_app
from contextvault.interfaces.api.middleware.cors import CORSMiddleware
from contextvault.interfaces.api.resources.context import (
    ContextIngestResource,
    ContextQueryResource,
    ContextRetrieveResource,
    ContextSourceResource,
)
from contextvault.interfaces.api.resources.health import HealthResource
from contextvault.interfaces.api.resources.populate import PopulateExistingResource
from contextvault.interfaces.api.resources.weight import ContextWeightResource


@pytest.fixture
def app(uow_factory, sequence_embedder):
    """Falcon ASGI app with API resources over in-memory fakes."""
    ingest_source = IngestSourceUseCase(
        unit_of_work_factory=uow_factory,
        chunker=SentenceBoundaryChunker(),
        embedding_provider=sequence_embedder,
        delay_seconds=0,
    )
    resources = ApiResources(
        health=HealthResource(),
        ingest=ContextIngestResource(ingest_source, IngestionDispatcher(ingest_source)),
        source=ContextSourceResource(DeleteSourceChunksUseCase(uow_factory)),
        retrieve=ContextRetrieveResource(
            RetrieveContextUseCase(uow_factory, sequence_embedder), PromptAssembler()
        ),
        query=ContextQueryResource(QueryContextUseCase(uow_factory, sequence_embedder)),
        weight=ContextWeightResource(
            GetContextWeightUseCase(uow_factory), UpdateContextWeightUseCase(uow_factory)
        ),
        populate=PopulateExistingResource(
            PopulateExistingUseCase(uow_factory, ingest_source),
            GetContextStatsUseCase(uow_factory),
        ),
    )
    return create_app(resources, middleware=[CORSMiddleware(["http://localhost:3000"])])


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    return TestClient(app)
