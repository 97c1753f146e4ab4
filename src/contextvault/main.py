"""Application entry point and composition root."""

from falcon.asgi import App

from contextvault import __version__
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
from contextvault.config import Settings, get_settings
from contextvault.infrastructure.chunking.sentence_chunker import SentenceBoundaryChunker
from contextvault.infrastructure.embedding.openai_provider import OpenAIEmbeddingProvider
from contextvault.infrastructure.persistence.postgres.connection import (
    check_connection,
    create_pool,
)
from contextvault.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)
from contextvault.interfaces.api.app import ApiResources, create_app
from contextvault.interfaces.api.middleware.cors import CORSMiddleware
from contextvault.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from contextvault.interfaces.api.resources.context import (
    ContextIngestResource,
    ContextQueryResource,
    ContextRetrieveResource,
    ContextSourceResource,
)
from contextvault.interfaces.api.resources.health import HealthResource
from contextvault.interfaces.api.resources.populate import PopulateExistingResource
from contextvault.interfaces.api.resources.weight import ContextWeightResource
from contextvault.logging_config import configure_logging


def main() -> None:
    """CLI entry point."""
    print(f"contextvault v{__version__}")


def create_contextvault_app(settings: Settings | None = None) -> App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    configure_logging("DEBUG" if settings.debug else settings.log_level)

    pool = create_pool(
        settings.database_url,
        min_size=settings.database_pool_min_size,
        max_size=settings.database_pool_max_size,
    )
    uow_factory = create_uow_factory(pool, dimensions=settings.embedding_dimensions)

    embedding_provider = OpenAIEmbeddingProvider(
        base_url=settings.embedding_api_url,
        api_key=settings.embedding_api_key,
        model=settings.embedding_model,
        max_retries=settings.embedding_max_retries,
    )
    chunker = SentenceBoundaryChunker()
    prompt_assembler = PromptAssembler()

    ingest_source = IngestSourceUseCase(
        unit_of_work_factory=uow_factory,
        chunker=chunker,
        embedding_provider=embedding_provider,
        delay_seconds=settings.ingest_delay_seconds,
        document_chunk_size=settings.chunk_size_document,
        default_chunk_size=settings.chunk_size_default,
        chunk_overlap=settings.chunk_overlap,
    )
    dispatcher = IngestionDispatcher(ingest_source)
    retrieve_context = RetrieveContextUseCase(
        unit_of_work_factory=uow_factory,
        embedding_provider=embedding_provider,
        default_limit=settings.retrieval_limit,
        default_threshold=settings.retrieval_threshold,
    )
    query_context = QueryContextUseCase(
        unit_of_work_factory=uow_factory,
        embedding_provider=embedding_provider,
        default_limit=settings.retrieval_limit,
        default_threshold=settings.retrieval_threshold,
    )
    populate_existing = PopulateExistingUseCase(
        unit_of_work_factory=uow_factory,
        ingest_source=ingest_source,
    )

    async def readiness() -> bool:
        return await check_connection(pool)

    resources = ApiResources(
        health=HealthResource(readiness),
        ingest=ContextIngestResource(ingest_source, dispatcher),
        source=ContextSourceResource(DeleteSourceChunksUseCase(uow_factory)),
        retrieve=ContextRetrieveResource(retrieve_context, prompt_assembler),
        query=ContextQueryResource(query_context),
        weight=ContextWeightResource(
            GetContextWeightUseCase(uow_factory),
            UpdateContextWeightUseCase(uow_factory),
        ),
        populate=PopulateExistingResource(
            populate_existing,
            GetContextStatsUseCase(uow_factory),
        ),
    )

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    return create_app(
        resources,
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool),
        ],
    )


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    uvicorn.run(create_contextvault_app(), host="0.0.0.0", port=8000)
