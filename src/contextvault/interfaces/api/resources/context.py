"""Context ingestion and retrieval API resources."""

import falcon.asgi

from contextvault.application.dto.ingestion_dto import IngestInput
from contextvault.application.dto.retrieval_dto import QueryContextInput, RetrieveContextInput
from contextvault.application.prompting.prompt_assembler import PromptAssembler
from contextvault.application.services.ingestion_dispatcher import IngestionDispatcher
from contextvault.application.use_cases.context.delete_source_chunks import (
    DeleteSourceChunksUseCase,
)
from contextvault.application.use_cases.ingestion.ingest_source import IngestSourceUseCase
from contextvault.application.use_cases.retrieval.query_context import QueryContextUseCase
from contextvault.application.use_cases.retrieval.retrieve_context import (
    RetrieveContextUseCase,
)
from contextvault.domain.exceptions import StoreError, ValidationError
from contextvault.interfaces.api.resources.serializers import (
    bundle_to_dict,
    ingest_result_to_dict,
    search_result_to_dict,
)


def _str_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None and str(v).strip()]


class ContextIngestResource:
    """POST /v1/context/ingest - chunk, embed and save a source."""

    def __init__(
        self, ingest_source: IngestSourceUseCase, dispatcher: IngestionDispatcher
    ) -> None:
        self._ingest_source = ingest_source
        self._dispatcher = dispatcher

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Ingest inline, or after the response when background is true."""
        try:
            body = await req.get_media()
            input_data = IngestInput(
                source_type=body.get("source_type") or "document",
                source_id=str(body["source_id"]),
                title=body["title"],
                full_text=body["content"],
                metadata=body.get("metadata") or {},
            )
            background = bool(body.get("background", False))
        except (KeyError, TypeError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing or invalid field: {e}"}
            return
        except Exception:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid request body"}
            return

        if background:
            async def _run() -> None:
                await self._dispatcher.dispatch(input_data)

            resp.schedule(_run)
            resp.status = falcon.HTTP_202
            resp.media = {
                "status": "scheduled",
                "source_type": input_data.source_type,
                "source_id": input_data.source_id,
            }
            return

        try:
            result = await self._ingest_source.execute(input_data)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        resp.status = falcon.HTTP_200
        resp.media = ingest_result_to_dict(result)


class ContextSourceResource:
    """DELETE /v1/context/sources/{source_type}/{source_id} - drop a source's chunks."""

    def __init__(self, delete_source_chunks: DeleteSourceChunksUseCase) -> None:
        self._delete_source_chunks = delete_source_chunks

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        source_type: str,
        source_id: str,
    ) -> None:
        try:
            deleted = await self._delete_source_chunks.execute(source_type, source_id)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except StoreError:
            resp.status = falcon.HTTP_503
            resp.media = {"error": "Chunk store unavailable"}
            return
        resp.status = falcon.HTTP_200
        resp.media = {"deleted": deleted}


class ContextRetrieveResource:
    """POST /v1/context/retrieve - context bundle and assembled prompts for a query."""

    def __init__(
        self, retrieve_context: RetrieveContextUseCase, prompt_assembler: PromptAssembler
    ) -> None:
        self._retrieve_context = retrieve_context
        self._prompt_assembler = prompt_assembler

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        try:
            body = await req.get_media()
            input_data = RetrieveContextInput(
                query=body.get("query") or "",
                selected_folders=_str_list(body.get("selected_folders")),
                include_all_sources=bool(body.get("include_all_sources", True)),
                selected_source_ids=_str_list(body.get("selected_source_ids")),
                limit=body.get("limit"),
                threshold=body.get("threshold"),
            )
            user_prompt = body.get("user_prompt") or input_data.query
            system_prompt = body.get("system_prompt")
        except Exception:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid request body"}
            return

        try:
            bundle = await self._retrieve_context.execute(input_data)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except StoreError:
            resp.status = falcon.HTTP_503
            resp.media = {"error": "Chunk store unavailable"}
            return

        resp.status = falcon.HTTP_200
        resp.media = {
            **bundle_to_dict(bundle),
            "include_all_sources": input_data.include_all_sources,
            "folder_filtered": not input_data.include_all_sources
            and bool(input_data.selected_folders),
            "prompt": self._prompt_assembler.assemble(bundle, user_prompt),
            "system_prompt": self._prompt_assembler.build_system_prompt(
                bundle,
                base_prompt=system_prompt,
                include_all_sources=input_data.include_all_sources,
            ),
        }


class ContextQueryResource:
    """POST /v1/context/query - raw similarity search."""

    def __init__(self, query_context: QueryContextUseCase) -> None:
        self._query_context = query_context

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        try:
            body = await req.get_media()
            input_data = QueryContextInput(
                prompt=body.get("prompt") or "",
                limit=body.get("limit"),
                threshold=body.get("threshold"),
                source_types=_str_list(body.get("source_types")),
            )
        except Exception:
            resp.status = falcon.HTTP_400
            resp.media = {"success": False, "error": "Invalid request body"}
            return

        try:
            results = await self._query_context.execute(input_data)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"success": False, "error": str(e)}
            return
        except StoreError:
            resp.status = falcon.HTTP_503
            resp.media = {"success": False, "error": "Chunk store unavailable"}
            return

        resp.status = falcon.HTTP_200
        resp.media = {"success": True, "data": [search_result_to_dict(r) for r in results]}
