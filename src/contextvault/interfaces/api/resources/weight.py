"""Context weight API resource."""

import falcon.asgi

from contextvault.application.use_cases.context.context_weight import (
    GetContextWeightUseCase,
    UpdateContextWeightUseCase,
)
from contextvault.domain.exceptions import NotFound, StoreError, ValidationError


class ContextWeightResource:
    """GET/POST /v1/context/weight - read or set a source's context weight."""

    def __init__(
        self,
        get_weight: GetContextWeightUseCase,
        update_weight: UpdateContextWeightUseCase,
    ) -> None:
        self._get_weight = get_weight
        self._update_weight = update_weight

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        item_id = req.get_param("item_id")
        item_type = req.get_param("item_type")
        if not item_id or not item_type:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Missing required parameters: item_id, item_type"}
            return
        try:
            weight = await self._get_weight.execute(item_id, item_type)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        except StoreError:
            resp.status = falcon.HTTP_503
            resp.media = {"error": "Chunk store unavailable"}
            return
        resp.status = falcon.HTTP_200
        resp.media = {"context_weight": weight}

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        try:
            body = await req.get_media()
            item_id = body["item_id"]
            item_type = body["item_type"]
            weight = body["weight"]
        except (KeyError, TypeError):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Missing required fields: item_id, item_type, weight"}
            return
        except Exception:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid request body"}
            return

        try:
            updated = await self._update_weight.execute(str(item_id), item_type, weight)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except StoreError:
            resp.status = falcon.HTTP_503
            resp.media = {"error": "Chunk store unavailable"}
            return
        resp.status = falcon.HTTP_200
        resp.media = {"context_weight": weight, "chunks_updated": updated}
