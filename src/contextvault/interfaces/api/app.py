"""Falcon ASGI application."""

import logging
from dataclasses import dataclass

import falcon
import falcon.asgi
from falcon.asgi import App

from contextvault.interfaces.api.resources.context import (
    ContextIngestResource,
    ContextQueryResource,
    ContextRetrieveResource,
    ContextSourceResource,
)
from contextvault.interfaces.api.resources.health import HealthResource
from contextvault.interfaces.api.resources.populate import PopulateExistingResource
from contextvault.interfaces.api.resources.weight import ContextWeightResource

logger = logging.getLogger(__name__)


@dataclass
class ApiResources:
    """All resources served by the API."""

    health: HealthResource
    ingest: ContextIngestResource
    source: ContextSourceResource
    retrieve: ContextRetrieveResource
    query: ContextQueryResource
    weight: ContextWeightResource
    populate: PopulateExistingResource


async def _log_exception(req, resp, ex, params) -> None:
    logger.error("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(resources: ApiResources, middleware: list | None = None) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, _log_exception)

    app.add_route("/v1/health", resources.health)
    app.add_route("/v1/health/ready", resources.health, suffix="ready")
    app.add_route("/v1/context/ingest", resources.ingest)
    app.add_route("/v1/context/sources/{source_type}/{source_id}", resources.source)
    app.add_route("/v1/context/retrieve", resources.retrieve)
    app.add_route("/v1/context/query", resources.query)
    app.add_route("/v1/context/weight", resources.weight)
    app.add_route("/v1/context/populate-existing", resources.populate)
    return app
