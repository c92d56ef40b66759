"""Mapping of domain exceptions to HTTP responses."""

import traceback

import falcon
import falcon.asgi

from pontual.application.services import ErrorTrackingService
from pontual.domain.exceptions import (
    DuplicateRecord,
    NotFound,
    PermissionDenied,
    StorageError,
    ValidationError,
)
from pontual.observability.logging import get_logger

logger = get_logger(__name__)

STORAGE_FAILURE_MESSAGE = "Não foi possível concluir a operação. Tente novamente."


async def _permission_denied(req, resp, ex: PermissionDenied, params) -> None:
    resp.status = falcon.HTTP_403
    resp.media = {"error": str(ex), "permission": ex.permission}


async def _not_found(req, resp, ex: NotFound, params) -> None:
    resp.status = falcon.HTTP_404
    resp.media = {"error": str(ex)}


async def _validation_error(req, resp, ex: ValidationError, params) -> None:
    resp.status = falcon.HTTP_400
    resp.media = {"error": str(ex)}


async def _duplicate(req, resp, ex: DuplicateRecord, params) -> None:
    resp.status = falcon.HTTP_409
    resp.media = {"error": str(ex)}


async def _storage_error(req, resp, ex: StorageError, params) -> None:
    resp.status = falcon.HTTP_503
    resp.media = {"error": STORAGE_FAILURE_MESSAGE}


async def _http_error(req, resp, ex: falcon.HTTPError, params) -> None:
    resp.status = ex.status
    resp.media = {"error": ex.title, "description": ex.description}
    for name, value in (ex.headers or {}).items():
        resp.set_header(name, value)


def _unexpected_error_handler(error_tracking: ErrorTrackingService):
    async def _unexpected(req, resp, ex: Exception, params) -> None:
        logger.exception("unhandled_error", path=req.path, method=req.method)
        user = getattr(req.context, "user", None)
        await error_tracking.capture_api_error(
            str(ex) or type(ex).__name__,
            500,
            f"{req.method} {req.path}",
            user_id=user.user_id if user else None,
            stack_trace="".join(traceback.format_exception(ex)),
        )
        resp.status = falcon.HTTP_500
        resp.media = {"error": "Internal server error"}

    return _unexpected


def register_error_handlers(
    app: falcon.asgi.App, error_tracking: ErrorTrackingService
) -> None:
    """Most specific handler wins, so domain errors never reach the 500 handler."""
    app.add_error_handler(Exception, _unexpected_error_handler(error_tracking))
    app.add_error_handler(falcon.HTTPError, _http_error)
    app.add_error_handler(PermissionDenied, _permission_denied)
    app.add_error_handler(NotFound, _not_found)
    app.add_error_handler(ValidationError, _validation_error)
    app.add_error_handler(DuplicateRecord, _duplicate)
    app.add_error_handler(StorageError, _storage_error)
