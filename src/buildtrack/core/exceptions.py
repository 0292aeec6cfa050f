"""Domain errors and the exception handlers that expose them with request_id."""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.buildtrack.core.logging import get_logger

logger = get_logger(__name__)


class DomainError(Exception):
    """Base class for errors raised by the tracking core."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(DomainError):
    """Referenced project, trade or task does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: object):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ForbiddenError(DomainError):
    """Role or ownership check failed."""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, detail: str = "Access denied"):
        super().__init__(detail)


class ConflictError(DomainError):
    """Write collides with a uniqueness rule, typically after a concurrent write."""

    status_code = status.HTTP_409_CONFLICT


class DomainValidationError(DomainError):
    """Input is well-typed but violates a domain rule."""

    status_code = 422


class CatalogError(DomainValidationError):
    """Static template catalog is internally inconsistent."""


class PartialFailureError(DomainError):
    """A sequential bulk operation stopped partway.

    Everything created before the failing step is kept; callers should
    refetch the authoritative state instead of trusting local results.
    """

    status_code = status.HTTP_207_MULTI_STATUS

    def __init__(self, created: int, requested: int):
        super().__init__(f"Created {created} of {requested} trades before a failure")
        self.created = created
        self.requested = requested


def _error_body(detail: str, **extra: object) -> dict[str, object]:
    return {"detail": detail, "request_id": correlation_id.get(), **extra}


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.detail))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.detail))

    @app.exception_handler(PartialFailureError)
    async def partial_failure_handler(request: Request, exc: PartialFailureError) -> JSONResponse:
        logger.warning(
            "Partial failure",
            path=request.url.path,
            created=exc.created,
            requested=exc.requested,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.detail, created=exc.created, requested=exc.requested),
        )

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
        logger.info(
            "Domain error",
            path=request.url.path,
            error=type(exc).__name__,
            detail=exc.detail,
        )
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.detail))

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
