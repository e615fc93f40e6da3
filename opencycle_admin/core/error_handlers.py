"""Translate domain exceptions into HTTP responses.

Services and dependencies raise the exceptions from `opencycle_admin.exceptions`;
only this module decides which status code and body each one becomes.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from opencycle_admin.exceptions import (
    AppException,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    InsufficientPermissionsError,
    MetricUnavailableError,
)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
    )


async def validation_error_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    """
    422 with `{"detail": ..., "field": ...}`; `field` is omitted when the error names none.
    """
    body = {"detail": str(exc)}
    if exc.field:
        body["field"] = exc.field
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_CONTENT, content=body)


async def insufficient_permissions_handler(
    request: Request, exc: InsufficientPermissionsError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)}
    )


async def authentication_error_handler(
    request: Request, exc: AuthenticationError
) -> JSONResponse:
    """401 carrying the `WWW-Authenticate: Bearer` challenge."""
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc)},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def metric_unavailable_handler(
    request: Request, exc: MetricUnavailableError
) -> JSONResponse:
    """
    503 naming the metric, so the console can grey out that one widget.
    """
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc), "metric": exc.metric},
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    # The message may contain internals; log it and answer generically
    logger.error(f"Unhandled application error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An internal error occurred"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Install the handlers above on `app`.

    Starlette picks the handler of the closest class in the exception's MRO, so
    `InsufficientPermissionsError` gets 403 although it subclasses `AuthenticationError`,
    and `AppException` only catches what nothing more specific does.
    """
    handlers = {
        NotFoundError: not_found_handler,
        ValidationError: validation_error_handler,
        InsufficientPermissionsError: insufficient_permissions_handler,
        AuthenticationError: authentication_error_handler,
        MetricUnavailableError: metric_unavailable_handler,
        AppException: app_exception_handler,
    }
    for exc_class, handler in handlers.items():
        app.add_exception_handler(exc_class, handler)  # type: ignore[arg-type]
