from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from meetvoice_api.models.schemas import ErrorResponse


logger = logging.getLogger("meetvoice_api.errors")


class ArticleServiceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class StoreError(ArticleServiceError):
    """Failure talking to or querying the document store; message is the driver's text."""


class ArticleNotFoundError(ArticleServiceError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(f"Article '{slug}' not found")


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


async def article_service_error_handler(request: Request, exc: ArticleServiceError) -> JSONResponse:
    if isinstance(exc, ArticleNotFoundError):
        logger.info(
            "Article not found",
            extra={"event": "article_not_found", "slug": exc.slug, "path": request.url.path},
        )
    else:
        logger.error(
            "Store error: %s",
            exc,
            extra={"event": "store_error", "path": request.url.path},
        )
    return _error_response(exc.status_code, str(exc))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    parts = []
    for err in exc.errors():
        loc = err.get("loc", [])
        field = loc[-1] if loc else "request"
        parts.append(f"{field}: {err.get('msg')}")
    message = "Invalid query: " + "; ".join(parts)
    logger.warning(message, extra={"event": "request_invalid", "path": request.url.path})
    return _error_response(status.HTTP_400_BAD_REQUEST, message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ArticleServiceError, article_service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
