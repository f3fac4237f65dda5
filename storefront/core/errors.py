"""API error envelope, not-found trap and exception handler registration."""

from __future__ import annotations

from collections.abc import Sequence
import logging
import traceback
from typing import Any

from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.schemas.error import ErrorEnvelope
from storefront.schemas.error import UploadErrorResponse
from storefront.schemas.error import ValidationErrorEntry
from storefront.schemas.error import ValidationErrorResponse

logger = logging.getLogger(__name__)

STACK_PLACEHOLDER = "🍃"

NOT_FOUND_TRAP_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


class APIError(Exception):
    """Base application exception carrying the status the response should use."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        data: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.data = data


class BadRequestError(APIError):
    """Business rule rejection reported as 400."""

    def __init__(self, message: str, *, data: Any = None) -> None:
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST, data=data)


class NotFoundError(APIError):
    """Convenience exception for missing resources."""

    def __init__(self, message: str = "Resource not found", *, data: Any = None) -> None:
        super().__init__(message, status_code=status.HTTP_404_NOT_FOUND, data=data)


class RequestValidationFailed(Exception):
    """Raised by the validation gate when any field constraint is violated."""

    def __init__(self, errors: Sequence[ValidationErrorEntry]) -> None:
        super().__init__(f"{len(errors)} validation error(s)")
        self.errors = list(errors)


class UploadRejectedError(Exception):
    """Raised when an image upload is refused before reaching the image service."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def resolve_status_code(current: int | None) -> int:
    """Keep an already-set non-200 status, otherwise report a server error."""
    if current and current != status.HTTP_200_OK:
        return current
    return status.HTTP_500_INTERNAL_SERVER_ERROR


class ErrorResponder:
    """Terminal handler turning any failure into the shared error envelope."""

    def __init__(self, *, production: bool) -> None:
        self.production = production

    def status_for(self, exc: Exception) -> int:
        return resolve_status_code(getattr(exc, "status_code", None))

    def envelope(self, exc: Exception) -> ErrorEnvelope:
        message, data = _message_and_data(exc)
        if self.production:
            stack = STACK_PLACEHOLDER
        else:
            stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return ErrorEnvelope(message=message, stack=stack, data=data)

    async def __call__(self, request: Request, exc: Exception) -> JSONResponse:
        status_code = self.status_for(exc)
        # Other exceptions reach here from ServerErrorMiddleware, which re-raises them to the server log.
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR and isinstance(exc, (APIError, StarletteHTTPException)):
            logger.error(
                "Request %s %s failed with status %s",
                request.method,
                request.url.path,
                status_code,
                exc_info=(type(exc), exc, exc.__traceback__),
            )
        return JSONResponse(
            status_code=status_code,
            content=self.envelope(exc).model_dump(mode="json"),
            headers=getattr(exc, "headers", None),
        )


def _message_and_data(exc: Exception) -> tuple[str, Any]:
    if isinstance(exc, APIError):
        return exc.message, exc.data
    if isinstance(exc, StarletteHTTPException):
        if isinstance(exc.detail, str):
            return exc.detail, None
        return "Request failed", exc.detail
    return str(exc), getattr(exc, "data", None)


def _format_location(location: tuple[Any, ...] | list[Any] | Any) -> str:
    if not isinstance(location, (tuple, list)):
        return str(location)

    prefixes = {"body", "query", "path", "header", "cookie"}
    filtered = [str(part) for part in location if part not in prefixes]
    if filtered:
        return ".".join(filtered)

    if not location:
        return "request"

    return str(location[0])


def _validation_entries(exc: RequestValidationError) -> list[ValidationErrorEntry]:
    entries: list[ValidationErrorEntry] = []
    for issue in exc.errors():
        if issue.get("type") == "json_invalid":
            entries.append(ValidationErrorEntry(field="body", message="Malformed JSON body"))
            continue
        field = _format_location(issue.get("loc", ()))
        message = str(issue.get("msg", "Invalid value"))
        entries.append(ValidationErrorEntry(field=field, message=message))
    return entries


def _validation_response(entries: Sequence[ValidationErrorEntry]) -> JSONResponse:
    payload = ValidationErrorResponse(errors=list(entries))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=payload.model_dump())


async def validation_gate_exception_handler(_: Request, exc: RequestValidationFailed) -> JSONResponse:
    """Render gate rejections as the itemized 400 envelope."""

    return _validation_response(exc.errors)


async def request_validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Normalize FastAPI parsing errors to the same itemized 400 envelope."""

    return _validation_response(_validation_entries(exc))


async def upload_rejected_exception_handler(_: Request, exc: UploadRejectedError) -> JSONResponse:
    """Report refused uploads without touching the terminal envelope."""

    payload = UploadErrorResponse(message=exc.message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=payload.model_dump())


def register_error_handlers(app: FastAPI, responder: ErrorResponder) -> None:
    """Attach all storefront error handlers to a FastAPI app instance."""

    app.add_exception_handler(RequestValidationFailed, validation_gate_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(UploadRejectedError, upload_rejected_exception_handler)
    app.add_exception_handler(StarletteHTTPException, responder)
    app.add_exception_handler(APIError, responder)
    app.add_exception_handler(Exception, responder)


async def not_found_trap(request: Request) -> None:
    """Forward unmatched requests to the error responder as a 404 failure."""
    requested = request.url.path
    if request.url.query:
        requested = f"{requested}?{request.url.query}"
    raise NotFoundError(f"Not Found - {requested}")


def install_not_found_trap(app: FastAPI) -> None:
    """Register the catch-all route; call after every router is included."""

    app.add_api_route(
        "/{unmatched_path:path}",
        not_found_trap,
        methods=NOT_FOUND_TRAP_METHODS,
        include_in_schema=False,
    )
