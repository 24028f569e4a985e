"""
API error rendering.

Maps FairFormException subclasses to JSON bodies of the form
{"error": <kind>, "message": ..., "details"?: ...} with the status carried
by the exception class. Upstream failures show a fixed public message and
infrastructure failures never expose details.

Dependencies: fastapi, fairform.core.exceptions
System role: Single translation point from typed errors to HTTP
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fairform.core.exceptions import ContentBlockedError, ErrorKind, FairFormException
from fairform.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

_HIDDEN_DETAIL_KINDS = {
    ErrorKind.MODERATION_FAILURE,
    ErrorKind.UNEXPECTED_RESPONSE,
    ErrorKind.CONFIGURATION,
    ErrorKind.REPOSITORY,
    ErrorKind.SERVER,
}


def error_body(exc: FairFormException) -> dict[str, Any]:
    """
    Build the JSON body for a typed error.

    Args:
        exc: Raised application exception

    Returns:
        dict: Response body
    """
    message = exc.public_message if exc.status_code == 502 else exc.message
    body: dict[str, Any] = {"error": exc.kind.value, "message": message}

    if isinstance(exc, ContentBlockedError):
        body["moderation"] = exc.moderation.model_dump(mode="json", by_alias=True)
    elif exc.details and exc.kind not in _HIDDEN_DETAIL_KINDS:
        body["details"] = exc.details
    return body


async def fairform_exception_handler(request: Request, exc: FairFormException) -> JSONResponse:
    """Render a FairFormException."""
    if exc.status_code >= 500:
        log_exception_with_context(
            logger,
            f"{request.method} {request.url.path} failed: {exc.kind.value}",
            exc,
            path=request.url.path,
        )
    else:
        logger.warning(
            f"{request.method} {request.url.path} rejected: {exc.kind.value}",
            extra={"path": request.url.path, "error_kind": exc.kind.value},
        )
    return JSONResponse(status_code=exc.status_code, content=error_body(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render FastAPI body/query validation failures as 400 ValidationError."""
    form_errors: list[str] = []
    field_errors: dict[str, list[str]] = {}
    for error in exc.errors():
        # Drop the "body"/"query"/"path" prefix
        loc = [str(part) for part in error.get("loc", ())][1:]
        message = error.get("msg", "Invalid value")
        if loc:
            field_errors.setdefault(loc[0], []).append(message)
        else:
            form_errors.append(message)

    return JSONResponse(
        status_code=400,
        content={
            "error": ErrorKind.VALIDATION.value,
            "message": "Invalid request.",
            "details": {"formErrors": form_errors, "fieldErrors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: log and return an opaque 500."""
    log_exception_with_context(
        logger,
        f"Unhandled error on {request.method} {request.url.path}",
        exc,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=500,
        content={"error": ErrorKind.SERVER.value, "message": "Unable to process request."},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the handlers above to an app."""
    app.add_exception_handler(FairFormException, fairform_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
