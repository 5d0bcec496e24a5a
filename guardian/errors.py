"""
Error taxonomy shared by the services and the HTTP layer.

Every error carries a machine-checkable ``kind`` and the HTTP status the
API answers with. Routes let these propagate; ``register_error_handlers``
renders them as ``{"detail": ..., "kind": ...}``.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class GuardianError(Exception):
    kind = "error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GuardianError):
    """Missing or malformed input."""
    kind = "validation_error"
    status_code = 400


class AuthenticationError(GuardianError):
    kind = "authentication_error"
    status_code = 401


class NotFoundError(GuardianError):
    """Row is absent or owned by another user."""
    kind = "not_found"
    status_code = 404


class NoActiveContactsError(GuardianError):
    kind = "no_active_contacts"
    status_code = 400


class UpstreamUnavailableError(GuardianError):
    """Vision or notification provider failed."""
    kind = "upstream_unavailable"
    status_code = 502


async def guardian_error_handler(request: Request, exc: GuardianError):
    logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.kind, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "kind": exc.kind},
    )


def _describe_validation_errors(errors) -> str:
    parts = []
    for error in errors:
        # drop the leading "body"/"query" segment
        loc = [str(p) for p in error.get("loc", ())[1:]] or [str(p) for p in error.get("loc", ())]
        parts.append(f"{'.'.join(loc)}: {error.get('msg', 'invalid value')}")
    return "Invalid request: " + "; ".join(parts)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return await guardian_error_handler(request, ValidationError(_describe_validation_errors(exc.errors())))


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(GuardianError, guardian_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
