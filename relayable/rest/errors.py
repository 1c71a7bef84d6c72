import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from relayable.relay.errors import GatewayError, ValidationFailed
from relayable.rest.models.errors import ErrorResponse, ValidationErrorResponse, Violation

LOGGER = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong!"


def violation(field: str, message: str, type: str, location: str = "body") -> Dict[str, Any]:
    return Violation(field=field, message=message, type=type, location=location).model_dump()


def to_violations(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Flattens pydantic/FastAPI error entries into {field, message, type, location},
    keeping their order.
    """
    violations = []
    for error in errors:
        raw_loc = tuple(error.get("loc", ()))
        location = str(raw_loc[0]) if raw_loc else "body"
        error_type = error.get("type", "value_error")
        # json_invalid carries a character offset where a field name would be
        if error_type == "json_invalid" or len(raw_loc) < 2 or not isinstance(raw_loc[1], str):
            field = location
        else:
            field = ".".join(str(part) for part in raw_loc[1:])
        violations.append(violation(field, error.get("msg", "Invalid value"), error_type, location))
    return violations


def _strict(request: Request) -> bool:
    config = getattr(request.app.state, "config", None)
    return bool(config and config.strict_status_codes)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await gateway_error_handler(request, ValidationFailed(to_violations(exc.errors())))


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    if isinstance(exc, ValidationFailed):
        LOGGER.error(f"{request.method} {request.url.path} rejected: {exc.violations}")
        body = ValidationErrorResponse(errors=exc.violations)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())

    LOGGER.error(f"{request.method} {request.url.path} failed with {type(exc).__name__}: {exc.message}", exc_info=exc)
    status_code = exc.status_code if _strict(request) else status.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=exc.message).model_dump())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    LOGGER.error(f"{request.method} {request.url.path} returned {exc.status_code}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """
    Turns any exception the routes and handlers let through into the generic 500.
    Installed inside CORSMiddleware so these responses still carry CORS headers.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            LOGGER.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=ErrorResponse(error=GENERIC_ERROR_MESSAGE).model_dump(),
            )


def register_error_handlers(app: FastAPI) -> None:
    """Must run before CORSMiddleware is added so the catch-all sits inside it."""
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_middleware(UnhandledErrorMiddleware)
