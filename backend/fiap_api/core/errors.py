"""
Application errors and their HTTP translation

Services raise these typed errors; the handlers registered by
``register_exception_handlers`` turn them into JSON responses whose messages
are rendered in the request culture:

    {"status": "error", "messages": ["O campo 'name' é obrigatório."]}
"""
import logging
from typing import Any, Dict, Iterable, List, NamedTuple, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from fiap_api.core.localization import get_request_culture, translate

logger = logging.getLogger(__name__)


class ErrorDetail(NamedTuple):
    """A catalog message key plus its format parameters"""
    key: str
    params: Dict[str, Any] = {}


class ApiError(Exception):
    """Base class for errors that map to an HTTP status"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, details: Iterable[ErrorDetail]):
        self.details: List[ErrorDetail] = list(details)
        super().__init__("; ".join(translate(d.key, "en-US", **d.params) for d in self.details))

    def messages(self, culture: Optional[str] = None) -> List[str]:
        return [translate(d.key, culture, **d.params) for d in self.details]


class ValidationError(ApiError):
    """Request failed field validation (one detail per offending field)"""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: Any):
        super().__init__([ErrorDetail("not_found", {"entity": entity, "id": entity_id})])


class ConflictError(ApiError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, key: str, **params):
        super().__init__([ErrorDetail(key, params)])


class PaymentGatewayError(ApiError):
    """The payment provider rejected the call or could not be reached"""

    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, reason: str, key: str = "gateway_error"):
        self.reason = reason
        super().__init__([ErrorDetail(key, {"reason": reason})])


def error_response(request: Request, status_code: int, messages: List[str]) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "messages": messages},
    )


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    culture = get_request_culture(request)
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc}")
    return error_response(request, exc.status_code, exc.messages(culture))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Re-shape FastAPI's automatic 422 into the same 400 payload the services
    produce, so clients see one validation format.
    """
    culture = get_request_culture(request)
    messages = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "body"
        key = "required" if error.get("type") == "missing" else "invalid_value"
        messages.append(translate(key, culture, field=field))
    return error_response(request, status.HTTP_400_BAD_REQUEST, messages)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the handlers for every ApiError subclass and request parsing errors"""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)


class CustomExceptionMiddleware(BaseHTTPMiddleware):
    """
    Catch-all for unhandled exceptions: logs the traceback and answers with a
    JSON 500 instead of the server's plain-text error page.

    Only installed when ENABLE_EXCEPTION_MIDDLEWARE is true.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception(f"Unhandled error on {request.method} {request.url.path}")
            return error_response(
                request,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                [translate("internal_error", get_request_culture(request))],
            )
