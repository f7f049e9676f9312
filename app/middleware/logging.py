import logging
import time
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
QUIET_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Stamps every request with an id and logs method, path, status and duration.

    Query strings are never logged: the OAuth callback carries codes and
    session tokens there.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        path = request.url.path
        context = {"request_id": request_id, "method": request.method, "path": path}

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            context["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
            logger.error(f"[{request_id}] {request.method} {path} - ERROR: {type(exc).__name__}", extra=context)
            raise

        context["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
        context["status_code"] = response.status_code

        if path in QUIET_PATHS:
            level = logging.DEBUG
        elif response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        logger.log(level, f"[{request_id}] {request.method} {path} - {response.status_code} ({context['duration_ms']}ms)", extra=context)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
