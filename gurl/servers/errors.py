"""Uniform conversion of handler failures into HTTP responses.

Every failure raised by a handler is turned into an ApiError by
`to_api_error()` and rendered by one exception handler:

    ClientError        -> 400, short message
    DAOError           -> 500, 'Db error' (logged with traceback)
    anything else      -> 500, 'Internal Server Error' (logged with traceback)

Only server-fault (5xx) errors are logged. Internal details never reach the
response body.

Not-found is not an error: handlers return an empty 404 response directly.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from gurl.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from gurl.dao.exceptions import DAOError
from gurl.exceptions import ClientError, GurlError


logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Handler failure carrying the HTTP status and client-facing message."""

    def __init__(self, status_code: int, message: str, error: BaseException | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.error = error

    @property
    def error_code(self) -> str:
        return getattr(self.error, 'error_code', UNKNOWN_INTERNAL_SERVER_ERROR)


def to_api_error(exc: BaseException) -> ApiError:
    if isinstance(exc, ClientError):
        return ApiError(400, str(exc), exc)
    if isinstance(exc, DAOError):
        return ApiError(500, 'Db error', exc)
    return ApiError(500, 'Internal Server Error', exc)


async def api_error_handler(request: Request, exc: Exception) -> PlainTextResponse:
    error = to_api_error(exc)
    if error.status_code >= 500:
        logger.error(
            'Request failed. Responding with %d.',
            error.status_code,
            exc_info=error.error,
            extra={'method': request.method, 'path': request.url.path, 'error_code': error.error_code},
        )
    return PlainTextResponse(error.message, status_code=error.status_code)


def register_error_handlers(app: FastAPI) -> None:
    for exc_class in (GurlError, DAOError, Exception):
        app.add_exception_handler(exc_class, api_error_handler)
