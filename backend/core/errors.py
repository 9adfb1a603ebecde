"""Error kinds raised by the staff directory routes.

Each error carries the HTTP status and the message sent back to the client.
They are rendered as ``{"error": message}`` by the handler installed with
:func:`register_exception_handlers`.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class StaffServiceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = 'Internal server error'

    def __init__(self, message: str | None = None, status_code: int | None = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class DatabaseError(StaffServiceError):
    message = 'Database error'


class AuthenticationError(StaffServiceError):
    message = 'Authentication error'


class InvalidCredentials(StaffServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = 'Invalid credentials'


class DuplicateEmail(StaffServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = 'Email already exists'


class UploadRejected(StaffServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = 'Upload rejected'


class InternalError(StaffServiceError):
    pass


def error_response(exc: StaffServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={'error': exc.message})


def register_exception_handlers(app) -> None:
    @app.exception_handler(StaffServiceError)
    async def staff_service_error_handler(request: Request, exc: StaffServiceError):
        logger.info('%s %s failed with %s: %s', request.method, request.url.path, exc.status_code, exc.message)
        return error_response(exc)
