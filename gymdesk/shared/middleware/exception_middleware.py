# gymdesk/shared/middleware/exception_middleware.py (async version)

"""
Middleware for centralized exception handling.

This module defines middleware that intercepts exceptions and formats
appropriate error responses for the client.
"""

import time
import logging
import traceback
from typing import Callable

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from gymdesk.domain.exceptions import DomainException
from gymdesk.adapters.configuration.config import settings

# Configure logger
logger = logging.getLogger(__name__)

# Domain error code -> HTTP status. Programmer errors surface as 500.
STATUS_BY_CODE = {
    "INVALID_INPUT": status.HTTP_400_BAD_REQUEST,
    "RESOURCE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "RESOURCE_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "RESOURCE_INACTIVE": status.HTTP_400_BAD_REQUEST,
    "TENANT_CONTEXT_MISSING": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "RENEWAL_PRECONDITION_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "DATABASE_OPERATION_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _caller(request: Request) -> str:
    return request.client.host if request.client else "N/A"


class AsyncExceptionMiddleware(BaseHTTPMiddleware):
    """
    Middleware for centralized exception handling.
    Captures specific exceptions and formats the response accordingly.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.time()
        try:
            response = await call_next(request)
            process_time = time.time() - start_time
            response.headers["X-Process-Time"] = str(process_time)
            return response

        except DomainException as exc:
            # Domain exceptions: mapping from pure exception to HTTP code based on 'internal_code'
            status_code = STATUS_BY_CODE.get(exc.internal_code, status.HTTP_400_BAD_REQUEST)
            if status_code >= 500:
                logger.error(
                    f"Internal domain error: {str(exc)} | Code: {exc.internal_code} | "
                    f"Path: {request.url.path}"
                )
                detail = "Internal server error" if settings.ENVIRONMENT == "production" else str(exc)
            else:
                logger.warning(
                    f"Domain exception: {str(exc)} | Code: {exc.internal_code} | "
                    f"Path: {request.url.path}"
                )
                detail = str(exc)

            return JSONResponse(
                status_code=status_code,
                content={
                    "detail": detail,
                    "code": exc.internal_code,
                    "errors": exc.details or {}
                }
            )

        except SQLAlchemyError as exc:
            # Raw SQLAlchemy errors that escaped the repositories (e.g. pagination queries)
            error_message = "Internal database error" if settings.ENVIRONMENT == "production" else str(exc)
            logger.error(
                f"Database error: Type={type(exc).__name__} | "
                f"Path: {request.url.path} | Client: {_caller(request)}"
            )

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "detail": error_message,
                    "code": "DATABASE_ERROR"
                }
            )

        except Exception as exc:
            # Unhandled exceptions
            if settings.ENVIRONMENT == "production":
                error_message = "Internal server error"
                logger.exception(
                    f"Unhandled exception: Type={type(exc).__name__} | "
                    f"Path: {request.url.path} | Client: {_caller(request)}"
                )
            else:
                error_message = str(exc)
                logger.exception(
                    f"Unhandled exception: {str(exc)} | "
                    f"Path: {request.url.path} | Client: {_caller(request)}\n"
                    f"Traceback: {traceback.format_exc()}"
                )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "detail": error_message,
                    "code": "INTERNAL_SERVER_ERROR"
                }
            )
