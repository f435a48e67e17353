from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from app.core.exceptions import CoachingError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, path: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "message": message,
                "status_code": status_code,
                "path": path,
            }
        },
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except StarletteHTTPException as e:
            return _error_response(e.status_code, e.detail, str(request.url.path))
        except CoachingError as e:
            logger.warning(
                f"{type(e).__name__}: {e.message}",
                extra={"extra_fields": {"path": str(request.url.path)}},
            )
            return _error_response(
                status.HTTP_422_UNPROCESSABLE_ENTITY, e.message, str(request.url.path)
            )
        except Exception as e:
            logger.error(
                f"Unhandled exception: {e}",
                exc_info=True,
                extra={
                    "extra_fields": {
                        "path": str(request.url.path),
                        "method": request.method,
                    }
                },
            )
            
            error_detail = str(e) if request.app.debug else "Internal server error"
            
            return _error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR, error_detail, str(request.url.path)
            )
