"""
Error taxonomy and the app-wide exception handlers
"""
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from catalog_api.utils.logger import get_logger

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


class APIError(Exception):
    """Base class for errors that map onto a client-facing response"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message, **self.extra}


class RequestValidationFailed(APIError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(APIError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(APIError):
    status_code = status.HTTP_409_CONFLICT


class StorageError(APIError):
    def __init__(self, message: str = INTERNAL_ERROR_MESSAGE, **extra: Any):
        super().__init__(message, **extra)


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the driver reports a unique/primary key constraint failure"""
    orig = getattr(exc, "orig", None)
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate == "23505":
        return True
    return "unique" in str(orig or exc).lower()


@contextmanager
def translate_storage_errors(
    operation: str,
    conflict_message: Optional[str] = None,
) -> Iterator[None]:
    """
    Classify data-layer failures raised inside the block.

    Unique violations become ConflictError when ``conflict_message`` is given,
    other integrity failures become RequestValidationFailed and everything
    else from SQLAlchemy becomes a generic StorageError.
    """
    try:
        yield
    except IntegrityError as exc:
        if conflict_message and is_unique_violation(exc):
            logger.info(f"{operation}: rejected duplicate ({exc.orig})")
            raise ConflictError(conflict_message) from exc
        logger.warning(f"{operation}: integrity error ({exc.orig})")
        raise RequestValidationFailed("Invalid data for this resource") from exc
    except SQLAlchemyError as exc:
        logger.error(f"{operation} failed: {exc}", exc_info=True)
        raise StorageError() from exc


def _format_validation_errors(exc: RequestValidationError) -> list:
    details = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        details.append({
            "field": ".".join(loc) or None,
            "message": error.get("msg"),
            "type": error.get("type"),
        })
    return details


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path}: invalid request")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "error": "Invalid request",
            "details": jsonable_encoder(_format_validation_errors(exc)),
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": INTERNAL_ERROR_MESSAGE},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
