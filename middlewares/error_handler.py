import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from schemas.common import ErrorCode
from services.errors import DataAccessError
from utils.responses import error_response

logger = logging.getLogger(__name__)


def add_error_handlers(app: FastAPI):
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
        )
        return error_response(400, ErrorCode.INVALID_INPUT.value, f"Invalid input data: {details}")

    # constraint violations -> 409
    @app.exception_handler(IntegrityError)
    async def integrity_exception_handler(request: Request, exc: IntegrityError):
        logger.warning("Integrity violation on %s %s: %s", request.method, request.url.path, exc.orig)
        return error_response(409, ErrorCode.CONFLICT.value, "The change conflicts with existing records")

    @app.exception_handler(DataAccessError)
    @app.exception_handler(SQLAlchemyError)
    async def data_access_exception_handler(request: Request, exc: Exception):
        logger.exception("Data access failure on %s %s", request.method, request.url.path)
        return error_response(503, ErrorCode.DATA_ACCESS_ERROR.value, "Record store unavailable")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, ErrorCode.INTERNAL_ERROR.value, str(exc))
