from typing import Any

from fastapi.responses import JSONResponse

from schemas.common import ErrorCode, ErrorDetail, ErrorResponse, ServiceResult, SuccessEnvelope

# failure code -> HTTP status
STATUS_BY_CODE = {
    ErrorCode.INVALID_INPUT.value: 400,
    ErrorCode.NO_GRADES.value: 400,
    ErrorCode.NO_COURSES.value: 400,
    ErrorCode.NOT_FOUND.value: 404,
    ErrorCode.CONFLICT.value: 409,
    ErrorCode.DATA_ACCESS_ERROR.value: 503,
}


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    """The one error body of the API (ErrorResponse), used by routers and global handlers."""
    body = ErrorResponse(error=ErrorDetail(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def failure_response(result: ServiceResult) -> JSONResponse:
    status_code = STATUS_BY_CODE.get(result.error.code, 500)
    return error_response(status_code, result.error.code, result.error.message)


def _jsonable(payload: Any) -> Any:
    if hasattr(payload, "model_dump"):
        return payload.model_dump(mode="json")
    if isinstance(payload, list):
        return [_jsonable(p) for p in payload]
    return payload


def envelope(result: ServiceResult, data=None):
    """Standard {"success", "data", "message"} body, or the failure response."""
    if not result.ok:
        return failure_response(result)
    body = SuccessEnvelope[Any](
        data=_jsonable(result.data if data is None else data),
        message=result.message,
    )
    return body.model_dump(mode="json", exclude={"meta"})
