"""
schemas/common.py

- Shared schemas reused across the project (pydantic v2)
- Contents:
  1) Error standard: ErrorCode, ErrorDetail, ErrorResponse
  2) Pagination meta: Pagination, MetaInfo, make_meta()
  3) Success envelope: SuccessEnvelope[T]
  4) Service outcome: ServiceResult[T] (value or typed failure, never an exception)
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from math import ceil
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field, ConfigDict


# =========================================================
# 1) Error standard
# =========================================================

class ErrorCode(str, Enum):
    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    NO_GRADES = "NO_GRADES"
    NO_COURSES = "NO_COURSES"
    DATA_ACCESS_ERROR = "DATA_ACCESS_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorDetail(BaseModel):
    """Smallest unit carrying an error code and message"""
    code: str = Field(..., description="Error code (e.g. NOT_FOUND, INVALID_INPUT)")
    message: str = Field(..., description="Human readable message")


class ErrorResponse(BaseModel):
    """
    Standard error body returned by the global error handlers
    (middlewares/error_handler.py)
    """
    success: bool = False
    error: ErrorDetail
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Response creation time (UTC)"
    )

    model_config = ConfigDict(extra="ignore")


# =========================================================
# 2) Pagination request / meta
# =========================================================

class Pagination(BaseModel):
    """
    Paging parameters shared by list endpoints
    - page: starts at 1
    - size: 1~200
    """
    page: int = Field(1, ge=1, description="Current page (1-based)")
    size: int = Field(20, ge=1, le=200, description="Items per page")

    model_config = ConfigDict(extra="ignore")


class MetaInfo(BaseModel):
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    size: int = Field(..., ge=1)
    pages: int = Field(..., ge=1)

    model_config = ConfigDict(extra="ignore")


def make_meta(total: int, page: int, size: int) -> MetaInfo:
    """
    Build paging meta
    - pages is at least 1 even when total is 0
    """
    pages = max(1, ceil(total / max(1, size)))
    return MetaInfo(total=total, page=page, size=size, pages=pages)


# =========================================================
# 3) Success envelope
# =========================================================

T = TypeVar("T")

class SuccessEnvelope(BaseModel, Generic[T]):
    success: bool = True
    data: T
    meta: Optional[MetaInfo] = None
    message: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


# =========================================================
# 4) Service outcome
# =========================================================

class ServiceResult(BaseModel, Generic[T]):
    """
    Outcome of a service call.
    - ok=True: data holds the value, message is a short summary
    - ok=False: error holds the typed failure reason
    """
    ok: bool
    data: Optional[T] = None
    error: Optional[ErrorDetail] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, data: T, message: Optional[str] = None) -> "ServiceResult[T]":
        return cls(ok=True, data=data, message=message)

    @classmethod
    def failure(cls, code: ErrorCode, message: str) -> "ServiceResult[T]":
        return cls(ok=False, error=ErrorDetail(code=code.value, message=message), message=message)
