"""Uniform ``{success, data?, error?}`` envelope returned by every service call."""
from __future__ import annotations

from typing import Any, Callable, Generic, Optional, TypeVar

from loguru import logger
from pydantic import BaseModel, Field

from roster.core.errors import RosterError

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    code: Optional[str] = Field(default=None, exclude=True)
    status_code: int = Field(default=200, exclude=True)

    @classmethod
    def ok(cls, data: Any = None) -> "ApiResponse":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, exc: RosterError) -> "ApiResponse":
        return cls(success=False, error=exc.message, code=exc.code, status_code=exc.status_code)

    def to_payload(self) -> dict:
        """JSON-ready dict; ``data``/``error`` only appear when set."""
        fields = {"success"}
        if self.data is not None:
            fields.add("data")
        if self.error is not None:
            fields.add("error")
        return self.model_dump(mode="json", by_alias=True, include=fields)


def guarded(operation: str, action: Callable[[], Any]) -> ApiResponse:
    try:
        return ApiResponse.ok(action())
    except RosterError as exc:
        logger.warning("{} failed: [{}] {}", operation, exc.code, exc.message)
        return ApiResponse.fail(exc)
    except Exception as exc:  # noqa: BLE001
        logger.exception("{} failed unexpectedly", operation)
        return ApiResponse(
            success=False,
            error=str(exc) or type(exc).__name__,
            code="internal",
            status_code=500,
        )
