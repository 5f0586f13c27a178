"""
API Result - Uniform outcome of every gateway call.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ApiResult:
    """
    Either success with the server payload, or failure with a message.

    Expected failures (no credential, transport errors, server errors) are
    returned as ApiResult.fail(...) rather than raised.
    """
    success: bool
    data: Any = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None) -> "ApiResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, message: str) -> "ApiResult":
        return cls(success=False, message=message)

    def __bool__(self) -> bool:
        return self.success
