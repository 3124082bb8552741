"""
Explicit outcome types for network calls.
Callers branch on Success / Failure instead of catching exceptions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")


class FailureKind(str, Enum):
    """Why a call did not produce a value."""
    TRANSPORT = "transport"                    # no connectivity, timeout, unreachable
    HTTP_STATUS = "http_status"                # non-2xx response
    MALFORMED_RESPONSE = "malformed_response"  # body does not match the expected shape


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return False


ApiResult = Union[Success[T], Failure]
