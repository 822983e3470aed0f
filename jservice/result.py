"""
Query outcomes.

The ``fetch_*`` methods of the client collapse every failure into an empty
list. ``FetchResult`` keeps the reason around for callers that need to tell
"no results" apart from "the request failed".
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, List, Optional, TypeVar, Union

T = TypeVar("T")


class FetchStatus(Enum):
    """How a query ended."""

    OK = "ok"
    REJECTED = "rejected"  # input out of bounds, no request made
    FAILED = "failed"  # transport, decode or response shape failure


@dataclass
class FetchResult(Generic[T]):
    """
    Outcome of a single query.

    Attributes:
        status: How the query ended
        items: Parsed records (empty unless status is OK)
        url: URL requested, None when the input was rejected
        error: Exception or description of the failure
    """

    status: FetchStatus
    items: List[T] = field(default_factory=list)
    url: Optional[str] = None
    error: Optional[Union[Exception, str]] = None

    @property
    def ok(self) -> bool:
        return self.status is FetchStatus.OK

    @classmethod
    def rejected(cls, reason: str) -> "FetchResult[T]":
        return cls(status=FetchStatus.REJECTED, error=reason)

    @classmethod
    def failed(cls, url: str, error: Union[Exception, str]) -> "FetchResult[T]":
        return cls(status=FetchStatus.FAILED, url=url, error=error)
