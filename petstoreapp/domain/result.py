"""
Service results

Downstream calls return either Success(value) or Failure(message, kind);
turning a failure into something displayable is the caller's business.
"""
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")

TRANSPORT = "transport"
CONFIGURATION = "configuration"


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    message: str
    kind: str = TRANSPORT

    @property
    def ok(self) -> bool:
        return False


ServiceResult = Union[Success[T], Failure]
