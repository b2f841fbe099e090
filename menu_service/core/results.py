"""
Lookup results: a value was found, or it was not.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Generic, Optional, TypeVar, Union
from uuid import UUID

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    entity: str
    id: Optional[UUID] = None

    @property
    def message(self) -> str:
        if self.id is None:
            return f"{self.entity.replace('_', ' ').capitalize()} not found"
        return f"{self.entity.replace('_', ' ').capitalize()} {self.id} not found"


Lookup = Union[Found[T], NotFound]


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the naive DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
