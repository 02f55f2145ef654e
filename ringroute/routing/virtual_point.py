from dataclasses import dataclass
from typing import Generic, Hashable, TypeVar


T = TypeVar("T", bound=Hashable)


@dataclass(frozen=True, slots=True)
class VirtualPoint(Generic[T]):
    """A position on the ring and the physical node owning it."""

    position: int
    node: T
