from dataclasses import dataclass, field
from typing import Generic, Hashable, TypeVar


T = TypeVar("T", bound=Hashable)


@dataclass(slots=True)
class RingInfo(Generic[T]):
    node_count: int
    virtual_node_count: int
    replicas_per_node: int
    hash_function: str
    weights: dict[T, int] = field(default_factory=dict)
