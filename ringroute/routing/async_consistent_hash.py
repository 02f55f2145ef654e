from __future__ import annotations

import asyncio
from typing import Generic, Hashable, Iterable, Mapping, TypeVar

from ringroute.env import Env
from ringroute.hashing import HashFunction

from .consistent_hash import ConsistentHash
from .ring import Ring
from .ring_info import RingInfo


T = TypeVar("T", bound=Hashable)


class AsyncConsistentHash(Generic[T]):
    """
    ConsistentHash for event loop callers.

    Membership changes are coroutines serialized by an ``asyncio.Lock``,
    so a membership watcher can await them alongside other work. Lookups
    stay synchronous: they read the current snapshot and never wait.
    """

    __slots__ = (
        "_hash",
        "_lock",
    )

    def __init__(
        self,
        hash_function: HashFunction | None = None,
        replicas: int | None = None,
        env: Env | None = None,
    ) -> None:
        self._hash: ConsistentHash[T] = ConsistentHash(
            hash_function=hash_function,
            replicas=replicas,
            env=env,
        )
        self._lock = asyncio.Lock()

    @property
    def replicas(self) -> int:
        return self._hash.replicas

    @property
    def hash_function(self) -> HashFunction:
        return self._hash.hash_function

    async def add_node(self, node: T, weight: int = 1) -> None:
        async with self._lock:
            self._hash.add_node(node, weight=weight)

    async def add_nodes(self, nodes: Iterable[T], weight: int = 1) -> None:
        async with self._lock:
            self._hash.add_nodes(nodes, weight=weight)

    async def add_weighted_nodes(self, nodes: Mapping[T, int]) -> None:
        async with self._lock:
            self._hash.add_weighted_nodes(nodes)

    async def remove_node(self, node: T) -> bool:
        async with self._lock:
            return self._hash.remove_node(node)

    async def remove_nodes(self, nodes: Iterable[T]) -> int:
        async with self._lock:
            return self._hash.remove_nodes(nodes)

    async def clear(self) -> int:
        async with self._lock:
            return self._hash.clear()

    def get_node_for_key(self, key: str | bytes) -> T | None:
        return self._hash.get_node_for_key(key)

    def get_nodes_for_key(self, key: str | bytes, count: int) -> list[T]:
        return self._hash.get_nodes_for_key(key, count)

    def get_backup(self, key: str | bytes) -> T | None:
        return self._hash.get_backup(key)

    def is_owner(self, key: str | bytes, node: T) -> bool:
        return self._hash.is_owner(key, node)

    @property
    def nodes(self) -> list[T]:
        return self._hash.nodes

    @property
    def node_count(self) -> int:
        return self._hash.node_count

    def contains(self, node: T) -> bool:
        return self._hash.contains(node)

    def weight_of(self, node: T) -> int | None:
        return self._hash.weight_of(node)

    def snapshot(self) -> Ring[T]:
        return self._hash.snapshot()

    def get_distribution(self, sample_keys: Iterable[str | bytes]) -> dict[T, int]:
        return self._hash.get_distribution(sample_keys)

    def get_ring_info(self) -> RingInfo[T]:
        return self._hash.get_ring_info()
