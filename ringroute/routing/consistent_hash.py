"""
Consistent Hash - Thread-safe facade over an immutable Ring.

Maps keys to nodes with stable assignment that minimizes remapping when
nodes join or leave. Adding or removing a node only moves the keys that
fall in that node's ring regions.

Concurrency model:
- The facade holds a reference to the current Ring snapshot
- Lookups read that reference once and walk the snapshot without locks,
  so readers never wait on writers or see a half-applied change
- Membership changes serialize on a per-instance lock, derive a new Ring
  and publish it with a single assignment

Example usage:
    ring = ConsistentHash()

    ring.add_node("cache-1:11211")
    ring.add_node("cache-2:11211")
    ring.add_node("cache-3:11211", weight=2)

    owner = ring.get_node_for_key("user:12345")

    # Ordered, distinct failover candidates
    candidates = ring.get_nodes_for_key("user:12345", count=2)
"""

from __future__ import annotations

import threading
from typing import Generic, Hashable, Iterable, Mapping, TypeVar

from ringroute.env import Env, load_env
from ringroute.errors import InvalidReplicaCountError, InvalidWeightError
from ringroute.hashing import HashFunction, resolve_hash_function
from ringroute.logging import Logger
from ringroute.logging.ring_logging_models import (
    RingCleared,
    RingHashFallback,
    RingNodeAdded,
    RingNodeRemoved,
)

from .ring import Ring
from .ring_info import RingInfo


T = TypeVar("T", bound=Hashable)


class ConsistentHash(Generic[T]):
    __slots__ = (
        "_ring",
        "_replicas",
        "_write_lock",
        "_logger",
    )

    def __init__(
        self,
        hash_function: HashFunction | None = None,
        replicas: int | None = None,
        env: Env | None = None,
    ) -> None:
        """
        Initialize an empty ConsistentHash.

        Args:
            hash_function: Places keys and virtual points. When None, the
                           built-in named by RINGROUTE_HASH_FUNCTION is used.
            replicas: Virtual points per node at weight 1. Defaults to
                      RINGROUTE_VIRTUAL_NODES (160).
            env: Configuration. When None it is loaded on every call from
                 the process environment and a .env file in the current
                 working directory. Pass an Env to skip that lookup.

        Raises:
            InvalidHashFunctionError: hash_function is not a HashFunction.
            InvalidReplicaCountError: replicas is less than 1.
            ValueError: env is None and a RINGROUTE_* variable or .env
                        entry holds an invalid value.
        """
        if env is None:
            env = load_env(Env)

        if replicas is None:
            replicas = env.RINGROUTE_VIRTUAL_NODES

        if replicas < 1:
            raise InvalidReplicaCountError(replicas)

        self._replicas = replicas
        self._write_lock = threading.Lock()

        self._logger = Logger()

        resolved = resolve_hash_function(
            hash_function,
            default=env.RINGROUTE_HASH_FUNCTION,
        )

        if hash_function is None:
            self._logger.log(
                RingHashFallback(
                    message=f"No hash function given, using {resolved.name}",
                    hash_function=resolved.name,
                ),
                name="ringroute",
            )

        self._ring: Ring[T] = Ring(resolved)

    @property
    def replicas(self) -> int:
        return self._replicas

    @property
    def hash_function(self) -> HashFunction:
        return self._ring.hash_function

    # =========================================================================
    # Node Management
    # =========================================================================

    def add_node(self, node: T, weight: int = 1) -> None:
        """
        Register a node with ``replicas * weight`` virtual points.

        Adding a node already present with the same weight is a no-op;
        a different weight replaces its points.

        Raises:
            InvalidWeightError: weight is less than 1.
            NodeEncodingError: the node cannot be encoded for hashing.
        """
        self.add_weighted_nodes({node: weight})

    def add_nodes(self, nodes: Iterable[T], weight: int = 1) -> None:
        """Register many nodes with the same weight, publishing one snapshot."""
        self.add_weighted_nodes({node: weight for node in nodes})

    def add_weighted_nodes(self, nodes: Mapping[T, int]) -> None:
        """Register a node -> weight mapping, publishing one snapshot."""
        weighted = list(nodes.items())

        for _, weight in weighted:
            if weight < 1:
                raise InvalidWeightError(weight)

        with self._write_lock:
            current = self._ring
            added = [
                (node, weight)
                for node, weight in weighted
                if current.count_for(node) != weight * self._replicas
            ]

            if not added:
                return

            updated = current.add_many(
                (node, weight * self._replicas) for node, weight in added
            )
            self._ring = updated

        for node, weight in added:
            self._logger.log(
                RingNodeAdded(
                    message=f"Added node {node} to ring",
                    node=str(node),
                    weight=weight,
                    points=len(updated.points_for(node)),
                    ring_points=updated.point_count,
                ),
                name="ringroute",
            )

    def remove_node(self, node: T) -> bool:
        """
        Unregister a node and its virtual points.

        Returns:
            True if the node was present. Removing an absent node is a no-op.
        """
        return self.remove_nodes([node]) == 1

    def remove_nodes(self, nodes: Iterable[T]) -> int:
        """Unregister many nodes in one publish. Returns how many were present."""
        nodes = list(nodes)

        with self._write_lock:
            current = self._ring
            removed = {
                node: len(current.points_for(node))
                for node in nodes
                if current.contains(node)
            }

            if not removed:
                return 0

            updated = current.remove_many(removed)
            self._ring = updated

        for node, points in removed.items():
            self._logger.log(
                RingNodeRemoved(
                    message=f"Removed node {node} from ring",
                    node=str(node),
                    points=points,
                    ring_points=updated.point_count,
                ),
                name="ringroute",
            )

        return len(removed)

    def clear(self) -> int:
        """Remove all nodes. Returns the number of nodes removed."""
        with self._write_lock:
            count = self._ring.node_count
            self._ring = Ring(self._ring.hash_function)

        if count:
            self._logger.log(
                RingCleared(
                    message=f"Cleared {count} nodes from ring",
                    nodes=count,
                ),
                name="ringroute",
            )

        return count

    # =========================================================================
    # Lookup Operations
    # =========================================================================

    def get_node_for_key(self, key: str | bytes) -> T | None:
        """
        Get the node owning ``key``'s ring position.

        Returns:
            The owning node, or None if the ring is empty.
        """
        ring = self._ring

        point = ring.successor(ring.position_for(key))
        if point is None:
            return None

        return point.node

    def get_nodes_for_key(self, key: str | bytes, count: int) -> list[T]:
        """
        Get up to ``count`` distinct nodes for ``key`` in ring-walk order.

        The first node is always ``get_node_for_key(key)``. Fewer than
        ``count`` nodes are returned when the ring has fewer, and an empty
        list when it has none.
        """
        ring = self._ring

        return ring.distinct_nodes_from(ring.position_for(key), count)

    def get_backup(self, key: str | bytes) -> T | None:
        """
        Get the first node after the owner of ``key``, or None when the ring
        has fewer than two nodes.
        """
        nodes = self.get_nodes_for_key(key, 2)
        if len(nodes) < 2:
            return None

        return nodes[1]

    def is_owner(self, key: str | bytes, node: T) -> bool:
        owner = self.get_node_for_key(key)
        return owner is not None and owner == node

    # =========================================================================
    # Membership
    # =========================================================================

    @property
    def nodes(self) -> list[T]:
        return self._ring.nodes

    @property
    def node_count(self) -> int:
        return self._ring.node_count

    def contains(self, node: T) -> bool:
        return self._ring.contains(node)

    def weight_of(self, node: T) -> int | None:
        count = self._ring.count_for(node)
        if count is None:
            return None

        return count // self._replicas

    def snapshot(self) -> Ring[T]:
        """The current immutable ring. Safe to keep and walk from any thread."""
        return self._ring

    def __contains__(self, node: object) -> bool:
        return self._ring.contains(node)

    def __len__(self) -> int:
        return self._ring.node_count

    # =========================================================================
    # Statistics
    # =========================================================================

    def get_distribution(self, sample_keys: Iterable[str | bytes]) -> dict[T, int]:
        """
        Count how many of ``sample_keys`` each node owns.

        All keys are resolved against one snapshot, so concurrent changes
        do not skew the counts.
        """
        ring = self._ring
        distribution: dict[T, int] = {node: 0 for node in ring.nodes}

        for key in sample_keys:
            point = ring.successor(ring.position_for(key))
            if point is not None:
                distribution[point.node] += 1

        return distribution

    def get_ring_info(self) -> RingInfo[T]:
        ring = self._ring

        return RingInfo(
            node_count=ring.node_count,
            virtual_node_count=ring.point_count,
            replicas_per_node=self._replicas,
            hash_function=ring.hash_function.name,
            weights={
                node: ring.count_for(node) // self._replicas for node in ring.nodes
            },
        )

