"""
Ring - Immutable snapshot of virtual point placement.

A Ring maps sorted hash positions to the physical nodes that own them.
Every node contributes a fixed number of virtual points, point ``i``
placed at ``hash_point(node, i)``, which smooths out the skew a single
point per node would give.

Rings are never mutated in place. ``add_points``, ``add_many``,
``remove_points`` and ``remove_many`` return a new Ring (or the same
instance when nothing changes), so any number of readers may walk a
Ring while a writer derives the next one. A derived ring starts from
slice copies of the position and owner lists and then inserts or
deletes only the points that changed.

Collisions:
    Several nodes may hash a virtual point to the same position. Every
    claim is retained, ordered by the claimant's encoded node bytes, and
    the smallest claimant owns the position. The result depends only on
    membership, never on insertion order, so independent processes with
    the same members agree. Removing the owner hands the position to the
    next claimant. A node colliding with itself keeps a single point.
"""

from __future__ import annotations

import bisect
from operator import itemgetter
from typing import Generic, Hashable, Iterable, Iterator, TypeVar

from ringroute.errors import InvalidReplicaCountError
from ringroute.hashing import HashFunction, encode_node

from .virtual_point import VirtualPoint


T = TypeVar("T", bound=Hashable)

Claim = tuple[bytes, T]

# Above this many changed positions a derived ring is rebuilt with one
# sort instead of per-point list inserts and deletes.
SPLICE_LIMIT = 1024


def _sorted_claims(claims: Iterable[Claim]) -> tuple[Claim, ...]:
    return tuple(sorted(claims, key=itemgetter(0)))


class Ring(Generic[T]):
    __slots__ = (
        "_hash_function",
        "_positions",
        "_owners",
        "_collisions",
        "_encodings",
        "_node_points",
        "_point_counts",
    )

    def __init__(self, hash_function: HashFunction) -> None:
        self._hash_function = hash_function

        # Sorted, unique positions and the owning node of each
        self._positions: list[int] = []
        self._owners: list[T] = []

        # position -> every (encoded node, node) claiming it, owner first.
        # Only positions with two or more claimants are kept.
        self._collisions: dict[int, tuple[Claim, ...]] = {}

        self._encodings: dict[T, bytes] = {}

        # node -> distinct positions it claims
        self._node_points: dict[T, tuple[int, ...]] = {}

        # node -> requested virtual point count
        self._point_counts: dict[T, int] = {}

    @property
    def hash_function(self) -> HashFunction:
        return self._hash_function

    # =========================================================================
    # Derivation
    # =========================================================================

    def add_points(self, node: T, count: int) -> Ring[T]:
        """
        Return a ring with ``count`` virtual points for ``node``.

        Re-adding a node with the same count returns this ring unchanged.
        A different count replaces the node's existing points.
        """
        return self.add_many([(node, count)])

    def add_many(self, nodes: Iterable[tuple[T, int]]) -> Ring[T]:
        """
        Bulk form of ``add_points``, deriving a single new ring.

        When a node appears more than once, its last count wins.
        """
        requested: dict[T, int] = {}
        for node, count in nodes:
            if count < 1:
                raise InvalidReplicaCountError(count)

            requested[node] = count

        changed = {
            node: count
            for node, count in requested.items()
            if self._point_counts.get(node) != count
        }

        if not changed:
            return self

        replaced = [node for node in changed if node in self._point_counts]

        return self.remove_many(replaced)._with_nodes(changed)

    def remove_points(self, node: T) -> Ring[T]:
        """Return a ring without ``node``'s points, or this ring if absent."""
        return self.remove_many([node])

    def remove_many(self, nodes: Iterable[T]) -> Ring[T]:
        removed = [node for node in dict.fromkeys(nodes) if node in self._node_points]
        if not removed:
            return self

        ring = self._copy()
        positions = ring._positions
        owners = ring._owners
        collisions = ring._collisions

        dropped: set[int] = set()

        for node in removed:
            points = ring._node_points.pop(node)
            del ring._point_counts[node]
            del ring._encodings[node]

            for position in points:
                claims = collisions.get(position)
                if claims is None:
                    dropped.add(position)
                    continue

                remaining = tuple(claim for claim in claims if claim[1] != node)
                if len(remaining) > 1:
                    collisions[position] = remaining

                else:
                    del collisions[position]

                owners[bisect.bisect_left(positions, position)] = remaining[0][1]

        if len(dropped) > SPLICE_LIMIT:
            kept = [
                (position, owner)
                for position, owner in zip(positions, owners)
                if position not in dropped
            ]
            ring._positions = [position for position, _ in kept]
            ring._owners = [owner for _, owner in kept]

        else:
            for position in dropped:
                index = bisect.bisect_left(positions, position)
                del positions[index]
                del owners[index]

        return ring

    def _with_nodes(self, nodes: dict[T, int]) -> Ring[T]:
        ring = self._copy()
        positions = ring._positions
        owners = ring._owners
        collisions = ring._collisions
        encodings = ring._encodings

        # Positions not yet on the ring, with their claims
        fresh: dict[int, tuple[Claim, ...]] = {}

        for node, count in nodes.items():
            encoded = encode_node(node)
            claim: Claim = (encoded, node)
            encodings[node] = encoded

            points = tuple(
                dict.fromkeys(
                    self._hash_function.hash_encoded_point(encoded, replica_index)
                    for replica_index in range(count)
                )
            )

            for position in points:
                index = bisect.bisect_left(positions, position)

                if index < len(positions) and positions[index] == position:
                    owner = owners[index]
                    claims = collisions.get(position, ((encodings[owner], owner),))
                    claims = _sorted_claims(claims + (claim,))

                    collisions[position] = claims
                    owners[index] = claims[0][1]

                else:
                    fresh[position] = _sorted_claims(fresh.get(position, ()) + (claim,))

            ring._node_points[node] = points
            ring._point_counts[node] = count

        for position, claims in fresh.items():
            if len(claims) > 1:
                collisions[position] = claims

        if len(fresh) > SPLICE_LIMIT:
            merged = sorted(
                [
                    *zip(positions, owners),
                    *((position, claims[0][1]) for position, claims in fresh.items()),
                ],
                key=itemgetter(0),
            )
            ring._positions = [position for position, _ in merged]
            ring._owners = [owner for _, owner in merged]

        else:
            for position, claims in fresh.items():
                index = bisect.bisect_left(positions, position)
                positions.insert(index, position)
                owners.insert(index, claims[0][1])

        return ring

    def _copy(self) -> Ring[T]:
        ring: Ring[T] = Ring(self._hash_function)
        ring._positions = self._positions[:]
        ring._owners = self._owners[:]
        ring._collisions = dict(self._collisions)
        ring._encodings = dict(self._encodings)
        ring._node_points = dict(self._node_points)
        ring._point_counts = dict(self._point_counts)

        return ring

    # =========================================================================
    # Lookup
    # =========================================================================

    def position_for(self, key: str | bytes) -> int:
        return self._hash_function.hash_key(key)

    def successor(self, position: int) -> VirtualPoint[T] | None:
        """
        Return the first point at or after ``position``, wrapping to the
        smallest position past the end. None when the ring has no points.
        """
        if not self._positions:
            return None

        index = self._successor_index(position)

        return VirtualPoint(
            position=self._positions[index],
            node=self._owners[index],
        )

    def distinct_nodes_from(self, position: int, limit: int) -> list[T]:
        """
        Walk clockwise from ``successor(position)`` collecting distinct
        nodes in encounter order.

        Each point is visited at most once, wraparound included, so the
        walk stops after ``limit`` nodes or a full turn.
        """
        if limit <= 0 or not self._positions:
            return []

        limit = min(limit, len(self._node_points))

        result: list[T] = []
        seen: set[T] = set()

        start = self._successor_index(position)
        ring_size = len(self._positions)

        for offset in range(ring_size):
            node = self._owners[(start + offset) % ring_size]

            if node not in seen:
                seen.add(node)
                result.append(node)

                if len(result) >= limit:
                    break

        return result

    def _successor_index(self, position: int) -> int:
        index = bisect.bisect_left(self._positions, position)

        # Wrap around if we're past the end
        if index >= len(self._positions):
            index = 0

        return index

    # =========================================================================
    # Introspection
    # =========================================================================

    @property
    def nodes(self) -> list[T]:
        return list(self._node_points)

    @property
    def node_count(self) -> int:
        return len(self._node_points)

    @property
    def point_count(self) -> int:
        return len(self._positions)

    def contains(self, node: T) -> bool:
        return node in self._node_points

    def points_for(self, node: T) -> tuple[int, ...]:
        return self._node_points.get(node, ())

    def count_for(self, node: T) -> int | None:
        """Requested virtual point count for ``node``, None if absent."""
        return self._point_counts.get(node)

    def claimants(self, position: int) -> list[T]:
        """Every node claiming ``position``, owner first."""
        claims = self._collisions.get(position)
        if claims is not None:
            return [claim[1] for claim in claims]

        index = bisect.bisect_left(self._positions, position)
        if index < len(self._positions) and self._positions[index] == position:
            return [self._owners[index]]

        return []

    def __contains__(self, node: object) -> bool:
        return node in self._node_points

    def __len__(self) -> int:
        return len(self._positions)

    def __iter__(self) -> Iterator[VirtualPoint[T]]:
        for position, node in zip(self._positions, self._owners):
            yield VirtualPoint(position=position, node=node)

    def __repr__(self) -> str:
        return (
            f"Ring(nodes={len(self._node_points)}, points={len(self._positions)}, "
            f"hash_function={self._hash_function.name!r})"
        )
