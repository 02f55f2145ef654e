"""
Hash function contract shared by key lookups and virtual point placement.

A hash function maps bytes to an unsigned integer position on the ring.
Keys are hashed directly, while the virtual points of a node are hashed
from the node's stable byte encoding joined with the replica index:

    <encoded node>:<replica index>

Implementations must be deterministic across process restarts, so any
seeded or per-process hash (such as the builtin ``hash()``) is unsuitable.
"""

from __future__ import annotations

import abc
from typing import Hashable

import msgspec

from ringroute.errors import NodeEncodingError


def encode_node(node: Hashable) -> bytes:
    """
    Convert a node to the bytes its virtual points are hashed from.

    Strings are UTF-8 encoded as-is. Every other node is prefixed with a
    NUL byte and a type tag, so unequal nodes never share an encoding:

        \\x00b:<raw bytes>               bytes
        \\x00s:<utf-8>                   strings starting with NUL
        \\x00<module.qualname>:<json>    everything else

    The JSON is msgspec's deterministic encoding, which covers ints,
    tuples, frozensets, dataclasses and msgspec Structs.
    """
    if isinstance(node, str):
        encoded = node.encode("utf-8")
        if encoded.startswith(b"\x00"):
            return b"\x00s:" + encoded

        return encoded

    if isinstance(node, bytes):
        return b"\x00b:" + node

    node_type = type(node)
    tag = f"{node_type.__module__}.{node_type.__qualname__}".encode("utf-8")

    try:
        return b"\x00" + tag + b":" + msgspec.json.encode(node, order="deterministic")

    except (TypeError, msgspec.EncodeError) as err:
        raise NodeEncodingError(node, str(err)) from err


def encode_key(key: str | bytes) -> bytes:
    if isinstance(key, bytes):
        return key

    return key.encode("utf-8")


class HashFunction(abc.ABC):
    """
    Base class for ring hash functions.

    Subclasses implement ``digest``; placement of keys and virtual
    points is shared.
    """

    name: str = "custom"

    @abc.abstractmethod
    def digest(self, data: bytes) -> int:
        """Return an unsigned integer of at least 64 bits for ``data``."""
        ...

    def hash_key(self, key: str | bytes) -> int:
        return self.digest(encode_key(key))

    def hash_point(self, node: Hashable, replica_index: int) -> int:
        return self.hash_encoded_point(encode_node(node), replica_index)

    def hash_encoded_point(self, encoded_node: bytes, replica_index: int) -> int:
        return self.digest(encoded_node + b":" + str(replica_index).encode("ascii"))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
