"""
Built-in hash functions backed by hashlib digests.

Each truncates its digest to the first 8 bytes, read big-endian, giving
positions in ``[0, 2**64)``.
"""

import hashlib

from .hash_function import HashFunction


RING_BITS = 64
RING_SIZE = 2**RING_BITS


class MD5Hash(HashFunction):
    """MD5 truncated to 64 bits. Chosen for speed and spread, not security."""

    name = "md5"

    def digest(self, data: bytes) -> int:
        digest = hashlib.md5(data, usedforsecurity=False).digest()
        return int.from_bytes(digest[:8], byteorder="big")


class SHA256Hash(HashFunction):
    name = "sha256"

    def digest(self, data: bytes) -> int:
        digest = hashlib.sha256(data).digest()
        return int.from_bytes(digest[:8], byteorder="big")


class Blake2bHash(HashFunction):
    name = "blake2b"

    def digest(self, data: bytes) -> int:
        digest = hashlib.blake2b(data, digest_size=8).digest()
        return int.from_bytes(digest, byteorder="big")
