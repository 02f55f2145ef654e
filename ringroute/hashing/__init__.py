"""Hash functions placing keys and virtual points on the ring."""

from ringroute.hashing.hash_function import (
    HashFunction as HashFunction,
    encode_key as encode_key,
    encode_node as encode_node,
)
from ringroute.hashing.digest_hash import (
    MD5Hash as MD5Hash,
    SHA256Hash as SHA256Hash,
    Blake2bHash as Blake2bHash,
    RING_BITS as RING_BITS,
    RING_SIZE as RING_SIZE,
)
from ringroute.hashing.callable_hash import CallableHash as CallableHash
from ringroute.hashing.hash_registry import (
    HashFunctionName as HashFunctionName,
    get_hash_function as get_hash_function,
    resolve_hash_function as resolve_hash_function,
)
