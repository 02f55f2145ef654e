"""
ringroute - consistent hashing of keys onto a changing set of nodes.

Example usage:
    from ringroute import ConsistentHash

    ring = ConsistentHash()
    ring.add_node("shard-a")
    ring.add_node("shard-b")

    owner = ring.get_node_for_key("order:42")
    failover = ring.get_nodes_for_key("order:42", count=2)
"""

from ringroute.errors import (
    RingError as RingError,
    InvalidReplicaCountError as InvalidReplicaCountError,
    InvalidWeightError as InvalidWeightError,
    InvalidHashFunctionError as InvalidHashFunctionError,
    NodeEncodingError as NodeEncodingError,
)
from ringroute.hashing import (
    HashFunction as HashFunction,
    MD5Hash as MD5Hash,
    SHA256Hash as SHA256Hash,
    Blake2bHash as Blake2bHash,
    CallableHash as CallableHash,
    get_hash_function as get_hash_function,
)
from ringroute.env import Env as Env, load_env as load_env
from ringroute.logging import configure_logging as configure_logging
from ringroute.routing import (
    AsyncConsistentHash as AsyncConsistentHash,
    ConsistentHash as ConsistentHash,
    Ring as Ring,
    RingInfo as RingInfo,
    VirtualPoint as VirtualPoint,
    new_consistent_hash as new_consistent_hash,
)
