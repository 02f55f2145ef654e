import pytest

from ringroute.env import Env
from ringroute.routing import ConsistentHash

from .helpers import TableHash


@pytest.fixture
def table_hash() -> TableHash:
    return TableHash(
        {
            b"a:0": 100,
            b"a:1": 300,
            b"b:0": 200,
            b"c:0": 400,
        }
    )


@pytest.fixture
def ring_env() -> Env:
    return Env(RINGROUTE_VIRTUAL_NODES=160)


@pytest.fixture
def three_node_hash(ring_env: Env) -> ConsistentHash[str]:
    consistent_hash: ConsistentHash[str] = ConsistentHash(env=ring_env)
    consistent_hash.add_nodes(["node-1:9000", "node-2:9000", "node-3:9000"])

    return consistent_hash
