from typing import Hashable, TypeVar

from ringroute.env import Env
from ringroute.hashing import HashFunction

from .consistent_hash import ConsistentHash


T = TypeVar("T", bound=Hashable)


def new_consistent_hash(
    hash_function: HashFunction | None = None,
    env: Env | None = None,
) -> ConsistentHash[T]:
    """
    Create an empty ring, substituting the default hash when none is given.

    Without ``env`` the configuration is read from the process environment
    and from ``.env`` in the current working directory each time this is
    called, so an invalid value there raises ValueError. Load an Env once
    at startup and pass it in to avoid both.
    """
    return ConsistentHash(hash_function=hash_function, env=env)
