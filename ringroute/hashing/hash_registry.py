from typing import Literal

from ringroute.errors import InvalidHashFunctionError

from .digest_hash import Blake2bHash, MD5Hash, SHA256Hash
from .hash_function import HashFunction


HashFunctionName = Literal["md5", "sha256", "blake2b"]


_builtin_hash_functions: dict[str, type[HashFunction]] = {
    MD5Hash.name: MD5Hash,
    SHA256Hash.name: SHA256Hash,
    Blake2bHash.name: Blake2bHash,
}


def get_hash_function(name: HashFunctionName | str) -> HashFunction:
    hash_function_type = _builtin_hash_functions.get(name.lower())
    if hash_function_type is None:
        raise InvalidHashFunctionError(
            f"Unknown hash function {name!r}, expected one of "
            f"{sorted(_builtin_hash_functions)}"
        )

    return hash_function_type()


def resolve_hash_function(
    hash_function: HashFunction | None,
    default: HashFunctionName | str = MD5Hash.name,
) -> HashFunction:
    """
    Return ``hash_function`` unchanged, or the named default when it is None.
    """
    if hash_function is None:
        return get_hash_function(default)

    if not isinstance(hash_function, HashFunction):
        raise InvalidHashFunctionError(
            f"hash_function must be a HashFunction or None, got "
            f"{type(hash_function).__name__}. Wrap plain callables in CallableHash."
        )

    return hash_function
