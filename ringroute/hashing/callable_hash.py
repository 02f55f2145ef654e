from typing import Callable

from ringroute.errors import InvalidHashFunctionError

from .hash_function import HashFunction


class CallableHash(HashFunction):
    """
    Adapts a plain ``bytes -> int`` callable to the HashFunction contract.

    Example usage:
        import zlib

        ring = ConsistentHash(
            hash_function=CallableHash(zlib.crc32, name="crc32"),
        )

    The callable must be deterministic across processes and return a
    non-negative integer.
    """

    def __init__(
        self,
        func: Callable[[bytes], int],
        name: str | None = None,
    ) -> None:
        if not callable(func):
            raise InvalidHashFunctionError(
                f"CallableHash requires a callable, got {type(func).__name__}"
            )

        self._func = func
        self.name = name or getattr(func, "__name__", "custom")

    def digest(self, data: bytes) -> int:
        return self._func(data)
