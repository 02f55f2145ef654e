"""
Exceptions raised by the ring and its facade.

Only argument misuse at the API boundary is an error. An empty ring,
a duplicate add and a redundant remove are all reported through return
values instead.
"""


class RingError(Exception):
    """Base class for every ringroute error."""

    pass


class InvalidReplicaCountError(RingError, ValueError):
    """
    Raised when a facade is built with fewer than one virtual
    point per node.
    """

    def __init__(self, replicas: int) -> None:
        super().__init__(f"replicas must be >= 1, got {replicas}")
        self.replicas = replicas


class InvalidWeightError(RingError, ValueError):
    def __init__(self, weight: int) -> None:
        super().__init__(f"weight must be >= 1, got {weight}")
        self.weight = weight


class InvalidHashFunctionError(RingError, TypeError):
    """
    Raised when the supplied hash function is neither None nor a
    HashFunction instance, or when a hash function is requested by an
    unknown name.
    """

    pass


class NodeEncodingError(RingError, TypeError):
    """Raised when a node cannot be converted to stable bytes for hashing."""

    def __init__(self, node: object, reason: str) -> None:
        super().__init__(
            f"cannot encode node {node!r} of type {type(node).__name__}: {reason}"
        )
        self.node = node
