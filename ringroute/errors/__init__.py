from .ring import (
    RingError as RingError,
    InvalidReplicaCountError as InvalidReplicaCountError,
    InvalidWeightError as InvalidWeightError,
    InvalidHashFunctionError as InvalidHashFunctionError,
    NodeEncodingError as NodeEncodingError,
)
