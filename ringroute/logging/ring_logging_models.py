from .models import Entry, LogLevel


class RingNodeAdded(Entry, kw_only=True):
    node: str
    weight: int
    points: int
    ring_points: int
    level: LogLevel = LogLevel.DEBUG

class RingNodeRemoved(Entry, kw_only=True):
    node: str
    points: int
    ring_points: int
    level: LogLevel = LogLevel.DEBUG

class RingCleared(Entry, kw_only=True):
    nodes: int
    level: LogLevel = LogLevel.INFO

class RingHashFallback(Entry, kw_only=True):
    hash_function: str
    level: LogLevel = LogLevel.TRACE
