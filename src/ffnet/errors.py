"""
Network Errors
==============

Every error raised by the engine is a caller contract violation, never a
transient condition. Each class also derives from the matching builtin so
callers may catch ``IndexError`` / ``ValueError`` / ``RuntimeError``.
"""


class NetworkError(Exception):
    """Base class for engine errors"""


class LayerIndexError(NetworkError, IndexError):
    """Layer index outside 1..L-1 for a computed-layer accessor, or outside 0..L-1"""


class ShapeMismatchError(NetworkError, ValueError):
    """Vector, matrix or record does not match the network shape"""


class NetworkStructureError(NetworkError, RuntimeError):
    """Illegal structural sequencing or an incomplete network"""
