from .poi import ClusterUnavailable, ComputeFailure, LoadError, ParseError, PoiError

__all__ = [
    "ClusterUnavailable",
    "ComputeFailure",
    "LoadError",
    "ParseError",
    "PoiError",
]
