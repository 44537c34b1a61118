class PoiError(Exception):
    """Base exception for point-of-interest query failures."""


class LoadError(PoiError):
    """Raised when the point data set cannot be read or decoded at startup."""


class ParseError(PoiError):
    """Raised when request input (bounds, zoom) is malformed."""


class ComputeFailure(PoiError):
    """Raised when clustering cannot produce a result."""


class ClusterUnavailable(ComputeFailure):
    """Raised when waiting on an in-flight clustering run exceeds the bound."""
