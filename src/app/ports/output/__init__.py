from .point_source import IPointSource

__all__ = [
    "IPointSource",
]
