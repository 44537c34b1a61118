from .local_point_source import LocalPointSource
from .s3_point_source import S3PointSource

__all__ = [
    "LocalPointSource",
    "S3PointSource",
]
