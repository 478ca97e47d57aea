"""Object storage abstraction layer.

This module provides a protocol-based abstraction for object storage backends,
enabling support for S3, MinIO, and other S3-compatible services.
"""

from .client import (
    AccessDeniedError,
    AccessPolicy,
    BucketAlreadyExistsError,
    BucketInfo,
    BucketNotEmptyError,
    BucketNotFoundError,
    Connection,
    InvalidBucketNameError,
    ObjectInfo,
    ObjectNotFoundError,
    ObjectPayload,
    StorageClient,
    StorageConfigurationError,
    StorageError,
    StorageTransportError,
)

__all__ = [
    "AccessDeniedError",
    "AccessPolicy",
    "BucketAlreadyExistsError",
    "BucketInfo",
    "BucketNotEmptyError",
    "BucketNotFoundError",
    "Connection",
    "InvalidBucketNameError",
    "ObjectInfo",
    "ObjectNotFoundError",
    "ObjectPayload",
    "StorageClient",
    "StorageConfigurationError",
    "StorageError",
    "StorageTransportError",
]
