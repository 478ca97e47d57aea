"""
Thin facade over S3-compatible object storage: bucket and object CRUD,
public ACLs and public URLs.
"""

from s3util.infra.storage import (
    AccessDeniedError,
    AccessPolicy,
    BucketAlreadyExistsError,
    BucketInfo,
    BucketNotEmptyError,
    BucketNotFoundError,
    InvalidBucketNameError,
    ObjectInfo,
    ObjectNotFoundError,
    StorageConfigurationError,
    StorageError,
    StorageTransportError,
)
from s3util.services import AsyncStorageFacade, StorageFacade

__all__ = [
    "AccessDeniedError",
    "AccessPolicy",
    "AsyncStorageFacade",
    "BucketAlreadyExistsError",
    "BucketInfo",
    "BucketNotEmptyError",
    "BucketNotFoundError",
    "InvalidBucketNameError",
    "ObjectInfo",
    "ObjectNotFoundError",
    "StorageConfigurationError",
    "StorageError",
    "StorageFacade",
    "StorageTransportError",
]
