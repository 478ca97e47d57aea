"""Storage client protocol and data types.

This module defines the abstract interface for bucket and object operations,
the normalized result types, and the error taxonomy raised by storage backends.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import IO, Any, Protocol, Union

ObjectPayload = Union[bytes, bytearray, IO[bytes]]


class StorageError(RuntimeError):
    """Raised when object storage operations fail.

    Carries the provider's error code and message verbatim in ``code`` and
    ``provider_message``. The original provider exception, when there is
    one, is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status_code: int | None = None,
        operation: str | None = None,
        provider_message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.operation = operation
        self.provider_message = provider_message


class StorageConfigurationError(StorageError):
    """Raised when a storage client cannot be built from configuration."""


class AccessDeniedError(StorageError):
    """Credentials were rejected or lack permission for the request."""


class BucketNotFoundError(StorageError):
    """The target bucket does not exist."""


class ObjectNotFoundError(StorageError):
    """The target object does not exist."""


class BucketAlreadyExistsError(StorageError):
    """The bucket name is already taken."""


class BucketNotEmptyError(StorageError):
    """The bucket still holds objects and cannot be deleted."""


class InvalidBucketNameError(StorageError):
    """The provider rejected the bucket name."""


class StorageTransportError(StorageError):
    """Network, credential resolution, or payload I/O failed before a response."""


class AccessPolicy(Enum):
    """Canned ACL applied to an object."""

    PUBLIC_READ = "public-read"
    DEFAULT = None

    @property
    def acl(self) -> str | None:
        return self.value


@dataclass(frozen=True, slots=True)
class Connection:
    """Region and credentials for one storage endpoint."""

    region: str
    access_key_id: str
    secret_access_key: str = field(repr=False)
    endpoint_url: str | None = None
    addressing_style: str | None = None
    use_ssl: bool = True


@dataclass(frozen=True, slots=True)
class BucketInfo:
    """A bucket as reported by a listing."""

    name: str
    created_at: datetime | None


@dataclass(frozen=True, slots=True)
class ObjectInfo:
    """An object as reported by a bucket listing."""

    key: str
    size: int
    last_modified: datetime | None
    etag: str | None = None


class StorageClient(Protocol):
    """Protocol defining the interface for object storage backends.

    Implementations must provide all methods defined here and raise
    ``StorageError`` subclasses on failure.
    """

    def create_bucket(self, *, bucket: str) -> None:
        """Create a bucket.

        Args:
            bucket: Bucket name.

        Raises:
            BucketAlreadyExistsError: If the name is taken.
            InvalidBucketNameError: If the provider rejects the name.
            AccessDeniedError: If the credentials lack permission.
        """
        ...

    def list_buckets(self) -> list[BucketInfo]:
        """List all buckets owned by the credentials.

        Raises:
            StorageError: If the operation fails.
        """
        ...

    def delete_bucket(self, *, bucket: str) -> None:
        """Delete an empty bucket.

        Raises:
            BucketNotEmptyError: If the bucket still holds objects.
            BucketNotFoundError: If the bucket does not exist.
        """
        ...

    def put_object(
        self,
        *,
        bucket: str,
        object_key: str,
        body: ObjectPayload,
        acl: str | None = None,
        content_type: str | None = None,
    ) -> None:
        """Store an object, overwriting any object with the same key.

        Args:
            bucket: Target bucket name.
            object_key: Object key (path) in the bucket.
            body: Bytes or a readable binary stream.
            acl: Canned ACL to apply, or None for the provider default.
            content_type: MIME type of the object.

        Raises:
            BucketNotFoundError: If the bucket does not exist.
            StorageTransportError: If the payload cannot be read or sent.
        """
        ...

    def list_objects(
        self, *, bucket: str, prefix: str | None = None
    ) -> list[ObjectInfo]:
        """List every object in a bucket, following continuation tokens.

        Raises:
            BucketNotFoundError: If the bucket does not exist.
        """
        ...

    def get_object(self, *, bucket: str, object_key: str) -> Any:
        """Open an object for reading.

        Returns:
            A readable byte stream. The caller owns it and must close it.

        Raises:
            ObjectNotFoundError: If the key does not exist.
            BucketNotFoundError: If the bucket does not exist.
        """
        ...

    def delete_object(self, *, bucket: str, object_key: str) -> None:
        """Delete an object from storage.

        Raises:
            StorageError: If the provider reports a failure.
        """
        ...

    def put_object_acl(self, *, bucket: str, object_key: str, acl: str) -> None:
        """Replace the canned ACL of an existing object.

        Raises:
            ObjectNotFoundError: If the key does not exist.
        """
        ...
