"""S3-compatible storage client implementation.

This module provides an S3-compatible storage client that works with
AWS S3, MinIO, and other S3-compatible object storage services.

Dependencies:
    - boto3
    - botocore
"""

from __future__ import annotations

from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from s3util.infra.storage.client import (
    AccessDeniedError,
    BucketAlreadyExistsError,
    BucketInfo,
    BucketNotEmptyError,
    BucketNotFoundError,
    Connection,
    InvalidBucketNameError,
    ObjectInfo,
    ObjectNotFoundError,
    ObjectPayload,
    StorageConfigurationError,
    StorageError,
    StorageTransportError,
)

# S3 rejects a LocationConstraint naming the default region
DEFAULT_REGION = "us-east-1"

ERROR_CLASS_BY_CODE: dict[str, type[StorageError]] = {
    "AccessDenied": AccessDeniedError,
    "AllAccessDisabled": AccessDeniedError,
    "InvalidAccessKeyId": AccessDeniedError,
    "SignatureDoesNotMatch": AccessDeniedError,
    "NoSuchBucket": BucketNotFoundError,
    "NoSuchKey": ObjectNotFoundError,
    "BucketAlreadyExists": BucketAlreadyExistsError,
    "BucketAlreadyOwnedByYou": BucketAlreadyExistsError,
    "BucketNotEmpty": BucketNotEmptyError,
    "InvalidBucketName": InvalidBucketNameError,
}

ERROR_CLASS_BY_STATUS: dict[int, type[StorageError]] = {
    403: AccessDeniedError,
    404: ObjectNotFoundError,
}

# Calls that address no object, so a bare 404 can only mean the bucket
BUCKET_OPERATIONS = frozenset(
    {"create_bucket", "list_buckets", "delete_bucket", "list_objects"}
)


def translate_client_error(
    exc: ClientError, *, operation: str, summary: str
) -> StorageError:
    """Map a botocore ClientError onto the storage error taxonomy.

    The provider's code and message are kept as-is on the returned error.
    """
    error = exc.response.get("Error") or {}
    code = error.get("Code")
    status = (exc.response.get("ResponseMetadata") or {}).get("HTTPStatusCode")
    error_cls = ERROR_CLASS_BY_CODE.get(str(code)) if code else None
    if error_cls is None and status is not None:
        error_cls = ERROR_CLASS_BY_STATUS.get(int(status))
        if error_cls is ObjectNotFoundError and operation in BUCKET_OPERATIONS:
            error_cls = BucketNotFoundError
    if error_cls is None:
        error_cls = StorageError
    return error_cls(
        f"{summary}: {exc}",
        code=str(code) if code else None,
        status_code=int(status) if status is not None else None,
        operation=operation,
        provider_message=error.get("Message"),
    )


class S3StorageClient:
    """S3-compatible object storage client.

    Supports AWS S3, MinIO, and other S3-compatible services.
    Uses boto3 for all storage operations.
    """

    def __init__(self, *, connection: Connection) -> None:
        """Initialize the S3 client for one region and credential pair.

        No request is sent here; credential problems surface on the first
        operation.

        Args:
            connection: Region, credentials and endpoint options.

        Raises:
            StorageConfigurationError: If boto3 rejects the region or endpoint.
        """
        self._connection = connection
        self._client = self._build_client(connection)

    @staticmethod
    def _build_client(connection: Connection) -> Any:
        """Create a boto3 S3 client from a connection."""
        s3_options: dict[str, Any] = {}
        addressing_style = (connection.addressing_style or "").strip().lower()
        if addressing_style:
            s3_options["addressing_style"] = addressing_style
        config = Config(s3=s3_options) if s3_options else None

        try:
            return boto3.client(
                "s3",
                endpoint_url=connection.endpoint_url,
                region_name=connection.region,
                aws_access_key_id=connection.access_key_id,
                aws_secret_access_key=connection.secret_access_key,
                use_ssl=bool(connection.use_ssl),
                config=config,
            )
        except (BotoCoreError, ValueError) as exc:
            raise StorageConfigurationError(
                f"Failed to build S3 client: {exc}"
            ) from exc

    def create_bucket(self, *, bucket: str) -> None:
        """Create a bucket in the connection's region."""
        params: dict[str, Any] = {"Bucket": bucket}
        if self._connection.region and self._connection.region != DEFAULT_REGION:
            params["CreateBucketConfiguration"] = {
                "LocationConstraint": self._connection.region
            }

        try:
            self._client.create_bucket(**params)
        except ClientError as exc:
            raise translate_client_error(
                exc, operation="create_bucket", summary="Failed to create bucket"
            ) from exc
        except BotoCoreError as exc:
            raise StorageTransportError(
                f"Failed to create bucket: {exc}", operation="create_bucket"
            ) from exc

    def list_buckets(self) -> list[BucketInfo]:
        """List all buckets owned by the credentials."""
        try:
            response = self._client.list_buckets()
        except ClientError as exc:
            raise translate_client_error(
                exc, operation="list_buckets", summary="Failed to list buckets"
            ) from exc
        except BotoCoreError as exc:
            raise StorageTransportError(
                f"Failed to list buckets: {exc}", operation="list_buckets"
            ) from exc

        return [
            BucketInfo(name=str(item["Name"]), created_at=item.get("CreationDate"))
            for item in response.get("Buckets") or []
        ]

    def delete_bucket(self, *, bucket: str) -> None:
        """Delete an empty bucket."""
        try:
            self._client.delete_bucket(Bucket=bucket)
        except ClientError as exc:
            raise translate_client_error(
                exc, operation="delete_bucket", summary="Failed to delete bucket"
            ) from exc
        except BotoCoreError as exc:
            raise StorageTransportError(
                f"Failed to delete bucket: {exc}", operation="delete_bucket"
            ) from exc

    def put_object(
        self,
        *,
        bucket: str,
        object_key: str,
        body: ObjectPayload,
        acl: str | None = None,
        content_type: str | None = None,
    ) -> None:
        """Store an object, optionally applying a canned ACL."""
        params: dict[str, Any] = {"Bucket": bucket, "Key": object_key, "Body": body}
        if acl:
            params["ACL"] = acl
        if content_type:
            params["ContentType"] = content_type

        try:
            self._client.put_object(**params)
        except ClientError as exc:
            raise translate_client_error(
                exc, operation="put_object", summary="Failed to upload object"
            ) from exc
        except (BotoCoreError, OSError) as exc:
            raise StorageTransportError(
                f"Failed to upload object: {exc}", operation="put_object"
            ) from exc

    def list_objects(
        self, *, bucket: str, prefix: str | None = None
    ) -> list[ObjectInfo]:
        """List every object in a bucket, following continuation tokens."""
        params: dict[str, Any] = {"Bucket": bucket}
        if prefix:
            params["Prefix"] = prefix

        objects: list[ObjectInfo] = []
        try:
            paginator = self._client.get_paginator("list_objects_v2")
            for page in paginator.paginate(**params):
                for item in page.get("Contents") or []:
                    size = item.get("Size")
                    objects.append(
                        ObjectInfo(
                            key=str(item["Key"]),
                            size=int(size) if size is not None else 0,
                            last_modified=item.get("LastModified"),
                            etag=item.get("ETag"),
                        )
                    )
        except ClientError as exc:
            raise translate_client_error(
                exc, operation="list_objects", summary="Failed to list objects"
            ) from exc
        except BotoCoreError as exc:
            raise StorageTransportError(
                f"Failed to list objects: {exc}", operation="list_objects"
            ) from exc

        return objects

    def get_object(self, *, bucket: str, object_key: str) -> Any:
        """Open an object for reading and hand back its body stream."""
        try:
            response = self._client.get_object(Bucket=bucket, Key=object_key)
        except ClientError as exc:
            raise translate_client_error(
                exc, operation="get_object", summary="Failed to download object"
            ) from exc
        except BotoCoreError as exc:
            raise StorageTransportError(
                f"Failed to download object: {exc}", operation="get_object"
            ) from exc

        body = response.get("Body")
        if body is None:
            raise StorageError("S3 response missing Body", operation="get_object")
        return body

    def delete_object(self, *, bucket: str, object_key: str) -> None:
        """Delete an object from storage."""
        try:
            self._client.delete_object(Bucket=bucket, Key=object_key)
        except ClientError as exc:
            raise translate_client_error(
                exc, operation="delete_object", summary="Failed to delete object"
            ) from exc
        except BotoCoreError as exc:
            raise StorageTransportError(
                f"Failed to delete object: {exc}", operation="delete_object"
            ) from exc

    def put_object_acl(self, *, bucket: str, object_key: str, acl: str) -> None:
        """Replace the canned ACL of an existing object."""
        try:
            self._client.put_object_acl(Bucket=bucket, Key=object_key, ACL=acl)
        except ClientError as exc:
            raise translate_client_error(
                exc, operation="put_object_acl", summary="Failed to set object ACL"
            ) from exc
        except BotoCoreError as exc:
            raise StorageTransportError(
                f"Failed to set object ACL: {exc}", operation="put_object_acl"
            ) from exc
