"""Storage facade for bucket and object operations.

This module provides the application-facing entry point: one object bound to
a region and credential pair that exposes bucket and object CRUD, public ACL
management and public URL construction. Every remote call is traced through
an injectable logger and recorded in the operation metrics.
"""

from __future__ import annotations

import asyncio
import logging
import time
from contextlib import contextmanager
from typing import Any, BinaryIO, Iterator

from s3util.common.config import Settings, get_settings
from s3util.infra.observability.metrics import LATENCY, OPERATIONS
from s3util.infra.storage.client import (
    AccessPolicy,
    BucketInfo,
    Connection,
    ObjectInfo,
    ObjectPayload,
    StorageClient,
    StorageConfigurationError,
)
from s3util.infra.storage.s3_client import S3StorageClient

DEFAULT_LOGGER_NAME = "s3util.storage"
PUBLIC_URL_TEMPLATE = "https://{bucket}.s3.{region}.amazonaws.com/{key}"


def _describe(fields: dict[str, Any]) -> str:
    return " ".join(f"{k}={v}" for k, v in fields.items() if v is not None)


class StorageFacade:
    """Bucket and object operations against one S3 region.

    Holds no state besides the connection and the underlying client, so one
    instance can be shared between threads and several instances with
    different credentials can be used side by side.
    """

    def __init__(
        self,
        region: str,
        access_key_id: str,
        secret_access_key: str,
        *,
        endpoint_url: str | None = None,
        addressing_style: str | None = None,
        use_ssl: bool = True,
        storage_client: StorageClient | None = None,
        logger: logging.Logger | None = None,
        enable_metrics: bool = True,
    ) -> None:
        self._connection = Connection(
            region=region,
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            endpoint_url=endpoint_url,
            addressing_style=addressing_style,
            use_ssl=use_ssl,
        )
        if storage_client is None:
            storage_client = S3StorageClient(connection=self._connection)
        self._storage = storage_client
        self._logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self._enable_metrics = enable_metrics

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        storage_client: StorageClient | None = None,
        logger: logging.Logger | None = None,
    ) -> "StorageFacade":
        """Build a facade from environment-backed settings."""
        settings = settings or get_settings()
        if not settings.S3_ACCESS_KEY_ID or not settings.S3_SECRET_ACCESS_KEY:
            raise StorageConfigurationError(
                "S3_ACCESS_KEY_ID and S3_SECRET_ACCESS_KEY are required"
            )
        return cls(
            settings.S3_REGION,
            settings.S3_ACCESS_KEY_ID,
            settings.S3_SECRET_ACCESS_KEY,
            endpoint_url=settings.S3_ENDPOINT_URL,
            addressing_style=settings.S3_ADDRESSING_STYLE,
            use_ssl=settings.S3_USE_SSL,
            storage_client=storage_client,
            logger=logger,
            enable_metrics=settings.ENABLE_METRICS,
        )

    @property
    def region(self) -> str:
        return self._connection.region

    @property
    def connection(self) -> Connection:
        return self._connection

    @contextmanager
    def _traced(self, operation: str, **fields: Any) -> Iterator[dict[str, Any]]:
        """Time one remote call, then log and count its outcome.

        The body may add result fields (e.g. ``count``) to the yielded dict.
        Failures are logged and re-raised unchanged.
        """
        start = time.perf_counter()
        try:
            yield fields
        except Exception as exc:
            elapsed = time.perf_counter() - start
            self._observe(operation, "error", elapsed)
            self._logger.error(
                "storage operation=%s %s status=error duration_ms=%.3f error=%s",
                operation,
                _describe(fields),
                round(elapsed * 1000, 3),
                exc,
                extra={
                    "extra": {
                        "operation": operation,
                        **fields,
                        "status": "error",
                        "error_type": type(exc).__name__,
                        "error_code": getattr(exc, "code", None),
                        "duration_ms": round(elapsed * 1000, 3),
                    }
                },
            )
            raise
        elapsed = time.perf_counter() - start
        self._observe(operation, "ok", elapsed)
        self._logger.info(
            "storage operation=%s %s status=ok duration_ms=%.3f",
            operation,
            _describe(fields),
            round(elapsed * 1000, 3),
            extra={
                "extra": {
                    "operation": operation,
                    **fields,
                    "status": "ok",
                    "duration_ms": round(elapsed * 1000, 3),
                }
            },
        )

    def _observe(self, operation: str, outcome: str, elapsed: float) -> None:
        if not self._enable_metrics:
            return
        OPERATIONS.labels(operation, outcome).inc()
        LATENCY.labels(operation).observe(elapsed)

    def create_bucket(self, bucket: str) -> None:
        """Create a bucket in the facade's region."""
        with self._traced("create_bucket", bucket=bucket):
            self._storage.create_bucket(bucket=bucket)

    def list_buckets(self) -> list[BucketInfo]:
        """Return every bucket visible to the credentials, in provider order."""
        with self._traced("list_buckets") as fields:
            buckets = self._storage.list_buckets()
            fields["count"] = len(buckets)
        return buckets

    def delete_bucket(self, bucket: str) -> None:
        """Delete an empty bucket."""
        with self._traced("delete_bucket", bucket=bucket):
            self._storage.delete_bucket(bucket=bucket)

    def upload_object(
        self,
        bucket: str,
        key: str,
        payload: ObjectPayload,
        *,
        access: AccessPolicy = AccessPolicy.PUBLIC_READ,
        content_type: str | None = None,
    ) -> None:
        """Store ``payload`` under ``key``, replacing any existing object.

        Args:
            bucket: Target bucket name.
            key: Object key.
            payload: Bytes or a readable binary stream; the stream is only read.
            access: ACL applied with the upload. ``AccessPolicy.DEFAULT``
                leaves the provider default (private) in place.
            content_type: Optional MIME type stored with the object.
        """
        with self._traced("upload_object", bucket=bucket, key=key, acl=access.acl):
            self._storage.put_object(
                bucket=bucket,
                object_key=key,
                body=payload,
                acl=access.acl,
                content_type=content_type,
            )

    def get_public_url(self, bucket: str, key: str) -> str:
        """Build the public URL of an object without contacting the provider.

        Does not check that the object exists or is readable anonymously.
        """
        endpoint_url = self._connection.endpoint_url
        if endpoint_url:
            url = f"{endpoint_url.rstrip('/')}/{bucket}/{key}"
        else:
            url = PUBLIC_URL_TEMPLATE.format(
                bucket=bucket, region=self._connection.region, key=key
            )
        self._logger.debug(
            "storage public_url bucket=%s key=%s url=%s", bucket, key, url
        )
        return url

    def list_objects(
        self, bucket: str, *, prefix: str | None = None
    ) -> list[ObjectInfo]:
        """Return every object in ``bucket`` (optionally under ``prefix``)."""
        with self._traced("list_objects", bucket=bucket, prefix=prefix) as fields:
            objects = self._storage.list_objects(bucket=bucket, prefix=prefix)
            fields["count"] = len(objects)
        return objects

    def download_object(self, bucket: str, key: str) -> BinaryIO:
        """Open an object for reading.

        The returned stream belongs to the caller, who must close it.
        """
        with self._traced("download_object", bucket=bucket, key=key):
            body = self._storage.get_object(bucket=bucket, object_key=key)
        return body

    def delete_object(self, bucket: str, key: str) -> None:
        with self._traced("delete_object", bucket=bucket, key=key):
            self._storage.delete_object(bucket=bucket, object_key=key)

    def make_object_public(self, bucket: str, key: str) -> None:
        """Grant anonymous read access to an existing object."""
        acl = AccessPolicy.PUBLIC_READ.acl
        with self._traced("make_object_public", bucket=bucket, key=key, acl=acl):
            self._storage.put_object_acl(bucket=bucket, object_key=key, acl=acl)


class AsyncStorageFacade:
    """Coroutine front end for :class:`StorageFacade`.

    Each remote operation runs in a worker thread so the event loop keeps
    serving other tasks while the request is in flight. No ordering holds
    between operations awaited concurrently.
    """

    def __init__(self, facade: StorageFacade) -> None:
        self._facade = facade

    @classmethod
    def connect(
        cls,
        region: str,
        access_key_id: str,
        secret_access_key: str,
        **options: Any,
    ) -> "AsyncStorageFacade":
        return cls(StorageFacade(region, access_key_id, secret_access_key, **options))

    @property
    def facade(self) -> StorageFacade:
        return self._facade

    @property
    def region(self) -> str:
        return self._facade.region

    async def create_bucket(self, bucket: str) -> None:
        await asyncio.to_thread(self._facade.create_bucket, bucket)

    async def list_buckets(self) -> list[BucketInfo]:
        return await asyncio.to_thread(self._facade.list_buckets)

    async def delete_bucket(self, bucket: str) -> None:
        await asyncio.to_thread(self._facade.delete_bucket, bucket)

    async def upload_object(
        self,
        bucket: str,
        key: str,
        payload: ObjectPayload,
        *,
        access: AccessPolicy = AccessPolicy.PUBLIC_READ,
        content_type: str | None = None,
    ) -> None:
        await asyncio.to_thread(
            self._facade.upload_object,
            bucket,
            key,
            payload,
            access=access,
            content_type=content_type,
        )

    def get_public_url(self, bucket: str, key: str) -> str:
        return self._facade.get_public_url(bucket, key)

    async def list_objects(
        self, bucket: str, *, prefix: str | None = None
    ) -> list[ObjectInfo]:
        return await asyncio.to_thread(self._facade.list_objects, bucket, prefix=prefix)

    async def download_object(self, bucket: str, key: str) -> BinaryIO:
        """Open an object for reading.

        Reads on the returned stream block; run them with ``asyncio.to_thread``.
        """
        return await asyncio.to_thread(self._facade.download_object, bucket, key)

    async def delete_object(self, bucket: str, key: str) -> None:
        await asyncio.to_thread(self._facade.delete_object, bucket, key)

    async def make_object_public(self, bucket: str, key: str) -> None:
        await asyncio.to_thread(self._facade.make_object_public, bucket, key)
