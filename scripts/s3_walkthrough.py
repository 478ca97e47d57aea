#!/usr/bin/env python3
"""Run every storage operation once against a real or S3-compatible endpoint.

Usage:
  .venv/bin/python scripts/s3_walkthrough.py --bucket my-demo-bucket
  .venv/bin/python scripts/s3_walkthrough.py --bucket my-demo-bucket --keep

Credentials and region come from S3_* environment variables (or .env).
The bucket is created, filled with one public object, listed, downloaded,
and removed again unless --keep is given.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass

from s3util.common.config import get_settings
from s3util.common.logging import setup_logging
from s3util.services.storage_facade import StorageFacade

DEFAULT_KEY = "walkthrough/hello.txt"
DEFAULT_BODY = b"hello from s3util\n"


@dataclass(frozen=True, slots=True)
class WalkthroughResult:
    public_url: str
    listed_keys: list[str]
    round_trip_ok: bool
    cleaned_up: bool


def run_walkthrough(
    facade: StorageFacade,
    *,
    bucket: str,
    key: str = DEFAULT_KEY,
    body: bytes = DEFAULT_BODY,
    keep: bool = False,
) -> WalkthroughResult:
    facade.create_bucket(bucket)
    facade.upload_object(bucket, key, body)
    public_url = facade.get_public_url(bucket, key)
    listed_keys = [obj.key for obj in facade.list_objects(bucket)]

    stream = facade.download_object(bucket, key)
    try:
        downloaded = stream.read()
    finally:
        stream.close()

    facade.make_object_public(bucket, key)

    if not keep:
        facade.delete_object(bucket, key)
        facade.delete_bucket(bucket)

    return WalkthroughResult(
        public_url=public_url,
        listed_keys=listed_keys,
        round_trip_ok=downloaded == body,
        cleaned_up=not keep,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Exercise every s3util operation")
    parser.add_argument("--bucket", required=True, help="Bucket to create and use")
    parser.add_argument(
        "--key", default=DEFAULT_KEY, help=f"Object key (default: {DEFAULT_KEY})"
    )
    parser.add_argument(
        "--keep",
        action="store_true",
        help="Leave the bucket and object in place afterwards",
    )
    args = parser.parse_args()

    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    facade = StorageFacade.from_settings(settings)
    result = run_walkthrough(facade, bucket=args.bucket, key=args.key, keep=args.keep)

    print(f"Public URL: {result.public_url}")
    print(f"Objects: {', '.join(result.listed_keys) or '-'}")
    print(f"Round trip: {'ok' if result.round_trip_ok else 'MISMATCH'}")
    if not result.cleaned_up:
        print(f"[KEEP] bucket {args.bucket} left in place")


if __name__ == "__main__":
    main()
