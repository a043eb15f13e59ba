"""Upload Zengin reference data (banks.json + branches/*.json) to S3.

Usage:
    python scripts/seed_reference_data.py ./data --bucket furikomi-reference-data \
        --endpoint-url http://localhost:4566
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

import boto3
from botocore.exceptions import ClientError


def create_bucket(s3: Any, bucket: str, region: str) -> None:
    """Create the bucket. Skips if it already exists."""
    try:
        s3.head_bucket(Bucket=bucket)
        print(f"  Bucket {bucket} already exists, skipping")
        return
    except ClientError:
        pass
    kwargs: dict[str, Any] = {"Bucket": bucket}
    if region != "us-east-1":
        kwargs["CreateBucketConfiguration"] = {"LocationConstraint": region}
    s3.create_bucket(**kwargs)
    print(f"  Created bucket {bucket}")


def collect_reference_files(source: Path) -> list[Path]:
    """Return banks.json followed by branches/*.json, validating JSON shape."""
    banks = source / "banks.json"
    if not banks.is_file():
        raise SystemExit(f"banks.json not found under {source}")
    files = [banks, *sorted((source / "branches").glob("*.json"))]
    for path in files:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise SystemExit(f"{path}: invalid JSON") from exc
        if not isinstance(data, dict):
            raise SystemExit(f"{path} must contain a JSON object keyed by code")
    return files


def upload_reference_data(s3: Any, source: Path, bucket: str, prefix: str = "") -> int:
    """Upload reference files keeping their relative layout. Returns file count."""
    prefix = prefix.strip("/")
    files = collect_reference_files(source)
    for path in files:
        rel = path.relative_to(source).as_posix()
        key = f"{prefix}/{rel}" if prefix else rel
        s3.put_object(
            Bucket=bucket, Key=key, Body=path.read_bytes(),
            ContentType="application/json; charset=utf-8",
        )
    print(f"  Uploaded {len(files)} reference files ({len(files) - 1} branch tables)")
    return len(files)


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed S3 with Zengin reference data")
    parser.add_argument("source", type=Path, help="Directory holding banks.json and branches/")
    parser.add_argument("--bucket", default="furikomi-reference-data", help="Target bucket")
    parser.add_argument("--prefix", default="", help="Key prefix inside the bucket")
    parser.add_argument("--endpoint-url", default=None, help="S3 endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--region", default="ap-northeast-1", help="AWS region")
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    s3 = boto3.client("s3", **kwargs)

    print("Creating bucket...")
    create_bucket(s3, args.bucket, args.region)

    print("Uploading reference data...")
    upload_reference_data(s3, args.source, args.bucket, prefix=args.prefix)

    print("Done!")


if __name__ == "__main__":
    main()
