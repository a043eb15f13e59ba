"""Integration test fixtures: LocalStack S3 seeded with reference data."""

from __future__ import annotations

import os
import sys

import boto3
import pytest

from tests.fakes import FIXTURE_DIR

# Default LocalStack endpoint
LOCALSTACK_URL = os.environ.get("LOCALSTACK_URL", "http://localhost:4566")
BUCKET = "furikomi-reference-inttest"
REGION = "us-east-1"


def _localstack_available() -> bool:
    """Check if LocalStack is reachable."""
    try:
        client = boto3.client("s3", region_name=REGION, endpoint_url=LOCALSTACK_URL)
        client.list_buckets()
        return True
    except Exception:
        return False


skip_no_localstack = pytest.mark.skipif(
    not _localstack_available(),
    reason="LocalStack not available",
)


@pytest.fixture(scope="session")
def localstack_s3():
    """S3 client pointing at LocalStack."""
    return boto3.client("s3", region_name=REGION, endpoint_url=LOCALSTACK_URL)


@pytest.fixture(scope="session")
def seeded_bucket(localstack_s3):
    """Create the bucket and upload the fixture reference data via the seed script."""
    sys.path.insert(0, str(os.path.join(os.path.dirname(__file__), "..", "..", "scripts")))
    from seed_reference_data import create_bucket, upload_reference_data

    create_bucket(localstack_s3, BUCKET, REGION)
    upload_reference_data(localstack_s3, FIXTURE_DIR, BUCKET, prefix="inttest")
    return BUCKET
