"""S3 file storage backend implementing IFileStore."""

from __future__ import annotations

import boto3
from botocore.exceptions import ClientError

from furikomi.core.exceptions import ReferenceFileNotFound, StorageError

_MISSING_CODES = {"NoSuchKey", "404", "NotFound"}


class S3FileStore:
    """IFileStore reading reference documents from an S3 bucket/prefix."""

    def __init__(self, bucket: str, prefix: str = "", region: str = "ap-northeast-1",
                 endpoint_url: str | None = None) -> None:
        self._bucket = bucket
        self._prefix = prefix.strip("/")
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._client = boto3.client("s3", **kwargs)

    def _key(self, path: str) -> str:
        path = path.lstrip("/")
        return f"{self._prefix}/{path}" if self._prefix else path

    def read(self, path: str) -> bytes:
        key = self._key(path)
        try:
            resp = self._client.get_object(Bucket=self._bucket, Key=key)
            return resp["Body"].read()
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") in _MISSING_CODES:
                raise ReferenceFileNotFound(path) from exc
            raise StorageError(f"S3 read failed for s3://{self._bucket}/{key}: {exc}") from exc
