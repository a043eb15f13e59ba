"""Pluggable reference-data backends behind Protocol interfaces."""

from __future__ import annotations

from furikomi.core.config import AppSettings
from furikomi.core.protocols import ICacheBackend, IFileStore
from furikomi.persistence.local_backend import LocalFileStore
from furikomi.persistence.redis_backend import RedisCacheBackend
from furikomi.persistence.reference_data import FileReferenceData
from furikomi.persistence.s3_backend import S3FileStore


def create_reference_data(settings: AppSettings | None = None) -> FileReferenceData:
    """Create a wired-up reference-data source from application settings."""
    if settings is None:
        settings = AppSettings()

    file_store: IFileStore
    if settings.reference.source == "s3":
        file_store = S3FileStore(
            bucket=settings.s3.bucket,
            prefix=settings.s3.prefix,
            region=settings.s3.region,
            endpoint_url=settings.s3.endpoint_url,
        )
    else:
        file_store = LocalFileStore(settings.reference.base_path)

    cache: ICacheBackend | None = None
    if settings.redis.enabled:
        cache = RedisCacheBackend(
            host=settings.redis.host,
            port=settings.redis.port,
            db=settings.redis.db,
        )

    return FileReferenceData(
        file_store,
        cache=cache,
        cache_ttl=settings.redis.ttl,
        banks_file=settings.reference.banks_file,
        branches_dir=settings.reference.branches_dir,
    )
