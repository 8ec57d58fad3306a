"""
Storage Services
================
Async client for S3-compatible object storage.
"""

from s3facade.services.storage.handle import S3ClientHandle
from s3facade.services.storage.s3_client import S3StorageClient, get_storage_client

__all__ = ["S3ClientHandle", "S3StorageClient", "get_storage_client"]
