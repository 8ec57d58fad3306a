"""
S3 Client Handle
================
Holds the configured SDK objects shared by every storage operation.

Network calls go through an aioboto3 session, one client context per call.
Presigning is pure local computation, so it uses a plain boto3 client that
never opens a connection.
"""

from typing import Any, Dict, Optional
from urllib.parse import quote

import aioboto3
import boto3
from botocore.config import Config

from s3facade.core.config import Settings


class S3ClientHandle:
    """
    Configured access to one S3-compatible service

    Built once from settings and passed to the storage client. Nothing on it
    changes after construction, so it can be shared by concurrent calls.
    The session and signer can be replaced by test doubles.
    """

    def __init__(
        self,
        settings: Settings,
        session: Optional[Any] = None,
        signer: Optional[Any] = None,
    ):
        self.settings = settings
        self._session = session if session is not None else aioboto3.Session()
        self._signer = signer if signer is not None else self._build_signer()

    def _sdk_config(self) -> Config:
        """Client config: SigV4 always, path-style for custom endpoints"""
        if self.settings.uses_custom_endpoint:
            return Config(signature_version="s3v4", s3={"addressing_style": "path"})
        return Config(signature_version="s3v4")

    def client_kwargs(self) -> Dict[str, Any]:
        """
        Keyword arguments for creating an S3 client

        Returns:
            Dict[str, Any]: Arguments shared by the async and sync clients
        """
        return {
            "endpoint_url": self.settings.AWS_ENDPOINT_URL,
            "region_name": self.settings.AWS_REGION,
            "api_version": self.settings.AWS_API_VERSION,
            "aws_access_key_id": self.settings.AWS_ACCESS_KEY,
            "aws_secret_access_key": self.settings.AWS_SECRET_KEY,
            "config": self._sdk_config(),
        }

    def _build_signer(self) -> Any:
        # Own session so the boto3 module-level default session stays untouched
        return boto3.session.Session().client("s3", **self.client_kwargs())

    def client(self):
        """
        Open an async S3 client

        Returns:
            Async context manager yielding an aiobotocore S3 client
        """
        return self._session.client("s3", **self.client_kwargs())

    @property
    def signer(self) -> Any:
        """Synchronous client used for presigning only"""
        return self._signer

    def object_url(self, bucket: str, key: str) -> str:
        """
        Public URL of an object, matching the provider's addressing style

        Args:
            bucket: Bucket name
            key: Object key

        Returns:
            str: Object URL
        """
        quoted_key = quote(key, safe="/")
        if self.settings.uses_custom_endpoint:
            return f"{self.settings.AWS_ENDPOINT_URL}/{bucket}/{quoted_key}"
        return f"https://{bucket}.s3.{self.settings.AWS_REGION}.amazonaws.com/{quoted_key}"
