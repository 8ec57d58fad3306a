"""
Custom Exceptions
=================
Local exception classes and the provider error family.

Provider failures are never wrapped: whatever botocore raised reaches the
caller as the same object. ``PROVIDER_ERRORS`` exists so callers can catch
them without importing botocore themselves.
"""

from boto3.exceptions import Boto3Error
from botocore.exceptions import BotoCoreError, ClientError


# Boto3Error covers managed-transfer failures such as S3UploadFailedError
PROVIDER_ERRORS = (ClientError, BotoCoreError, Boto3Error)


class StorageException(Exception):
    """Base class for errors raised by this package itself"""


class StorageRequestError(StorageException, ValueError):
    """A required request field is missing or invalid"""
    def __init__(self, field: str, detail: str):
        self.field = field
        self.detail = detail
        super().__init__(f"{field}: {detail}")


class StorageConfigurationError(StorageException):
    """Configuration is not usable in the current environment"""
