"""
Storage Models
==============
Pydantic value objects for the parameters sent to the object storage SDK.

Each model is built per call, validated, turned into SDK keyword arguments
with ``to_params()`` and then discarded.
"""

from typing import Any, Dict, Optional
from enum import Enum

from pydantic import BaseModel, Field, field_validator


# ============================================================================
# ENUMS
# ============================================================================

class BucketACL(str, Enum):
    """Canned ACLs accepted by CreateBucket"""
    PRIVATE = "private"
    PUBLIC_READ = "public-read"
    PUBLIC_READ_WRITE = "public-read-write"
    AUTHENTICATED_READ = "authenticated-read"


class ObjectOwnership(str, Enum):
    """Object ownership controls accepted by CreateBucket"""
    BUCKET_OWNER_PREFERRED = "BucketOwnerPreferred"
    OBJECT_WRITER = "ObjectWriter"
    BUCKET_OWNER_ENFORCED = "BucketOwnerEnforced"


# ============================================================================
# OBJECT ADDRESSING
# ============================================================================

class ObjectReference(BaseModel):
    """Bucket name + object key of a stored object"""
    bucket: str = Field(..., min_length=1, description="Bucket name")
    key: str = Field(..., min_length=1, description="Object key")

    def to_params(self) -> Dict[str, Any]:
        return {"Bucket": self.bucket, "Key": self.key}


class UploadRequest(ObjectReference):
    """
    Object to create or overwrite

    The body is either raw bytes or a binary file-like object. Bytes go out
    in a single PutObject; streams go through the SDK's managed transfer,
    which only ever calls ``read(size)`` and so handles pipes and sockets
    of unknown length.
    """
    body: Any = Field(..., repr=False, description="bytes or binary stream")
    content_type: Optional[str] = Field(default=None, description="MIME type")
    metadata: Optional[Dict[str, str]] = Field(default=None, description="User metadata")

    @field_validator("body")
    def check_body(cls, v):
        if isinstance(v, (bytes, bytearray)):
            return v
        # botocore rejects memoryview blobs
        if isinstance(v, memoryview):
            return v.tobytes()
        if callable(getattr(v, "read", None)):
            return v
        raise ValueError("body must be bytes or a binary file-like object")

    @property
    def is_stream(self) -> bool:
        return not isinstance(self.body, (bytes, bytearray))

    def extra_args(self) -> Dict[str, Any]:
        """Object attributes shared by PutObject and the managed transfer"""
        args: Dict[str, Any] = {}
        if self.content_type:
            args["ContentType"] = self.content_type
        # Empty mappings are not sent at all
        if self.metadata:
            args["Metadata"] = dict(self.metadata)
        return args

    def to_params(self) -> Dict[str, Any]:
        params = super().to_params()
        params["Body"] = self.body
        params.update(self.extra_args())
        return params

    def transfer_params(self) -> Dict[str, Any]:
        """Keyword arguments for upload_fileobj"""
        return {
            "Fileobj": self.body,
            "Bucket": self.bucket,
            "Key": self.key,
            "ExtraArgs": self.extra_args() or None,
        }


class SignedUrlRequest(ObjectReference):
    """Parameters for a presigned GET URL"""
    file_name: Optional[str] = Field(default=None, description="Download filename override")
    expiry: int = Field(default=60, gt=0, description="URL lifetime in seconds")

    def to_params(self) -> Dict[str, Any]:
        params = super().to_params()
        if self.file_name:
            params["ResponseContentDisposition"] = f"attachment;filename={self.file_name}"
        return params


# ============================================================================
# BUCKETS
# ============================================================================

class CreateBucketRequest(BaseModel):
    """
    CreateBucket parameters

    Fields use the SDK's own names as aliases so a plain parameter mapping
    validates directly. Keys this model does not know about are kept and
    forwarded untouched.
    """
    bucket: str = Field(..., min_length=1, alias="Bucket")
    acl: Optional[BucketACL] = Field(default=None, alias="ACL")
    create_bucket_configuration: Optional[Dict[str, Any]] = Field(
        default=None, alias="CreateBucketConfiguration"
    )
    grant_full_control: Optional[str] = Field(default=None, alias="GrantFullControl")
    grant_read: Optional[str] = Field(default=None, alias="GrantRead")
    grant_read_acp: Optional[str] = Field(default=None, alias="GrantReadACP")
    grant_write: Optional[str] = Field(default=None, alias="GrantWrite")
    grant_write_acp: Optional[str] = Field(default=None, alias="GrantWriteACP")
    object_lock_enabled_for_bucket: Optional[bool] = Field(
        default=None, alias="ObjectLockEnabledForBucket"
    )
    object_ownership: Optional[ObjectOwnership] = Field(default=None, alias="ObjectOwnership")

    model_config = {
        "populate_by_name": True,
        "use_enum_values": True,
        "extra": "allow",
    }

    def to_params(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
