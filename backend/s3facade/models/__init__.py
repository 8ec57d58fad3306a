"""
Data Models
===========
Pydantic models for storage request validation.
"""

from s3facade.models.storage import (
    BucketACL,
    ObjectOwnership,
    ObjectReference,
    UploadRequest,
    SignedUrlRequest,
    CreateBucketRequest,
)


__all__ = [
    "BucketACL",
    "ObjectOwnership",
    "ObjectReference",
    "UploadRequest",
    "SignedUrlRequest",
    "CreateBucketRequest",
]
