"""
S3 Storage Client
=================
Async facade over an S3-compatible object store.

Every operation builds its request, forwards it to the SDK and hands back
the SDK's answer. Provider errors are logged and re-raised as the very same
exception object; there is no retry and no translation.
"""

from functools import lru_cache
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from s3facade.core.config import get_settings, validate_configuration
from s3facade.core.exceptions import PROVIDER_ERRORS, StorageRequestError
from s3facade.core.logging_config import get_logger
from s3facade.models.storage import (
    CreateBucketRequest,
    ObjectReference,
    SignedUrlRequest,
    UploadRequest,
)
from s3facade.services.storage.handle import S3ClientHandle


logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _build(model: Type[ModelT], data: Union[Mapping[str, Any], ModelT]) -> ModelT:
    """Validate request data, reporting the first bad field"""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(dict(data))
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or model.__name__
        raise StorageRequestError(field, first["msg"]) from e


class S3StorageClient:
    """
    Object Storage Client

    Exposes list/create bucket, upload, fetch and presign over a single
    S3ClientHandle. Holds no state of its own.
    """

    def __init__(self, handle: S3ClientHandle):
        self._handle = handle

    @property
    def handle(self) -> S3ClientHandle:
        return self._handle

    async def list_buckets(self, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """
        List buckets

        Args:
            params: Provider-specific filters (Prefix, MaxBuckets, ...)

        Returns:
            Dict[str, Any]: Provider response with the ordered "Buckets" list
        """
        try:
            async with self._handle.client() as s3_client:
                response = await s3_client.list_buckets(**dict(params or {}))
        except PROVIDER_ERRORS as e:
            logger.error(f"List buckets failed: {e}")
            raise

        logger.info(f"Listed {len(response.get('Buckets', []))} buckets")
        return response

    async def create_bucket(
        self,
        params: Union[Mapping[str, Any], CreateBucketRequest],
    ) -> Dict[str, Any]:
        """
        Create a bucket

        Args:
            params: Must contain "Bucket"; ACL, CreateBucketConfiguration,
                object lock and ownership settings are forwarded verbatim

        Returns:
            Dict[str, Any]: Provider response, e.g. {"Location": "/file-uploads"}

        Raises:
            StorageRequestError: If the bucket name is missing or empty
        """
        request = _build(CreateBucketRequest, params)

        try:
            async with self._handle.client() as s3_client:
                response = await s3_client.create_bucket(**request.to_params())
        except PROVIDER_ERRORS as e:
            logger.error(f"Create bucket {request.bucket} failed: {e}")
            raise

        logger.info(f"Bucket created: {request.bucket}")
        return response

    async def upload(
        self,
        file_data: Any,
        file_name: str,
        bucket_name: str,
        content_type: Optional[str],
        options: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Upload an object, overwriting any object with the same key

        Args:
            file_data: bytes, or a binary file-like object (only read() is
                needed; streams go through the managed transfer)
            file_name: Object key
            bucket_name: Target bucket
            content_type: MIME type
            options: Optional {"Metadata": {...}}; empty metadata is not sent

        Returns:
            Dict[str, Any]: Provider response (ETag, ...) plus Location,
            key, Key and Bucket

        Raises:
            StorageRequestError: If bucket or key is empty
        """
        options = options or {}
        request = _build(UploadRequest, {
            "bucket": bucket_name,
            "key": file_name,
            "body": file_data,
            "content_type": content_type,
            "metadata": options.get("Metadata"),
        })

        try:
            async with self._handle.client() as s3_client:
                if request.is_stream:
                    await s3_client.upload_fileobj(**request.transfer_params())
                    # The managed transfer returns nothing; read the ETag back
                    head = await s3_client.head_object(Bucket=request.bucket, Key=request.key)
                    response = {
                        name: head[name]
                        for name in ("ETag", "VersionId")
                        if name in head
                    }
                else:
                    response = await s3_client.put_object(**request.to_params())
        except PROVIDER_ERRORS as e:
            logger.error(f"Upload of {file_name} to {bucket_name} failed: {e}")
            raise

        logger.info(f"File {file_name}, uploaded successfully at {bucket_name}")

        result = dict(response)
        result.update({
            "Location": self._handle.object_url(request.bucket, request.key),
            "key": request.key,
            "Key": request.key,
            "Bucket": request.bucket,
        })
        return result

    async def get_document(self, file_name: str, bucket_name: str) -> Dict[str, Any]:
        """
        Fetch an object's body and metadata

        Args:
            file_name: Object key
            bucket_name: Bucket name

        Returns:
            Dict[str, Any]: Provider response with "Body" read into bytes

        Raises:
            StorageRequestError: If bucket or key is empty
        """
        ref = _build(ObjectReference, {"bucket": bucket_name, "key": file_name})

        try:
            async with self._handle.client() as s3_client:
                response = await s3_client.get_object(**ref.to_params())

                async with response["Body"] as stream:
                    body = await stream.read()
        except PROVIDER_ERRORS as e:
            logger.error(f"Get {file_name} from {bucket_name} failed: {e}")
            raise

        document = dict(response)
        document["Body"] = body
        return document

    def get_signed_url(
        self,
        bucket_name: str,
        key: str,
        file_name: Optional[str] = None,
        expiry: int = 60,
    ) -> str:
        """
        Presigned GET URL for an object

        A user without credentials for the object can fetch it with this URL
        until it expires. Signing happens locally; no request is sent.

        Args:
            bucket_name: Bucket name
            key: Object key
            file_name: If given, downloads are served as an attachment
                with this filename
            expiry: Lifetime in seconds

        Returns:
            str: Signed URL

        Raises:
            StorageRequestError: If bucket or key is empty or expiry is not positive
        """
        request = _build(SignedUrlRequest, {
            "bucket": bucket_name,
            "key": key,
            "file_name": file_name,
            "expiry": expiry,
        })

        try:
            return self._handle.signer.generate_presigned_url(
                "get_object",
                Params=request.to_params(),
                ExpiresIn=request.expiry,
            )
        except PROVIDER_ERRORS as e:
            logger.error(f"Signing URL for {key} in {bucket_name} failed: {e}")
            raise


@lru_cache()
def get_storage_client() -> S3StorageClient:
    """
    Get the process-wide storage client built from settings

    Construct S3StorageClient(S3ClientHandle(...)) directly when a different
    configuration or a test double is needed.

    Returns:
        S3StorageClient: Cached storage client

    Raises:
        StorageConfigurationError: If production settings lack credentials
    """
    settings = get_settings()
    validate_configuration(settings)
    return S3StorageClient(S3ClientHandle(settings))
