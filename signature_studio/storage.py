"""Object storage for uploaded images and baked GIFs"""

import logging
import re
from pathlib import Path
from typing import Optional, Protocol

import boto3
from botocore.config import Config

from .config import (
    PUBLIC_BASE_URL,
    R2_ACCESS_KEY_ID,
    R2_ACCOUNT_ID,
    R2_BUCKET_NAME,
    R2_PUBLIC_URL,
    R2_SECRET_ACCESS_KEY,
    STORAGE_BACKEND,
    UPLOAD_DIR,
)

logger = logging.getLogger(__name__)

# Longest lifetime S3-compatible presigned URLs allow (7 days)
PRESIGNED_URL_EXPIRATION = 604800

SAFE_KEY = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,254}$")


def validate_key(key: str) -> str:
    """Reject keys that could escape the storage root"""
    if not key or ".." in key or not SAFE_KEY.match(key):
        raise ValueError(f"Invalid storage key: {key!r}")
    return key


class ObjectStorage(Protocol):
    def put(self, key: str, data: bytes, content_type: str) -> str:
        """Store bytes and return an absolute URL they can be fetched from"""
        ...


class LocalObjectStorage:
    """Files on local disk, served by the /api/files route"""

    def __init__(self, root: str = UPLOAD_DIR, base_url: str = PUBLIC_BASE_URL):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def path_for(self, key: str) -> Path:
        return self.root / validate_key(key)

    def put(self, key: str, data: bytes, content_type: str) -> str:
        path = self.path_for(key)
        self.root.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.info(f"📤 Stored {key} ({len(data)} bytes, {content_type})")
        return f"{self.base_url}/api/files/{key}"


def get_r2_client():
    """Create and return an R2 client."""
    return boto3.client(
        "s3",
        endpoint_url=f"https://{R2_ACCOUNT_ID}.r2.cloudflarestorage.com",
        aws_access_key_id=R2_ACCESS_KEY_ID,
        aws_secret_access_key=R2_SECRET_ACCESS_KEY,
        config=Config(signature_version="s3v4"),
    )


def generate_presigned_url(
    key: str, expiration: int = PRESIGNED_URL_EXPIRATION, client=None, bucket: str = R2_BUCKET_NAME
) -> str:
    """Generate a presigned URL for accessing a private object in R2."""
    r2 = client or get_r2_client()
    params = {"Bucket": bucket, "Key": key, "ResponseContentDisposition": "inline"}
    try:
        url = r2.generate_presigned_url("get_object", Params=params, ExpiresIn=expiration)
        logger.info(f"✅ Generated presigned URL for key: {key}")
        return url
    except Exception as e:
        logger.error(f"❌ Failed to generate presigned URL for key {key}: {e}")
        raise


class R2ObjectStorage:
    """Cloudflare R2 bucket. Public bucket URLs are preferred since emails outlive presigned links."""

    def __init__(self, client=None, bucket: str = R2_BUCKET_NAME, public_url: Optional[str] = R2_PUBLIC_URL):
        self.client = client or get_r2_client()
        self.bucket = bucket
        self.public_url = public_url.rstrip("/") if public_url else None

    def put(self, key: str, data: bytes, content_type: str) -> str:
        validate_key(key)
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
                CacheControl="public, max-age=31536000, immutable",
            )
        except Exception as e:
            logger.error(f"❌ Failed to upload {key} to R2: {e}")
            raise
        logger.info(f"📤 Uploaded {key} to R2 ({len(data)} bytes)")
        if self.public_url:
            return f"{self.public_url}/{key}"
        logger.warning(f"⚠️ R2_PUBLIC_URL not set, {key} is only reachable for 7 days")
        return generate_presigned_url(key, client=self.client, bucket=self.bucket)


_storage: Optional[ObjectStorage] = None


def get_storage() -> ObjectStorage:
    """Configured storage backend, created on first use"""
    global _storage
    if _storage is None:
        _storage = R2ObjectStorage() if STORAGE_BACKEND == "r2" else LocalObjectStorage()
        logger.info(f"✅ Object storage backend: {STORAGE_BACKEND}")
    return _storage
