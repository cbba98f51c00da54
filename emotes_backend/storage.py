"""
Object storage abstraction for Firebase Cloud Storage, S3-compatible buckets
and in-memory testing.

Every uploaded object is publicly readable and addressed by a public URL:
``<base url>/<bucket>/<path>`` for GCS and the in-memory double,
``https://<bucket>.<endpoint host>/<path>`` (or ``<public base url>/<path>``)
for S3-compatible buckets. ``path_from_url`` reverses that mapping so a stored
URL is enough to find the object again.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol
from urllib.parse import urlsplit

import boto3
from botocore.config import Config
from firebase_admin import storage as firebase_storage

GCS_PUBLIC_BASE_URL = "https://storage.googleapis.com"


class StorageClient(Protocol):
    """Defines the operations the API needs from object storage."""

    def upload_public(self, path: str, data: bytes, content_type: str | None = None) -> str:
        """Store ``data`` at ``path``, make it publicly readable and return its URL."""
        ...

    def delete(self, path: str) -> None:
        ...

    def public_url(self, path: str) -> str:
        ...

    def path_from_url(self, url: str) -> Optional[str]:
        ...


def _path_after_bucket(url: str, bucket: str) -> Optional[str]:
    """Return the object path following ``<bucket>/`` in ``url``, if any."""
    if not url:
        return None
    parts = url.split(f"{bucket}/", 1)
    if len(parts) < 2 or not parts[1]:
        return None
    return parts[1]


@dataclass
class InMemoryStorageClient:
    """Test double for storage interactions."""

    bucket: str = "emotes-test"
    base_url: str = "https://storage.example.test"
    stored_objects: dict = None
    content_types: dict = None

    def __post_init__(self):
        if self.stored_objects is None:
            self.stored_objects = {}
        if self.content_types is None:
            self.content_types = {}

    def upload_public(self, path: str, data: bytes, content_type: str | None = None) -> str:
        self.stored_objects[path] = bytes(data)
        self.content_types[path] = content_type
        return self.public_url(path)

    def delete(self, path: str) -> None:
        if path not in self.stored_objects:
            raise FileNotFoundError(path)
        del self.stored_objects[path]
        self.content_types.pop(path, None)

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/{self.bucket}/{path}"

    def path_from_url(self, url: str) -> Optional[str]:
        return _path_after_bucket(url, self.bucket)

    def get_bytes(self, path: str) -> bytes:
        stored = self.stored_objects.get(path)
        if stored is None:
            raise FileNotFoundError(path)
        return stored

    def reset(self) -> None:
        self.stored_objects.clear()
        self.content_types.clear()


class FirebaseStorageClient:
    """
    Firebase Cloud Storage (GCS) client using the firebase_admin default bucket.
    """

    def __init__(self, app=None, bucket=None):
        self._bucket = bucket or firebase_storage.bucket(app=app)

    @property
    def bucket_name(self) -> str:
        return self._bucket.name

    def upload_public(self, path: str, data: bytes, content_type: str | None = None) -> str:
        blob = self._bucket.blob(path)
        blob.upload_from_string(data, content_type=content_type)
        blob.make_public()
        return self.public_url(blob.name)

    def delete(self, path: str) -> None:
        self._bucket.blob(path).delete()

    def public_url(self, path: str) -> str:
        return f"{GCS_PUBLIC_BASE_URL}/{self.bucket_name}/{path}"

    def path_from_url(self, url: str) -> Optional[str]:
        return _path_after_bucket(url, self.bucket_name)


@dataclass
class CosStorageClient:
    """
    S3-compatible storage client (Tencent COS, MinIO, AWS S3).
    """

    bucket: str
    region: str
    endpoint: str
    access_key_id: str
    secret_access_key: str
    public_base_url: str = ""

    def __post_init__(self):
        # Use virtual-hosted style addressing to satisfy COS requirements.
        config = Config(
            s3={"addressing_style": "virtual"},
            signature_version="s3v4",
        )
        self._client = boto3.client(
            "s3",
            endpoint_url=self.endpoint or None,
            region_name=self.region or None,
            aws_access_key_id=self.access_key_id,
            aws_secret_access_key=self.secret_access_key,
            config=config,
        )
        if not self.public_base_url:
            self.public_base_url = self._virtual_hosted_base_url()

    def _virtual_hosted_base_url(self) -> str:
        """Return ``https://<bucket>.<endpoint host>``, the address COS serves public reads on."""
        endpoint = self.endpoint or (
            f"https://s3.{self.region}.amazonaws.com" if self.region else "https://s3.amazonaws.com"
        )
        parts = urlsplit(endpoint if "://" in endpoint else f"https://{endpoint}")
        return f"{parts.scheme or 'https'}://{self.bucket}.{parts.netloc}"

    def upload_public(self, path: str, data: bytes, content_type: str | None = None) -> str:
        self._client.put_object(
            Bucket=self.bucket,
            Key=path,
            Body=data,
            ContentType=content_type or "application/octet-stream",
            ACL="public-read",
        )
        return self.public_url(path)

    def delete(self, path: str) -> None:
        self._client.delete_object(Bucket=self.bucket, Key=path)

    def public_url(self, path: str) -> str:
        return f"{self.public_base_url.rstrip('/')}/{path}"

    def path_from_url(self, url: str) -> Optional[str]:
        prefix = f"{self.public_base_url.rstrip('/')}/"
        if not url or not url.startswith(prefix) or len(url) == len(prefix):
            return None
        return url[len(prefix):]
