"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging
import os

from emotes_backend.config import Settings, get_settings
from emotes_backend.db import DbClient, FirestoreDbClient, InMemoryDbClient, SqlDbClient
from emotes_backend.firebase import get_firebase_app
from emotes_backend.storage import (
    CosStorageClient,
    FirebaseStorageClient,
    InMemoryStorageClient,
    StorageClient,
)

logger = logging.getLogger(__name__)

_db_client: DbClient | None = None
_storage_client: StorageClient | None = None


def _firebase_configured(settings: Settings) -> bool:
    return os.path.isfile(settings.firebase_credentials_path)


def _firebase_app(settings: Settings):
    return get_firebase_app(
        settings.firebase_credentials_path, settings.firebase_storage_bucket
    )


def get_db_client() -> DbClient:
    """
    Return a singleton document store client shared by all requests.
    """
    global _db_client
    if _db_client:
        return _db_client

    settings = get_settings()
    if settings.use_in_memory_backends:
        _db_client = InMemoryDbClient()
    elif settings.database_url:
        _db_client = SqlDbClient(settings.database_url)
    elif _firebase_configured(settings):
        _db_client = FirestoreDbClient(app=_firebase_app(settings))
    else:
        logger.warning(
            "No document store configured (%s not found, DATABASE_URL unset); "
            "using in-memory store",
            settings.firebase_credentials_path,
        )
        _db_client = InMemoryDbClient()
    logger.info("Document store: %s", _db_client.__class__.__name__)
    return _db_client


def get_storage_client() -> StorageClient:
    global _storage_client
    if _storage_client:
        return _storage_client

    settings = get_settings()
    if settings.use_in_memory_backends:
        _storage_client = InMemoryStorageClient()
    elif settings.cos_bucket:
        _storage_client = CosStorageClient(
            bucket=settings.cos_bucket,
            region=settings.cos_region or "",
            endpoint=settings.cos_endpoint or "",
            access_key_id=settings.aws_access_key_id or "",
            secret_access_key=settings.aws_secret_access_key or "",
            public_base_url=settings.cos_public_base_url or "",
        )
    elif _firebase_configured(settings):
        _storage_client = FirebaseStorageClient(app=_firebase_app(settings))
    else:
        logger.warning(
            "No object store configured (%s not found, COS_BUCKET unset); "
            "using in-memory storage",
            settings.firebase_credentials_path,
        )
        _storage_client = InMemoryStorageClient()
    logger.info("Object store: %s", _storage_client.__class__.__name__)
    return _storage_client
