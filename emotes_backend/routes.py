"""
HTTP routes for the emotes API.

Public routes live on ``router``; mutating routes live on ``admin_router`` and
are gated by the admin key.
"""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile

from emotes_backend.auth import require_admin_key
from emotes_backend.config import Settings, get_settings
from emotes_backend.constants import (
    AD_LINK_FIELD,
    CREATED_AT_FIELD,
    EMOTES_COLLECTION,
    EMOTES_STORAGE_PREFIX,
    SETTINGS_COLLECTION,
    SETTINGS_DOCUMENT,
)
from emotes_backend.db import DbClient
from emotes_backend.dependencies import get_db_client, get_storage_client
from emotes_backend.schemas import (
    AddEmoteResponse,
    ConfigResponse,
    Emote,
    ListEmotesResponse,
    MessageResponse,
    UpdateConfigRequest,
)
from emotes_backend.storage import StorageClient

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter(prefix="/admin", dependencies=[Depends(require_admin_key)])


def _emote_object_path(filename: str) -> str:
    return f"{EMOTES_STORAGE_PREFIX}/{int(time.time() * 1000)}_{filename}"


@router.get("/config", response_model=ConfigResponse)
def get_config(
    db: DbClient = Depends(get_db_client),
    settings: Settings = Depends(get_settings),
):
    doc = db.get_document(SETTINGS_COLLECTION, SETTINGS_DOCUMENT)
    if doc is None or doc.get(AD_LINK_FIELD) is None:
        return ConfigResponse(adLink=settings.default_ad_link)
    return ConfigResponse(adLink=doc[AD_LINK_FIELD])


@router.get("/emotes", response_model=ListEmotesResponse)
def list_emotes(
    limit: int = Query(100, ge=1, le=500),
    db: DbClient = Depends(get_db_client),
):
    docs = db.list_documents(
        EMOTES_COLLECTION, order_by=CREATED_AT_FIELD, descending=True, limit=limit
    )
    return ListEmotesResponse(emotes=[Emote(**doc) for doc in docs])


@admin_router.post("/config", response_model=MessageResponse)
def update_config(payload: UpdateConfigRequest, db: DbClient = Depends(get_db_client)):
    db.set_document(
        SETTINGS_COLLECTION,
        SETTINGS_DOCUMENT,
        {AD_LINK_FIELD: payload.adLink},
        merge=True,
    )
    logger.info("Ad link updated to %s", payload.adLink)
    return MessageResponse(message="Ad link updated successfully.")


@admin_router.post("/addemote", response_model=AddEmoteResponse)
def add_emote(
    image: UploadFile | None = File(None),
    name: str | None = Form(None),
    db: DbClient = Depends(get_db_client),
    storage: StorageClient = Depends(get_storage_client),
    settings: Settings = Depends(get_settings),
):
    """
    Upload the image as a public object, then record it in the emotes collection.

    A failed metadata write leaves the uploaded object in place.
    """
    if image is None or not image.filename:
        raise HTTPException(status_code=400, detail="No file uploaded.")

    data = image.file.read()
    path = _emote_object_path(image.filename)
    public_url = storage.upload_public(path, data, content_type=image.content_type)

    emote_id = db.create_document(
        EMOTES_COLLECTION,
        {"name": name or settings.unnamed_emote_name, "url": public_url},
    )
    logger.info("Added emote %s at %s (%d bytes)", emote_id, path, len(data))
    return AddEmoteResponse(url=public_url)


@admin_router.delete("/emote/{emote_id}", response_model=MessageResponse)
def delete_emote(
    emote_id: str,
    db: DbClient = Depends(get_db_client),
    storage: StorageClient = Depends(get_storage_client),
):
    """
    Delete the stored object (best effort) and then the emote record.

    The two deletions are not atomic; an object that is already gone does not
    block removal of the record.
    """
    doc = db.get_document(EMOTES_COLLECTION, emote_id)
    if doc is None:
        raise HTTPException(status_code=404, detail="Emote not found")

    path = storage.path_from_url(doc.get("url") or "")
    if path:
        try:
            storage.delete(path)
        except Exception as exc:
            logger.warning("Storage delete error for %s (might not exist): %s", path, exc)

    db.delete_document(EMOTES_COLLECTION, emote_id)
    logger.info("Deleted emote %s", emote_id)
    return MessageResponse(message="Emote deleted")


router.include_router(admin_router)
