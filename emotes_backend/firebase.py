"""
Firebase Admin SDK bootstrap shared by the Firestore and Storage clients.
"""

from __future__ import annotations

import logging

import firebase_admin
from firebase_admin import credentials

logger = logging.getLogger(__name__)


def get_firebase_app(credentials_path: str, storage_bucket: str) -> firebase_admin.App:
    """
    Return the default Firebase app, initializing it on first use.

    The service-account file is read once; later calls reuse the app even if
    they pass different arguments.
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    logger.info(
        "Initializing Firebase app from %s (bucket=%s)",
        credentials_path,
        storage_bucket,
    )
    cred = credentials.Certificate(credentials_path)
    return firebase_admin.initialize_app(cred, {"storageBucket": storage_bucket})
