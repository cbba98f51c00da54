"""
Admin-key gate for the mutating routes.
"""

from __future__ import annotations

import logging
import secrets
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from emotes_backend.config import Settings, get_settings

logger = logging.getLogger(__name__)

ADMIN_KEY_HEADER = "x-admin-key"


def require_admin_key(
    x_admin_key: Optional[str] = Header(default=None, alias=ADMIN_KEY_HEADER),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    FastAPI dependency gating the admin routes.

    Expects the configured admin key in the `x-admin-key` header; anything else
    is rejected with 403 before the route handler runs.
    """
    if x_admin_key is None or not secrets.compare_digest(
        x_admin_key.encode("utf-8"), settings.admin_access_key.encode("utf-8")
    ):
        logger.warning("Rejected admin request: invalid access key")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid Access Key")
