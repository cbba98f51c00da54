"""
Pydantic schemas for the emotes API.

Field names are camelCase because the browser pages read them as-is.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ConfigResponse(BaseModel):
    adLink: str


class UpdateConfigRequest(BaseModel):
    adLink: str = Field(..., max_length=2048)


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class AddEmoteResponse(BaseModel):
    success: bool = True
    url: str


class Emote(BaseModel):
    id: str
    name: str
    url: str
    createdAt: Optional[datetime] = None


class ListEmotesResponse(BaseModel):
    emotes: list[Emote]
