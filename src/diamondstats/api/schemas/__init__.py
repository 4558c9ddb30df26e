"""Pydantic models for API I/O."""

from .player import (
    DescriptionResponse,
    PlayerDetailResponse,
    PlayerEditResponse,
    PlayerListResponse,
    PlayerUpdateRequest,
)

__all__ = [
    "DescriptionResponse",
    "PlayerDetailResponse",
    "PlayerEditResponse",
    "PlayerListResponse",
    "PlayerUpdateRequest",
]
