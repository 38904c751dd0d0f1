"""Dependency helpers shared by API routers."""

from __future__ import annotations

from fastapi import Request

from planning_poker.core.config import Settings
from planning_poker.rooms.registry import RoomStore


def get_room_store(request: Request) -> RoomStore:
    """Return the room store created by the application lifespan."""
    return request.app.state.room_store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
