"""Pydantic models for room APIs."""

from __future__ import annotations

from pydantic import BaseModel


class CreateRoomRequest(BaseModel):
    """POST /api/rooms request body."""

    scale_id: str | None = None
    host_name: str | None = None


class JoinRequest(BaseModel):
    """POST /api/rooms/{room_id}/participants request body."""

    name: str
    participant_id: str | None = None


class VoteRequest(BaseModel):
    """POST /api/rooms/{room_id}/votes request body; a null or empty vote clears it."""

    participant_id: str
    vote: str | None = None


class ReadyRequest(BaseModel):
    """POST /api/rooms/{room_id}/ready request body."""

    participant_id: str
    ready: bool = True


class RevealRequest(BaseModel):
    """POST /api/rooms/{room_id}/reveal request body."""

    participant_id: str | None = None


class ResetRequest(BaseModel):
    """POST /api/rooms/{room_id}/reset request body."""

    participant_id: str | None = None
    scale_id: str | None = None


class ChangeScaleRequest(BaseModel):
    """PATCH /api/rooms/{room_id} request body."""

    scale_id: str
