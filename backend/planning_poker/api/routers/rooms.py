"""Room REST routes."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi import Depends

from planning_poker.api.deps import get_room_store
from planning_poker.api.deps import get_settings
from planning_poker.api.errors import raise_room_error
from planning_poker.core.config import Settings
from planning_poker.rooms.models import ChangeScaleRequest
from planning_poker.rooms.models import CreateRoomRequest
from planning_poker.rooms.models import JoinRequest
from planning_poker.rooms.models import ReadyRequest
from planning_poker.rooms.models import ResetRequest
from planning_poker.rooms.models import RevealRequest
from planning_poker.rooms.models import VoteRequest
from planning_poker.rooms.registry import RoomError
from planning_poker.rooms.registry import RoomStore
from planning_poker.rooms.registry import normalize_room_id
from planning_poker.rooms.views import project_room

router = APIRouter()


@router.post("/api/rooms")
def create_room(
    payload: CreateRoomRequest,
    store: RoomStore = Depends(get_room_store),
    settings: Settings = Depends(get_settings),
) -> dict[str, object]:
    """Create a room, joining the host when a name is given."""
    scale_id = settings.poker_default_scale if payload.scale_id is None else payload.scale_id
    try:
        room, host = store.create_room(scale_id=scale_id, host_name=payload.host_name)
        host_id = host.participant_id if host is not None else None
        with store.lock_room(room.room_id) as room:
            view = project_room(room, host_id)
    except RoomError as exc:
        raise_room_error(exc, {"scale_id": scale_id})
    return {"room_id": room.room_id, "participant_id": host_id, "room": view}


@router.get("/api/rooms/{room_id}")
def get_room_view(
    room_id: str,
    participant_id: str | None = None,
    store: RoomStore = Depends(get_room_store),
) -> dict[str, object]:
    """Return one room as seen by participant_id."""
    try:
        with store.lock_room(room_id) as room:
            view = project_room(room, participant_id)
    except RoomError as exc:
        raise_room_error(exc, {"room_id": normalize_room_id(room_id)})
    return view


@router.patch("/api/rooms/{room_id}")
def change_room_scale(
    room_id: str,
    payload: ChangeScaleRequest,
    store: RoomStore = Depends(get_room_store),
) -> dict[str, object]:
    """Switch the estimation scale, which always starts a new round."""
    try:
        with store.lock_room(room_id):
            room = store.change_scale(room_id, payload.scale_id)
            view = project_room(room)
    except RoomError as exc:
        raise_room_error(exc, {"room_id": normalize_room_id(room_id), "scale_id": payload.scale_id})
    return view


@router.post("/api/rooms/{room_id}/participants")
def join_room(
    room_id: str,
    payload: JoinRequest,
    store: RoomStore = Depends(get_room_store),
) -> dict[str, object]:
    """Join a room, or rename when participant_id is already a member."""
    try:
        with store.lock_room(room_id) as room:
            participant = store.join(room_id, payload.name, payload.participant_id)
            view = project_room(room, participant.participant_id)
    except RoomError as exc:
        raise_room_error(exc, {"room_id": normalize_room_id(room_id)})
    return {"participant_id": participant.participant_id, "room": view}


@router.delete("/api/rooms/{room_id}/participants/{participant_id}")
def leave_room(
    room_id: str,
    participant_id: str,
    store: RoomStore = Depends(get_room_store),
) -> dict[str, object]:
    """Remove one participant from the room."""
    try:
        with store.lock_room(room_id) as room:
            auto_revealed = store.leave(room_id, participant_id)
            view = project_room(room)
    except RoomError as exc:
        raise_room_error(
            exc,
            {"room_id": normalize_room_id(room_id), "participant_id": participant_id},
        )
    return {**view, "auto_revealed": auto_revealed}


@router.post("/api/rooms/{room_id}/votes")
def cast_vote(
    room_id: str,
    payload: VoteRequest,
    store: RoomStore = Depends(get_room_store),
) -> dict[str, object]:
    """Set or clear the caller's vote."""
    try:
        with store.lock_room(room_id) as room:
            auto_revealed = store.vote(room_id, payload.participant_id, payload.vote or None)
            view = project_room(room, payload.participant_id)
    except RoomError as exc:
        raise_room_error(
            exc,
            {"room_id": normalize_room_id(room_id), "participant_id": payload.participant_id},
        )
    return {**view, "auto_revealed": auto_revealed}


@router.post("/api/rooms/{room_id}/ready")
def set_ready(
    room_id: str,
    payload: ReadyRequest,
    store: RoomStore = Depends(get_room_store),
) -> dict[str, object]:
    """Update the caller's ready flag."""
    try:
        with store.lock_room(room_id) as room:
            auto_revealed = store.set_ready(room_id, payload.participant_id, payload.ready)
            view = project_room(room, payload.participant_id)
    except RoomError as exc:
        raise_room_error(
            exc,
            {"room_id": normalize_room_id(room_id), "participant_id": payload.participant_id},
        )
    return {**view, "auto_revealed": auto_revealed}


@router.post("/api/rooms/{room_id}/reveal")
def reveal_votes(
    room_id: str,
    payload: RevealRequest | None = None,
    store: RoomStore = Depends(get_room_store),
) -> dict[str, object]:
    """Reveal every vote of the current round."""
    requester_id = payload.participant_id if payload is not None else None
    try:
        with store.lock_room(room_id):
            room = store.reveal(room_id)
            view = project_room(room, requester_id)
    except RoomError as exc:
        raise_room_error(exc, {"room_id": normalize_room_id(room_id)})
    return view


@router.post("/api/rooms/{room_id}/reset")
def reset_round(
    room_id: str,
    payload: ResetRequest | None = None,
    store: RoomStore = Depends(get_room_store),
) -> dict[str, object]:
    """Clear the round, optionally switching scale."""
    requester_id = payload.participant_id if payload is not None else None
    scale_id = payload.scale_id if payload is not None else None
    try:
        with store.lock_room(room_id):
            room = store.reset(room_id, scale_id=scale_id)
            view = project_room(room, requester_id)
    except RoomError as exc:
        raise_room_error(exc, {"room_id": normalize_room_id(room_id), "scale_id": scale_id})
    return view
