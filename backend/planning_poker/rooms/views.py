"""Room view builders used by REST responses."""

from __future__ import annotations

from planning_poker.rooms.registry import Participant
from planning_poker.rooms.registry import Room
from planning_poker.rooms.scales import get_scale


def participant_view(
    room: Room,
    participant: Participant,
    requester_id: str | None = None,
) -> dict[str, object]:
    has_voted = participant.vote is not None
    expose_vote = room.revealed or participant.participant_id == requester_id
    return {
        "id": participant.participant_id,
        "name": participant.name,
        "has_voted": has_voted,
        "vote": participant.vote if expose_vote and has_voted else None,
        "ready": participant.ready,
    }


def project_room(room: Room, requester_id: str | None = None) -> dict[str, object]:
    """Render room state for one caller.

    Pending votes of other participants stay hidden until the round is
    revealed; the requester always sees their own vote.
    """
    scale = get_scale(room.scale_id)
    return {
        "id": room.room_id,
        "scale_id": room.scale_id,
        "scale_values": list(scale.values) if scale is not None else [],
        "created_at": room.created_at,
        "updated_at": room.updated_at,
        "revealed": room.revealed,
        "participants": [
            participant_view(room, participant, requester_id)
            for participant in room.participants
        ],
    }
