"""In-memory room store and the per-room voting state machine."""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from datetime import timezone
import logging
import secrets
import threading
import uuid

from planning_poker.rooms.scales import DEFAULT_SCALE_ID
from planning_poker.rooms.scales import get_scale

ROOM_ID_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
ROOM_ID_LENGTH = 4
DEFAULT_ROOM_IDLE_SECONDS = 3600

logger = logging.getLogger(__name__)


class RoomError(Exception):
    """Base class for room-domain errors."""


class RoomNotFoundError(RoomError):
    """Raised when a room id does not resolve to a live room."""


class ParticipantNotFoundError(RoomError):
    """Raised when a participant id is not a member of the room."""


class InvalidNameError(RoomError):
    """Raised when a display name is blank after trimming."""


class InvalidVoteError(RoomError):
    """Raised when a vote token is not part of the room's active scale."""


class InvalidScaleError(RoomError):
    """Raised when a scale id is not registered."""


class NotReadyError(RoomError):
    """Raised when marking ready without a selected estimate."""


class RoundRevealedError(RoomError):
    """Raised when votes change after the round was revealed (strict mode)."""


@dataclass(slots=True)
class Participant:
    """Participant membership and voting state inside one room."""

    participant_id: str
    name: str
    joined_at: int
    last_active_at: int
    vote: str | None = None
    ready: bool = False


@dataclass(slots=True)
class Room:
    """Room aggregate state."""

    room_id: str
    scale_id: str
    created_at: int
    updated_at: int
    revealed: bool = False
    participants: list[Participant] = field(default_factory=list)

    def find_participant(self, participant_id: str) -> Participant | None:
        for participant in self.participants:
            if participant.participant_id == participant_id:
                return participant
        return None


def now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def normalize_room_id(room_id: str) -> str:
    """Room ids are case-insensitive; the store keeps them upper-case."""
    return room_id.strip().upper()


def generate_room_id() -> str:
    return "".join(secrets.choice(ROOM_ID_ALPHABET) for _ in range(ROOM_ID_LENGTH))


def should_auto_reveal(room: Room) -> bool:
    """Return True when an unrevealed round has every participant voted and ready."""
    if room.revealed:
        return False
    if not room.participants:
        return False
    return all(
        participant.ready and participant.vote is not None
        for participant in room.participants
    )


class RoomStore:
    """Process-wide registry of rooms, one lock per room.

    Mutations take only the room lock. Room creation and idle reclamation take
    the store guard first and then room locks, so the lock order is fixed.
    """

    def __init__(
        self,
        *,
        room_idle_seconds: int = DEFAULT_ROOM_IDLE_SECONDS,
        reject_votes_after_reveal: bool = True,
        clock: Callable[[], int] = now_ms,
        room_id_factory: Callable[[], str] = generate_room_id,
    ) -> None:
        if room_idle_seconds < 0:
            raise ValueError("room_idle_seconds must be >= 0")

        self._rooms: dict[str, Room] = {}
        self._room_locks: dict[str, threading.RLock] = {}
        self._rooms_guard = threading.Lock()
        self._room_idle_ms = room_idle_seconds * 1000
        self._reject_votes_after_reveal = reject_votes_after_reveal
        self._clock = clock
        self._room_id_factory = room_id_factory

    @property
    def reject_votes_after_reveal(self) -> bool:
        return self._reject_votes_after_reveal

    def room_count(self) -> int:
        return len(self._rooms)

    def find_room(self, room_id: str) -> Room | None:
        """Return the room for room_id, or None. Never touches updated_at."""
        return self._rooms.get(normalize_room_id(room_id))

    def get_room(self, room_id: str) -> Room:
        room = self.find_room(room_id)
        if room is None:
            raise RoomNotFoundError(f"room_id={room_id} not found")
        return room

    @contextmanager
    def lock_room(self, room_id: str) -> Iterator[Room]:
        """Acquire one room write lock and yield the live room."""
        key = normalize_room_id(room_id)
        lock = self._room_locks.get(key)
        if lock is None:
            raise RoomNotFoundError(f"room_id={room_id} not found")
        with lock:
            # The room may have been reclaimed, and its id reused, while we waited on its lock.
            if self._room_locks.get(key) is not lock:
                raise RoomNotFoundError(f"room_id={room_id} not found")
            yield self.get_room(key)

    def create_room(
        self,
        scale_id: str = DEFAULT_SCALE_ID,
        host_name: str | None = None,
    ) -> tuple[Room, Participant | None]:
        """Create a room with a fresh id and optionally join its host."""
        if get_scale(scale_id) is None:
            raise InvalidScaleError(f"scale_id={scale_id} is not supported")

        self.reclaim_idle_rooms()

        with self._rooms_guard:
            room_id = self._generate_unique_room_id()
            timestamp = self._clock()
            room = Room(
                room_id=room_id,
                scale_id=scale_id,
                created_at=timestamp,
                updated_at=timestamp,
            )
            self._rooms[room_id] = room
            self._room_locks[room_id] = threading.RLock()
            logger.info("Created room %s with scale %s", room_id, scale_id)

            host: Participant | None = None
            if host_name is not None and host_name.strip():
                host = self.join(room_id, host_name)
            return room, host

    def join(self, room_id: str, name: str, participant_id: str | None = None) -> Participant:
        """Add a participant, or rename an existing one when participant_id matches."""
        with self.lock_room(room_id) as room:
            display_name = name.strip()
            if not display_name:
                raise InvalidNameError("name is required")

            timestamp = self._touch(room)
            participant = room.find_participant(participant_id) if participant_id else None
            if participant is not None:
                participant.name = display_name
                participant.last_active_at = timestamp
                return participant

            participant = Participant(
                participant_id=str(uuid.uuid4()),
                name=display_name,
                joined_at=timestamp,
                last_active_at=timestamp,
            )
            room.participants.append(participant)
            logger.debug("Participant %s joined room %s", participant.participant_id, room.room_id)
            return participant

    def vote(self, room_id: str, participant_id: str, token: str | None = None) -> bool:
        """Set or clear a vote. Returns True when this call auto-revealed the round."""
        with self.lock_room(room_id) as room:
            participant = self._require_participant(room, participant_id)
            self._ensure_round_open(room)
            if token is not None:
                scale = get_scale(room.scale_id)
                if scale is None or not scale.allows(token):
                    raise InvalidVoteError(
                        f"vote={token!r} is not allowed for scale {room.scale_id}"
                    )

            if participant.vote != token:
                participant.ready = False
            participant.vote = token
            participant.last_active_at = self._touch(room)
            return self._apply_auto_reveal(room)

    def set_ready(self, room_id: str, participant_id: str, ready: bool) -> bool:
        """Toggle the ready flag. Returns True when this call auto-revealed the round."""
        with self.lock_room(room_id) as room:
            participant = self._require_participant(room, participant_id)
            self._ensure_round_open(room)
            if ready and participant.vote is None:
                raise NotReadyError("select an estimate first")

            participant.ready = ready
            participant.last_active_at = self._touch(room)
            return self._apply_auto_reveal(room)

    def leave(self, room_id: str, participant_id: str) -> bool:
        """Remove a participant. Returns True when the remaining set auto-revealed."""
        with self.lock_room(room_id) as room:
            participant = self._require_participant(room, participant_id)
            room.participants.remove(participant)
            self._touch(room)
            logger.debug("Participant %s left room %s", participant_id, room.room_id)
            if not room.participants:
                # An empty room has no round left; the next join starts voting afresh.
                room.revealed = False
                return False
            return self._apply_auto_reveal(room)

    def reveal(self, room_id: str) -> Room:
        with self.lock_room(room_id) as room:
            if not room.revealed:
                room.revealed = True
                logger.info("Room %s revealed", room.room_id)
            self._touch(room)
            return room

    def reset(self, room_id: str, scale_id: str | None = None) -> Room:
        """Start a new round, optionally switching the room to another scale."""
        with self.lock_room(room_id) as room:
            if scale_id is not None and get_scale(scale_id) is None:
                raise InvalidScaleError(f"scale_id={scale_id} is not supported")

            for participant in room.participants:
                participant.vote = None
                participant.ready = False
            room.revealed = False
            if scale_id is not None and scale_id != room.scale_id:
                logger.info("Room %s switched scale %s -> %s", room.room_id, room.scale_id, scale_id)
                room.scale_id = scale_id
            self._touch(room)
            logger.info("Room %s reset", room.room_id)
            return room

    def change_scale(self, room_id: str, scale_id: str) -> Room:
        return self.reset(room_id, scale_id=scale_id)

    def reclaim_idle_rooms(self, now: int | None = None) -> list[str]:
        """Drop empty rooms that have been idle longer than the configured window."""
        if self._room_idle_ms == 0:
            return []

        current = self._clock() if now is None else now
        reclaimed: list[str] = []
        with self._rooms_guard:
            for room_id in list(self._rooms):
                with self._room_locks[room_id]:
                    room = self._rooms[room_id]
                    if room.participants or current - room.updated_at < self._room_idle_ms:
                        continue
                    del self._rooms[room_id]
                    del self._room_locks[room_id]
                reclaimed.append(room_id)

        if reclaimed:
            logger.info("Reclaimed %d idle room(s): %s", len(reclaimed), ", ".join(reclaimed))
        return reclaimed

    def _generate_unique_room_id(self) -> str:
        room_id = self._room_id_factory()
        while room_id in self._rooms:
            logger.warning("Room id collision detected for %s, regenerating", room_id)
            room_id = self._room_id_factory()
        return room_id

    def _touch(self, room: Room) -> int:
        room.updated_at = max(self._clock(), room.updated_at)
        return room.updated_at

    def _ensure_round_open(self, room: Room) -> None:
        if room.revealed and self.reject_votes_after_reveal:
            raise RoundRevealedError(f"room_id={room.room_id} is revealed; reset to vote again")

    @staticmethod
    def _require_participant(room: Room, participant_id: str) -> Participant:
        participant = room.find_participant(participant_id)
        if participant is None:
            raise ParticipantNotFoundError(
                f"participant_id={participant_id} not in room_id={room.room_id}"
            )
        return participant

    @staticmethod
    def _apply_auto_reveal(room: Room) -> bool:
        if not should_auto_reveal(room):
            return False
        room.revealed = True
        logger.info("Room %s auto-revealed: every participant is ready", room.room_id)
        return True


__all__ = [
    "DEFAULT_ROOM_IDLE_SECONDS",
    "InvalidNameError",
    "InvalidScaleError",
    "InvalidVoteError",
    "NotReadyError",
    "Participant",
    "ParticipantNotFoundError",
    "ROOM_ID_ALPHABET",
    "ROOM_ID_LENGTH",
    "Room",
    "RoomError",
    "RoomNotFoundError",
    "RoomStore",
    "RoundRevealedError",
    "generate_room_id",
    "normalize_room_id",
    "now_ms",
    "should_auto_reveal",
]
