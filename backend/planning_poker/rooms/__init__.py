"""Room domain package: scales, store/state machine and views."""

from planning_poker.rooms.registry import InvalidNameError
from planning_poker.rooms.registry import InvalidScaleError
from planning_poker.rooms.registry import InvalidVoteError
from planning_poker.rooms.registry import NotReadyError
from planning_poker.rooms.registry import Participant
from planning_poker.rooms.registry import ParticipantNotFoundError
from planning_poker.rooms.registry import Room
from planning_poker.rooms.registry import RoomError
from planning_poker.rooms.registry import RoomNotFoundError
from planning_poker.rooms.registry import RoomStore
from planning_poker.rooms.registry import RoundRevealedError
from planning_poker.rooms.registry import should_auto_reveal
from planning_poker.rooms.scales import DEFAULT_SCALE_ID
from planning_poker.rooms.scales import EstimationScale
from planning_poker.rooms.views import project_room

__all__ = [
    "DEFAULT_SCALE_ID",
    "EstimationScale",
    "InvalidNameError",
    "InvalidScaleError",
    "InvalidVoteError",
    "NotReadyError",
    "Participant",
    "ParticipantNotFoundError",
    "Room",
    "RoomError",
    "RoomNotFoundError",
    "RoomStore",
    "RoundRevealedError",
    "project_room",
    "should_auto_reveal",
]
