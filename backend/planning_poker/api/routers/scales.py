"""Estimation scale and health REST routes."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi import Depends

from planning_poker.api.deps import get_room_store
from planning_poker.api.errors import raise_api_error
from planning_poker.rooms.registry import RoomStore
from planning_poker.rooms.scales import EstimationScale
from planning_poker.rooms.scales import get_scale
from planning_poker.rooms.scales import list_scales

router = APIRouter()


def _scale_detail(scale: EstimationScale) -> dict[str, object]:
    return {
        "scale_id": scale.scale_id,
        "label": scale.label,
        "values": list(scale.values),
        "description": scale.description,
    }


@router.get("/api/scales")
def get_scales() -> list[dict[str, object]]:
    """Return every registered estimation scale."""
    return [_scale_detail(scale) for scale in list_scales()]


@router.get("/api/scales/{scale_id}")
def get_scale_detail(scale_id: str) -> dict[str, object]:
    scale = get_scale(scale_id)
    if scale is None:
        raise_api_error(
            status_code=404,
            code="SCALE_NOT_FOUND",
            message="scale not found",
            detail={"scale_id": scale_id},
        )
    return _scale_detail(scale)


@router.get("/api/health")
def health(store: RoomStore = Depends(get_room_store)) -> dict[str, object]:
    return {"status": "ok", "rooms": store.room_count()}
