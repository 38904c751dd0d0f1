"""HTTP error mapping helpers for API routes."""

from __future__ import annotations

from typing import Any
from typing import NoReturn

from fastapi import HTTPException
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from planning_poker.rooms.registry import InvalidNameError
from planning_poker.rooms.registry import InvalidScaleError
from planning_poker.rooms.registry import InvalidVoteError
from planning_poker.rooms.registry import NotReadyError
from planning_poker.rooms.registry import ParticipantNotFoundError
from planning_poker.rooms.registry import RoomError
from planning_poker.rooms.registry import RoomNotFoundError
from planning_poker.rooms.registry import RoundRevealedError

ROOM_ERROR_RESPONSES: dict[type[RoomError], tuple[int, str, str]] = {
    RoomNotFoundError: (404, "ROOM_NOT_FOUND", "room not found"),
    ParticipantNotFoundError: (400, "PARTICIPANT_NOT_FOUND", "participant not found"),
    InvalidNameError: (400, "INVALID_NAME", "a participant name is required"),
    InvalidVoteError: (400, "INVALID_VOTE", "vote not allowed for current scale"),
    InvalidScaleError: (400, "INVALID_SCALE", "unsupported scale"),
    NotReadyError: (400, "NOT_READY", "select an estimate first"),
    RoundRevealedError: (409, "ROUND_REVEALED", "votes are revealed; reset to start a new round"),
}


def api_error(*, code: str, message: str, detail: dict[str, Any] | None = None) -> dict[str, Any]:
    """Build a unified API error payload."""
    return {"code": code, "message": message, "detail": detail or {}}


async def handle_http_exception(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unify HTTP errors to {code,message,detail} payload."""
    if isinstance(exc.detail, dict) and {"code", "message", "detail"} <= set(exc.detail):
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.detail,
            headers=exc.headers,
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=api_error(
            code="HTTP_ERROR",
            message=str(exc.detail),
            detail={},
        ),
        headers=exc.headers,
    )


def raise_api_error(
    *,
    status_code: int,
    code: str,
    message: str,
    detail: dict[str, Any],
) -> NoReturn:
    raise HTTPException(
        status_code=status_code,
        detail=api_error(code=code, message=message, detail=detail),
    )


def raise_room_error(exc: RoomError, detail: dict[str, Any]) -> NoReturn:
    """Translate a room-domain failure into the unified HTTP error."""
    status_code, code, message = ROOM_ERROR_RESPONSES.get(
        type(exc),
        (400, "ROOM_ERROR", str(exc)),
    )
    raise HTTPException(
        status_code=status_code,
        detail=api_error(code=code, message=message, detail=detail),
    ) from exc
