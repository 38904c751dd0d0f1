"""Background sweep that reclaims idle empty rooms."""

from __future__ import annotations

import asyncio
import logging

from planning_poker.rooms.registry import RoomStore

logger = logging.getLogger(__name__)


async def reclaim_idle_rooms_loop(store: RoomStore, interval_seconds: float) -> None:
    while True:
        await asyncio.sleep(interval_seconds)
        reclaimed = await asyncio.to_thread(store.reclaim_idle_rooms)
        if reclaimed:
            logger.debug("Sweep reclaimed %d room(s), %d remain", len(reclaimed), store.room_count())


async def stop_task(task: asyncio.Task[None]) -> None:
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
