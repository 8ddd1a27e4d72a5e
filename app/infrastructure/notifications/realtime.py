"""Helpers to broadcast realtime events that are not stored as notifications."""

from __future__ import annotations

import copy
import logging
from typing import Any

from .registry import ChannelRegistry

logger = logging.getLogger(__name__)


class RealtimeEventPublisher:
    """Dispatch structured realtime events to websocket subscribers."""

    def __init__(self, registry: ChannelRegistry) -> None:
        self._registry = registry

    async def dispatch(self, user_id: int, *, event_type: str, payload: Any) -> int:
        """Send an ``event_type`` event to the connections of ``user_id``."""

        if not user_id:
            return 0
        return await self._registry.push(user_id, self._message(event_type, payload))

    async def dispatch_group(self, group_tag: str, *, event_type: str, payload: Any) -> int:
        """Broadcast an ``event_type`` event to every member of ``group_tag``."""

        delivered = await self._registry.push(group_tag, self._message(event_type, payload))
        logger.debug("Realtime %s event reached %s endpoint(s) in %s", event_type, delivered, group_tag)
        return delivered

    @staticmethod
    def _message(event_type: str, payload: Any) -> dict[str, Any]:
        return {"type": event_type, "data": copy.deepcopy(payload)}


__all__ = ["RealtimeEventPublisher"]
