"""Membership table of live realtime connections."""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from typing import Any, DefaultDict, Protocol, Set

logger = logging.getLogger(__name__)

ADMIN_GROUP = "admins"


class PushEndpoint(Protocol):
    """Anything able to deliver a JSON message to a connected client."""

    async def send_json(self, data: Any) -> None:  # pragma: no cover - protocol
        ...


def _key_for(target: int | str) -> str:
    if isinstance(target, bool):
        raise TypeError("Push targets must be a user id or a group tag")
    if isinstance(target, int):
        return f"user:{target}"
    return f"group:{target}"


class ChannelRegistry:
    """Map recipient identities and broadcast groups to live endpoints.

    The registry does not authenticate the identities it is given; the
    realtime session boundary decides which identity a connection may join.
    Membership changes happen under a lock so a ``leave`` racing a ``push``
    never exposes a partially removed endpoint.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._members: DefaultDict[str, Set[PushEndpoint]] = defaultdict(set)
        self._memberships: DefaultDict[PushEndpoint, Set[str]] = defaultdict(set)

    def join(self, connection: PushEndpoint, recipient_id: int) -> None:
        """Register ``connection`` under the user ``recipient_id``."""

        self._add(connection, _key_for(int(recipient_id)))

    def join_group(self, connection: PushEndpoint, group_tag: str) -> None:
        """Register ``connection`` under the broadcast group ``group_tag``."""

        self._add(connection, _key_for(str(group_tag)))

    def leave(self, connection: PushEndpoint) -> None:
        """Remove ``connection`` from every identity and group it joined."""

        with self._lock:
            keys = self._memberships.pop(connection, set())
            for key in keys:
                members = self._members.get(key)
                if members is None:
                    continue
                members.discard(connection)
                if not members:
                    self._members.pop(key, None)
        if keys:
            logger.debug("Realtime endpoint left %s", ", ".join(sorted(keys)))

    def connection_count(self, target: int | str) -> int:
        with self._lock:
            return len(self._members.get(_key_for(target), ()))

    async def push(self, target: int | str, message: dict[str, Any]) -> int:
        """Send ``message`` to every endpoint registered under ``target``.

        ``target`` is a user id or a group tag. Returns the number of endpoints
        that accepted the message; zero when nobody is connected. Endpoints
        that left after the push started are skipped, and endpoints whose send
        fails are dropped from the registry.
        """

        key = _key_for(target)
        with self._lock:
            endpoints = list(self._members.get(key, ()))

        delivered = 0
        for endpoint in endpoints:
            if not self._is_member(endpoint, key):
                continue
            try:
                await endpoint.send_json(message)
            except Exception as exc:
                logger.warning("Dropping realtime endpoint on %s after failed push: %s", key, exc)
                self.leave(endpoint)
                continue
            delivered += 1
        return delivered

    def _is_member(self, connection: PushEndpoint, key: str) -> bool:
        with self._lock:
            return key in self._memberships.get(connection, ())

    def _add(self, connection: PushEndpoint, key: str) -> None:
        with self._lock:
            self._members[key].add(connection)
            self._memberships[connection].add(key)
        logger.debug("Realtime endpoint joined %s", key)


__all__ = ["ADMIN_GROUP", "ChannelRegistry", "PushEndpoint"]
