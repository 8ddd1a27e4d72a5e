"""Tests for the realtime channel registry."""

from __future__ import annotations

import asyncio
import threading

from app.infrastructure.notifications import ADMIN_GROUP, ChannelRegistry


def test_push_reaches_every_connection_of_the_recipient(make_endpoint) -> None:
    registry = ChannelRegistry()
    laptop, phone, other = make_endpoint(), make_endpoint(), make_endpoint()
    registry.join(laptop, 1)
    registry.join(phone, 1)
    registry.join(other, 2)

    delivered = asyncio.run(registry.push(1, {"type": "ping"}))

    assert delivered == 2
    assert laptop.messages == [{"type": "ping"}]
    assert phone.messages == [{"type": "ping"}]
    assert other.messages == []


def test_push_without_connection_returns_zero() -> None:
    registry = ChannelRegistry()

    assert asyncio.run(registry.push(42, {"type": "notification"})) == 0


def test_leave_is_idempotent_and_removes_every_membership(make_endpoint) -> None:
    registry = ChannelRegistry()
    endpoint = make_endpoint()
    registry.join(endpoint, 7)
    registry.join_group(endpoint, ADMIN_GROUP)

    registry.leave(endpoint)
    registry.leave(endpoint)

    assert registry.connection_count(7) == 0
    assert registry.connection_count(ADMIN_GROUP) == 0
    assert asyncio.run(registry.push(7, {"type": "ping"})) == 0
    assert endpoint.messages == []


def test_failed_endpoint_is_dropped_without_affecting_others(make_endpoint) -> None:
    registry = ChannelRegistry()
    broken = make_endpoint(fail=True)
    healthy = make_endpoint()
    registry.join(broken, 3)
    registry.join(healthy, 3)

    delivered = asyncio.run(registry.push(3, {"type": "notification"}))

    assert delivered == 1
    assert healthy.messages == [{"type": "notification"}]
    assert registry.connection_count(3) == 1


def test_group_push_only_reaches_group_members(make_endpoint) -> None:
    registry = ChannelRegistry()
    admin, user = make_endpoint(), make_endpoint()
    registry.join(admin, 1)
    registry.join_group(admin, ADMIN_GROUP)
    registry.join(user, 2)

    delivered = asyncio.run(registry.push(ADMIN_GROUP, {"type": "ticket.board"}))

    assert delivered == 1
    assert admin.messages == [{"type": "ticket.board"}]
    assert user.messages == []


def test_user_ids_and_group_tags_do_not_collide(make_endpoint) -> None:
    registry = ChannelRegistry()
    endpoint = make_endpoint()
    registry.join(endpoint, 5)

    assert asyncio.run(registry.push("5", {"type": "ping"})) == 0
    assert asyncio.run(registry.push(5, {"type": "ping"})) == 1


class _EvictingEndpoint:
    """Endpoint that removes its sibling from the registry while receiving."""

    def __init__(self, registry: ChannelRegistry) -> None:
        self.registry = registry
        self.sibling: _EvictingEndpoint | None = None
        self.messages: list[dict] = []

    async def send_json(self, data) -> None:
        self.messages.append(data)
        self.registry.leave(self.sibling)


def test_endpoint_removed_during_push_is_skipped() -> None:
    registry = ChannelRegistry()
    first, second = _EvictingEndpoint(registry), _EvictingEndpoint(registry)
    first.sibling, second.sibling = second, first
    registry.join(first, 9)
    registry.join(second, 9)

    delivered = asyncio.run(registry.push(9, {"type": "notification"}))

    assert delivered == 1
    assert len(first.messages) + len(second.messages) == 1
    assert registry.connection_count(9) == 1


def test_concurrent_membership_changes_during_pushes(make_endpoint) -> None:
    registry = ChannelRegistry()
    stable = make_endpoint()
    registry.join(stable, 1)
    stop = threading.Event()
    errors: list[BaseException] = []

    def churn() -> None:
        try:
            while not stop.is_set():
                transient = make_endpoint()
                registry.join(transient, 1)
                registry.join_group(transient, ADMIN_GROUP)
                registry.leave(transient)
        except BaseException as exc:  # pragma: no cover - surfaced by the assertion below
            errors.append(exc)

    workers = [threading.Thread(target=churn) for _ in range(3)]
    for worker in workers:
        worker.start()

    async def push_repeatedly() -> list[int]:
        return [await registry.push(1, {"type": "ping", "n": n}) for n in range(300)]

    try:
        counts = asyncio.run(push_repeatedly())
    finally:
        stop.set()
        for worker in workers:
            worker.join()

    assert errors == []
    assert all(count >= 1 for count in counts)
    assert len(stable.messages) == 300
    assert registry.connection_count(1) == 1
    assert registry.connection_count(ADMIN_GROUP) == 0
