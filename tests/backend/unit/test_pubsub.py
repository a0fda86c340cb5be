"""
Unit tests for core.pubsub module.
Tests per-agent channel registration and message broadcasting.
"""
import asyncio

import pytest

from chatrelay.core.pubsub import AgentChannel, NotificationHub


pytestmark = pytest.mark.asyncio


class TestRegistration:
    """Tests for agent channel registration."""

    async def test_register_creates_channel(self):
        hub = NotificationHub(capacity=10)
        channel = await hub.register_agent_channel(7)
        assert isinstance(channel, AgentChannel)
        assert channel.agent_id == 7
        assert hub.get_channel(7) is channel
        assert len(hub) == 1

    async def test_register_is_idempotent(self):
        hub = NotificationHub(capacity=10)
        first = await hub.register_agent_channel(7)
        second = await hub.register_agent_channel(7)
        assert first is second
        assert len(hub) == 1

    async def test_concurrent_registration_shares_one_channel(self):
        hub = NotificationHub(capacity=10)
        channels = await asyncio.gather(*(hub.register_agent_channel(3) for _ in range(20)))
        assert all(c is channels[0] for c in channels)
        assert len(hub) == 1

    async def test_separate_agents_get_separate_channels(self):
        hub = NotificationHub(capacity=10)
        a = await hub.register_agent_channel(1)
        b = await hub.register_agent_channel(2)
        assert a is not b
        assert len(hub) == 2


class TestBroadcast:
    """Tests for fan-out delivery."""

    async def test_broadcast_reaches_every_subscriber(self):
        hub = NotificationHub(capacity=10)
        channel = await hub.register_agent_channel(1)
        q1 = channel.subscribe()
        q2 = channel.subscribe()

        reached = await hub.broadcast(1, "hello")

        assert reached == 2
        assert q1.get_nowait() == "hello"
        assert q2.get_nowait() == "hello"

    async def test_broadcast_to_unknown_agent_reaches_nobody(self):
        hub = NotificationHub(capacity=10)
        assert await hub.broadcast(99, "hello") == 0

    async def test_broadcast_without_subscribers(self):
        hub = NotificationHub(capacity=10)
        await hub.register_agent_channel(1)
        assert await hub.broadcast(1, "hello") == 0

    async def test_broadcast_is_scoped_to_agent(self):
        hub = NotificationHub(capacity=10)
        q1 = (await hub.register_agent_channel(1)).subscribe()
        q2 = (await hub.register_agent_channel(2)).subscribe()

        await hub.broadcast(1, "for agent 1")

        assert q1.qsize() == 1
        assert q2.empty()

    async def test_unsubscribed_queue_receives_nothing(self):
        hub = NotificationHub(capacity=10)
        channel = await hub.register_agent_channel(1)
        queue = channel.subscribe()
        channel.unsubscribe(queue)

        assert await hub.broadcast(1, "hello") == 0
        assert queue.empty()
        assert channel.subscriber_count == 0

    async def test_lagging_subscriber_drops_oldest(self):
        hub = NotificationHub(capacity=2)
        channel = await hub.register_agent_channel(1)
        queue = channel.subscribe()

        for text in ("m1", "m2", "m3"):
            await hub.broadcast(1, text)

        assert queue.qsize() == 2
        assert queue.get_nowait() == "m2"
        assert queue.get_nowait() == "m3"
