# chatrelay/core/pubsub.py
"""
Notification hub: process-wide registry of per-agent broadcast channels.

Each agent gets one fan-out channel; every subscriber of that channel
receives every message published to it. The hub is created once at
startup and lives for the whole process. No request flow publishes to it
yet; it is the extension point for pushing replies to connected agents.

Data structure:
- _channels: Dict[agent_id, AgentChannel]
- AgentChannel._subscribers: Set[asyncio.Queue]
"""
import asyncio
import logging
from typing import Dict, Optional, Set

from chatrelay.config import settings

logger = logging.getLogger("uvicorn.error")


class AgentChannel:
    """
    Fan-out broadcast channel for a single agent.

    Subscribers receive messages through bounded queues. A subscriber that
    falls behind loses its oldest pending messages rather than blocking
    the publisher.
    """

    def __init__(self, agent_id: int, capacity: int):
        self.agent_id = agent_id
        self.capacity = capacity
        self._subscribers: Set[asyncio.Queue] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> asyncio.Queue:
        """Register a new receiver and return its queue."""
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.capacity)
        self._subscribers.add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        self._subscribers.discard(queue)

    def send(self, message: str) -> int:
        """
        Deliver a message to every current subscriber.

        Returns:
            Number of subscribers the message was queued for
        """
        delivered = 0
        for queue in list(self._subscribers):
            if queue.full():
                # Lagging receiver: drop its oldest message
                queue.get_nowait()
            queue.put_nowait(message)
            delivered += 1
        return delivered


class NotificationHub:
    """
    Registry mapping agent user ids to their broadcast channels.

    Registration is guarded by a lock so concurrent registrations for the
    same agent end up sharing one channel.
    """

    def __init__(self, capacity: Optional[int] = None):
        self.capacity = capacity or settings.hub_channel_capacity
        self._channels: Dict[int, AgentChannel] = {}
        self._lock = asyncio.Lock()

    async def register_agent_channel(self, agent_id: int) -> AgentChannel:
        """
        Return the channel for an agent, creating it on first use.

        Args:
            agent_id: Id of an agent-role user

        Returns:
            AgentChannel: The (possibly pre-existing) channel for this agent
        """
        async with self._lock:
            channel = self._channels.get(agent_id)
            if channel is None:
                channel = AgentChannel(agent_id, self.capacity)
                self._channels[agent_id] = channel
                logger.info("[hub] registered channel for agent %s", agent_id)
            return channel

    def get_channel(self, agent_id: int) -> Optional[AgentChannel]:
        return self._channels.get(agent_id)

    async def broadcast(self, agent_id: int, message: str) -> int:
        """
        Publish a message to all subscribers of an agent's channel.

        Returns:
            Number of subscribers reached (0 when the agent has no channel)
        """
        channel = self._channels.get(agent_id)
        if channel is None:
            return 0
        return channel.send(message)

    def __len__(self) -> int:
        return len(self._channels)


# Global hub instance (singleton pattern), attached to app.state at startup
hub = NotificationHub()
