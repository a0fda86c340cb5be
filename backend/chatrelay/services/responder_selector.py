"""
Responder Selector

Picks the agent that answers a human message: a uniform random draw over
the agents passed in, with no memory between calls.
"""
import random
from typing import Optional, Sequence

from ..core.errors import NoResponderAvailable
from ..models.user import User


class ResponderSelector:
    def __init__(self, rng: Optional[random.Random] = None):
        # Injectable source of randomness; seed it for reproducible tests
        self.rng = rng or random.SystemRandom()

    def select(self, agents: Sequence[User]) -> User:
        """
        Choose one agent from a materialized snapshot.

        Raises:
            NoResponderAvailable: the snapshot is empty
        """
        candidates = list(agents)
        if not candidates:
            raise NoResponderAvailable("no agent users registered")
        if len(candidates) == 1:
            return candidates[0]
        return self.rng.choice(candidates)
