# chatrelay/core/errors.py
"""
Exception taxonomy.

Business "no" answers (invalid session, role not permitted, no responder)
are normal results of the relay and are not raised out of it. The classes
below cover the conditions that cross component boundaries as exceptions.
"""


class RelayError(Exception):
    """Base class for all errors raised by chatrelay components."""


class UsernameTaken(RelayError):
    """Raised by the identity store when a username is already registered."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"username already exists: {username!r}")


class StorageUnavailable(RelayError):
    """The database could not complete a read or write."""


class NoResponderAvailable(RelayError):
    """There is no agent user to answer a human message."""


class GatewayError(RelayError):
    """Base class for generation service failures."""


class GatewayUnavailable(GatewayError):
    """The generation service could not be reached or answered with an error status."""


class GatewayProtocolError(GatewayError):
    """The generation service answered with a body that is not the expected shape."""
