"""
Data Layer Protocol Definitions

This module defines typing.Protocol interfaces for the two local stores.
These protocols enable dependency injection for SessionState, so any
platform's preferences or secure-storage primitive can be substituted
without touching the session logic.

Protocols defined:
- ConfigurationStorage: Interface for persisting non-secret host/port settings
- SecretStorage: Interface for persisting the secret API key
"""

from typing import Optional, Protocol

from data.models import ServerConfiguration


class ConfigurationStorage(Protocol):
    """Protocol defining the interface for non-secret connection settings.

    Implementations must never hold the API key.
    """

    def save(self, host: str, port: int) -> None:
        """Persist host and port together.

        Args:
            host: Server host name or address.
            port: Server TCP port.
        """
        ...

    def load(self) -> ServerConfiguration:
        """Return the last saved settings, or defaults if none are stored."""
        ...

    def clear(self) -> None:
        """Remove the stored settings, returning to defaults."""
        ...


class SecretStorage(Protocol):
    """Protocol defining the capability interface for the secret API key.

    Implementations should be backed by a store that encrypts at rest and
    restricts access to the owning user.
    """

    def save(self, secret: str) -> None:
        """Replace any stored secret with the given one."""
        ...

    def load(self) -> Optional[str]:
        """Return the stored secret, or None if absent or unreadable."""
        ...

    def clear(self) -> None:
        """Delete the stored secret if present."""
        ...
