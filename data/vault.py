"""
Credential Vault Module

This module stores the server API key in the operating system's secure
credential store (macOS Keychain, Windows Credential Locker, freedesktop
Secret Service) through the keyring library. The key is addressed by a fixed
service/account pair and is never written next to the non-secret settings.
"""

from typing import Any, Optional

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from config import settings
from utils.exceptions import CredentialVaultError
from utils.logger import get_logger

logger = get_logger(__name__)


class CredentialVault:
    """Secure store for the API key, keyed by (service, account)."""

    def __init__(self, service: Optional[str] = None, account: Optional[str] = None,
                 backend: Any = None):
        """
        Initialize the vault.

        Args:
            service: Keyring service name. Defaults to settings.KEYRING_SERVICE.
            account: Keyring account name. Defaults to settings.KEYRING_ACCOUNT.
            backend: Object with get_password/set_password/delete_password.
                Defaults to the keyring module (the active system backend).
        """
        self.service = service or settings.KEYRING_SERVICE
        self.account = account or settings.KEYRING_ACCOUNT
        self.backend = backend if backend is not None else keyring
        if backend is None:
            self._check_backend()

    def _check_backend(self) -> None:
        active = keyring.get_keyring()
        if type(active).__module__.startswith("keyring.backends.fail"):
            logger.warning("No secure keyring backend is available; the API key cannot be stored")

    def save(self, secret: str) -> None:
        """
        Replace any stored API key with the given one.

        The old entry is deleted first so the write never collides with an
        existing item.

        Args:
            secret: The API key.

        Raises:
            CredentialVaultError: If the secure store rejects the write.
        """
        self.clear()
        try:
            self.backend.set_password(self.service, self.account, secret)
        except KeyringError as e:
            logger.error(f"Failed to store API key in keyring ({type(e).__name__})")
            raise CredentialVaultError(
                f"Could not store API key for service '{self.service}'"
            ) from e
        logger.info("API key stored in keyring")

    def load(self) -> Optional[str]:
        """
        Read the stored API key.

        Returns:
            Optional[str]: The key, or None if absent or the store is unavailable.
        """
        try:
            secret = self.backend.get_password(self.service, self.account)
        except KeyringError as e:
            logger.warning(f"Keyring unavailable, treating API key as absent ({type(e).__name__})")
            return None
        return secret or None

    def clear(self) -> None:
        """Delete the stored API key; a missing entry is a no-op."""
        try:
            self.backend.delete_password(self.service, self.account)
            logger.debug("Removed API key from keyring")
        except PasswordDeleteError:
            pass
        except KeyringError as e:
            logger.warning(f"Could not remove API key from keyring ({type(e).__name__})")
