"""
Custom Exception Classes for the Blog Admin Client

This module defines the error taxonomy surfaced to callers of the sync
client and the session state, plus the local configuration errors.
"""


class BlogAdminError(Exception):
    """Base exception for all Blog Admin application errors."""
    pass


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(BlogAdminError):
    """Raised when configuration validation fails or required settings are missing."""
    pass


class CredentialVaultError(BlogAdminError):
    """Raised when the secure credential store rejects a write."""
    pass


# =============================================================================
# Client Errors
# =============================================================================

class BlogClientError(BlogAdminError):
    """Base exception for errors returned by blog content operations."""
    pass


class NotConfiguredError(BlogClientError):
    """Raised when a content operation is attempted without host and API key."""

    def __init__(self, message: str = "API client not configured"):
        super().__init__(message)


class InvalidURLError(BlogClientError):
    """Raised when the configured host/port cannot form a valid URL."""

    def __init__(self, message: str = "Invalid URL"):
        super().__init__(message)


class TransportError(BlogClientError):
    """Raised on connection, DNS or timeout failures below the HTTP layer."""
    pass


class ServerError(BlogClientError):
    """Raised when the server answers with a status outside 200-299."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"Server error ({status_code}): {message}")


class DecodeError(BlogClientError):
    """Raised when a successful response body does not match the expected shape."""
    pass


class InvalidContentError(BlogClientError):
    """Raised when post content fails local validation before any request."""
    pass
