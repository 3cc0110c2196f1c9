"""
Shared Test Fixtures for the Blog Admin Client

This module provides common fixtures used across all test modules.
Fixtures include an in-memory keyring backend, a temporary preferences
store, mock HTTP sessions and responses, and payload factories for
posts and comments.
"""

import pytest
from unittest.mock import MagicMock
from typing import Optional, Dict, Any
import json
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from keyring.errors import KeyringError, PasswordDeleteError, PasswordSetError


# =============================================================================
# Local Store Fixtures
# =============================================================================

class InMemoryKeyring:
    """
    Keyring backend stand-in keeping secrets in a dict.

    Mirrors the keyring API (get_password/set_password/delete_password) and
    its error behavior, and records every call for inspection.
    """

    def __init__(self):
        self.secrets: Dict[tuple, str] = {}
        self.calls = []
        self.fail_reads = False
        self.fail_writes = False

    def get_password(self, service, account):
        self.calls.append(("get", service, account))
        if self.fail_reads:
            raise KeyringError("keyring locked")
        return self.secrets.get((service, account))

    def set_password(self, service, account, password):
        self.calls.append(("set", service, account))
        if self.fail_writes:
            raise PasswordSetError("write refused")
        if (service, account) in self.secrets:
            raise PasswordSetError("duplicate item")
        self.secrets[(service, account)] = password

    def delete_password(self, service, account):
        self.calls.append(("delete", service, account))
        if (service, account) not in self.secrets:
            raise PasswordDeleteError("Password not found")
        del self.secrets[(service, account)]


@pytest.fixture
def fake_keyring():
    """
    Provide an empty in-memory keyring backend.

    Usage:
        def test_vault(fake_keyring):
            vault = CredentialVault(backend=fake_keyring)

    Returns:
        InMemoryKeyring: The backend.
    """
    return InMemoryKeyring()


@pytest.fixture
def vault(fake_keyring):
    """CredentialVault over the in-memory keyring."""
    from data.vault import CredentialVault
    return CredentialVault(service="test.blog", account="apiKey", backend=fake_keyring)


@pytest.fixture
def preferences_path(tmp_path):
    """Path of a preferences file inside the test's temporary directory."""
    return str(tmp_path / "preferences.env")


@pytest.fixture
def config_store(preferences_path):
    """ConfigurationStore writing to a temporary file."""
    from data.preferences import ConfigurationStore
    return ConfigurationStore(preferences_path)


# =============================================================================
# HTTP Response Fixtures
# =============================================================================

@pytest.fixture
def mock_http_response():
    """
    Factory fixture for creating mock HTTP responses.

    Usage:
        def test_http_request(mock_http_response):
            response = mock_http_response(
                status_code=200,
                json_data={'key': 'value'}
            )

    Returns:
        callable: A factory function for creating mock responses.
    """
    def _create_response(
        status_code: int = 200,
        content: Optional[bytes] = None,
        json_data: Optional[Any] = None,
    ) -> MagicMock:
        """
        Create a mock HTTP response object.

        Args:
            status_code: HTTP status code (default 200).
            content: Raw body bytes (generated from json_data if not provided).
            json_data: Value returned by response.json().

        Returns:
            MagicMock: A mock response object mimicking requests.Response.
        """
        mock_response = MagicMock()
        mock_response.status_code = status_code

        if content is None:
            content = json.dumps(json_data).encode('utf-8') if json_data is not None else b''
        mock_response.content = content
        mock_response.text = content.decode('utf-8', errors='replace')
        mock_response.ok = 200 <= status_code < 300

        if json_data is not None:
            mock_response.json.return_value = json_data
        else:
            mock_response.json.side_effect = ValueError("No JSON data")

        return mock_response

    return _create_response


@pytest.fixture
def mock_session(mock_http_response):
    """
    Mock requests.Session whose request() returns a 200 with an empty object.

    Usage:
        def test_call(mock_session):
            mock_session.request.return_value = mock_session.response(json_data={...})

    Returns:
        MagicMock: The session, with the response factory attached.
    """
    session = MagicMock()
    session.request.return_value = mock_http_response(json_data={})
    session.response = mock_http_response
    return session


@pytest.fixture
def client(mock_session):
    """SyncClient configured for localhost:8081 with key k1 over the mock session."""
    from services.sync_client import SyncClient
    sync_client = SyncClient(session=mock_session, timeout=5)
    sync_client.configure("localhost", 8081, "k1")
    return sync_client


# =============================================================================
# Data Model Factories
# =============================================================================

@pytest.fixture
def post_payload():
    """
    Factory fixture for post JSON payloads as the server sends them.

    Returns:
        callable: A factory function for post dictionaries.
    """
    def _create_post(
        id: int = 1,
        content: str = 'hi',
        createdAt: int = 1700000000000,
        published: bool = True,
        commentCount: int = 0,
        **extra
    ) -> Dict[str, Any]:
        payload = {
            'id': id,
            'content': content,
            'createdAt': createdAt,
            'published': published,
            'commentCount': commentCount,
        }
        payload.update(extra)
        return payload

    return _create_post


@pytest.fixture
def comment_payload():
    """
    Factory fixture for comment JSON payloads as the server sends them.

    Returns:
        callable: A factory function for comment dictionaries.
    """
    def _create_comment(
        id: int = 5,
        postId: int = 1,
        authorName: str = 'Reader',
        content: str = 'Nice post',
        createdAt: int = 1700000100000,
        approved: bool = False,
        **extra
    ) -> Dict[str, Any]:
        payload = {
            'id': id,
            'postId': postId,
            'authorName': authorName,
            'content': content,
            'createdAt': createdAt,
            'approved': approved,
        }
        payload.update(extra)
        return payload

    return _create_comment
