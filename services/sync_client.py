"""
Sync Client Module

This module handles the HTTP/JSON protocol to the user-operated blog server.
It builds requests against the configured host and port, attaches the API key
to authenticated requests, decodes responses into data models and classifies
every failure into the client error taxonomy. It never retries.
"""

import json
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import requests

from config import settings
from data.models import Comment, CommentsPage, Post, PostsPage
from utils.exceptions import (
    DecodeError, InvalidURLError, NotConfiguredError, ServerError, TransportError
)
from utils.logger import get_logger

logger = get_logger(__name__)

_URL_ERRORS = (
    requests.exceptions.InvalidURL,
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
)

UNSENDABLE_KEY_MESSAGE = "API key cannot be sent in an HTTP header"


def is_header_safe(value: str) -> bool:
    """
    Check that a value can be sent verbatim as an HTTP header value.

    Args:
        value: The candidate header value

    Returns:
        bool: True if the value is Latin-1 encodable, has no CR/LF and no
        surrounding whitespace
    """
    if value != value.strip() or "\r" in value or "\n" in value:
        return False
    try:
        value.encode("latin-1")
    except UnicodeEncodeError:
        return False
    return True


class SyncClient:
    """Client for the blog server's REST API."""

    def __init__(self, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None):
        """
        Initialize an unconfigured client.

        Args:
            session: requests.Session used for all I/O. A new one is created if omitted.
            timeout: Transport timeout in seconds. Defaults to settings.REQUEST_TIMEOUT.
        """
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.host = ""
        self.port = settings.DEFAULT_SERVER_PORT
        self.base_address = ""
        self._api_key = ""

    def __repr__(self) -> str:
        return f"SyncClient(base_address={self.base_address!r}, configured={self.is_configured})"

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def configure(self, host: str, port: int, api_key: str) -> None:
        """
        Point the client at a server and set the API key.

        Args:
            host: Server host name or address.
            port: Server TCP port.
            api_key: Secret sent as the X-API-KEY header on authenticated requests.
        """
        self.host = host or ""
        self.port = port
        self.base_address = f"http://{self.host}:{port}" if self.host else ""
        self._api_key = api_key or ""
        logger.info(f"Client configured for {self.base_address or '(no host)'}")

    def reset(self) -> None:
        """Forget the server address and API key."""
        self.host = ""
        self.port = settings.DEFAULT_SERVER_PORT
        self.base_address = ""
        self._api_key = ""

    @property
    def is_configured(self) -> bool:
        return bool(self.base_address) and bool(self._api_key)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    # -------------------------------------------------------------------------
    # Request plumbing
    # -------------------------------------------------------------------------

    def _build_url(self, endpoint: str) -> str:
        host = self.host
        if not host or any(ch.isspace() for ch in host) or "/" in host:
            raise InvalidURLError()
        if not isinstance(self.port, int) or not 0 < self.port <= 65535:
            raise InvalidURLError()
        # Bare IPv6 literals need brackets inside a URL
        if ":" in host and not host.startswith("["):
            host = f"[{host}]"

        url = f"http://{host}:{self.port}{endpoint}"
        try:
            parsed = urlparse(url)
            port = parsed.port
        except ValueError as e:
            raise InvalidURLError() from e
        if not parsed.hostname or port is None:
            raise InvalidURLError()
        return url

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            return (response.content or b"").decode("utf-8")
        except UnicodeDecodeError:
            return settings.UNKNOWN_ERROR_MESSAGE

    def _request(self, method: str, endpoint: str, *,
                 body: Optional[Dict[str, Any]] = None,
                 params: Optional[Dict[str, Any]] = None,
                 requires_auth: bool = False,
                 expect_body: bool = True) -> Any:
        """
        Send one request and return the decoded JSON body.

        Args:
            method: HTTP method.
            endpoint: Path below the base address, e.g. "/api/posts".
            body: Minimal JSON body to send, if any.
            params: Query string parameters, if any.
            requires_auth: Whether to attach the X-API-KEY header.
            expect_body: False for operations whose success shape is empty.

        Returns:
            The decoded JSON value, or None when expect_body is False.

        Raises:
            NotConfiguredError: If host or API key is missing, or the key
                cannot be sent as a header.
            InvalidURLError: If the configured address cannot form a URL.
            TransportError: On connection, DNS or timeout failures.
            ServerError: If the status code is outside 200-299.
            DecodeError: If a 2xx body is not valid JSON.
        """
        if not self.is_configured:
            raise NotConfiguredError()

        url = self._build_url(endpoint)
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if requires_auth:
            if not is_header_safe(self._api_key):
                raise NotConfiguredError(UNSENDABLE_KEY_MESSAGE)
            headers[settings.API_KEY_HEADER] = self._api_key

        data = None
        if body is not None:
            data = json.dumps(body, ensure_ascii=False).encode("utf-8")

        logger.debug(f"{method} {endpoint}")
        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                params=params,
                data=data,
                timeout=self.timeout,
            )
        except _URL_ERRORS as e:
            raise InvalidURLError() from e
        except (requests.exceptions.InvalidHeader, UnicodeEncodeError) as e:
            raise NotConfiguredError(UNSENDABLE_KEY_MESSAGE) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {endpoint} failed: {type(e).__name__}")
            raise TransportError(f"Could not reach server at {self.base_address}: {e}") from e

        status = response.status_code
        if not 200 <= status <= 299:
            message = self._error_message(response)
            logger.warning(f"{method} {endpoint} returned {status}")
            raise ServerError(status, message)

        if not expect_body:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Response to {method} {endpoint} is not valid JSON") from e

    # -------------------------------------------------------------------------
    # Posts
    # -------------------------------------------------------------------------

    def list_posts(self, page: int = settings.DEFAULT_PAGE,
                   limit: int = settings.DEFAULT_PAGE_LIMIT) -> PostsPage:
        """
        Fetch one page of posts.

        Args:
            page: 1-based page number.
            limit: Maximum posts per page.

        Returns:
            PostsPage: Posts in server order plus the total count.
        """
        payload = self._request("GET", "/api/posts", params={"page": page, "limit": limit})
        return PostsPage.from_dict(payload)

    def get_post(self, post_id: int) -> Post:
        """Fetch a single post by id."""
        return Post.from_dict(self._request("GET", f"/api/posts/{post_id}"))

    def create_post(self, content: str) -> Post:
        """
        Create a post.

        Args:
            content: Post text; callers validate and trim it first.

        Returns:
            Post: The post as stored by the server, with its assigned id.
        """
        payload = self._request("POST", "/api/posts", body={"content": content}, requires_auth=True)
        return Post.from_dict(payload)

    def delete_post(self, post_id: int) -> None:
        """Delete a post by id."""
        self._request("DELETE", f"/api/posts/{post_id}", requires_auth=True, expect_body=False)

    # -------------------------------------------------------------------------
    # Comments
    # -------------------------------------------------------------------------

    def list_post_comments(self, post_id: int) -> CommentsPage:
        """Fetch all comments for one post."""
        return CommentsPage.from_dict(self._request("GET", f"/api/comments/post/{post_id}"))

    def list_pending_comments(self) -> CommentsPage:
        """Fetch comments awaiting moderation across all posts."""
        return CommentsPage.from_dict(
            self._request("GET", "/api/comments/pending", requires_auth=True)
        )

    def moderate_comment(self, comment_id: int, approve: bool) -> Comment:
        """
        Approve or unapprove a comment.

        Args:
            comment_id: The comment id.
            approve: New approval state.

        Returns:
            Comment: The updated comment.
        """
        payload = self._request(
            "PUT",
            f"/api/comments/{comment_id}/moderate",
            body={"approve": approve},
            requires_auth=True,
        )
        return Comment.from_dict(payload)

    def delete_comment(self, comment_id: int) -> None:
        """Delete a comment by id."""
        self._request("DELETE", f"/api/comments/{comment_id}", requires_auth=True, expect_body=False)
