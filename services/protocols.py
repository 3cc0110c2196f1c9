"""
Service Protocol Definitions

This module defines the typing.Protocol interface for the blog sync client.
SessionState depends on this protocol rather than on a concrete client, so
tests and alternative transports can be injected.

Protocols defined:
- BlogClientProtocol: Interface for the authenticated blog server client
"""

from typing import Protocol

from data.models import Comment, CommentsPage, Post, PostsPage


class BlogClientProtocol(Protocol):
    """Protocol defining the interface for blog server clients.

    Every operation raises a utils.exceptions.BlogClientError subclass on
    failure, and NotConfiguredError before any I/O when unconfigured.
    """

    @property
    def is_configured(self) -> bool:
        """True iff both base address and API key are set."""
        ...

    def configure(self, host: str, port: int, api_key: str) -> None:
        """Rebuild the base address and credential."""
        ...

    def reset(self) -> None:
        """Forget the base address and credential."""
        ...

    def close(self) -> None:
        """Release transport resources."""
        ...

    def list_posts(self, page: int = 1, limit: int = 50) -> PostsPage:
        """Fetch one page of posts in server order."""
        ...

    def get_post(self, post_id: int) -> Post:
        """Fetch a single post."""
        ...

    def create_post(self, content: str) -> Post:
        """Create a post with the given (already validated) content."""
        ...

    def delete_post(self, post_id: int) -> None:
        """Delete a post."""
        ...

    def list_post_comments(self, post_id: int) -> CommentsPage:
        """Fetch all comments for one post."""
        ...

    def list_pending_comments(self) -> CommentsPage:
        """Fetch the queue of comments awaiting moderation."""
        ...

    def moderate_comment(self, comment_id: int, approve: bool) -> Comment:
        """Set a comment's approval state and return the updated comment."""
        ...

    def delete_comment(self, comment_id: int) -> None:
        """Delete a comment."""
        ...
