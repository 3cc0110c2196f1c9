"""
Data Models for the Blog Admin Client

This module contains the data classes for server configuration and the
remote blog entities, together with the strict decoders that turn server
JSON into them. A payload that does not match the expected shape raises
DecodeError.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from config import settings
from utils.exceptions import DecodeError


def _require(payload: Any, key: str, kind: type, entity: str) -> Any:
    """Fetch a required key from a JSON object, checking its JSON type."""
    if not isinstance(payload, dict):
        raise DecodeError(f"Expected a JSON object for {entity}, got {type(payload).__name__}")
    if key not in payload:
        raise DecodeError(f"Missing field '{key}' in {entity}")
    value = payload[key]
    # bool is an int subclass; JSON true/false is never a number here
    if kind is int and isinstance(value, bool):
        raise DecodeError(f"Field '{key}' in {entity} must be int, got bool")
    if not isinstance(value, kind):
        raise DecodeError(f"Field '{key}' in {entity} must be {kind.__name__}, got {type(value).__name__}")
    return value


@dataclass
class ServerConfiguration:
    """Non-secret connection settings. An empty host means not configured."""
    host: str = ""
    port: int = settings.DEFAULT_SERVER_PORT

    @property
    def is_present(self) -> bool:
        return bool(self.host)


@dataclass
class Post:
    """A blog post as returned by the server."""
    id: int
    content: str
    created_at: int                    # epoch millis
    published: bool
    comment_count: int

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Post":
        return cls(
            id=_require(payload, "id", int, "post"),
            content=_require(payload, "content", str, "post"),
            created_at=_require(payload, "createdAt", int, "post"),
            published=_require(payload, "published", bool, "post"),
            comment_count=_require(payload, "commentCount", int, "post"),
        )


@dataclass
class Comment:
    """A reader comment attached to a post."""
    id: int
    post_id: int
    author_name: str
    content: str
    created_at: int                    # epoch millis
    approved: bool

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Comment":
        return cls(
            id=_require(payload, "id", int, "comment"),
            post_id=_require(payload, "postId", int, "comment"),
            author_name=_require(payload, "authorName", str, "comment"),
            content=_require(payload, "content", str, "comment"),
            created_at=_require(payload, "createdAt", int, "comment"),
            approved=_require(payload, "approved", bool, "comment"),
        )


@dataclass
class PostsPage:
    """One page of posts plus the server-side total."""
    posts: List[Post] = field(default_factory=list)
    total_count: int = 0

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "PostsPage":
        items = _require(payload, "posts", list, "posts response")
        return cls(
            posts=[Post.from_dict(item) for item in items],
            total_count=_require(payload, "totalCount", int, "posts response"),
        )


@dataclass
class CommentsPage:
    """A list of comments for one projection (pending queue or one post)."""
    comments: List[Comment] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "CommentsPage":
        items = _require(payload, "comments", list, "comments response")
        return cls(comments=[Comment.from_dict(item) for item in items])
