"""
Session State Module

This module holds the authoritative in-memory snapshot for a running admin
session: the server configuration, whether the session is usable, the loaded
posts and the comments of the active moderation view. Every content
operation delegates to the injected client and reconciles the snapshot only
on success. Failures come back as OperationResult values carrying the
original error; nothing is retried.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, List, Optional, TypeVar

from config import settings
from data.models import Comment, CommentsPage, Post, PostsPage
from data.protocols import ConfigurationStorage, SecretStorage
from services.protocols import BlogClientProtocol
from utils.exceptions import BlogClientError, InvalidContentError, NotConfiguredError
from utils.helpers import is_valid_post_content, normalize_post_content
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class OperationResult(Generic[T]):
    """Outcome of a content operation: a value on success, an error otherwise."""
    value: Optional[T] = None
    error: Optional[BlogClientError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "OperationResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: BlogClientError) -> "OperationResult[T]":
        return cls(error=error)


class CommentView(Enum):
    """Which comments the session currently holds."""
    NONE = "none"
    PENDING = "pending"                # moderation queue across all posts
    POST = "post"                      # every comment of one post


class SessionState:
    """
    In-memory session over one configured blog server.

    The client and both stores are injected, so several isolated sessions can
    coexist (e.g. in tests).
    """

    def __init__(self, client: BlogClientProtocol, config_store: ConfigurationStorage,
                 vault: SecretStorage):
        """
        Initialize the session from the persisted configuration.

        Args:
            client: The blog server client.
            config_store: Store for host and port.
            vault: Secure store for the API key.
        """
        self.client = client
        self.config_store = config_store
        self.vault = vault

        self.server_host = ""
        self.server_port = settings.DEFAULT_SERVER_PORT
        self._api_key = ""

        self.posts: List[Post] = []
        self.comments: List[Comment] = []
        self.comment_view = CommentView.NONE
        self.comment_view_post_id: Optional[int] = None

        self.last_error: Optional[BlogClientError] = None
        self._in_flight = 0

        self.load_configuration()

    def __repr__(self) -> str:
        return (f"SessionState(host={self.server_host!r}, port={self.server_port}, "
                f"configured={self.configured})")

    # -------------------------------------------------------------------------
    # Configuration lifecycle
    # -------------------------------------------------------------------------

    @property
    def configured(self) -> bool:
        return bool(self.server_host) and bool(self._api_key)

    @property
    def has_api_key(self) -> bool:
        return bool(self._api_key)

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    def load_configuration(self) -> None:
        """Read both stores and configure the client if the session is usable."""
        stored = self.config_store.load()
        self.server_host = stored.host
        self.server_port = stored.port
        self._api_key = self.vault.load() or ""

        if self.configured:
            self.client.configure(self.server_host, self.server_port, self._api_key)
            logger.info(f"Session configured for {self.server_host}:{self.server_port}")
        else:
            logger.info("Session is not configured")

    def save_configuration(self, host: str, port: int, api_key: str) -> None:
        """
        Persist new connection settings and reconfigure the client.

        The API key is written first; if the secure store rejects it the
        CredentialVaultError propagates and nothing else changes. If the
        preferences write then fails, the previous key is put back before
        the error propagates.

        Args:
            host: Server host name or address.
            port: Server TCP port.
            api_key: The secret API key.
        """
        previous_key = self._api_key
        self.vault.save(api_key)
        try:
            self.config_store.save(host, port)
        except Exception:
            logger.error(f"Could not save preferences for {host}:{port}, restoring previous API key")
            if previous_key:
                self.vault.save(previous_key)
            else:
                self.vault.clear()
            raise

        self.server_host = host
        self.server_port = port
        self._api_key = api_key
        self.client.configure(host, port, api_key)
        logger.info(f"Saved configuration for {host}:{port} (configured={self.configured})")

    def clear_configuration(self) -> None:
        """Wipe both stores and reset the session to its defaults. No server contact."""
        self.config_store.clear()
        self.vault.clear()

        self.server_host = ""
        self.server_port = settings.DEFAULT_SERVER_PORT
        self._api_key = ""
        self.client.reset()

        self.posts = []
        self.comments = []
        self.comment_view = CommentView.NONE
        self.comment_view_post_id = None
        self.last_error = None
        logger.info("Configuration cleared")

    # -------------------------------------------------------------------------
    # Operation plumbing
    # -------------------------------------------------------------------------

    def _run(self, name: str, call: Callable[[], T],
             reconcile: Optional[Callable[[T], None]] = None) -> OperationResult[T]:
        """
        Run one content operation against the client.

        Args:
            name: Operation name for logging.
            call: Performs the client request and returns its value.
            reconcile: Applies a successful value to the local snapshot.

        Returns:
            OperationResult: The value, or the unchanged client error.
        """
        if not self.configured:
            error = NotConfiguredError()
            self.last_error = error
            logger.warning(f"{name} skipped: {error}")
            return OperationResult.failure(error)

        self.last_error = None
        self._in_flight += 1
        try:
            value = call()
        except BlogClientError as e:
            self.last_error = e
            logger.warning(f"{name} failed: {e}")
            return OperationResult.failure(e)
        finally:
            self._in_flight -= 1

        if reconcile is not None:
            reconcile(value)
        return OperationResult.success(value)

    # -------------------------------------------------------------------------
    # Posts
    # -------------------------------------------------------------------------

    def load_posts(self, page: int = settings.DEFAULT_PAGE,
                   limit: int = settings.DEFAULT_PAGE_LIMIT) -> OperationResult[PostsPage]:
        """Fetch a page of posts and replace the local list with it, in server order."""
        def reconcile(result: PostsPage) -> None:
            self.posts = list(result.posts)
            logger.info(f"Loaded {len(result.posts)} of {result.total_count} posts")

        return self._run("load_posts", lambda: self.client.list_posts(page, limit), reconcile)

    def get_post(self, post_id: int) -> OperationResult[Post]:
        """Fetch one post; a loaded copy with the same id is refreshed in place."""
        def reconcile(post: Post) -> None:
            if any(p.id == post.id for p in self.posts):
                self.posts = [post if p.id == post.id else p for p in self.posts]

        return self._run("get_post", lambda: self.client.get_post(post_id), reconcile)

    def create_post(self, content: str) -> OperationResult[Post]:
        """
        Create a post from user-entered text.

        The text is trimmed and must be 1 to MAX_POST_LENGTH code points;
        otherwise the operation fails with InvalidContentError before any
        request. The created post is not inserted locally; reload to see it.

        Args:
            content: The raw text.

        Returns:
            OperationResult[Post]: The server's copy of the new post.
        """
        trimmed = normalize_post_content(content)
        if not is_valid_post_content(trimmed):
            error = InvalidContentError(
                f"Post content must be between 1 and {settings.MAX_POST_LENGTH} characters"
            )
            self.last_error = error
            return OperationResult.failure(error)

        return self._run("create_post", lambda: self.client.create_post(trimmed))

    def delete_post(self, post_id: int) -> OperationResult[None]:
        """Delete a post and drop it, and its comments, from the local snapshot."""
        def reconcile(_: None) -> None:
            self.posts = [p for p in self.posts if p.id != post_id]
            self.comments = [c for c in self.comments if c.post_id != post_id]

        return self._run("delete_post", lambda: self.client.delete_post(post_id), reconcile)

    # -------------------------------------------------------------------------
    # Comments
    # -------------------------------------------------------------------------

    def load_pending_comments(self) -> OperationResult[CommentsPage]:
        """Switch to the moderation queue and load it."""
        def reconcile(result: CommentsPage) -> None:
            self.comments = list(result.comments)
            self.comment_view = CommentView.PENDING
            self.comment_view_post_id = None

        return self._run("load_pending_comments", self.client.list_pending_comments, reconcile)

    def load_post_comments(self, post_id: int) -> OperationResult[CommentsPage]:
        """Switch to the comments of one post and load them."""
        def reconcile(result: CommentsPage) -> None:
            self.comments = list(result.comments)
            self.comment_view = CommentView.POST
            self.comment_view_post_id = post_id

        return self._run(
            "load_post_comments", lambda: self.client.list_post_comments(post_id), reconcile
        )

    def moderate_comment(self, comment_id: int, approve: bool) -> OperationResult[Comment]:
        """
        Approve or unapprove a comment.

        The pending queue only holds unapproved comments, so an approved result
        leaves it; the per-post view keeps every comment and replaces the entry.
        """
        def reconcile(updated: Comment) -> None:
            if self.comment_view == CommentView.PENDING and updated.approved:
                self.comments = [c for c in self.comments if c.id != updated.id]
            else:
                self.comments = [updated if c.id == updated.id else c for c in self.comments]

        return self._run(
            "moderate_comment",
            lambda: self.client.moderate_comment(comment_id, approve),
            reconcile,
        )

    def approve_comment(self, comment_id: int) -> OperationResult[Comment]:
        """Approve a comment."""
        return self.moderate_comment(comment_id, True)

    def delete_comment(self, comment_id: int) -> OperationResult[None]:
        """Delete a comment and drop it from the local snapshot."""
        def reconcile(_: None) -> None:
            self.comments = [c for c in self.comments if c.id != comment_id]

        return self._run("delete_comment", lambda: self.client.delete_comment(comment_id), reconcile)
