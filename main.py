"""
Blog Admin Console

This is the main entry point for the Blog Admin client. It wires the
preferences store, the keyring-backed credential vault and the sync client
into a session, and exposes the admin operations (configure, list, create,
delete, moderate) as command-line subcommands.

Version: 1.0.0
"""

import sys
import argparse
import logging
from typing import List, Optional

from config import settings
from config.validators import validate_settings, get_config_summary
from data.models import Comment, Post
from data.preferences import ConfigurationStore
from data.vault import CredentialVault
from services.session_state import OperationResult, SessionState
from services.sync_client import SyncClient
from utils.exceptions import BlogAdminError
from utils.helpers import format_relative_time, truncate_text
from utils.logger import get_logger, setup_file_logging

# Set up logging
logger = get_logger(__name__)


def create_session(client: Optional[SyncClient] = None,
                   config_store: Optional[ConfigurationStore] = None,
                   vault: Optional[CredentialVault] = None) -> SessionState:
    """
    Build a session from explicit collaborators, defaulting to the real ones.

    Returns:
        SessionState: The initialized session.
    """
    return SessionState(
        client=client or SyncClient(),
        config_store=config_store or ConfigurationStore(),
        vault=vault or CredentialVault(),
    )


def format_post(post: Post) -> str:
    """Render a post as one console row."""
    status = "published" if post.published else "draft"
    comments = "1 comment" if post.comment_count == 1 else f"{post.comment_count} comments"
    return (f"#{post.id}  {truncate_text(post.content, 80)}\n"
            f"      {format_relative_time(post.created_at)} | {status} | {comments}")


def format_comment(comment: Comment) -> str:
    """Render a comment as one console row."""
    status = "approved" if comment.approved else "pending"
    return (f"#{comment.id} on post #{comment.post_id}  {comment.author_name} "
            f"({format_relative_time(comment.created_at)}, {status})\n"
            f"      {truncate_text(comment.content, 120)}")


class AdminConsole:
    """
    Console front end for a SessionState.

    Each command prints its result to stdout and returns a process exit code.
    Errors are printed by their message; retrying is up to the user.
    """

    def __init__(self, session: SessionState, out=None, err=None):
        self.session = session
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def _print(self, text: str) -> None:
        print(text, file=self.out)

    def _fail(self, result: OperationResult) -> int:
        print(f"Error: {result.error}", file=self.err)
        return 1

    def configure(self, host: str, port: int, api_key: str) -> int:
        self.session.save_configuration(host, port, api_key)
        if not self.session.configured:
            print("Error: host and API key are both required", file=self.err)
            return 1
        self._print(f"Connected to {host}:{port}")
        return 0

    def disconnect(self) -> int:
        self.session.clear_configuration()
        self._print("Disconnected")
        return 0

    def status(self) -> int:
        state = "configured" if self.session.configured else "not configured"
        self._print(f"Status:  {state}")
        self._print(f"Host:    {self.session.server_host or '-'}")
        self._print(f"Port:    {self.session.server_port}")
        self._print(f"API key: {'stored' if self.session.has_api_key else 'missing'}")
        return 0

    def list_posts(self, page: int, limit: int) -> int:
        result = self.session.load_posts(page, limit)
        if not result.ok:
            return self._fail(result)
        if not self.session.posts:
            self._print("No posts")
        for post in self.session.posts:
            self._print(format_post(post))
        self._print(f"{len(self.session.posts)} of {result.value.total_count} posts")
        return 0

    def show_post(self, post_id: int) -> int:
        result = self.session.get_post(post_id)
        if not result.ok:
            return self._fail(result)
        self._print(format_post(result.value))
        return 0

    def create_post(self, content: str) -> int:
        result = self.session.create_post(content)
        if not result.ok:
            return self._fail(result)
        self._print(f"Created post #{result.value.id}")
        return 0

    def delete_post(self, post_id: int) -> int:
        result = self.session.delete_post(post_id)
        if not result.ok:
            return self._fail(result)
        self._print(f"Deleted post #{post_id}")
        return 0

    def _print_comments(self, empty_message: str) -> None:
        if not self.session.comments:
            self._print(empty_message)
        for comment in self.session.comments:
            self._print(format_comment(comment))

    def pending_comments(self) -> int:
        result = self.session.load_pending_comments()
        if not result.ok:
            return self._fail(result)
        self._print_comments("No comments awaiting moderation")
        return 0

    def post_comments(self, post_id: int) -> int:
        result = self.session.load_post_comments(post_id)
        if not result.ok:
            return self._fail(result)
        self._print_comments(f"No comments on post #{post_id}")
        return 0

    def moderate_comment(self, comment_id: int, approve: bool) -> int:
        result = self.session.moderate_comment(comment_id, approve)
        if not result.ok:
            return self._fail(result)
        self._print(f"Comment #{comment_id} {'approved' if result.value.approved else 'unapproved'}")
        return 0

    def delete_comment(self, comment_id: int) -> int:
        result = self.session.delete_comment(comment_id)
        if not result.ok:
            return self._fail(result)
        self._print(f"Deleted comment #{comment_id}")
        return 0

    def dispatch(self, args: argparse.Namespace) -> int:
        """Run the subcommand selected on the command line."""
        command = args.command
        if command == "configure":
            return self.configure(args.host, args.port, args.api_key)
        if command == "disconnect":
            return self.disconnect()
        if command == "status":
            return self.status()
        if command == "posts":
            return self.list_posts(args.page, args.limit)
        if command == "show":
            return self.show_post(args.post_id)
        if command == "create":
            return self.create_post(args.content)
        if command == "delete-post":
            return self.delete_post(args.post_id)
        if command == "pending":
            return self.pending_comments()
        if command == "comments":
            return self.post_comments(args.post_id)
        if command == "approve":
            return self.moderate_comment(args.comment_id, True)
        if command == "unapprove":
            return self.moderate_comment(args.comment_id, False)
        if command == "delete-comment":
            return self.delete_comment(args.comment_id)
        raise ValueError(f"Unknown command: {command}")


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Blog Admin Console')
    parser.add_argument('--log-file', type=str, default=None, help='Log file path')
    parser.add_argument('--log-level', type=str, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default='WARNING', help='Logging level')
    sub = parser.add_subparsers(dest='command', required=True)

    configure = sub.add_parser('configure', help='Save server host, port and API key')
    configure.add_argument('--host', required=True, help='Server host (e.g. 192.168.1.100)')
    configure.add_argument('--port', type=int, default=settings.DEFAULT_SERVER_PORT, help='Server port')
    configure.add_argument('--api-key', required=True, help='API key for authenticated requests')

    sub.add_parser('disconnect', help='Forget the server configuration and API key')
    sub.add_parser('status', help='Show the current configuration')

    posts = sub.add_parser('posts', help='List posts')
    posts.add_argument('--page', type=int, default=settings.DEFAULT_PAGE)
    posts.add_argument('--limit', type=int, default=settings.DEFAULT_PAGE_LIMIT)

    show = sub.add_parser('show', help='Show one post')
    show.add_argument('post_id', type=int)

    create = sub.add_parser('create', help='Create a post')
    create.add_argument('content', help=f'Post text, up to {settings.MAX_POST_LENGTH} characters')

    delete_post = sub.add_parser('delete-post', help='Delete a post')
    delete_post.add_argument('post_id', type=int)

    sub.add_parser('pending', help='List comments awaiting moderation')

    comments = sub.add_parser('comments', help='List all comments of a post')
    comments.add_argument('post_id', type=int)

    approve = sub.add_parser('approve', help='Approve a comment')
    approve.add_argument('comment_id', type=int)

    unapprove = sub.add_parser('unapprove', help='Unapprove a comment')
    unapprove.add_argument('comment_id', type=int)

    delete_comment = sub.add_parser('delete-comment', help='Delete a comment')
    delete_comment.add_argument('comment_id', type=int)

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    # Parse command line arguments
    args = parse_arguments(argv)

    # Set up logging
    log_level = getattr(logging, args.log_level)
    setup_file_logging(args.log_file, log_level)

    try:
        validate_settings()
        logger.debug(f"Configuration: {get_config_summary()}")

        session = create_session()
        try:
            exit_code = AdminConsole(session).dispatch(args)
        finally:
            session.client.close()

    except BlogAdminError as e:
        print(f"Error: {e}", file=sys.stderr)
        exit_code = 1
    except Exception as e:
        logger.error(f"Unhandled exception in Blog Admin: {e}", exc_info=True)
        exit_code = 2

    logger.debug(f"Blog Admin finished with exit code {exit_code}")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
