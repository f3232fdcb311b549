"""Dashboard state: the viewer's own posts and, for admins, all users."""

import logging
from typing import Callable, Optional

from ..models.post import Post
from ..models.user import AuthorRequestStatus, Identity, Role, User
from .api_client import ApiError, BlogApiClient
from .author_requests import AuthorRequestWorkflow
from .notifications import Notifier
from .paged_list import PagedList
from .session import LOGIN_ROUTE, SessionStore

logger = logging.getLogger(__name__)


class DashboardState:
    """Lists shown on the dashboard, kept in step with the session.

    Subscribes to the session store: the lists a viewer may see are loaded,
    the others are cleared, and losing the session sends the viewer to the
    login page.
    """

    def __init__(
        self,
        session: SessionStore,
        api: BlogApiClient,
        notifier: Notifier,
        posts_page_size: int = 5,
        users_page_size: int = 10,
        navigate: Optional[Callable[[str], None]] = None,
    ):
        self.session = session
        self.api = api
        self.notifier = notifier
        self._navigate = navigate

        self.my_posts: PagedList[Post] = PagedList(
            api.list_my_posts,
            page_size=posts_page_size,
            notifier=notifier,
            error_message="Failed to load your posts.",
            name="my posts",
        )
        self.users: PagedList[User] = PagedList(
            api.list_users,
            page_size=users_page_size,
            notifier=notifier,
            error_message="Failed to load users.",
            name="users",
        )
        self.author_requests = AuthorRequestWorkflow(session, api, notifier, users=self.users)
        self._unsubscribe = session.subscribe(self._on_identity_changed)

    def refresh(self) -> None:
        """Load whatever the current identity is entitled to see."""
        self._on_identity_changed(self.session.identity)

    def close(self) -> None:
        self._unsubscribe()

    def _on_identity_changed(self, identity: Optional[Identity]) -> None:
        if identity is None:
            logger.debug("Session ended; clearing dashboard lists")
            self.my_posts.clear()
            self.users.clear()
            if self._navigate is not None:
                self._navigate(LOGIN_ROUTE)
            return

        if identity.can_author:
            self.my_posts.load()
        else:
            self.my_posts.clear()

        if identity.is_admin:
            self.users.load()
        else:
            self.users.clear()

    # Post mutations

    def delete_post(self, post_id: str) -> bool:
        return self._mutate(
            lambda: self.api.delete_post(post_id),
            self.my_posts,
            "Post deleted successfully.",
            "Failed to delete post.",
        )

    # User mutations (admin only)

    def block_user(self, user_id: str) -> bool:
        return self._mutate(
            lambda: self.api.set_user_blocked(user_id, True),
            self.users,
            "User blocked successfully.",
            "Failed to block user.",
        )

    def unblock_user(self, user_id: str) -> bool:
        return self._mutate(
            lambda: self.api.set_user_blocked(user_id, False),
            self.users,
            "User unblocked successfully.",
            "Failed to unblock user.",
        )

    def delete_user(self, user_id: str) -> bool:
        return self._mutate(
            lambda: self.api.delete_user(user_id),
            self.users,
            "User deleted successfully.",
            "Failed to delete user.",
        )

    def change_user_role(self, user_id: str, role: Role) -> bool:
        return self._mutate(
            lambda: self.api.update_user_role(user_id, role),
            self.users,
            f"Role updated to {role.value}.",
            "Failed to update user role.",
        )

    def process_author_request(self, user_id: str, decision: AuthorRequestStatus) -> bool:
        return self.author_requests.process_author_request(user_id, decision)

    def _mutate(self, action, target: PagedList, success: str, fallback: str) -> bool:
        """Run a write, then resync the affected list from the backend."""
        try:
            action()
        except ApiError as e:
            self.notifier.error(e.server_message or fallback)
            return False
        self.notifier.success(success)
        target.after_mutation()
        return True
