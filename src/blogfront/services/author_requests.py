"""Promotion of users to the AUTHOR role.

A USER asks for the role; an ADMIN approves or rejects the request. The
requester's own session reflects a submitted request immediately. A decision
made by an admin only reaches the requester on their next login.
"""

import logging
from typing import Optional

from ..models.user import AuthorRequestStatus, Role, User
from .api_client import ApiError, BlogApiClient
from .notifications import Notifier
from .paged_list import PagedList
from .session import SessionStore

logger = logging.getLogger(__name__)

DECISIONS = (AuthorRequestStatus.APPROVED, AuthorRequestStatus.REJECTED)


class AuthorRequestError(Exception):
    """The author request action is not allowed for the current session."""
    pass


class AuthorRequestWorkflow:
    """Submit and process author role requests.

    Args:
        session: The acting user's session.
        api: Backend client.
        notifier: Receives success and failure notifications.
        users: The admin's user list, reloaded after a decision.
    """

    def __init__(
        self,
        session: SessionStore,
        api: BlogApiClient,
        notifier: Notifier,
        users: Optional[PagedList[User]] = None,
    ):
        self.session = session
        self.api = api
        self.notifier = notifier
        self.users = users

    def submit_author_request(self) -> bool:
        """Ask for the AUTHOR role on behalf of the current user.

        Raises:
            AuthorRequestError: Not a USER, or a request is pending or approved.
                No request is sent in that case.
        """
        identity = self.session.identity
        if identity is None or identity.role != Role.USER:
            raise AuthorRequestError("Only users can request the author role.")
        if not identity.can_request_author:
            raise AuthorRequestError(
                f"Author request is already {identity.author_request_status.value.lower()}."
            )

        try:
            message = self.api.request_author_role()
        except ApiError as e:
            self.notifier.error(
                e.server_message or "Failed to send author role request.", summary="Request Failed"
            )
            return False

        self.session.update_author_request_status(AuthorRequestStatus.PENDING)
        logger.info(f"User {identity.id} requested the author role")
        self.notifier.success(message, summary="Request Sent")
        return True

    def process_author_request(self, user_id: str, decision: AuthorRequestStatus) -> bool:
        """Approve or reject a user's author request (admin only).

        Raises:
            AuthorRequestError: The caller is not an admin or the decision is
                not APPROVED/REJECTED. No request is sent in that case.
        """
        if decision not in DECISIONS:
            raise AuthorRequestError("Decision must be APPROVED or REJECTED.")
        if not self.session.has_role(Role.ADMIN):
            raise AuthorRequestError("Only administrators can process author requests.")

        verb = "approve" if decision == AuthorRequestStatus.APPROVED else "reject"
        try:
            user = self.api.process_author_request(user_id, decision)
        except ApiError as e:
            self.notifier.error(e.server_message or f"Failed to {verb} author request.")
            return False

        logger.info(f"Author request of user {user_id} {decision.value.lower()}")
        label = (user.email if user is not None else "") or user_id
        self.notifier.success(f"Author request for {label} {decision.value.lower()}.")
        if self.users is not None:
            self.users.after_mutation()
        return True
