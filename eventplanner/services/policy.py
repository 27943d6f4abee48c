"""Authorization rules for writing events."""

from __future__ import annotations

import logging
from typing import Protocol

from eventplanner.domain.errors import ForbiddenError
from eventplanner.domain.models import Event, User

logger = logging.getLogger(__name__)


class AuthorizationPolicy(Protocol):
    def can_create(self, user: User) -> bool: ...

    def can_modify(self, user: User, event: Event) -> bool: ...


class OwnerOrAdminPolicy:
    """Admins may write anything; owners may modify their own events.

    With ``admin_only_writes`` set, non-admin users cannot write events at
    all, even ones they own.
    """

    def __init__(self, admin_only_writes: bool = True) -> None:
        self.admin_only_writes = admin_only_writes

    def can_create(self, user: User) -> bool:
        return user.is_admin or not self.admin_only_writes

    def can_modify(self, user: User, event: Event) -> bool:
        if user.is_admin:
            return True
        if self.admin_only_writes:
            return False
        return event.owner_id == user.id


def ensure_can_create(policy: AuthorizationPolicy, user: User) -> None:
    if not policy.can_create(user):
        logger.warning("User %s denied event creation", user.id)
        raise ForbiddenError("Forbidden: Only admin users can create events")


def ensure_can_modify(
    policy: AuthorizationPolicy, user: User, event: Event, action: str
) -> None:
    if not policy.can_modify(user, event):
        logger.warning("User %s denied %s on event %s", user.id, action, event.id)
        raise ForbiddenError(
            f"Forbidden: Only the creator or admin can {action} this event"
        )
