"""FastAPI dependencies: services from app state and the calling user."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header, Request

from eventplanner.domain.errors import ForbiddenError, UnauthorizedError
from eventplanner.domain.models import User
from eventplanner.services.lifecycle import EventLifecycleService
from eventplanner.services.users import UserService


def get_event_service(request: Request) -> EventLifecycleService:
    return request.app.state.event_service


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_current_user(
    users: Annotated[UserService, Depends(get_user_service)],
    x_user_id: Annotated[str | None, Header(alias="X-User-Id")] = None,
) -> User:
    """Resolve the ``X-User-Id`` header to a registered user.

    Raises:
        UnauthorizedError: header missing or naming no known user
    """
    if not x_user_id:
        raise UnauthorizedError("Unauthorized")
    user = users.store.users.get(x_user_id)
    if user is None:
        raise UnauthorizedError("Unauthorized")
    return user


def require_admin(user: Annotated[User, Depends(get_current_user)]) -> User:
    if not user.is_admin:
        raise ForbiddenError("Admin access required")
    return user


EventServiceDep = Annotated[EventLifecycleService, Depends(get_event_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_admin)]
