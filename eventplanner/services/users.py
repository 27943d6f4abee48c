"""Service for registering and administering users."""

from __future__ import annotations

import logging

from eventplanner.domain.errors import (
    DuplicateUserError,
    NotFoundError,
    SelfDeletionError,
)
from eventplanner.domain.models import User, UserCreate, UserRole, UserUpdate
from eventplanner.repos.memory import MemoryStore

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    def register(self, payload: UserCreate) -> User:
        user = User(**payload.model_dump())
        if not self.store.users.add_unique(user):
            raise DuplicateUserError("User with this email already exists")
        logger.info("Registered user %s with role %s", user.id, user.role)
        return user

    def get(self, user_id: str) -> User:
        user = self.store.users.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def list_users(self, role: UserRole | None = None) -> list[User]:
        return self.store.users.list_all(role=role)

    def update(self, user_id: str, payload: UserUpdate) -> User:
        user = self.get(user_id)
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)

        updated = User.model_validate({**user.model_dump(), **changes})
        if not self.store.users.replace_unique(updated):
            raise DuplicateUserError("User with this email already exists")
        logger.info("Updated user %s (%s)", user.id, ", ".join(sorted(changes)))
        return updated

    def delete(self, user_id: str, actor: User) -> None:
        if user_id == actor.id:
            raise SelfDeletionError("Cannot delete your own account")
        self.get(user_id)
        self.store.users.delete(user_id)
        logger.info("User %s deleted by %s", user_id, actor.id)

    def count(self) -> int:
        return self.store.users.count()
