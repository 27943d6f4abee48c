"""User routes: registration, profile and admin management."""

from __future__ import annotations

from fastapi import APIRouter, status

from eventplanner.api.deps import AdminUser, CurrentUser, UserServiceDep
from eventplanner.domain.models import User, UserCount, UserCreate, UserRole, UserUpdate

auth_router = APIRouter(prefix="/auth", tags=["auth"])
users_router = APIRouter(prefix="/users", tags=["users"])
admin_router = APIRouter(prefix="/admin/users", tags=["admin"])


@auth_router.post("/register", response_model=User, status_code=status.HTTP_201_CREATED)
def register(body: UserCreate, service: UserServiceDep) -> User:
    return service.register(body)


@auth_router.get("/me", response_model=User)
def me(user: CurrentUser) -> User:
    return user


@users_router.get("/count", response_model=UserCount)
def count_users(service: UserServiceDep) -> UserCount:
    return UserCount(count=service.count())


@admin_router.get("", response_model=list[User])
def list_users(
    service: UserServiceDep, admin: AdminUser, role: UserRole | None = None
) -> list[User]:
    return service.list_users(role=role)


@admin_router.put("/{user_id}", response_model=User)
def update_user(
    user_id: str, body: UserUpdate, service: UserServiceDep, admin: AdminUser
) -> User:
    return service.update(user_id, body)


@admin_router.delete("/{user_id}")
def delete_user(user_id: str, service: UserServiceDep, admin: AdminUser) -> dict:
    service.delete(user_id, admin)
    return {"status": "deleted"}
