from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Form

from ..models.schemas import (
    DeletedResponse,
    QuotaResponse,
    UserMessageResponse,
    UserResponse,
)
from ..services.container import Services, get_services
from ..services.quotas import AdmissionController
from ..services.user_directory import UserDirectory
from ..services.validation import clean_text, parse_id, parse_limit

router = APIRouter(tags=["users"])


def get_users(services: Services = Depends(get_services)) -> UserDirectory:
    return services.users


def get_admission(services: Services = Depends(get_services)) -> AdmissionController:
    return services.admission


@router.post("/users", response_model=UserMessageResponse)
def create_user(
    id: Optional[str] = Form(default=None),
    name: Optional[str] = Form(default=None),
    max_tasks_per_day: Optional[str] = Form(default=None),
    users: UserDirectory = Depends(get_users),
) -> UserMessageResponse:
    user = users.create(
        parse_id(id, kind="user"),
        clean_text(name, detail="Name cannot be empty"),
        parse_limit(max_tasks_per_day),
    )
    return UserMessageResponse(
        message="User created successfully",
        user=UserResponse.model_validate(user),
    )


@router.get("/users", response_model=list[UserResponse])
def list_users(users: UserDirectory = Depends(get_users)) -> list[UserResponse]:
    return [UserResponse.model_validate(u) for u in users.list_users()]


@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(user_id: str, users: UserDirectory = Depends(get_users)) -> UserResponse:
    return UserResponse.model_validate(users.lookup(parse_id(user_id, kind="user")))


@router.put("/users/{user_id}", response_model=UserMessageResponse)
def update_user(
    user_id: str,
    name: Optional[str] = Form(default=None),
    max_tasks_per_day: Optional[str] = Form(default=None),
    users: UserDirectory = Depends(get_users),
) -> UserMessageResponse:
    uid = parse_id(user_id, kind="user")
    user = users.update(
        uid,
        name=clean_text(name, detail="Name cannot be empty") if name is not None else None,
        max_tasks_per_day=parse_limit(max_tasks_per_day) if max_tasks_per_day is not None else None,
    )
    return UserMessageResponse(
        message="User updated successfully",
        user=UserResponse.model_validate(user),
    )


@router.delete("/users/{user_id}", response_model=DeletedResponse)
def delete_user(user_id: str, users: UserDirectory = Depends(get_users)) -> DeletedResponse:
    removed = users.delete(parse_id(user_id, kind="user"))
    return DeletedResponse(message="User deleted successfully", deleted=removed)


@router.get("/users/{user_id}/quota", response_model=QuotaResponse)
def get_quota(
    user_id: str,
    admission: AdmissionController = Depends(get_admission),
) -> QuotaResponse:
    uid = parse_id(user_id, kind="user")
    quota = admission.quota_for(uid)
    return QuotaResponse(
        user_id=uid,
        day=quota.day,
        max_tasks_per_day=quota.max_tasks_per_day,
        used_today=quota.used_today,
        remaining=quota.remaining,
    )
