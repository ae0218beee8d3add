from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    task: str
    created_at: datetime
    updated_at: datetime


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    max_tasks_per_day: int = Field(ge=0)
    created_at: datetime
    updated_at: datetime


class QuotaResponse(BaseModel):
    user_id: int
    day: date
    max_tasks_per_day: int = Field(ge=0)
    used_today: int = Field(ge=0)
    remaining: int = Field(ge=0)


class MessageResponse(BaseModel):
    message: str


class TaskMessageResponse(MessageResponse):
    task: TaskResponse


class UserMessageResponse(MessageResponse):
    user: UserResponse


class DeletedResponse(MessageResponse):
    deleted: int = 0
