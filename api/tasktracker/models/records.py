from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .tables import TaskRow, UserRow


@dataclass(frozen=True)
class User:
    id: int
    name: str
    max_tasks_per_day: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: UserRow) -> "User":
        return cls(
            id=row.id,
            name=row.name,
            max_tasks_per_day=row.max_tasks_per_day,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


@dataclass(frozen=True)
class Task:
    id: int
    user_id: int
    task: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: TaskRow) -> "Task":
        return cls(
            id=row.id,
            user_id=row.user_id,
            task=row.task,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
