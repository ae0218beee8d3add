from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from ..models.records import Task
from ..models.tables import TaskRow
from .clock import Clock, to_naive_utc
from .database import Database, store_errors
from .errors import NotFoundError


class TaskStore:
    """Durable per-user task collection backed by the ``todo_tasks`` table.

    Methods accepting ``session`` join the caller's transaction instead of
    opening their own; the admission controller relies on this to run the
    count and the insert in one transaction.
    """

    def __init__(self, *, db: Database, clock: Clock) -> None:
        self.db = db
        self.clock = clock

    # Quota helpers
    def count_for_user_on_date(self, user_id: int, day: date, *, session: Session | None = None) -> int:
        start, end = self.clock.day_bounds(day)
        q = (
            select(func.count())
            .select_from(TaskRow)
            .where(TaskRow.user_id == user_id)
            .where(TaskRow.created_at >= start)
            .where(TaskRow.created_at < end)
        )
        with store_errors("Error counting tasks"):
            with self.db.reuse_or_open(session) as s:
                return int(s.execute(q).scalar_one())

    def insert(
        self,
        user_id: int,
        text: str,
        *,
        now: datetime | None = None,
        session: Session | None = None,
    ) -> Task:
        ts = to_naive_utc(now or self.clock.now())
        row = TaskRow(user_id=user_id, task=text, created_at=ts, updated_at=ts)
        with store_errors("Error adding task"):
            with self.db.reuse_or_open(session) as s:
                s.add(row)
                s.flush()
                return Task.from_row(row)

    # Tasks
    def list_for_user(self, user_id: int) -> list[Task]:
        q = select(TaskRow).where(TaskRow.user_id == user_id).order_by(TaskRow.id)
        with store_errors("Error retrieving tasks"):
            with self.db.session() as s:
                return [Task.from_row(r) for r in s.scalars(q)]

    def get_by_id(self, task_id: int, *, session: Session | None = None) -> Task:
        with store_errors("Error retrieving task"):
            with self.db.reuse_or_open(session) as s:
                row = s.get(TaskRow, task_id)
                if row is None:
                    raise NotFoundError("Task not found")
                return Task.from_row(row)

    def update(self, task_id: int, text: str, *, session: Session | None = None) -> Task:
        with store_errors("Error updating task"):
            with self.db.reuse_or_open(session) as s:
                row = s.get(TaskRow, task_id)
                if row is None:
                    raise NotFoundError("Task not found")
                row.task = text
                row.updated_at = to_naive_utc(self.clock.now())
                s.flush()
                return Task.from_row(row)

    def delete(self, task_id: int, *, session: Session | None = None) -> None:
        with store_errors("Error deleting task"):
            with self.db.reuse_or_open(session) as s:
                row = s.get(TaskRow, task_id)
                if row is None:
                    raise NotFoundError("Task not found")
                s.delete(row)

    def delete_all_for_user(self, user_id: int, *, session: Session | None = None) -> int:
        with store_errors("Error deleting tasks"):
            with self.db.reuse_or_open(session) as s:
                result = s.execute(delete(TaskRow).where(TaskRow.user_id == user_id))
                return int(result.rowcount or 0)
