from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models.records import User
from ..models.tables import UserRow
from .clock import Clock, to_naive_utc
from .database import Database, store_errors
from .errors import NotFoundError, ValidationError
from .locks import UserLockRegistry
from .task_store import TaskStore

logger = logging.getLogger(__name__)


class UserDirectory:
    """Users and their daily quota. The only writer of the ``users`` table."""

    def __init__(
        self,
        *,
        db: Database,
        clock: Clock,
        tasks: TaskStore,
        locks: UserLockRegistry,
    ) -> None:
        self.db = db
        self.clock = clock
        self.tasks = tasks
        self.locks = locks

    def lookup(self, user_id: int, *, session: Session | None = None, for_update: bool = False) -> User:
        q = select(UserRow).where(UserRow.id == user_id)
        if for_update:
            # Row lock on backends that support it; a no-op on SQLite.
            q = q.with_for_update()
        with store_errors("Error reading user"):
            with self.db.reuse_or_open(session) as s:
                row = s.scalars(q).first()
                if row is None:
                    raise NotFoundError("User ID not found")
                return User.from_row(row)

    def list_users(self) -> list[User]:
        with store_errors("Error retrieving users"):
            with self.db.session() as s:
                return [User.from_row(r) for r in s.scalars(select(UserRow).order_by(UserRow.id))]

    def create(self, user_id: int, name: str, max_tasks_per_day: int) -> User:
        if max_tasks_per_day < 0:
            raise ValidationError("max_tasks_per_day must be >= 0")
        now = to_naive_utc(self.clock.now())
        row = UserRow(
            id=user_id,
            name=name,
            max_tasks_per_day=max_tasks_per_day,
            created_at=now,
            updated_at=now,
        )
        with store_errors("Error creating user"):
            try:
                with self.db.session() as s:
                    if s.get(UserRow, user_id) is not None:
                        raise ValidationError("User already exists")
                    s.add(row)
                    s.flush()
                    user = User.from_row(row)
            except IntegrityError:
                # Lost a race against a concurrent create of the same id.
                raise ValidationError("User already exists") from None

        logger.info("Created user %s (max_tasks_per_day=%s)", user_id, max_tasks_per_day)
        return user

    def update(
        self,
        user_id: int,
        *,
        name: str | None = None,
        max_tasks_per_day: int | None = None,
    ) -> User:
        if max_tasks_per_day is not None and max_tasks_per_day < 0:
            raise ValidationError("max_tasks_per_day must be >= 0")

        with store_errors("Error updating user"):
            with self.db.session() as s:
                row = s.get(UserRow, user_id)
                if row is None:
                    raise NotFoundError("User ID not found")
                if name is not None:
                    row.name = name
                if max_tasks_per_day is not None:
                    row.max_tasks_per_day = max_tasks_per_day
                row.updated_at = to_naive_utc(self.clock.now())
                s.flush()
                user = User.from_row(row)

        logger.info("Updated user %s", user_id)
        return user

    def delete(self, user_id: int) -> int:
        """Delete the user and cascade to its tasks. Returns the number of tasks removed."""
        # Held so an admission for this user cannot insert between the two deletes.
        with self.locks.hold(user_id):
            with store_errors("Error deleting user"):
                with self.db.session() as s:
                    row = s.get(UserRow, user_id)
                    if row is None:
                        raise NotFoundError("User ID not found")
                    removed = self.tasks.delete_all_for_user(user_id, session=s)
                    s.delete(row)

        logger.info("Deleted user %s and %d task(s)", user_id, removed)
        return removed
