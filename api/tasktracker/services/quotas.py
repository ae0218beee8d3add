"""Quota-checked task creation.

An admission attempt moves Start -> UserResolved -> CountObtained and ends
Admitted or Rejected(limit); it may leave early as Rejected(user not found)
or Failed(store error). Steps from user lookup to insert run under the
user's admission lock and inside a single transaction, so two concurrent
attempts for the same user can never both observe ``count < limit``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime

from ..models.records import Task
from .clock import Clock
from .database import Database, store_errors
from .errors import NotFoundError, QuotaExceededError, StoreUnavailableError
from .locks import UserLockRegistry
from .task_store import TaskStore
from .user_directory import UserDirectory
from .validation import clean_text, parse_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserQuota:
    day: date
    max_tasks_per_day: int
    used_today: int

    @property
    def remaining(self) -> int:
        return max(self.max_tasks_per_day - self.used_today, 0)

    @property
    def exhausted(self) -> bool:
        return self.used_today >= self.max_tasks_per_day


class AdmissionController:
    def __init__(
        self,
        *,
        db: Database,
        users: UserDirectory,
        tasks: TaskStore,
        clock: Clock,
        locks: UserLockRegistry,
    ) -> None:
        self.db = db
        self.users = users
        self.tasks = tasks
        self.clock = clock
        self.locks = locks

    def admit(self, user_id: object, text: str | None) -> Task:
        # Validation never touches the store.
        uid = parse_id(user_id, kind="user")
        body = clean_text(text)

        with self.locks.hold(uid):
            try:
                with store_errors("Error adding task"):
                    with self.db.session() as s:
                        user = self.users.lookup(uid, session=s, for_update=True)

                        # One instant decides both the day being counted and
                        # the created_at of the new row.
                        now = self.clock.now()
                        quota = self._quota(uid, user.max_tasks_per_day, now, session=s)
                        if quota.exhausted:
                            raise QuotaExceededError()

                        task = self.tasks.insert(uid, body, now=now, session=s)
            except NotFoundError:
                logger.info("Rejected task for user %s: user not found", uid)
                raise
            except QuotaExceededError:
                logger.info("Rejected task for user %s: daily limit reached", uid)
                raise
            except StoreUnavailableError:
                logger.error("Failed to admit task for user %s", uid)
                raise

        logger.info(
            "Admitted task %s for user %s (%d/%d today)",
            task.id,
            uid,
            quota.used_today + 1,
            quota.max_tasks_per_day,
        )
        return task

    def quota_for(self, user_id: int, now: datetime | None = None) -> UserQuota:
        """Current usage for an already parsed ``user_id``; informational, takes no lock."""
        user = self.users.lookup(user_id)
        return self._quota(user_id, user.max_tasks_per_day, now or self.clock.now())

    def _quota(self, user_id: int, limit: int, now: datetime, *, session=None) -> UserQuota:
        today = self.clock.today(now)
        used = self.tasks.count_for_user_on_date(user_id, today, session=session)
        return UserQuota(day=today, max_tasks_per_day=limit, used_today=used)
