from __future__ import annotations

import logging

from ..models.records import Task
from .database import Database, store_errors
from .errors import AuthorizationError
from .task_store import TaskStore
from .validation import clean_text, parse_id

logger = logging.getLogger(__name__)


def _check_owner(task: Task, user_id: int) -> None:
    if task.user_id != user_id:
        raise AuthorizationError("Task does not belong to user")


class TaskService:
    """Read/update/delete of tasks through the owning user's path. No quota logic."""

    def __init__(self, *, db: Database, tasks: TaskStore) -> None:
        self.db = db
        self.tasks = tasks

    def list_tasks(self, user_id: object) -> list[Task]:
        return self.tasks.list_for_user(parse_id(user_id, kind="user"))

    def get_task(self, user_id: object, task_id: object) -> Task:
        uid = parse_id(user_id, kind="user")
        tid = parse_id(task_id, kind="task")
        task = self.tasks.get_by_id(tid)
        _check_owner(task, uid)
        return task

    def update_task(self, user_id: object, task_id: object, text: str | None) -> Task:
        uid = parse_id(user_id, kind="user")
        tid = parse_id(task_id, kind="task")
        body = clean_text(text)

        with store_errors("Error updating task"):
            with self.db.session() as s:
                _check_owner(self.tasks.get_by_id(tid, session=s), uid)
                task = self.tasks.update(tid, body, session=s)

        logger.info("Updated task %s for user %s", tid, uid)
        return task

    def delete_task(self, user_id: object, task_id: object) -> None:
        uid = parse_id(user_id, kind="user")
        tid = parse_id(task_id, kind="task")

        with store_errors("Error deleting task"):
            with self.db.session() as s:
                _check_owner(self.tasks.get_by_id(tid, session=s), uid)
                self.tasks.delete(tid, session=s)

        logger.info("Deleted task %s for user %s", tid, uid)

    def delete_all_tasks(self, user_id: object) -> int:
        uid = parse_id(user_id, kind="user")
        removed = self.tasks.delete_all_for_user(uid)
        logger.info("Deleted %d task(s) for user %s", removed, uid)
        return removed
