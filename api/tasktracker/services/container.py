from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from .clock import Clock
from .database import Database, StorageConfig
from .locks import UserLockRegistry
from .quotas import AdmissionController
from .settings import Settings
from .task_store import TaskStore
from .tasks import TaskService
from .user_directory import UserDirectory


@dataclass
class Services:
    settings: Settings
    db: Database
    clock: Clock
    locks: UserLockRegistry
    tasks: TaskStore
    users: UserDirectory
    admission: AdmissionController
    task_service: TaskService


def build_services(settings: Settings, *, clock: Clock | None = None, db: Database | None = None) -> Services:
    clock = clock or Clock(settings.timezone)
    db = db or Database(StorageConfig.from_settings(settings))
    locks = UserLockRegistry()

    tasks = TaskStore(db=db, clock=clock)
    users = UserDirectory(db=db, clock=clock, tasks=tasks, locks=locks)
    admission = AdmissionController(db=db, users=users, tasks=tasks, clock=clock, locks=locks)

    return Services(
        settings=settings,
        db=db,
        clock=clock,
        locks=locks,
        tasks=tasks,
        users=users,
        admission=admission,
        task_service=TaskService(db=db, tasks=tasks),
    )


def get_services(request: Request) -> Services:
    return request.app.state.services
