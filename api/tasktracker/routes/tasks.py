from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Form

from ..models.schemas import DeletedResponse, MessageResponse, TaskMessageResponse, TaskResponse
from ..services.container import Services, get_services
from ..services.quotas import AdmissionController
from ..services.tasks import TaskService

router = APIRouter(tags=["tasks"])


def get_admission(services: Services = Depends(get_services)) -> AdmissionController:
    return services.admission


def get_task_service(services: Services = Depends(get_services)) -> TaskService:
    return services.task_service


@router.post("/users/{user_id}/tasks", response_model=TaskMessageResponse)
def add_task(
    user_id: str,
    task: Optional[str] = Form(default=None),
    admission: AdmissionController = Depends(get_admission),
) -> TaskMessageResponse:
    created = admission.admit(user_id, task)
    return TaskMessageResponse(
        message="Task added successfully",
        task=TaskResponse.model_validate(created),
    )


@router.get("/users/{user_id}/tasks", response_model=list[TaskResponse])
def get_tasks(
    user_id: str,
    service: TaskService = Depends(get_task_service),
) -> list[TaskResponse]:
    return [TaskResponse.model_validate(t) for t in service.list_tasks(user_id)]


@router.delete("/users/{user_id}/tasks", response_model=DeletedResponse)
def delete_tasks(
    user_id: str,
    service: TaskService = Depends(get_task_service),
) -> DeletedResponse:
    removed = service.delete_all_tasks(user_id)
    return DeletedResponse(message=f"Deleted {removed} tasks", deleted=removed)


@router.get("/users/{user_id}/tasks/{task_id}", response_model=TaskResponse)
def get_task(
    user_id: str,
    task_id: str,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return TaskResponse.model_validate(service.get_task(user_id, task_id))


@router.put("/users/{user_id}/tasks/{task_id}", response_model=TaskMessageResponse)
def update_task(
    user_id: str,
    task_id: str,
    task: Optional[str] = Form(default=None),
    service: TaskService = Depends(get_task_service),
) -> TaskMessageResponse:
    updated = service.update_task(user_id, task_id, task)
    return TaskMessageResponse(
        message="Task updated successfully",
        task=TaskResponse.model_validate(updated),
    )


@router.delete("/users/{user_id}/tasks/{task_id}", response_model=MessageResponse)
def delete_task(
    user_id: str,
    task_id: str,
    service: TaskService = Depends(get_task_service),
) -> MessageResponse:
    service.delete_task(user_id, task_id)
    return MessageResponse(message="Task deleted successfully")
