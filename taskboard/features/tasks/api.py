"""Tasks API endpoints"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db import get_db
from taskboard.features.tasks.domain import TaskNotFoundError, TaskStats
from taskboard.features.tasks.service import TaskService
from taskboard.features.tasks.schemas import (
    CreateTaskRequest,
    DashboardResponse,
    DeleteResponse,
    StatusFilter,
    TaskListResponse,
    TaskResponse,
    UpdateTaskRequest,
)

logger = logging.getLogger(__name__)

DASHBOARD_TASK_LIMIT = 10

router = APIRouter(prefix="/api/tasks", tags=["tasks"])
dashboard_router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


def get_task_service(db: AsyncSession = Depends(get_db)) -> TaskService:
    return TaskService(db, logger=logger)


def _server_error(action: str, e: Exception) -> HTTPException:
    logger.error(f"Failed to {action}: {e}", exc_info=True)
    return HTTPException(status_code=500, detail=f"Failed to {action}: {str(e)}")


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    status: StatusFilter = Query(StatusFilter.ALL, description="all, pending or completed"),
    limit: int = Query(12, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: TaskService = Depends(get_task_service),
):
    """List tasks newest first, optionally filtered by status"""
    try:
        tasks = await service.list_tasks(status=status.to_status(), limit=limit, offset=offset)
    except Exception as e:
        raise _server_error("list tasks", e)

    return {
        "tasks": tasks,
        "count": len(tasks),
        "current_filter": status,
    }


@router.get("/stats", response_model=TaskStats)
async def get_task_stats(service: TaskService = Depends(get_task_service)):
    """Aggregate counts and completion percentage over all tasks"""
    try:
        return await service.get_stats()
    except Exception as e:
        raise _server_error("compute task stats", e)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: int, service: TaskService = Depends(get_task_service)):
    """Get a single task by ID"""
    try:
        task = await service.get_task(task_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise _server_error("fetch task", e)

    return {"task": task}


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(request: CreateTaskRequest, service: TaskService = Depends(get_task_service)):
    """Create a new task"""
    try:
        task = await service.create_task(request.to_create())
    except Exception as e:
        raise _server_error("create task", e)

    return {"task": task}


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    request: UpdateTaskRequest,
    service: TaskService = Depends(get_task_service),
):
    """Update an existing task; only the fields sent are changed"""
    try:
        task = await service.update_task(task_id, request.to_update())
    except TaskNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise _server_error("update task", e)

    return {"task": task}


@router.post("/{task_id}/complete", response_model=TaskResponse)
async def complete_task(task_id: int, service: TaskService = Depends(get_task_service)):
    """Mark a task as completed"""
    try:
        task = await service.mark_completed(task_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise _server_error("complete task", e)

    return {"task": task}


@router.post("/{task_id}/reopen", response_model=TaskResponse)
async def reopen_task(task_id: int, service: TaskService = Depends(get_task_service)):
    """Mark a task as pending again"""
    try:
        task = await service.mark_pending(task_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise _server_error("reopen task", e)

    return {"task": task}


@router.delete("/{task_id}", response_model=DeleteResponse)
async def delete_task(task_id: int, service: TaskService = Depends(get_task_service)):
    """Permanently delete a task"""
    try:
        await service.delete_task(task_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise _server_error("delete task", e)

    return {"success": True, "message": "Task deleted successfully"}


@dashboard_router.get("", response_model=DashboardResponse)
async def get_dashboard(service: TaskService = Depends(get_task_service)):
    """Latest tasks and task statistics"""
    try:
        tasks = await service.list_tasks(limit=DASHBOARD_TASK_LIMIT)
        stats = await service.get_stats()
    except Exception as e:
        raise _server_error("load dashboard", e)

    logger.info(f"Dashboard: {len(tasks)} tasks, {stats.completion_percentage}% complete")
    return {"tasks": tasks, "stats": stats}
