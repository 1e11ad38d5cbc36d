from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from taskdeck.core.database import get_db
from taskdeck.core.deps import get_current_user
from taskdeck.models.user import User
from taskdeck.models.task import Priority
from taskdeck.schemas.task import TaskResponse
from taskdeck.schemas.view import DashboardTask, DashboardResponse, UpcomingResponse
from taskdeck.services.task_service import (
    get_user_tasks,
    filter_dashboard,
    count_completion,
    due_status,
    overdue_tasks,
    today_tasks,
    upcoming_groups
)

router = APIRouter(prefix="/views", tags=["views"])


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    search: Optional[str] = Query(None),
    category_id: Optional[int] = Query(None),
    priority: Optional[Priority] = Query(None)
):
    tasks = get_user_tasks(db, current_user.id)
    completed, pending = count_completion(tasks)
    today = date.today()
    filtered = filter_dashboard(tasks, search=search, category_id=category_id, priority=priority)
    return {
        "tasks": [
            DashboardTask.model_validate(t).model_copy(update={"due_status": due_status(t, today)})
            for t in filtered
        ],
        "completed_count": completed,
        "pending_count": pending
    }


@router.get("/today", response_model=List[TaskResponse])
def today(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    category_id: Optional[int] = Query(None)
):
    return today_tasks(get_user_tasks(db, current_user.id), category_id=category_id)


@router.get("/upcoming", response_model=UpcomingResponse)
def upcoming(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    category_id: Optional[int] = Query(None)
):
    groups = upcoming_groups(get_user_tasks(db, current_user.id), category_id=category_id)
    return {"dates": list(groups.keys()), "groups": groups}


@router.get("/overdue", response_model=List[TaskResponse])
def overdue(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    category_id: Optional[int] = Query(None)
):
    return overdue_tasks(get_user_tasks(db, current_user.id), category_id=category_id)
