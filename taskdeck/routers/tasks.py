import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional

from taskdeck.core.database import get_db
from taskdeck.core.deps import get_current_user
from taskdeck.models.user import User
from taskdeck.models.task import Task
from taskdeck.models.category import Category
from taskdeck.models.subtask import Subtask
from taskdeck.schemas.task import TaskCreate, TaskUpdate, TaskResponse
from taskdeck.schemas.subtask import SubtaskCreate, SubtaskUpdate, SubtaskResponse
from taskdeck.services.task_service import get_user_tasks

router = APIRouter(prefix="/tasks", tags=["tasks"])

logger = logging.getLogger(__name__)

# champs qui ne peuvent pas être remis à null par un PUT
NON_NULLABLE_FIELDS = ("title", "completed", "priority")


def get_owned_task(task_id: int, db: Session, current_user: User) -> Task:
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")

    if task.user_id != current_user.id:
        logger.warning(f"User {current_user.id} denied access to task {task_id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to access this task"
        )

    return task


def check_category(category_id: Optional[int], db: Session, current_user: User) -> None:
    # la catégorie est une simple référence, mais elle doit appartenir au user
    if category_id is None:
        return
    category = db.query(Category).filter(
        Category.id == category_id,
        Category.user_id == current_user.id
    ).first()
    if not category:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid category")


@router.get("", response_model=List[TaskResponse])
def list_tasks(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return get_user_tasks(db, current_user.id)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if not task_data.title or not task_data.title.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Task title is required")

    check_category(task_data.category_id, db, current_user)

    new_task = Task(
        user_id=current_user.id,
        category_id=task_data.category_id,
        title=task_data.title,
        description=task_data.description or "",
        completed=task_data.completed,
        priority=task_data.priority,
        due_date=task_data.due_date
    )
    db.add(new_task)
    db.commit()
    db.refresh(new_task)

    logger.info(f"Task {new_task.id} created by user {current_user.id}")
    return new_task


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return get_owned_task(task_id, db, current_user)


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    task_data: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    task = get_owned_task(task_id, db, current_user)

    update_data = task_data.model_dump(exclude_unset=True)

    for field in NON_NULLABLE_FIELDS:
        if field in update_data and update_data[field] is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Task {field} cannot be null")

    if "title" in update_data and not update_data["title"].strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Task title cannot be empty")

    if "description" in update_data and update_data["description"] is None:
        update_data["description"] = ""

    if "category_id" in update_data:
        check_category(update_data["category_id"], db, current_user)

    for field, value in update_data.items():
        setattr(task, field, value)

    db.commit()
    db.refresh(task)
    return task


@router.delete("/{task_id}")
def delete_task(task_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    task = get_owned_task(task_id, db, current_user)

    # sous-tâches d'abord, puis la tâche
    deleted = db.query(Subtask).filter(Subtask.task_id == task.id).delete(synchronize_session=False)
    db.delete(task)
    db.commit()

    logger.info(f"Task {task_id} deleted by user {current_user.id} ({deleted} subtasks)")
    return {"success": True}


# ========== SOUS-TÂCHES ==========

def get_task_subtask(task: Task, subtask_id: int, db: Session) -> Subtask:
    subtask = db.query(Subtask).filter(
        Subtask.id == subtask_id,
        Subtask.task_id == task.id
    ).first()
    if not subtask:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subtask not found")
    return subtask


@router.post("/{task_id}/subtasks", response_model=SubtaskResponse, status_code=status.HTTP_201_CREATED)
def create_subtask(
    task_id: int,
    subtask_data: SubtaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    task = get_owned_task(task_id, db, current_user)

    if not subtask_data.title or not subtask_data.title.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Subtask title is required")

    subtask = Subtask(task_id=task.id, title=subtask_data.title, completed=subtask_data.completed)
    db.add(subtask)
    db.commit()
    db.refresh(subtask)
    return subtask


@router.put("/{task_id}/subtasks/{subtask_id}", response_model=SubtaskResponse)
def update_subtask(
    task_id: int,
    subtask_id: int,
    subtask_data: SubtaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    task = get_owned_task(task_id, db, current_user)
    subtask = get_task_subtask(task, subtask_id, db)

    update_data = subtask_data.model_dump(exclude_unset=True)

    if "title" in update_data:
        if not update_data["title"] or not update_data["title"].strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Subtask title cannot be empty")
        subtask.title = update_data["title"]

    if "completed" in update_data:
        if update_data["completed"] is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Subtask completed cannot be null")
        subtask.completed = update_data["completed"]

    db.commit()
    db.refresh(subtask)
    return subtask


@router.delete("/{task_id}/subtasks/{subtask_id}")
def delete_subtask(
    task_id: int,
    subtask_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    task = get_owned_task(task_id, db, current_user)
    subtask = get_task_subtask(task, subtask_id, db)

    db.delete(subtask)
    db.commit()
    return {"success": True}
