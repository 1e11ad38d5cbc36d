"""Task service

Projections des vues dashboard / today / upcoming. Ce sont des fonctions
pures recalculées à partir de l'ensemble des tâches de l'utilisateur, elles
n'écrivent rien et acceptent n'importe quels objets ayant les attributs
d'une ``Task``.
"""

from sqlalchemy.orm import Session, selectinload
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple
from taskdeck.models.task import Task, Priority


PRIORITY_RANK = {
    Priority.URGENT: 0,
    Priority.HIGH: 1,
    Priority.NORMAL: 2,
    Priority.LOW: 3,
}


def get_user_tasks(db: Session, user_id: int) -> List[Task]:
    # toutes les tâches du user, plus récentes d'abord
    return db.query(Task).options(
        selectinload(Task.category),
        selectinload(Task.subtasks)
    ).filter(
        Task.user_id == user_id
    ).order_by(Task.created_at.desc(), Task.id.desc()).all()


def _due_day(task) -> Optional[date]:
    if task.due_date is None:
        return None
    return task.due_date.date()


def _matches_category(task, category_id: Optional[int]) -> bool:
    return category_id is None or task.category_id == category_id


def filter_dashboard(
    tasks: Iterable,
    search: Optional[str] = None,
    category_id: Optional[int] = None,
    priority: Optional[Priority] = None
) -> List:
    result = list(tasks)

    if search:
        query = search.lower()
        result = [
            t for t in result
            if query in t.title.lower() or (t.description and query in t.description.lower())
        ]

    if category_id is not None:
        result = [t for t in result if t.category_id == category_id]

    if priority is not None:
        result = [t for t in result if t.priority == priority]

    return result


def count_completion(tasks: Iterable) -> Tuple[int, int]:
    """Retourne (terminées, en attente) sur l'ensemble des tâches."""
    completed = 0
    pending = 0
    for task in tasks:
        if task.completed:
            completed += 1
        else:
            pending += 1
    return completed, pending


def due_status(task, today: Optional[date] = None) -> str:
    """Statut d'échéance affiché sur le dashboard: overdue, today, upcoming ou none."""
    day = _due_day(task)
    if day is None:
        return "none"
    today = today or date.today()
    if day < today:
        return "overdue"
    if day == today:
        return "today"
    return "upcoming"


def overdue_tasks(tasks: Iterable, today: Optional[date] = None, category_id: Optional[int] = None) -> List:
    # échéance passée et pas encore terminée, la plus ancienne d'abord
    today = today or date.today()
    filtered = [
        t for t in tasks
        if not t.completed and due_status(t, today) == "overdue" and _matches_category(t, category_id)
    ]
    filtered.sort(key=lambda t: t.due_date)
    return filtered


def today_tasks(tasks: Iterable, today: Optional[date] = None, category_id: Optional[int] = None) -> List:
    today = today or date.today()

    filtered = [
        t for t in tasks
        if _due_day(t) == today and _matches_category(t, category_id)
    ]
    # tri stable: à priorité égale l'ordre source est conservé
    filtered.sort(key=lambda t: PRIORITY_RANK[Priority(t.priority)])
    return filtered


def upcoming_groups(tasks: Iterable, today: Optional[date] = None, category_id: Optional[int] = None) -> Dict[str, List]:
    """Groupe les tâches à venir par jour d'échéance (clé ISO ``YYYY-MM-DD``).

    Seules les tâches dont l'échéance tombe strictement après ``today`` sont
    gardées. L'ordre d'insertion du dict donne l'ordre d'affichage des
    groupes (chronologique).
    """
    today = today or date.today()

    filtered = [
        t for t in tasks
        if _due_day(t) is not None and _due_day(t) > today and _matches_category(t, category_id)
    ]
    filtered.sort(key=lambda t: t.due_date)

    groups: Dict[str, List] = {}
    for task in filtered:
        key = _due_day(task).isoformat()
        groups.setdefault(key, []).append(task)
    return groups
