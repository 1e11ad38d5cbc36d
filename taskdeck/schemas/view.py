from pydantic import BaseModel
from typing import Dict, List, Literal

from taskdeck.schemas.task import TaskResponse

# Schemas des vues (dashboard / today / upcoming)

class DashboardTask(TaskResponse):
    due_status: Literal["overdue", "today", "upcoming", "none"] = "none"

class DashboardResponse(BaseModel):
    tasks: List[DashboardTask]
    completed_count: int
    pending_count: int

class UpcomingResponse(BaseModel):
    dates: List[str]
    groups: Dict[str, List[TaskResponse]]
