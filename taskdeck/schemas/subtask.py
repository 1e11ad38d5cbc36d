from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

class SubtaskCreate(BaseModel):
    title: Optional[str] = None
    completed: bool = False

class SubtaskUpdate(BaseModel):
    title: Optional[str] = None
    completed: Optional[bool] = None

class SubtaskResponse(BaseModel):
    id: int
    task_id: int
    title: str
    completed: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
