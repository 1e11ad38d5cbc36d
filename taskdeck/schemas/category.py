from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

# Schemas catégories

class CategoryCreate(BaseModel):
    name: Optional[str] = None
    color: Optional[str] = None

class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    color: Optional[str] = None

class CategoryResponse(BaseModel):
    id: int
    user_id: int
    name: str
    color: Optional[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
