from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ObjectiveBase(BaseModel):
    title: str
    description: Optional[str] = None
    child_id: Optional[int] = None  # None = every child


class ObjectiveCreate(ObjectiveBase):
    """Schema for creating an objective.

    `created_at` is normally left to the database; it can be supplied when
    importing objectives that already existed, since it decides the first
    week they count.
    """
    created_at: Optional[datetime] = None


class ObjectiveRead(ObjectiveBase):
    id: int
    created_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
