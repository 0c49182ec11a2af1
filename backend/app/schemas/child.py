from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ChildCreate(BaseModel):
    name: str
    avatar_url: Optional[str] = None


class ChildRead(ChildCreate):
    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
