from datetime import date

from pydantic import BaseModel, ConfigDict


class ExclusionCreate(BaseModel):
    objective_id: int
    week_start: date  # any day of the week; stored as its Monday


class ExclusionRead(BaseModel):
    id: int
    objective_id: int
    child_id: int
    week_start: date

    model_config = ConfigDict(from_attributes=True)
