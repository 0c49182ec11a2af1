from datetime import date

from pydantic import BaseModel, ConfigDict


class DailyLogRead(BaseModel):
    id: int
    objective_id: int
    child_id: int
    date: date
    is_completed: bool

    model_config = ConfigDict(from_attributes=True)


class DailyLogToggle(BaseModel):
    objective_id: int
    date: date


class DailyLogToggleResult(BaseModel):
    objective_id: int
    date: date
    is_completed: bool
