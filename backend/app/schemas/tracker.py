from datetime import date

from pydantic import BaseModel


class ObjectiveWeekRow(BaseModel):
    objective_id: int
    title: str
    days: list[bool]  # Mon..Sun
    completed_days: int
    is_perfect: bool
    # False for objectives only shown because of show_all
    counts_toward_score: bool = True


class WeekView(BaseModel):
    child_id: int
    week_start: date
    week_end: date  # Sunday
    is_past_week: bool
    show_all: bool
    objectives: list[ObjectiveWeekRow]
    score: int
    is_perfect_week: bool
    perfect_count: int


class WeekScorePoint(BaseModel):
    week_start: date
    score: int
    is_perfect_week: bool
    perfect_count: int
    active_count: int
