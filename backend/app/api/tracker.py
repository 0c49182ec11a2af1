from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.api.children import get_child_or_404
from app.core.config import settings
from app.core.constants import PERFECT_DAYS
from app.core.scoring import active_objectives, completed_days_by_objective, score_week
from app.core.time_utils import local_today, monday_of, mondays_between, week_days, week_range
from app.db import get_db
from app.models.daily_log import DailyLog
from app.models.objective import Objective
from app.models.objective_exclusion import ObjectiveExclusion
from app.schemas.tracker import ObjectiveWeekRow, WeekScorePoint, WeekView

router = APIRouter(prefix="/children/{child_id}/weeks", tags=["tracker"])

# Guard against accidental multi-decade summaries
MAX_SUMMARY_WEEKS = 260


def child_objectives(db: Session, child_id: int) -> list[Objective]:
    """Every objective that can apply to the child, retired ones included.

    Retired objectives still count for the weeks before they were deleted,
    so the scoring rules need them.
    """
    return (
        db.query(Objective)
        .filter(or_(Objective.child_id.is_(None), Objective.child_id == child_id))
        .order_by(Objective.created_at, Objective.id)
        .all()
    )


def child_logs(db: Session, child_id: int, start: date | None = None, end: date | None = None):
    query = db.query(DailyLog).filter(DailyLog.child_id == child_id)
    if start is not None:
        query = query.filter(DailyLog.date >= start)
    if end is not None:
        query = query.filter(DailyLog.date < end)
    return query.all()


def child_exclusions(db: Session, child_id: int, start: date | None = None, end: date | None = None):
    query = db.query(ObjectiveExclusion).filter(ObjectiveExclusion.child_id == child_id)
    if start is not None:
        query = query.filter(ObjectiveExclusion.week_start >= start)
    if end is not None:
        query = query.filter(ObjectiveExclusion.week_start < end)
    return query.all()


@router.get("/", response_model=list[WeekScorePoint])
def list_week_scores(
    child_id: int,
    start_date: date = Query(...),
    end_date: date = Query(...),
    db: Session = Depends(get_db),
):
    """Score of every week overlapping [start_date, end_date], oldest first."""
    get_child_or_404(db, child_id)
    if end_date < start_date:
        raise HTTPException(status_code=422, detail="end_date must be >= start_date")
    mondays = mondays_between(start_date, end_date)
    if len(mondays) > MAX_SUMMARY_WEEKS:
        raise HTTPException(
            status_code=422, detail=f"range covers more than {MAX_SUMMARY_WEEKS} weeks"
        )

    range_start, range_end = mondays[0], week_range(mondays[-1])[1]
    objectives = child_objectives(db, child_id)
    logs = child_logs(db, child_id, range_start, range_end)
    exclusions = child_exclusions(db, child_id, range_start, range_end)

    points: list[WeekScorePoint] = []
    for wk in mondays:
        active = active_objectives(
            wk, child_id, objectives, exclusions, show_all=False, tz_name=settings.timezone
        )
        result = score_week(active, logs, wk)
        points.append(
            WeekScorePoint(
                week_start=wk,
                score=result.score,
                is_perfect_week=result.is_perfect_week,
                perfect_count=result.perfect_count,
                active_count=len(active),
            )
        )
    return points


@router.get("/{week_start}", response_model=WeekView)
def get_week(
    child_id: int,
    week_start: date,
    show_all: bool = Query(False),
    db: Session = Depends(get_db),
):
    """
    Weekly grid for one child: active objectives, their Mon..Sun cells and
    the week's score. Any day of the week may be passed; it is normalized to
    its Monday.

    `show_all` also lists objectives that have not reached their first
    counted week yet. Those rows never change the score.
    """
    get_child_or_404(db, child_id)
    wk = monday_of(week_start)
    start, end = week_range(wk)
    tz = settings.timezone

    objectives = child_objectives(db, child_id)
    logs = child_logs(db, child_id, start, end)
    exclusions = child_exclusions(db, child_id, start, end)

    scored = active_objectives(wk, child_id, objectives, exclusions, show_all=False, tz_name=tz)
    shown = (
        active_objectives(wk, child_id, objectives, exclusions, show_all=True, tz_name=tz)
        if show_all
        else scored
    )
    result = score_week(scored, logs, wk)

    scored_ids = {obj.id for obj in scored}
    counts = completed_days_by_objective(logs, wk)
    done = {(log.objective_id, log.date) for log in logs if log.is_completed}
    days = week_days(wk)

    rows = []
    for obj in shown:
        n = counts.get(obj.id, 0)
        rows.append(
            ObjectiveWeekRow(
                objective_id=obj.id,
                title=obj.title,
                days=[(obj.id, d) in done for d in days],
                completed_days=n,
                is_perfect=n >= PERFECT_DAYS,
                counts_toward_score=obj.id in scored_ids,
            )
        )

    return WeekView(
        child_id=child_id,
        week_start=wk,
        week_end=days[-1],
        is_past_week=wk < monday_of(local_today(tz)),
        show_all=show_all,
        objectives=rows,
        score=result.score,
        is_perfect_week=result.is_perfect_week,
        perfect_count=result.perfect_count,
    )
