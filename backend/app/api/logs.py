import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.children import get_child_or_404
from app.api.objectives import ensure_assigned_to, get_objective_or_404
from app.db import get_db
from app.models.daily_log import DailyLog
from app.schemas.daily_log import DailyLogRead, DailyLogToggle, DailyLogToggleResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/children/{child_id}/logs", tags=["logs"])


def find_log(db: Session, child_id: int, objective_id: int, day: date) -> DailyLog | None:
    return (
        db.query(DailyLog)
        .filter(DailyLog.child_id == child_id)
        .filter(DailyLog.objective_id == objective_id)
        .filter(DailyLog.date == day)
        .first()
    )


@router.get("/", response_model=list[DailyLogRead])
def list_logs(
    child_id: int,
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    """
    List a child's daily logs, optionally within [start_date, end_date).

    The weekly grid calls it with a Monday and the next Monday:
      GET /children/1/logs?start_date=2025-01-06&end_date=2025-01-13
    """
    get_child_or_404(db, child_id)
    query = db.query(DailyLog).filter(DailyLog.child_id == child_id)
    if start_date is not None:
        query = query.filter(DailyLog.date >= start_date)
    if end_date is not None:
        query = query.filter(DailyLog.date < end_date)
    return query.order_by(DailyLog.date, DailyLog.objective_id).all()


@router.post("/toggle", response_model=DailyLogToggleResult)
def toggle_log(child_id: int, payload: DailyLogToggle, db: Session = Depends(get_db)):
    """Flip one cell of the weekly grid.

    An existing row for that objective and day is removed (not done);
    otherwise a completed row is inserted.
    """
    get_child_or_404(db, child_id)
    obj = get_objective_or_404(db, payload.objective_id)
    ensure_assigned_to(obj, child_id)

    existing = find_log(db, child_id, payload.objective_id, payload.date)
    if existing:
        db.delete(existing)
        is_completed = False
    else:
        db.add(
            DailyLog(
                child_id=child_id,
                objective_id=payload.objective_id,
                date=payload.date,
                is_completed=True,
            )
        )
        is_completed = True
    try:
        db.commit()
    except IntegrityError:
        # Another toggle for the same cell committed first
        db.rollback()
        logger.warning(
            "Conflicting toggle for child %s objective %s on %s",
            child_id,
            payload.objective_id,
            payload.date.isoformat(),
        )
        raise HTTPException(status_code=409, detail="Log changed concurrently, reload the week")

    logger.info(
        "Child %s objective %s on %s -> %s",
        child_id,
        payload.objective_id,
        payload.date.isoformat(),
        "done" if is_completed else "not done",
    )
    return DailyLogToggleResult(
        objective_id=payload.objective_id,
        date=payload.date,
        is_completed=is_completed,
    )
