import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.children import get_child_or_404
from app.api.objectives import ensure_assigned_to, get_objective_or_404
from app.core.time_utils import monday_of
from app.db import get_db
from app.models.objective_exclusion import ObjectiveExclusion
from app.schemas.exclusion import ExclusionCreate, ExclusionRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/children/{child_id}/exclusions", tags=["exclusions"])


@router.get("/", response_model=list[ExclusionRead])
def list_exclusions(
    child_id: int,
    week_start: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    get_child_or_404(db, child_id)
    query = db.query(ObjectiveExclusion).filter(ObjectiveExclusion.child_id == child_id)
    if week_start is not None:
        query = query.filter(ObjectiveExclusion.week_start == monday_of(week_start))
    return query.order_by(ObjectiveExclusion.week_start, ObjectiveExclusion.id).all()


@router.post("/", response_model=ExclusionRead)
def create_exclusion(child_id: int, payload: ExclusionCreate, db: Session = Depends(get_db)):
    """Hide an objective from this child for a single week."""
    get_child_or_404(db, child_id)
    obj = get_objective_or_404(db, payload.objective_id)
    ensure_assigned_to(obj, child_id)
    wk = monday_of(payload.week_start)

    row = ObjectiveExclusion(
        objective_id=payload.objective_id,
        child_id=child_id,
        week_start=wk,
    )
    db.add(row)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(
            "Objective %s already excluded for child %s week %s",
            payload.objective_id,
            child_id,
            wk.isoformat(),
        )
        raise HTTPException(status_code=409, detail="Objective already excluded for this week")
    db.refresh(row)
    logger.info(
        "Excluded objective %s for child %s week %s",
        payload.objective_id,
        child_id,
        wk.isoformat(),
    )
    return row


@router.delete("/{exclusion_id}", status_code=204)
def delete_exclusion(child_id: int, exclusion_id: int, db: Session = Depends(get_db)):
    row = (
        db.query(ObjectiveExclusion)
        .filter(ObjectiveExclusion.id == exclusion_id)
        .filter(ObjectiveExclusion.child_id == child_id)
        .first()
    )
    if not row:
        raise HTTPException(status_code=404, detail="Exclusion not found")
    db.delete(row)
    db.commit()
    logger.info("Removed exclusion %s for child %s", exclusion_id, child_id)
