import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.api.children import get_child_or_404
from app.db import get_db
from app.models.daily_log import DailyLog
from app.models.objective import Objective
from app.models.objective_exclusion import ObjectiveExclusion
from app.schemas.objective import ObjectiveCreate, ObjectiveRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/objectives", tags=["objectives"])


def get_objective_or_404(db: Session, objective_id: int) -> Objective:
    obj = db.query(Objective).filter(Objective.id == objective_id).first()
    if not obj:
        raise HTTPException(status_code=404, detail="Objective not found")
    return obj


def ensure_assigned_to(obj: Objective, child_id: int) -> None:
    """Reject objectives that belong to a different child."""
    if obj.child_id is not None and obj.child_id != child_id:
        logger.warning(
            "Rejected objective %s for child %s: assigned to child %s",
            obj.id,
            child_id,
            obj.child_id,
        )
        raise HTTPException(status_code=422, detail="Objective is assigned to another child")


def _as_utc(dt: datetime) -> datetime:
    # Naive timestamps are taken as UTC, same as when they are read back
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


@router.get("/", response_model=list[ObjectiveRead])
def list_objectives(
    child_id: Optional[int] = Query(None),
    include_deleted: bool = Query(False),
    db: Session = Depends(get_db),
):
    """
    List objectives in creation order.

    With `child_id`, only that child's objectives plus the ones shared by
    every child are returned.
    """
    query = db.query(Objective)
    if child_id is not None:
        query = query.filter(or_(Objective.child_id.is_(None), Objective.child_id == child_id))
    if not include_deleted:
        query = query.filter(Objective.deleted_at.is_(None))
    return query.order_by(Objective.created_at, Objective.id).all()


@router.post("/", response_model=ObjectiveRead)
def create_objective(payload: ObjectiveCreate, db: Session = Depends(get_db)):
    title = payload.title.strip()
    if not title:
        logger.warning("Rejected objective with blank title")
        raise HTTPException(status_code=422, detail="title must not be empty")
    if payload.child_id is not None:
        get_child_or_404(db, payload.child_id)

    obj = Objective(
        title=title,
        description=payload.description,
        child_id=payload.child_id,
    )
    if payload.created_at is not None:
        obj.created_at = _as_utc(payload.created_at)

    db.add(obj)
    db.commit()
    db.refresh(obj)
    logger.info(
        "Created objective %s %r for %s",
        obj.id,
        obj.title,
        f"child {obj.child_id}" if obj.child_id is not None else "every child",
    )
    return obj


@router.get("/{objective_id}", response_model=ObjectiveRead)
def get_objective(objective_id: int, db: Session = Depends(get_db)):
    return get_objective_or_404(db, objective_id)


@router.delete("/{objective_id}", status_code=204)
def delete_objective(
    objective_id: int,
    purge: bool = Query(False),
    db: Session = Depends(get_db),
):
    """Retire an objective.

    By default this is a soft delete: past weeks keep scoring it. With
    `purge=true` the objective and its whole history are removed.
    """
    obj = get_objective_or_404(db, objective_id)

    if purge:
        db.query(DailyLog).filter(DailyLog.objective_id == objective_id).delete(
            synchronize_session=False
        )
        db.query(ObjectiveExclusion).filter(
            ObjectiveExclusion.objective_id == objective_id
        ).delete(synchronize_session=False)
        db.delete(obj)
        db.commit()
        logger.info("Purged objective %s", objective_id)
        return

    if obj.deleted_at is None:
        obj.deleted_at = datetime.now(timezone.utc)
        db.commit()
        logger.info("Soft-deleted objective %s", objective_id)
