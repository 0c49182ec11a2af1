import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.db import get_db
from app.models.child import Child
from app.models.daily_log import DailyLog
from app.models.objective import Objective
from app.models.objective_exclusion import ObjectiveExclusion
from app.models.point_transaction import PointTransaction
from app.schemas.child import ChildCreate, ChildRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/children", tags=["children"])


def get_child_or_404(db: Session, child_id: int) -> Child:
    child = db.query(Child).filter(Child.id == child_id).first()
    if not child:
        raise HTTPException(status_code=404, detail="Child not found")
    return child


@router.get("/", response_model=list[ChildRead])
def list_children(db: Session = Depends(get_db)):
    return db.query(Child).order_by(Child.created_at, Child.id).all()


@router.post("/", response_model=ChildRead)
def create_child(payload: ChildCreate, db: Session = Depends(get_db)):
    name = payload.name.strip()
    if not name:
        logger.warning("Rejected child with blank name")
        raise HTTPException(status_code=422, detail="name must not be empty")

    child = Child(name=name, avatar_url=payload.avatar_url)
    db.add(child)
    db.commit()
    db.refresh(child)
    logger.info("Created child %s (%s)", child.id, child.name)
    return child


@router.get("/{child_id}", response_model=ChildRead)
def get_child(child_id: int, db: Session = Depends(get_db)):
    return get_child_or_404(db, child_id)


@router.delete("/{child_id}", status_code=204)
def delete_child(child_id: int, db: Session = Depends(get_db)):
    """Delete a child along with its whole history.

    Objectives assigned to every child are kept; the child's own ones go.
    """
    child = get_child_or_404(db, child_id)

    own_objective_ids = [
        row.id for row in db.query(Objective.id).filter(Objective.child_id == child_id)
    ]
    db.query(DailyLog).filter(DailyLog.child_id == child_id).delete(synchronize_session=False)
    db.query(ObjectiveExclusion).filter(
        ObjectiveExclusion.child_id == child_id
    ).delete(synchronize_session=False)
    db.query(PointTransaction).filter(
        PointTransaction.child_id == child_id
    ).delete(synchronize_session=False)
    if own_objective_ids:
        db.query(DailyLog).filter(DailyLog.objective_id.in_(own_objective_ids)).delete(
            synchronize_session=False
        )
        db.query(ObjectiveExclusion).filter(
            ObjectiveExclusion.objective_id.in_(own_objective_ids)
        ).delete(synchronize_session=False)
        db.query(Objective).filter(Objective.id.in_(own_objective_ids)).delete(
            synchronize_session=False
        )
    db.delete(child)
    db.commit()
    logger.info("Deleted child %s and %d objectives", child_id, len(own_objective_ids))
