import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.children import get_child_or_404
from app.api.tracker import child_exclusions, child_logs, child_objectives
from app.core.config import settings
from app.core.scoring import point_balance
from app.db import get_db
from app.models.point_transaction import PointTransaction
from app.schemas.points import PointBalance, PointTransactionCreate, PointTransactionRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/children/{child_id}/points", tags=["points"])


@router.get("/transactions", response_model=list[PointTransactionRead])
def list_transactions(child_id: int, db: Session = Depends(get_db)):
    get_child_or_404(db, child_id)
    return (
        db.query(PointTransaction)
        .filter(PointTransaction.child_id == child_id)
        .order_by(PointTransaction.created_at.desc(), PointTransaction.id.desc())
        .all()
    )


@router.post("/transactions", response_model=PointTransactionRead)
def create_transaction(
    child_id: int,
    payload: PointTransactionCreate,
    db: Session = Depends(get_db),
):
    """Record a manual adjustment. Spending is a negative amount.

    Spending more than the current balance is allowed.
    """
    get_child_or_404(db, child_id)
    if payload.amount == 0:
        logger.warning("Rejected zero-point transaction for child %s", child_id)
        raise HTTPException(status_code=422, detail="amount must not be 0")

    txn = PointTransaction(
        child_id=child_id,
        amount=payload.amount,
        description=(payload.description or "").strip() or None,
    )
    db.add(txn)
    db.commit()
    db.refresh(txn)
    logger.info("Child %s points %+d (%s)", child_id, txn.amount, txn.description or "-")
    return txn


@router.get("/balance", response_model=PointBalance)
def get_balance(child_id: int, db: Session = Depends(get_db)):
    """Lifetime balance: all weekly scores plus all transactions."""
    get_child_or_404(db, child_id)
    transactions = (
        db.query(PointTransaction).filter(PointTransaction.child_id == child_id).all()
    )
    balance = point_balance(
        child_id,
        child_objectives(db, child_id),
        child_logs(db, child_id),
        child_exclusions(db, child_id),
        transactions,
        tz_name=settings.timezone,
    )
    transactions_total = sum(t.amount for t in transactions)
    return PointBalance(
        child_id=child_id,
        earned=balance - transactions_total,
        transactions_total=transactions_total,
        balance=balance,
    )
