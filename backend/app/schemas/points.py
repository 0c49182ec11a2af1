from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class PointTransactionCreate(BaseModel):
    amount: int  # negative to spend points
    description: Optional[str] = None


class PointTransactionRead(PointTransactionCreate):
    id: int
    child_id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PointBalance(BaseModel):
    child_id: int
    earned: int              # sum of weekly scores
    transactions_total: int  # sum of signed adjustments
    balance: int
