from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.sql import expression
from app.db import Base


class DailyLog(Base):
    __tablename__ = "daily_logs"

    id = Column(Integer, primary_key=True, index=True)

    objective_id = Column(
        Integer,
        ForeignKey("objectives.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    child_id = Column(
        Integer,
        ForeignKey("children.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Local calendar day, no time component
    date = Column(Date, nullable=False)

    is_completed = Column(
        Boolean,
        nullable=False,
        default=True,
        server_default=expression.true(),
    )

    __table_args__ = (
        UniqueConstraint("objective_id", "child_id", "date", name="uq_daily_logs_objective_child_date"),
    )
