from sqlalchemy import Column, Date, ForeignKey, Integer, UniqueConstraint
from app.db import Base


class ObjectiveExclusion(Base):
    __tablename__ = "objective_exclusions"

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

    # Monday of the hidden week
    week_start = Column(Date, nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "objective_id", "child_id", "week_start", name="uq_objective_exclusions_week"
        ),
    )
