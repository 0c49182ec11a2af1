"""Weekly activation and scoring rules.

Pure functions over already-loaded records. Nothing here touches the
database: routes load the rows, hand them over, and render what comes back.

Records are read by attribute, so ORM rows, pydantic models and plain
namespaces all work:

  objective   id, child_id, created_at, deleted_at
  log         objective_id, date, is_completed
  exclusion   objective_id, child_id, week_start
  transaction amount

`created_at` / `deleted_at` may be dates or datetimes. `created_at` is
reduced to a calendar day in `tz_name` (see time_utils.calendar_day);
`deleted_at` is compared with 00:00 of the week's Monday in `tz_name`.
"""
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Iterable, Sequence

from app.core.constants import (
    DAYS_PER_WEEK,
    PERFECT_DAYS,
    PERFECT_WEEK_MULTIPLIER,
    POINTS_PER_PERFECT_OBJECTIVE,
)
from app.core.time_utils import (
    calendar_day,
    monday_of,
    start_of_day,
    to_local_datetime,
    week_range,
)


@dataclass(frozen=True)
class WeekScore:
    score: int = 0
    is_perfect_week: bool = False
    perfect_count: int = 0
    # objective id -> distinct completed days in the week
    completed_days: dict[Any, int] = field(default_factory=dict)


# --- activation gates -------------------------------------------------------

def is_owned_by(objective, child_id) -> bool:
    """Global objectives (child_id None) belong to every child."""
    return objective.child_id is None or objective.child_id == child_id


def is_retired(objective, week_start: date, tz_name: str | None = None) -> bool:
    """Soft-deleted at or before 00:00 on the Monday that starts this week.

    A deletion later that Monday, or any other day, leaves the week counting.
    A plain date is read as midnight of that day.
    """
    deleted = objective.deleted_at
    if deleted is None:
        return False
    if isinstance(deleted, datetime):
        return to_local_datetime(deleted, tz_name) <= start_of_day(week_start, tz_name)
    return deleted <= week_start


def is_excluded(objective, child_id, week_start: date, exclusions: Iterable) -> bool:
    """An exclusion hides one objective for one child for one exact Monday."""
    return any(
        ex.objective_id == objective.id
        and ex.child_id == child_id
        and ex.week_start == week_start
        for ex in exclusions
    )


def effective_start(objective, tz_name: str | None = None) -> date | None:
    """First Monday an objective counts ("smart start").

    Created on a Monday -> that week. Created Tue..Sun -> the following week,
    so a partial first week never counts against the child.
    """
    created = calendar_day(objective.created_at, tz_name)
    if created is None:
        return None
    start = monday_of(created)
    if created.weekday() != 0:
        start += timedelta(days=DAYS_PER_WEEK)
    return start


def has_started(objective, week_start: date, tz_name: str | None = None) -> bool:
    start = effective_start(objective, tz_name)
    return start is None or week_start >= start


def active_objectives(
    week_start: date,
    child_id,
    objectives: Sequence,
    exclusions: Sequence = (),
    show_all: bool = False,
    tz_name: str | None = None,
) -> list:
    """Objectives that apply to `child_id` during the week of `week_start`.

    `show_all` skips the smart-start gate only; it is a viewing aid for past
    weeks and must not be used when accruing points.
    Input order is kept and repeated objectives are dropped.
    """
    week_start = monday_of(week_start)
    seen = set()
    out = []
    for obj in objectives:
        if obj.id in seen:
            continue
        if not is_owned_by(obj, child_id):
            continue
        if is_retired(obj, week_start, tz_name):
            continue
        if is_excluded(obj, child_id, week_start, exclusions):
            continue
        if not show_all and not has_started(obj, week_start, tz_name):
            continue
        seen.add(obj.id)
        out.append(obj)
    return out


# --- scoring ----------------------------------------------------------------

def completed_days_by_objective(logs: Iterable, week_start: date) -> dict[Any, int]:
    """Distinct completed days per objective inside the week window."""
    start, end = week_range(week_start)
    days = defaultdict(set)
    for log in logs:
        if log.is_completed and start <= log.date < end:
            days[log.objective_id].add(log.date)
    return {obj_id: len(ds) for obj_id, ds in days.items()}


def score_week(active: Sequence, logs: Iterable, week_start: date) -> WeekScore:
    """Score one week given its active objectives and the child's logs.

    One point per perfect objective (7/7 days). When every active objective
    is perfect the total becomes perfect_count * 2 instead.
    """
    if not active:
        return WeekScore()

    counts = completed_days_by_objective(logs, monday_of(week_start))
    completed = {obj.id: counts.get(obj.id, 0) for obj in active}
    perfect = sum(1 for n in completed.values() if n >= PERFECT_DAYS)

    is_perfect_week = perfect == len(active)
    if is_perfect_week:
        score = perfect * PERFECT_WEEK_MULTIPLIER
    else:
        score = perfect * POINTS_PER_PERFECT_OBJECTIVE
    return WeekScore(
        score=score,
        is_perfect_week=is_perfect_week,
        perfect_count=perfect,
        completed_days=completed,
    )


def weekly_scores(
    child_id,
    objectives: Sequence,
    logs: Sequence,
    exclusions: Sequence = (),
    tz_name: str | None = None,
) -> dict[date, WeekScore]:
    """Score every week that has at least one log, keyed by Monday."""
    by_week = defaultdict(list)
    for log in logs:
        by_week[monday_of(log.date)].append(log)

    out = {}
    for monday in sorted(by_week):
        active = active_objectives(
            monday, child_id, objectives, exclusions, show_all=False, tz_name=tz_name
        )
        if not active:
            continue
        out[monday] = score_week(active, by_week[monday], monday)
    return out


def point_balance(
    child_id,
    objectives: Sequence,
    logs: Sequence,
    exclusions: Sequence = (),
    transactions: Sequence = (),
    tz_name: str | None = None,
) -> int:
    """Lifetime balance: every week's score plus every signed transaction.

    Spending is never checked against what was earned, so the result can be
    negative.
    """
    earned = sum(
        ws.score
        for ws in weekly_scores(child_id, objectives, logs, exclusions, tz_name).values()
    )
    return earned + sum(t.amount for t in transactions)
