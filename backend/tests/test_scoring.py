from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

from app.core.scoring import (
    active_objectives,
    completed_days_by_objective,
    effective_start,
    point_balance,
    score_week,
    weekly_scores,
)

CHILD = 1
OTHER_CHILD = 2
WEEK1 = date(2024, 1, 1)   # Monday
WEEK2 = date(2024, 1, 8)
WEEK3 = date(2024, 1, 15)


def objective(id, child_id=None, created_at=WEEK1, deleted_at=None, title=None):
    return SimpleNamespace(
        id=id,
        title=title or f"objective {id}",
        child_id=child_id,
        created_at=created_at,
        deleted_at=deleted_at,
    )


def log(objective_id, day, is_completed=True):
    return SimpleNamespace(objective_id=objective_id, child_id=CHILD, date=day, is_completed=is_completed)


def exclusion(objective_id, week_start, child_id=CHILD):
    return SimpleNamespace(objective_id=objective_id, child_id=child_id, week_start=week_start)


def done_days(objective_id, monday, days=7):
    return [log(objective_id, monday + timedelta(days=i)) for i in range(days)]


def ids(objs):
    return [o.id for o in objs]


# --- activation ---------------------------------------------------------------

def test_ownership_gate():
    objs = [objective(1), objective(2, child_id=CHILD), objective(3, child_id=OTHER_CHILD)]
    assert ids(active_objectives(WEEK1, CHILD, objs)) == [1, 2]
    assert ids(active_objectives(WEEK1, OTHER_CHILD, objs)) == [1, 3]


def test_created_on_monday_counts_that_week():
    objs = [objective(1, created_at=date(2024, 1, 1))]
    assert ids(active_objectives(WEEK1, CHILD, objs)) == [1]


def test_created_midweek_starts_next_monday():
    objs = [objective(1, created_at=date(2024, 1, 2))]
    assert active_objectives(WEEK1, CHILD, objs) == []
    assert ids(active_objectives(WEEK2, CHILD, objs)) == [1]


def test_created_on_sunday_starts_next_monday():
    objs = [objective(1, created_at=date(2024, 1, 7))]
    assert effective_start(objs[0]) == WEEK2
    assert active_objectives(WEEK1, CHILD, objs) == []
    assert ids(active_objectives(WEEK2, CHILD, objs)) == [1]


def test_objective_not_active_before_creation_week():
    objs = [objective(1, created_at=date(2024, 1, 8))]
    assert active_objectives(WEEK1, CHILD, objs) == []


def test_objective_without_created_at_is_always_started():
    objs = [objective(1, created_at=None)]
    assert ids(active_objectives(date(2020, 6, 1), CHILD, objs)) == [1]


def test_smart_start_uses_timezone_for_timestamps():
    # 23:30 UTC on Monday is already Tuesday in Paris
    obj = objective(1, created_at=datetime(2024, 1, 1, 23, 30, tzinfo=timezone.utc))
    assert ids(active_objectives(WEEK1, CHILD, [obj], tz_name="UTC")) == [1]
    assert active_objectives(WEEK1, CHILD, [obj], tz_name="Europe/Paris") == []


def test_show_all_skips_smart_start_only():
    objs = [
        objective(1, created_at=date(2024, 1, 2)),
        objective(2, deleted_at=date(2023, 12, 1)),
    ]
    assert ids(active_objectives(WEEK1, CHILD, objs, show_all=True)) == [1]


def test_show_all_is_a_superset():
    objs = [
        objective(1),
        objective(2, created_at=date(2024, 1, 3)),
        objective(3, child_id=CHILD, created_at=date(2024, 1, 10)),
        objective(4, deleted_at=date(2024, 1, 9)),
        objective(5, child_id=OTHER_CHILD),
    ]
    excl = [exclusion(1, WEEK2)]
    for wk in (WEEK1, WEEK2, WEEK3):
        hidden = set(ids(active_objectives(wk, CHILD, objs, excl, show_all=False)))
        shown = set(ids(active_objectives(wk, CHILD, objs, excl, show_all=True)))
        assert hidden <= shown


def test_soft_delete_midweek_keeps_that_week():
    objs = [objective(1, deleted_at=date(2024, 1, 10))]  # Wednesday
    assert ids(active_objectives(WEEK2, CHILD, objs)) == [1]
    assert active_objectives(WEEK3, CHILD, objs) == []
    assert ids(active_objectives(WEEK1, CHILD, objs)) == [1]


def test_soft_delete_monday_afternoon_keeps_that_week():
    objs = [objective(1, deleted_at=datetime(2024, 1, 8, 15, 0, tzinfo=timezone.utc))]
    assert ids(active_objectives(WEEK2, CHILD, objs, tz_name="UTC")) == [1]
    assert active_objectives(WEEK3, CHILD, objs, tz_name="UTC") == []


def test_soft_delete_at_monday_midnight_retires_that_week():
    objs = [objective(1, deleted_at=datetime(2024, 1, 8, 0, 0, tzinfo=timezone.utc))]
    assert active_objectives(WEEK2, CHILD, objs, tz_name="UTC") == []
    assert ids(active_objectives(WEEK1, CHILD, objs, tz_name="UTC")) == [1]


def test_soft_delete_compares_against_local_midnight():
    # 23:30 UTC on Sunday is 00:30 Monday in Paris
    objs = [objective(1, deleted_at=datetime(2024, 1, 7, 23, 30, tzinfo=timezone.utc))]
    assert active_objectives(WEEK2, CHILD, objs, tz_name="UTC") == []
    assert ids(active_objectives(WEEK2, CHILD, objs, tz_name="Europe/Paris")) == [1]


def test_soft_delete_plain_date_counts_as_midnight():
    objs = [objective(1, deleted_at=WEEK2)]
    assert active_objectives(WEEK2, CHILD, objs) == []
    assert ids(active_objectives(WEEK1, CHILD, objs)) == [1]


def test_exclusion_hides_a_single_week():
    objs = [objective(1), objective(2)]
    excl = [exclusion(1, WEEK2)]
    assert ids(active_objectives(WEEK1, CHILD, objs, excl)) == [1, 2]
    assert ids(active_objectives(WEEK2, CHILD, objs, excl)) == [2]
    assert ids(active_objectives(WEEK3, CHILD, objs, excl)) == [1, 2]


def test_exclusion_is_per_child():
    objs = [objective(1)]
    excl = [exclusion(1, WEEK1, child_id=OTHER_CHILD)]
    assert ids(active_objectives(WEEK1, CHILD, objs, excl)) == [1]
    assert active_objectives(WEEK1, OTHER_CHILD, objs, excl) == []


def test_exclusion_needs_exact_monday():
    objs = [objective(1)]
    excl = [exclusion(1, date(2024, 1, 9))]  # a Tuesday never matches
    assert ids(active_objectives(WEEK2, CHILD, objs, excl)) == [1]


def test_activation_keeps_order_and_drops_duplicates():
    a, b = objective(7), objective(3)
    assert ids(active_objectives(WEEK1, CHILD, [a, b, a])) == [7, 3]


def test_activation_accepts_any_day_of_the_week():
    objs = [objective(1, created_at=date(2024, 1, 2))]
    assert ids(active_objectives(date(2024, 1, 12), CHILD, objs)) == [1]


# --- weekly score -------------------------------------------------------------

def test_perfect_week_doubles_score():
    active = [objective(1), objective(2)]
    logs = done_days(1, WEEK1) + done_days(2, WEEK1)
    result = score_week(active, logs, WEEK1)
    assert result.is_perfect_week is True
    assert result.perfect_count == 2
    assert result.score == 4


def test_one_missed_day_loses_bonus():
    active = [objective(1), objective(2)]
    logs = done_days(1, WEEK1) + done_days(2, WEEK1, days=6)
    result = score_week(active, logs, WEEK1)
    assert result.is_perfect_week is False
    assert result.perfect_count == 1
    assert result.score == 1
    assert result.completed_days == {1: 7, 2: 6}


def test_no_active_objectives_scores_zero():
    result = score_week([], done_days(1, WEEK1), WEEK1)
    assert result.score == 0
    assert result.is_perfect_week is False
    assert result.perfect_count == 0


def test_no_logs_scores_zero():
    result = score_week([objective(1)], [], WEEK1)
    assert result.score == 0
    assert result.completed_days == {1: 0}


def test_uncompleted_rows_do_not_count():
    logs = done_days(1, WEEK1, days=6) + [log(1, WEEK1 + timedelta(days=6), is_completed=False)]
    assert score_week([objective(1)], logs, WEEK1).score == 0


def test_logs_outside_the_week_are_ignored():
    logs = done_days(1, WEEK1, days=6) + [log(1, WEEK2)]
    assert completed_days_by_objective(logs, WEEK1) == {1: 6}
    assert score_week([objective(1)], logs, WEEK1).score == 0


def test_duplicate_rows_for_a_day_count_once():
    logs = done_days(1, WEEK1, days=6) + [log(1, WEEK1)]
    assert completed_days_by_objective(logs, WEEK1) == {1: 6}


def test_logs_for_inactive_objectives_are_ignored():
    logs = done_days(1, WEEK1) + done_days(99, WEEK1)
    result = score_week([objective(1)], logs, WEEK1)
    assert result.score == 2
    assert result.perfect_count == 1


# --- balance ------------------------------------------------------------------

def test_balance_two_perfect_weeks_minus_spending():
    objs = [objective(1)]
    logs = done_days(1, WEEK1) + done_days(1, WEEK2)
    txns = [SimpleNamespace(amount=-3)]
    assert point_balance(CHILD, objs, logs, transactions=txns) == 1


def test_balance_can_go_negative():
    txns = [SimpleNamespace(amount=5), SimpleNamespace(amount=-12)]
    assert point_balance(CHILD, [objective(1)], [], transactions=txns) == -7


def test_balance_uses_smart_start_even_for_past_weeks():
    # Created on a Tuesday: its first (partial) week never scores
    objs = [objective(1, created_at=date(2024, 1, 2))]
    logs = done_days(1, WEEK1) + done_days(1, WEEK2)
    assert point_balance(CHILD, objs, logs) == 2


def test_weekly_scores_skip_weeks_without_active_objectives():
    objs = [objective(1, deleted_at=WEEK2)]
    logs = done_days(1, WEEK1) + done_days(1, WEEK2)
    scores = weekly_scores(CHILD, objs, logs)
    assert list(scores) == [WEEK1]
    assert scores[WEEK1].score == 2


def test_weekly_scores_apply_exclusions():
    objs = [objective(1), objective(2)]
    logs = done_days(1, WEEK1) + done_days(1, WEEK2) + done_days(2, WEEK2)
    excl = [exclusion(2, WEEK1)]
    scores = weekly_scores(CHILD, objs, logs, excl)
    # week 1: only objective 1 active, perfect -> 2; week 2: both perfect -> 4
    assert scores[WEEK1].score == 2
    assert scores[WEEK2].score == 4
    assert point_balance(CHILD, objs, logs, excl) == 6


def test_scoring_does_not_mutate_inputs():
    objs = [objective(1), objective(2, created_at=date(2024, 1, 2))]
    logs = done_days(1, WEEK1)
    before = [vars(o).copy() for o in objs], [vars(entry).copy() for entry in logs]
    point_balance(CHILD, objs, logs)
    active_objectives(WEEK1, CHILD, objs, show_all=True)
    assert before == ([vars(o) for o in objs], [vars(entry) for entry in logs])
