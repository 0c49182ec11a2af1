"""Scoring constants.

Kept together so the weekly rules can be read (and adjusted) in one place.
"""

# A week runs Monday..Sunday
DAYS_PER_WEEK = 7

# An objective is "perfect" once every day of its week is logged complete
PERFECT_DAYS = DAYS_PER_WEEK

# Points for each perfect objective in a week
POINTS_PER_PERFECT_OBJECTIVE = 1

# Replaces the per-objective points when every active objective is perfect
PERFECT_WEEK_MULTIPLIER = 2
