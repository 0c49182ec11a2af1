#!/usr/bin/env python3
"""
Seed a demo family into the Objectives Tracker API.

Creates two children, three objectives (two shared, one per child) back-dated
to a Monday so they count from the first seeded week, then fills N past weeks
of daily logs:

  - Week pattern alternates between a perfect week (every cell done) and a
    week with a few missed days, so scores and the x2 bonus both show up.
  - One objective is excluded for the oldest week of the second child.
  - One reward redemption is recorded per child.

Usage examples:
  - Against a local backend:
      python scripts/seed_demo_family.py --base-url http://localhost:8000
  - Against port-forwarded backend:
      python scripts/seed_demo_family.py --base-url http://localhost:8080 --weeks 8
"""

from __future__ import annotations

import argparse
import datetime as dt
import random
import sys
from typing import Any

try:
    import requests  # type: ignore
except ImportError:  # pragma: no cover
    print("This script requires the 'requests' package.\nInstall with: pip install requests", file=sys.stderr)
    raise


CHILDREN = ["Léa", "Hugo"]
SHARED_OBJECTIVES = ["Brush teeth", "Make the bed"]
OWN_OBJECTIVES = {"Léa": "Read 20 minutes", "Hugo": "Practice piano"}


def monday_of_week(d: dt.date) -> dt.date:
    return d - dt.timedelta(days=d.weekday())


def call(base_url: str, method: str, path: str, payload: dict | None = None) -> Any:
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    r = requests.request(method, url, json=payload, timeout=15)
    if r.status_code >= 300:
        raise RuntimeError(f"{method} {path} -> HTTP {r.status_code}: {r.text}")
    return r.json() if r.content else None


def seed_week(base_url: str, child_id: int, objective_ids: list[int], week_start: dt.date, perfect: bool) -> int:
    """Log one week for one child. Returns the number of cells marked done."""
    done = 0
    for obj_id in objective_ids:
        missed = set() if perfect else set(random.sample(range(7), k=random.randint(1, 3)))
        for dow in range(7):
            if dow in missed:
                continue
            day = week_start + dt.timedelta(days=dow)
            call(
                base_url,
                "POST",
                f"children/{child_id}/logs/toggle",
                {"objective_id": obj_id, "date": day.isoformat()},
            )
            done += 1
    return done


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed demo children, objectives and weekly logs")
    ap.add_argument("--base-url", required=True, help="API base URL (e.g., http://localhost:8000)")
    ap.add_argument("--weeks", type=int, default=6, help="Number of past weeks to fill (default 6)")
    ap.add_argument("--seed", type=int, default=None, help="Random seed for reproducible data")
    args = ap.parse_args()

    if args.seed is not None:
        random.seed(args.seed)

    base_url = args.base_url
    this_monday = monday_of_week(dt.date.today())
    # Past weeks only, oldest first
    week_starts = [this_monday - dt.timedelta(weeks=args.weeks - i) for i in range(args.weeks)]
    created_at = dt.datetime.combine(week_starts[0], dt.time(8, 0)).isoformat()

    shared_ids = [
        call(base_url, "POST", "objectives/", {"title": title, "created_at": created_at})["id"]
        for title in SHARED_OBJECTIVES
    ]

    for idx, name in enumerate(CHILDREN):
        child = call(base_url, "POST", "children/", {"name": name})
        own = call(
            base_url,
            "POST",
            "objectives/",
            {"title": OWN_OBJECTIVES[name], "child_id": child["id"], "created_at": created_at},
        )
        objective_ids = shared_ids + [own["id"]]

        if idx == 1:
            call(
                base_url,
                "POST",
                f"children/{child['id']}/exclusions/",
                {"objective_id": own["id"], "week_start": week_starts[0].isoformat()},
            )

        cells = 0
        for n, ws in enumerate(week_starts):
            cells += seed_week(base_url, child["id"], objective_ids, ws, perfect=(n % 2 == 0))

        call(
            base_url,
            "POST",
            f"children/{child['id']}/points/transactions",
            {"amount": -2, "description": "Ice cream"},
        )
        balance = call(base_url, "GET", f"children/{child['id']}/points/balance")
        print(f"{name}: {cells} cells logged, balance {balance['balance']}")

    print(f"Seed complete: {len(CHILDREN)} children, {args.weeks} weeks.")


if __name__ == "__main__":
    main()
