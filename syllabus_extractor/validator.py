"""
Post-filter for extracted assignments.

Every extraction path converges here before results are stored:

1. Records without a title are dropped. Records without a due date are
   dropped too, unless keep_undated is set.
2. Dated records are sorted by date (stable, so same-day items keep their
   source order).
3. Course-start floor: syllabi sometimes quote a schedule from a previous
   term. Dates are grouped into clusters where consecutive dates sit no
   more than window_days apart. A leading cluster with fewer records than
   everything after it is treated as stray. The course starts at the first
   date of the first cluster that is kept, and anything dated more than
   window_days before that start is dropped.

   When every date is more than window_days from its neighbours, each one
   is its own cluster and the first real item is taken for a stray one
   (Feb 3, Mar 17, Apr 28 keeps only the last two). A wider window keeps
   such sparse schedules whole.

Running the filter on its own output returns the same list.
"""

import logging
from datetime import date, timedelta
from typing import List, Optional

from .models import Assignment

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 30


def _has_title(assignment: Assignment) -> bool:
    return bool(assignment.title and assignment.title.strip())


def cluster_dates(dates: List[date], window_days: int = DEFAULT_WINDOW_DAYS) -> List[List[date]]:
    """Split sorted dates wherever consecutive dates are > window_days apart."""
    clusters: List[List[date]] = []
    for d in dates:
        if clusters and (d - clusters[-1][-1]).days <= window_days:
            clusters[-1].append(d)
        else:
            clusters.append([d])
    return clusters


def course_start(dates: List[date], window_days: int = DEFAULT_WINDOW_DAYS) -> Optional[date]:
    """Estimate the course start from sorted due dates (None if no dates)."""
    clusters = cluster_dates(dates, window_days)
    if not clusters:
        return None

    # The last cluster always qualifies (nothing follows it)
    remaining = len(dates)
    for cluster in clusters:
        remaining -= len(cluster)
        if len(cluster) >= remaining:
            return cluster[0]
    return clusters[-1][0]


def compute_floor(dates: List[date], window_days: int = DEFAULT_WINDOW_DAYS) -> Optional[date]:
    start = course_start(dates, window_days)
    if start is None:
        return None
    return start - timedelta(days=window_days)


def post_filter(
    assignments: List[Assignment],
    window_days: int = DEFAULT_WINDOW_DAYS,
    keep_undated: bool = False,
) -> List[Assignment]:
    """Validate, sort and floor-filter a list of assignments.

    Args:
        assignments: Records from any extraction path
        window_days: Size of the course-start window
        keep_undated: Keep titled records without a due date; they are
            appended after the dated ones in source order

    Returns:
        A new list; the input is not modified
    """
    titled = [a for a in assignments if _has_title(a)]
    dated = [a for a in titled if a.due_date is not None]
    undated = [a for a in titled if a.due_date is None] if keep_undated else []

    dropped = len(assignments) - len(dated) - len(undated)
    if dropped:
        logger.debug("Dropped %d record(s) missing a title or due date", dropped)

    if not dated:
        return undated

    dated.sort(key=lambda a: a.due_date)

    floor = compute_floor([a.due_date for a in dated], window_days)
    kept = [a for a in dated if a.due_date >= floor]
    if len(kept) < len(dated):
        logger.info(
            "Dropped %d assignment(s) dated before the course-start floor %s",
            len(dated) - len(kept), floor.isoformat(),
        )

    return kept + undated
