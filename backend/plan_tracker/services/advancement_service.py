"""Lazy week/day cursor advancement for enrollments."""

import logging
from datetime import datetime
from typing import Optional, Tuple

from plan_tracker.date_utils import as_utc, days_between, is_same_day, start_of_day
from plan_tracker.schemas import Enrollment

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7


def compute_cursor(
    started_at: datetime,
    now: datetime,
    current: Tuple[int, int] = (1, 0),
    total_weeks: Optional[int] = None,
) -> Tuple[int, int]:
    """
    Map elapsed whole days since ``started_at`` to (week, day_index).

    week = elapsed // 7 + 1, day_index = elapsed % 7. Before the start date
    the ``current`` cursor is returned untouched. Once the plan length is
    exhausted the cursor stays on the last day of the last week.
    """
    elapsed = days_between(started_at, now)
    if elapsed < 0:
        return current

    week = elapsed // DAYS_PER_WEEK + 1
    day_index = elapsed % DAYS_PER_WEEK

    if total_weeks is not None and week > total_weeks:
        return (total_weeks, DAYS_PER_WEEK - 1)

    return (max(week, 1), day_index)


def advance_enrollment(enrollment: Enrollment, now: datetime) -> Enrollment:
    """
    Bring the enrollment's cursor in line with ``now``.

    Returns the same object when nothing needs writing (cursor already
    current, or already advanced earlier today); otherwise a new Enrollment
    with the moved cursor and ``last_progress_update`` stamped.
    """
    if enrollment.last_progress_update and is_same_day(enrollment.last_progress_update, now):
        return enrollment

    week, day_index = compute_cursor(
        enrollment.started_at,
        now,
        current=enrollment.cursor,
        total_weeks=enrollment.total_weeks,
    )
    if (week, day_index) == enrollment.cursor:
        return enrollment

    logger.debug(
        "Advancing %s/%s from week %s day %s to week %s day %s",
        enrollment.user_id,
        enrollment.plan_id,
        enrollment.current_week,
        enrollment.current_day_index,
        week,
        day_index,
    )
    return enrollment.model_copy(
        update={
            "current_week": week,
            "current_day_index": day_index,
            "last_progress_update": start_of_day(now),
        }
    )


def is_plan_exhausted(enrollment: Enrollment, now: datetime) -> bool:
    """True once every day of the plan lies in the past."""
    return days_between(enrollment.started_at, now) >= enrollment.total_weeks * DAYS_PER_WEEK


def complete_enrollment(enrollment: Enrollment, now: datetime) -> Enrollment:
    """Mark the enrollment finished; already-completed enrollments are returned as-is."""
    if not enrollment.is_active and enrollment.completed_at:
        return enrollment
    return enrollment.model_copy(update={"is_active": False, "completed_at": as_utc(now)})
