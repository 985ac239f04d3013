"""Per-day calendar status and plan totals for an enrollment."""

from datetime import datetime
from typing import Iterable, Optional

from plan_tracker.date_utils import add_days, is_same_day
from plan_tracker.schemas import (
    DayStatus,
    EnduranceCompletion,
    Enrollment,
    LogStatus,
    PlanTotals,
    StrengthCompletion,
    WorkoutLog,
)

KM_TO_MILES = 0.621371
LBS_TO_KG = 0.45359237


def expected_workout_date(started_at: datetime, week_number: int, day_index: int) -> datetime:
    """Week 1 day 0 falls on the start date; every slot after it is one day later."""
    return add_days(started_at, (week_number - 1) * 7 + day_index)


def find_log_for_slot(
    enrollment: Enrollment,
    week_number: int,
    day_index: int,
    workout_template_id: str,
) -> Optional[WorkoutLog]:
    """Latest log on the slot's date for the slot's workout, if any."""
    expected = expected_workout_date(enrollment.started_at, week_number, day_index)
    for log in reversed(enrollment.progress_log):
        if log.workout_template_id == workout_template_id and is_same_day(log.date, expected):
            return log
    return None


def day_status(
    enrollment: Enrollment,
    week_number: int,
    day_index: int,
    workout_template_id: str,
) -> DayStatus:
    """
    Status of one slot relative to the enrollment's cursor.

    Slots behind the cursor (or any slot of a completed plan) take the
    status of their log, or ``missed`` when nothing was logged.
    """
    is_past = (
        enrollment.completed_at is not None
        or week_number < enrollment.current_week
        or (week_number == enrollment.current_week and day_index < enrollment.current_day_index)
    )

    if is_past:
        log = find_log_for_slot(enrollment, week_number, day_index, workout_template_id)
        if log is None:
            return DayStatus.MISSED
        return DayStatus(log.status.value)

    if week_number == enrollment.current_week and day_index == enrollment.current_day_index:
        return DayStatus.CURRENT

    return DayStatus.UPCOMING


def plan_totals(logs: Iterable[WorkoutLog]) -> PlanTotals:
    """Active minutes, distance and lifted weight across completed logs."""
    completed = [
        log for log in logs
        if log.status == LogStatus.COMPLETED and log.completion is not None
    ]
    if not completed:
        return PlanTotals()

    total_minutes = 0.0
    total_miles = 0.0
    total_kgs = 0.0

    for log in completed:
        completion = log.completion
        total_minutes += completion.duration_minutes

        if isinstance(completion, EnduranceCompletion):
            distance = completion.distance
            if distance.unit == "kilometers":
                total_miles += distance.value * KM_TO_MILES
            else:
                total_miles += distance.value

        elif isinstance(completion, StrengthCompletion):
            session = completion.strength_session
            if session.volume_unit == "lbs":
                total_kgs += session.total_volume * LBS_TO_KG
            else:
                total_kgs += session.total_volume

    return PlanTotals(
        total_active_minutes=round(total_minutes, 1),
        average_workout_duration=round(total_minutes / len(completed), 1),
        total_distance_miles=round(total_miles, 2),
        total_weight_lifted=round(total_kgs, 1),
    )
