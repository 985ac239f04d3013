"""Resolution and validation of user workout overrides."""

import logging
from typing import Iterable, Sequence

from plan_tracker.exceptions import PastWeekOverrideRejected, ScheduleSlotNotFound
from plan_tracker.schemas import DayOfWeek, Enrollment, Override, PlanTemplate

logger = logging.getLogger(__name__)


def effective_workout(
    plan: PlanTemplate,
    overrides: Iterable[Override],
    week_number: int,
    day_of_week: DayOfWeek,
) -> str:
    """
    Workout id actually scheduled for a (week, day) slot.

    An override for the slot wins over the plan template. Raises
    ScheduleSlotNotFound when neither knows the slot.
    """
    day_of_week = DayOfWeek(day_of_week)
    for override in overrides:
        if override.week_number == week_number and override.day_of_week == day_of_week:
            return override.custom_workout_id

    day = plan.find_day(week_number, day_of_week)
    if day is None:
        raise ScheduleSlotNotFound(week_number, day_of_week.value)
    return day.workout_template_id


def apply_overrides(enrollment: Enrollment, new_overrides: Sequence[Override]) -> Enrollment:
    """
    Replace the enrollment's overrides wholesale with ``new_overrides``.

    The batch is all-or-nothing: if any entry targets a week before the
    current one, PastWeekOverrideRejected is raised and nothing changes.
    """
    new_overrides = [Override.model_validate(o) for o in new_overrides]

    invalid = [o for o in new_overrides if o.week_number < enrollment.current_week]
    if invalid:
        logger.info(
            "Rejected %d override(s) before week %d for %s/%s",
            len(invalid),
            enrollment.current_week,
            enrollment.user_id,
            enrollment.plan_id,
        )
        raise PastWeekOverrideRejected(enrollment.current_week, invalid)

    return enrollment.model_copy(update={"overrides": new_overrides})


def swap_days(
    plan: PlanTemplate,
    enrollment: Enrollment,
    week_number: int,
    first_day: DayOfWeek,
    second_day: DayOfWeek,
) -> Enrollment:
    """
    Exchange the effective workouts of two days in the same week.

    Expressed as two override entries submitted in one batch together with
    the other current/future overrides, so the past-week rule applies to the
    swap. Past-week overrides are carried over as they are.
    """
    first_day, second_day = DayOfWeek(first_day), DayOfWeek(second_day)
    first_workout = effective_workout(plan, enrollment.overrides, week_number, first_day)
    second_workout = effective_workout(plan, enrollment.overrides, week_number, second_day)

    swapped_slots = {(week_number, first_day), (week_number, second_day)}
    history = [o for o in enrollment.overrides if o.week_number < enrollment.current_week]
    upcoming = [
        o
        for o in enrollment.overrides
        if o.week_number >= enrollment.current_week and o.slot not in swapped_slots
    ]

    updated = apply_overrides(
        enrollment,
        upcoming
        + [
            Override(week_number=week_number, day_of_week=first_day, custom_workout_id=second_workout),
            Override(week_number=week_number, day_of_week=second_day, custom_workout_id=first_workout),
        ],
    )
    return updated.model_copy(update={"overrides": history + updated.overrides})


def reset_overrides(enrollment: Enrollment) -> Enrollment:
    """Drop overrides for the current and future weeks; past-week ones stay."""
    kept = [o for o in enrollment.overrides if o.week_number < enrollment.current_week]
    return enrollment.model_copy(update={"overrides": kept})


def merge_plan_with_overrides(plan: PlanTemplate, overrides: Iterable[Override]) -> PlanTemplate:
    """
    Copy of ``plan`` with every applicable override written into its schedule.

    Overrides pointing at a slot the plan doesn't have are skipped.
    """
    merged = plan.model_copy(deep=True)

    for override in overrides:
        day = merged.find_day(override.week_number, override.day_of_week)
        if day is None:
            logger.warning(
                "Could not apply override for week %s, day %s on plan %s",
                override.week_number,
                override.day_of_week.value,
                plan.id,
            )
            continue
        day.workout_template_id = override.custom_workout_id

    return merged
