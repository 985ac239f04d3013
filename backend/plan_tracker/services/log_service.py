"""Workout log lifecycle: creation, updates and the completed-workout counter."""

import logging
import uuid
from datetime import datetime
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from plan_tracker.date_utils import is_same_day
from plan_tracker.exceptions import LogNotFound, ValidationError
from plan_tracker.schemas import (
    Enrollment,
    LogMutation,
    LogStatus,
    UserStats,
    WorkoutLog,
    WorkoutLogInput,
)
from plan_tracker.services.streak_service import apply_streaks

logger = logging.getLogger(__name__)

LogData = Union[WorkoutLogInput, Mapping[str, Any]]


def new_log_id() -> str:
    return uuid.uuid4().hex


def parse_log_input(data: LogData) -> WorkoutLogInput:
    """Validate raw input, reporting every failing field."""
    if isinstance(data, WorkoutLogInput):
        return data
    try:
        return WorkoutLogInput.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            "Validation failed",
            details=[
                {
                    "field": ".".join(str(part) for part in err["loc"]),
                    "message": err["msg"],
                }
                for err in e.errors()
            ],
        )


def _require_completion(log_input: WorkoutLogInput) -> None:
    if log_input.completion is None:
        raise ValidationError(
            "Validation failed",
            details=[{"field": "completion", "message": "required when status is 'completed'"}],
        )


def _merge_completion(existing, incoming):
    """
    Completed -> completed payload update.

    Fields explicitly present in ``incoming`` overwrite ``existing`` when
    both are the same activity type; a different type replaces the payload.
    """
    if incoming is None:
        return existing
    if existing is None or existing.activity_type != incoming.activity_type:
        return incoming
    return existing.model_copy(
        update={field: getattr(incoming, field) for field in incoming.model_fields_set}
    )


def create_log(
    enrollment: Enrollment,
    stats: UserStats,
    data: LogData,
    now: datetime,
    log_id: Optional[str] = None,
) -> LogMutation:
    """
    Append a new workout log.

    Completed logs bump ``total_workouts_completed`` and recompute streaks.
    Several logs for the same day/workout are allowed; the latest one wins
    for display.
    """
    log_input = parse_log_input(data)
    if log_input.status == LogStatus.COMPLETED:
        _require_completion(log_input)

    log = WorkoutLog(
        id=log_id or new_log_id(),
        date=log_input.date,
        workout_template_id=log_input.workout_template_id,
        status=log_input.status,
        notes=log_input.notes,
        completion=log_input.completion,
    )
    enrollment = enrollment.model_copy(update={"progress_log": [*enrollment.progress_log, log]})

    if log.status == LogStatus.COMPLETED:
        stats = stats.model_copy(
            update={"total_workouts_completed": stats.total_workouts_completed + 1}
        )
        stats = apply_streaks(stats, enrollment.progress_log, now)

    logger.info(
        "Logged %s workout %s for %s/%s on %s",
        log.status.value,
        log.workout_template_id,
        enrollment.user_id,
        enrollment.plan_id,
        log.date.date().isoformat(),
    )
    return LogMutation(enrollment=enrollment, stats=stats, log=log)


def update_log(
    enrollment: Enrollment,
    stats: UserStats,
    log_id: str,
    data: LogData,
    now: datetime,
) -> LogMutation:
    """
    Overwrite an existing log and keep the counters consistent.

    date/workout/status/notes are always replaced. Moving away from
    ``completed`` clears the completion payload and decrements the counter
    (never below 0); moving to ``completed`` sets it and increments.
    """
    log_input = parse_log_input(data)

    index = enrollment.find_log_index(log_id)
    if index is None:
        raise LogNotFound(log_id)
    existing = enrollment.progress_log[index]

    was_completed = existing.status == LogStatus.COMPLETED
    will_be_completed = log_input.status == LogStatus.COMPLETED

    if will_be_completed and was_completed:
        completion = _merge_completion(existing.completion, log_input.completion)
    elif will_be_completed:
        _require_completion(log_input)
        completion = log_input.completion
    else:
        completion = None

    updated = WorkoutLog(
        id=existing.id,
        date=log_input.date,
        workout_template_id=log_input.workout_template_id,
        status=log_input.status,
        notes=log_input.notes,
        completion=completion,
    )
    progress_log = list(enrollment.progress_log)
    progress_log[index] = updated
    enrollment = enrollment.model_copy(update={"progress_log": progress_log})

    total = stats.total_workouts_completed
    if was_completed and not will_be_completed:
        total = max(0, total - 1)
    elif not was_completed and will_be_completed:
        total += 1
    stats = stats.model_copy(update={"total_workouts_completed": total})

    status_changed = was_completed != will_be_completed
    completed_day_moved = will_be_completed and not is_same_day(existing.date, updated.date)
    if status_changed or completed_day_moved:
        stats = apply_streaks(stats, enrollment.progress_log, now)

    logger.info(
        "Updated workout log %s for %s/%s: %s -> %s",
        log_id,
        enrollment.user_id,
        enrollment.plan_id,
        existing.status.value,
        updated.status.value,
    )
    return LogMutation(enrollment=enrollment, stats=stats, log=updated)
