"""Streak calculation from completed workout logs."""

from datetime import datetime
from typing import Iterable

from plan_tracker.date_utils import days_between, start_of_day
from plan_tracker.schemas import LogStatus, StreakStats, UserStats, WorkoutLog


def calculate_streaks(logs: Iterable[WorkoutLog], now: datetime) -> StreakStats:
    """
    Derive current/longest streak and last workout date.

    Only completed logs count, and several completions on the same UTC day
    count once. The current streak is 0 when the last completion was more
    than one day before ``now``; otherwise it is the run of consecutive days
    ending at the last completion.
    """
    completed_days = sorted(
        {start_of_day(log.date) for log in logs if log.status == LogStatus.COMPLETED}
    )

    if not completed_days:
        return StreakStats(current_streak=0, longest_streak=0, last_workout_date=None)

    # Longest streak
    longest_streak = 1
    run = 1
    for previous, current in zip(completed_days, completed_days[1:]):
        if days_between(previous, current) == 1:
            run += 1
            longest_streak = max(longest_streak, run)
        else:
            run = 1

    last_workout_date = completed_days[-1]

    # Current streak, walking backwards from the last completion
    if days_between(last_workout_date, start_of_day(now)) > 1:
        current_streak = 0
    else:
        current_streak = 1
        for index in range(len(completed_days) - 1, 0, -1):
            if days_between(completed_days[index - 1], completed_days[index]) == 1:
                current_streak += 1
            else:
                break

    return StreakStats(
        current_streak=current_streak,
        longest_streak=longest_streak,
        last_workout_date=last_workout_date,
    )


def apply_streaks(stats: UserStats, logs: Iterable[WorkoutLog], now: datetime) -> UserStats:
    """
    Copy of ``stats`` with the streak fields recomputed from ``logs``.

    With no completed logs left, the current streak and last workout date
    are cleared but the stored longest streak is kept.
    """
    streaks = calculate_streaks(logs, now)
    update = {
        "current_streak": streaks.current_streak,
        "longest_streak": streaks.longest_streak,
        "last_workout_date": streaks.last_workout_date,
    }
    if streaks.last_workout_date is None:
        del update["longest_streak"]
    return stats.model_copy(update=update)
