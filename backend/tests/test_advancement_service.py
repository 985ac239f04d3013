from plan_tracker.services.advancement_service import (
    advance_enrollment,
    complete_enrollment,
    compute_cursor,
    is_plan_exhausted,
)

from conftest import utc


def test_elapsed_days_map_to_week_and_day():
    # 2024-01-01 is a Monday; nine days later is week 2, day index 2
    assert compute_cursor(utc(2024, 1, 1), utc(2024, 1, 10)) == (2, 2)


def test_start_day_is_week_one_day_zero():
    assert compute_cursor(utc(2024, 1, 1, 18), utc(2024, 1, 1, 6)) == (1, 0)


def test_before_start_keeps_current_cursor():
    assert compute_cursor(utc(2024, 1, 10), utc(2024, 1, 5), current=(1, 3)) == (1, 3)


def test_cursor_is_clamped_to_plan_length():
    assert compute_cursor(utc(2024, 1, 1), utc(2024, 3, 1), total_weeks=4) == (4, 6)


def test_advance_moves_cursor_and_stamps_update(enrollment):
    now = utc(2024, 1, 10, 7)

    advanced = advance_enrollment(enrollment, now)

    assert advanced is not enrollment
    assert advanced.cursor == (2, 2)
    assert advanced.last_progress_update == utc(2024, 1, 10)
    # Input enrollment is untouched
    assert enrollment.cursor == (1, 0)


def test_advance_is_idempotent(enrollment):
    now = utc(2024, 1, 10, 7)

    once = advance_enrollment(enrollment, now)
    twice = advance_enrollment(once, now)

    assert twice is once
    assert twice.cursor == once.cursor == (2, 2)


def test_no_write_when_cursor_already_current(enrollment):
    assert advance_enrollment(enrollment, utc(2024, 1, 1, 20)) is enrollment


def test_guard_skips_recompute_on_the_same_day(enrollment):
    stamped = enrollment.model_copy(
        update={"current_week": 1, "current_day_index": 2, "last_progress_update": utc(2024, 1, 5)}
    )
    assert advance_enrollment(stamped, utc(2024, 1, 5, 23)) is stamped
    assert advance_enrollment(stamped, utc(2024, 1, 6, 1)).cursor == (1, 5)


def test_plan_exhaustion_and_completion(enrollment):
    assert not is_plan_exhausted(enrollment, utc(2024, 1, 28))
    assert is_plan_exhausted(enrollment, utc(2024, 1, 29))

    completed = complete_enrollment(enrollment, utc(2024, 1, 29, 12))
    assert completed.is_active is False
    assert completed.completed_at == utc(2024, 1, 29, 12)
    assert complete_enrollment(completed, utc(2024, 2, 5)) is completed
