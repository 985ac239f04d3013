from unittest.mock import MagicMock

from plan_tracker.schemas import DayOfWeek, DayStatus, Enrollment, Override, WorkoutLog
from plan_tracker.services.enrichment_service import EnrichmentService

from conftest import utc


def counting(catalog):
    return MagicMock(wraps=catalog)


def day(plan, week_number, day_of_week):
    week = next(w for w in plan.weeks if w.week_number == week_number)
    return next(d for d in week.days if d.day_of_week == DayOfWeek(day_of_week))


def total_fetches(mock_catalog):
    return (
        mock_catalog.get_plan_templates.call_count
        + mock_catalog.get_workout_templates.call_count
        + mock_catalog.get_exercise_records.call_count
    )


def test_rest_day_resolves_to_none(catalog):
    [plan] = EnrichmentService(catalog).enrich_training_plans(["5k-beginner"])

    rest = day(plan, 1, "Tue")
    assert rest.workout_template_id == "rest_day"
    assert rest.workout_details is None


def test_existing_template_is_resolved_with_exercises(catalog):
    [plan] = EnrichmentService(catalog).enrich_training_plans(["5k-beginner"])

    strength = day(plan, 1, "Wed").workout_details
    assert strength.name == "Strength A"
    assert [item.exercise_id for item in strength.structure] == ["push-up", "squat", "retired-exercise"]
    assert strength.structure[0].exercise.name == "Push-up"
    assert strength.structure[0].sets == 3
    # Dangling exercise reference stays in the structure without a record
    assert strength.structure[2].exercise is None


def test_plans_come_back_in_request_order_and_unknown_ids_are_skipped(catalog):
    plans = EnrichmentService(catalog).enrich_training_plans(["10k-novice", "missing", "5k-beginner"])

    assert [p.id for p in plans] == ["10k-novice", "5k-beginner"]
    assert len(plans[0].weeks) == 2
    assert plans[1].duration_weeks == 4


def test_join_uses_three_batch_fetches_regardless_of_plan_count(catalog):
    one = counting(catalog)
    EnrichmentService(one).enrich_training_plans(["5k-beginner"])

    two = counting(catalog)
    EnrichmentService(two).enrich_training_plans(["5k-beginner", "10k-novice"])

    assert total_fetches(one) == 3
    assert total_fetches(two) == 3
    assert sorted(two.get_workout_templates.call_args.args[0]) == [
        "easy-run-3mi",
        "long-run-5mi",
        "rest_day",
        "strength-a",
    ]


def test_enrollment_overlay_merges_overrides_and_statuses(catalog):
    enrollment = Enrollment(
        user_id="user-1",
        plan_id="5k-beginner",
        plan_name="5K Beginner",
        total_weeks=4,
        started_at=utc(2024, 1, 1, 9),
        current_week=1,
        current_day_index=2,
        overrides=[Override(week_number=2, day_of_week="Tue", custom_workout_id="hill-repeats")],
        progress_log=[
            WorkoutLog(
                id="log-1",
                date=utc(2024, 1, 1, 18),
                workout_template_id="easy-run-3mi",
                status="completed",
                completion={
                    "activity_type": "endurance",
                    "duration_minutes": 30,
                    "distance": {"value": 3, "unit": "miles"},
                },
            )
        ],
    )
    mock_catalog = counting(catalog)

    [progress] = EnrichmentService(mock_catalog).enrich_enrollments([enrollment], utc(2024, 1, 3))

    assert total_fetches(mock_catalog) == 3
    assert progress.id == "5k-beginner"
    assert progress.current_day_index == 2
    assert day(progress, 2, "Tue").workout_details.name == "Hill Repeats"
    assert day(progress, 1, "Mon").status == DayStatus.COMPLETED
    assert day(progress, 1, "Tue").status == DayStatus.MISSED
    assert day(progress, 1, "Wed").status == DayStatus.CURRENT
    assert day(progress, 1, "Thu").status == DayStatus.UPCOMING
    assert progress.totals.total_active_minutes == 30
    assert progress.totals.total_distance_miles == 3


def test_override_to_a_deleted_workout_has_no_details(catalog):
    enrollment = Enrollment(
        user_id="user-1",
        plan_id="5k-beginner",
        plan_name="5K Beginner",
        total_weeks=4,
        started_at=utc(2024, 1, 1, 9),
        overrides=[Override(week_number=1, day_of_week="Fri", custom_workout_id="deleted-workout")],
    )
    mock_catalog = counting(catalog)

    [progress] = EnrichmentService(mock_catalog).enrich_enrollments([enrollment], utc(2024, 1, 1, 12))

    friday = day(progress, 1, "Fri")
    assert friday.workout_template_id == "deleted-workout"
    assert friday.workout_details is None
    assert day(progress, 2, "Fri").workout_details.name == "Easy Run 3 mi"
    assert "deleted-workout" in mock_catalog.get_workout_templates.call_args.args[0]
    assert total_fetches(mock_catalog) == 3
