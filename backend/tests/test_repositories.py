import pytest
from sqlalchemy.exc import PendingRollbackError

from plan_tracker.exceptions import EnrollmentConflict, EnrollmentNotFound
from plan_tracker.models import Enrollment as EnrollmentRow
from plan_tracker.schemas import UserStats

from conftest import utc


def test_catalog_batch_lookups_skip_unknown_ids(catalog):
    plans = catalog.get_plan_templates(["10k-novice", "nope", "10k-novice"])

    assert [p.id for p in plans] == ["10k-novice"]
    assert plans[0].weeks[1].days[5].workout_template_id == "long-run-5mi"


def test_catalog_empty_lookup(catalog):
    assert catalog.get_workout_templates([]) == []
    assert catalog.get_exercise_records([]) == []


def test_exercise_defaults(catalog):
    (squat,) = catalog.get_exercise_records(["squat"])

    assert squat.name == "Bodyweight Squat"
    assert squat.equipment == []


def test_enrollment_round_trip(store, enrollment):
    store.create_enrollment(enrollment)
    store.commit()

    loaded = store.load_enrollment("user-1", "5k-beginner")

    assert loaded.started_at == utc(2024, 1, 1, 9, 30)
    assert loaded.started_at.tzinfo is not None
    assert loaded.version == 0
    assert store.list_enrollments("user-1") == [loaded]


def test_save_bumps_version(store, enrollment):
    store.create_enrollment(enrollment)

    saved = store.save_enrollment(enrollment.model_copy(update={"current_week": 2}))

    assert saved.version == 1
    assert store.load_enrollment("user-1", "5k-beginner").current_week == 2


def test_save_missing_enrollment(store, enrollment):
    with pytest.raises(EnrollmentNotFound):
        store.save_enrollment(enrollment)


def test_stats_default_for_unknown_user(store):
    stats = store.load_user_stats("ghost")

    assert stats == UserStats(user_id="ghost")


def test_save_user_stats(store):
    store.save_user_stats(
        UserStats(
            user_id="user-9",
            total_workouts_completed=4,
            current_streak=2,
            longest_streak=3,
            last_workout_date=utc(2024, 2, 1, 6),
        )
    )
    store.commit()

    stats = store.load_user_stats("user-9")
    assert (stats.total_workouts_completed, stats.current_streak, stats.longest_streak) == (4, 2, 3)
    assert stats.last_workout_date == utc(2024, 2, 1, 6)


def test_conflicting_flush_leaves_rollback_to_the_caller(store, seeded_db, enrollment):
    # Pending and not yet visible to the existence check
    seeded_db.add(
        EnrollmentRow(
            user_id="user-1",
            plan_id="5k-beginner",
            total_weeks=4,
            started_at=utc(2024, 1, 1),
            version=0,
        )
    )

    with pytest.raises(EnrollmentConflict):
        store.create_enrollment(enrollment)

    with pytest.raises(PendingRollbackError):
        store.list_enrollments("user-1")

    store.rollback()
    assert store.list_enrollments("user-1") == []
