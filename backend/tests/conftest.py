"""Shared fixtures: an in-memory database and a small seeded catalog."""

from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from plan_tracker.database import init_db
from plan_tracker.models import Exercise, TrainingPlan, WorkoutTemplate
from plan_tracker.repositories import CatalogRepository, EnrollmentRepository
from plan_tracker.schemas import Enrollment, PlanTemplate, UserStats
from plan_tracker.services import ProgressService

WEEK_SCHEDULE = [
    ("Mon", "easy-run-3mi"),
    ("Tue", "rest_day"),
    ("Wed", "strength-a"),
    ("Thu", "rest_day"),
    ("Fri", "easy-run-3mi"),
    ("Sat", "long-run-5mi"),
    ("Sun", "rest_day"),
]


def utc(year, month, day, hour=0, minute=0):
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def plan_weeks(count):
    return [
        {
            "week_number": week,
            "days": [
                {"day_of_week": day, "workout_template_id": workout}
                for day, workout in WEEK_SCHEDULE
            ],
        }
        for week in range(1, count + 1)
    ]


@pytest.fixture
def plan():
    return PlanTemplate(
        id="5k-beginner",
        name="5K Beginner",
        sport="running",
        level="beginner",
        duration_weeks=4,
        weeks=plan_weeks(4),
    )


@pytest.fixture
def enrollment():
    return Enrollment(
        user_id="user-1",
        plan_id="5k-beginner",
        plan_name="5K Beginner",
        total_weeks=4,
        started_at=utc(2024, 1, 1, 9, 30),
    )


@pytest.fixture
def stats():
    return UserStats(user_id="user-1")


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = Session()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def seeded_db(db):
    db.add_all([
        TrainingPlan(
            id="5k-beginner",
            name="5K Beginner",
            sport="running",
            level="beginner",
            duration_weeks=4,
            weeks=plan_weeks(4),
        ),
        TrainingPlan(
            id="10k-novice",
            name="10K Novice",
            sport="running",
            level="beginner",
            duration_weeks=2,
            weeks=plan_weeks(2),
        ),
        WorkoutTemplate(
            id="easy-run-3mi",
            name="Easy Run 3 mi",
            sport="running",
            category="endurance",
            description="Conversational pace",
            metrics={"distance_miles": 3.0},
            structure=[],
        ),
        WorkoutTemplate(
            id="long-run-5mi",
            name="Long Run 5 mi",
            sport="running",
            category="endurance",
            description="Slow and steady",
            metrics={"distance_miles": 5.0},
            structure=[{"exercise_id": "strides", "reps": 4, "notes": "after the run"}],
        ),
        WorkoutTemplate(
            id="strength-a",
            name="Strength A",
            sport="strength",
            category="strength",
            description="Full body",
            metrics={"duration_mins": 30},
            structure=[
                {"exercise_id": "push-up", "sets": 3, "reps": 12, "rest_seconds": 60},
                {"exercise_id": "squat", "sets": 3, "reps": 15, "rest_seconds": 60},
                {"exercise_id": "retired-exercise", "sets": 2, "reps": 10},
            ],
        ),
        WorkoutTemplate(
            id="hill-repeats",
            name="Hill Repeats",
            sport="running",
            category="intervals",
            description="6 x 60s uphill",
            structure=[],
        ),
        Exercise(id="push-up", name="Push-up", type="strength", equipment=[]),
        Exercise(id="squat", name="Bodyweight Squat", type="strength"),
        Exercise(id="strides", name="Strides", type="drill", sport="running"),
    ])
    db.commit()
    return db


@pytest.fixture
def catalog(seeded_db):
    return CatalogRepository(seeded_db)


@pytest.fixture
def store(seeded_db):
    return EnrollmentRepository(seeded_db)


@pytest.fixture
def service(catalog, store):
    return ProgressService(catalog, store)
