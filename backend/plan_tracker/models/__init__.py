"""Database models package."""

from plan_tracker.models.user import User
from plan_tracker.models.training_plan import TrainingPlan
from plan_tracker.models.workout_template import WorkoutTemplate
from plan_tracker.models.exercise import Exercise
from plan_tracker.models.enrollment import Enrollment

__all__ = [
    "User",
    "TrainingPlan",
    "WorkoutTemplate",
    "Exercise",
    "Enrollment",
]
