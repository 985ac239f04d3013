"""Interfaces the progress core needs from its collaborators."""

from typing import List, Protocol, Sequence

from plan_tracker.schemas import (
    Enrollment,
    ExerciseRecord,
    PlanTemplate,
    UserStats,
    WorkoutTemplate,
)


class CatalogStore(Protocol):
    """
    Read-only batch access to catalog data.

    Ids that do not exist are simply absent from the result.
    """

    def get_plan_templates(self, ids: Sequence[str]) -> List[PlanTemplate]: ...

    def get_workout_templates(self, ids: Sequence[str]) -> List[WorkoutTemplate]: ...

    def get_exercise_records(self, ids: Sequence[str]) -> List[ExerciseRecord]: ...


class EnrollmentStore(Protocol):
    """Mutable per-user enrollment documents and the user's aggregate stats."""

    def load_enrollment(self, user_id: str, plan_id: str) -> Enrollment: ...

    def list_enrollments(self, user_id: str) -> List[Enrollment]: ...

    def create_enrollment(self, enrollment: Enrollment) -> Enrollment: ...

    def save_enrollment(self, enrollment: Enrollment) -> Enrollment: ...

    def load_user_stats(self, user_id: str) -> UserStats: ...

    def save_user_stats(self, stats: UserStats) -> UserStats: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
