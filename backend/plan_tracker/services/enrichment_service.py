"""Denormalize plan templates, workout templates and exercises into display trees."""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from plan_tracker.repositories.base import CatalogStore
from plan_tracker.schemas import (
    EnrichedPlanDay,
    EnrichedPlanWeek,
    EnrichedStructureItem,
    EnrichedTrainingPlan,
    EnrichedUserPlanProgress,
    EnrichedWorkoutTemplate,
    Enrollment,
    ExerciseRecord,
    PlanTemplate,
    WorkoutTemplate,
)
from plan_tracker.services.calendar_service import day_status, plan_totals
from plan_tracker.services.override_service import merge_plan_with_overrides

logger = logging.getLogger(__name__)


class EnrichmentService:
    """
    Resolves plan -> workout template -> exercise references.

    Whatever the number of plans or weeks, a join costs exactly one batch
    fetch per catalog collection: plans, then workout templates, then
    exercises.
    """

    def __init__(self, catalog: CatalogStore):
        self.catalog = catalog

    def enrich_training_plans(self, plan_ids: Sequence[str]) -> List[EnrichedTrainingPlan]:
        """Enriched trees for ``plan_ids`` in request order; unknown ids are skipped."""
        plans = self._fetch_plans(plan_ids)
        workouts, exercises = self._fetch_references(plans)
        return [self._build_plan(plan, workouts, exercises) for plan in plans]

    def enrich_enrollments(
        self, enrollments: Sequence[Enrollment], now: datetime
    ) -> List[EnrichedUserPlanProgress]:
        """
        Enriched trees of each enrollment's effective schedule.

        Overrides are merged into the plan before references are collected,
        so custom workouts resolve in the same single template fetch. Each
        day also carries its calendar status.
        """
        plans_by_id = {p.id: p for p in self._fetch_plans([e.plan_id for e in enrollments])}

        merged: List[tuple] = []
        for enrollment in enrollments:
            plan = plans_by_id.get(enrollment.plan_id)
            if plan is None:
                logger.warning(
                    "Enrollment %s/%s references unknown plan",
                    enrollment.user_id,
                    enrollment.plan_id,
                )
                continue
            merged.append((enrollment, merge_plan_with_overrides(plan, enrollment.overrides)))

        workouts, exercises = self._fetch_references([plan for _, plan in merged])

        progress = []
        for enrollment, plan in merged:
            tree = self._build_plan(plan, workouts, exercises, enrollment=enrollment)
            progress.append(
                EnrichedUserPlanProgress(
                    **tree.model_dump(exclude={"weeks"}),
                    weeks=tree.weeks,
                    started_at=enrollment.started_at,
                    completed_at=enrollment.completed_at,
                    current_week=enrollment.current_week,
                    current_day_index=enrollment.current_day_index,
                    is_active=enrollment.is_active,
                    overrides=enrollment.overrides,
                    progress_log=enrollment.progress_log,
                    totals=plan_totals(enrollment.progress_log),
                )
            )
        return progress

    # ============== Fetches ==============

    def _fetch_plans(self, plan_ids: Sequence[str]) -> List[PlanTemplate]:
        requested = list(dict.fromkeys(plan_ids))
        fetched = {p.id: p for p in self.catalog.get_plan_templates(requested)}
        return [fetched[plan_id] for plan_id in requested if plan_id in fetched]

    def _fetch_references(self, plans: Sequence[PlanTemplate]) -> tuple:
        """One batch fetch of workout templates, one of exercises."""
        # The rest-day sentinel is collected too; it just never resolves
        workout_ids = list(dict.fromkeys(
            day.workout_template_id
            for plan in plans
            for week in plan.weeks
            for day in week.days
            if day.workout_template_id
        ))
        workouts = {w.id: w for w in self.catalog.get_workout_templates(workout_ids)}

        exercise_ids = list(dict.fromkeys(
            item.exercise_id
            for workout in workouts.values()
            for item in workout.structure
            if item.exercise_id
        ))
        exercises = {e.id: e for e in self.catalog.get_exercise_records(exercise_ids)}

        return workouts, exercises

    # ============== Tree building ==============

    def _build_plan(
        self,
        plan: PlanTemplate,
        workouts: Dict[str, WorkoutTemplate],
        exercises: Dict[str, ExerciseRecord],
        enrollment: Optional[Enrollment] = None,
    ) -> EnrichedTrainingPlan:
        weeks = []
        for week in plan.weeks:
            days = []
            for day in week.days:
                workout = workouts.get(day.workout_template_id)
                days.append(
                    EnrichedPlanDay(
                        day_of_week=day.day_of_week,
                        workout_template_id=day.workout_template_id,
                        workout_details=self._build_workout(workout, exercises) if workout else None,
                        status=(
                            day_status(
                                enrollment,
                                week.week_number,
                                day.day_of_week.index,
                                day.workout_template_id,
                            )
                            if enrollment is not None
                            else None
                        ),
                    )
                )
            weeks.append(EnrichedPlanWeek(week_number=week.week_number, days=days))

        return EnrichedTrainingPlan(
            id=plan.id,
            name=plan.name,
            sport=plan.sport,
            level=plan.level,
            description=plan.description,
            tags=plan.tags,
            duration_weeks=plan.duration_weeks,
            weeks=weeks,
        )

    @staticmethod
    def _build_workout(
        workout: WorkoutTemplate, exercises: Dict[str, ExerciseRecord]
    ) -> EnrichedWorkoutTemplate:
        return EnrichedWorkoutTemplate(
            **workout.model_dump(exclude={"structure"}),
            structure=[
                EnrichedStructureItem(
                    **item.model_dump(),
                    exercise=exercises.get(item.exercise_id),
                )
                for item in workout.structure
            ],
        )
