"""Progress service - request-scoped orchestration of the progress core."""

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Sequence

from plan_tracker.exceptions import PlanNotFound
from plan_tracker.repositories.base import CatalogStore, EnrollmentStore
from plan_tracker.schemas import (
    DayOfWeek,
    Enrollment,
    LogMutation,
    Override,
    PlanTemplate,
    UserDashboard,
)
from plan_tracker.services import advancement_service, log_service, override_service
from plan_tracker.services.enrichment_service import EnrichmentService

logger = logging.getLogger(__name__)


class ProgressService:
    """
    Enrollment reads and writes against the catalog and persistence stores.

    Every call follows the same flow: load the enrollment, advance its
    cursor (saving when it moved), run the operation, then save the
    enrollment and the user's stats in one transaction. ``now`` is always
    passed in explicitly.
    """

    def __init__(self, catalog: CatalogStore, store: EnrollmentStore):
        self.catalog = catalog
        self.store = store
        self.enrichment = EnrichmentService(catalog)

    # ============== Enrollment ==============

    def enroll(self, user_id: str, plan_id: str, now: datetime) -> Enrollment:
        """Start ``plan_id`` for the user today. EnrollmentConflict if already enrolled."""
        plan = self._get_plan(plan_id)
        enrollment = Enrollment(
            user_id=user_id,
            plan_id=plan.id,
            plan_name=plan.name,
            total_weeks=plan.duration_weeks,
            started_at=now,
            current_week=1,
            current_day_index=0,
            is_active=True,
        )
        with self._transaction():
            self.store.create_enrollment(enrollment)

        logger.info("User %s enrolled in plan %s", user_id, plan_id)
        return enrollment

    def get_enrollment(self, user_id: str, plan_id: str, now: datetime) -> Enrollment:
        """Load the enrollment with its cursor brought up to date."""
        with self._transaction():
            return self._load_current(user_id, plan_id, now)

    def get_dashboard(self, user_id: str, now: datetime) -> UserDashboard:
        """All of the user's enrollments as enriched trees, plus their stats."""
        with self._transaction():
            enrollments = [
                self._advance_and_save(e, now)
                for e in self.store.list_enrollments(user_id)
            ]
            stats = self.store.load_user_stats(user_id)

        return UserDashboard(
            stats=stats,
            training_plans=self.enrichment.enrich_enrollments(enrollments, now),
        )

    def todays_workout(self, user_id: str, plan_id: str, now: datetime) -> str:
        """Effective workout id for the enrollment's current slot."""
        enrollment = self.get_enrollment(user_id, plan_id, now)
        plan = self._get_plan(plan_id)
        return override_service.effective_workout(
            plan,
            enrollment.overrides,
            enrollment.current_week,
            DayOfWeek.from_index(enrollment.current_day_index),
        )

    def complete_plan(self, user_id: str, plan_id: str, now: datetime) -> Enrollment:
        with self._transaction():
            enrollment = self._load_current(user_id, plan_id, now)
            completed = advancement_service.complete_enrollment(enrollment, now)
            if completed is enrollment:
                return enrollment
            return self.store.save_enrollment(completed)

    # ============== Overrides ==============

    def update_overrides(
        self, user_id: str, plan_id: str, overrides: Sequence[Override], now: datetime
    ) -> Enrollment:
        """Replace the override set; PastWeekOverrideRejected leaves it untouched."""
        with self._transaction():
            enrollment = self._load_current(user_id, plan_id, now)
            updated = override_service.apply_overrides(enrollment, overrides)
            return self.store.save_enrollment(updated)

    def swap_days(
        self,
        user_id: str,
        plan_id: str,
        week_number: int,
        first_day: DayOfWeek,
        second_day: DayOfWeek,
        now: datetime,
    ) -> Enrollment:
        plan = self._get_plan(plan_id)
        with self._transaction():
            enrollment = self._load_current(user_id, plan_id, now)
            updated = override_service.swap_days(plan, enrollment, week_number, first_day, second_day)
            return self.store.save_enrollment(updated)

    def reset_overrides(self, user_id: str, plan_id: str, now: datetime) -> Enrollment:
        with self._transaction():
            enrollment = self._load_current(user_id, plan_id, now)
            updated = override_service.reset_overrides(enrollment)
            return self.store.save_enrollment(updated)

    # ============== Logs ==============

    def log_workout(self, user_id: str, plan_id: str, data, now: datetime) -> LogMutation:
        with self._transaction():
            enrollment = self._load_current(user_id, plan_id, now)
            stats = self.store.load_user_stats(user_id)
            result = log_service.create_log(enrollment, stats, data, now)
            return self._save_mutation(result)

    def update_log(
        self, user_id: str, plan_id: str, log_id: str, data, now: datetime
    ) -> LogMutation:
        with self._transaction():
            enrollment = self._load_current(user_id, plan_id, now)
            stats = self.store.load_user_stats(user_id)
            result = log_service.update_log(enrollment, stats, log_id, data, now)
            return self._save_mutation(result)

    # ============== Helpers ==============

    @contextmanager
    def _transaction(self):
        try:
            yield
            self.store.commit()
        except Exception:
            self.store.rollback()
            raise

    def _get_plan(self, plan_id: str) -> PlanTemplate:
        plans = self.catalog.get_plan_templates([plan_id])
        if not plans:
            raise PlanNotFound(plan_id)
        return plans[0]

    def _load_current(self, user_id: str, plan_id: str, now: datetime) -> Enrollment:
        return self._advance_and_save(self.store.load_enrollment(user_id, plan_id), now)

    def _advance_and_save(self, enrollment: Enrollment, now: datetime) -> Enrollment:
        advanced = advancement_service.advance_enrollment(enrollment, now)
        if advanced is enrollment:
            return enrollment
        if advanced.is_active and advancement_service.is_plan_exhausted(advanced, now):
            logger.info("Plan %s has run its full length for user %s", advanced.plan_id, advanced.user_id)
        return self.store.save_enrollment(advanced)

    def _save_mutation(self, result: LogMutation) -> LogMutation:
        enrollment = self.store.save_enrollment(result.enrollment)
        stats = self.store.save_user_stats(result.stats)
        return LogMutation(enrollment=enrollment, stats=stats, log=result.log)
