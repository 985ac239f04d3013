"""SQLAlchemy-backed persistence store for enrollments and user stats."""

import logging
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Optional

from plan_tracker.exceptions import (
    ConcurrentModification,
    EnrollmentConflict,
    EnrollmentNotFound,
)
from plan_tracker.models import Enrollment as EnrollmentRow, User
from plan_tracker.schemas import Enrollment, UserStats

logger = logging.getLogger(__name__)


class EnrollmentRepository:
    """
    Enrollment documents keyed by (user_id, plan_id).

    Writes are flushed but not committed; callers decide the transaction
    boundary with ``commit``/``rollback``. ``save_enrollment`` is a
    compare-and-set on ``version``.
    """
    
    def __init__(self, db: Session):
        self.db = db
    
    # ============== Enrollments ==============
    
    def load_enrollment(self, user_id: str, plan_id: str) -> Enrollment:
        row = self._get_row(user_id, plan_id)
        if not row:
            raise EnrollmentNotFound(user_id, plan_id)
        return self._to_schema(row)
    
    def list_enrollments(self, user_id: str) -> List[Enrollment]:
        rows = (
            self.db.query(EnrollmentRow)
            .filter(EnrollmentRow.user_id == user_id)
            .order_by(EnrollmentRow.id)
            .all()
        )
        return [self._to_schema(row) for row in rows]
    
    def create_enrollment(self, enrollment: Enrollment) -> Enrollment:
        if self._get_row(enrollment.user_id, enrollment.plan_id):
            raise EnrollmentConflict(enrollment.user_id, enrollment.plan_id)
        
        self._get_or_create_user(enrollment.user_id)
        row = EnrollmentRow(
            user_id=enrollment.user_id,
            plan_id=enrollment.plan_id,
            **self._row_values(enrollment),
            version=enrollment.version,
        )
        self.db.add(row)
        try:
            self.db.flush()
        except IntegrityError:
            # Lost a race against another enrollment for the same pair
            raise EnrollmentConflict(enrollment.user_id, enrollment.plan_id)
        
        return enrollment
    
    def save_enrollment(self, enrollment: Enrollment) -> Enrollment:
        """Persist the document; returns it with the bumped version."""
        new_version = enrollment.version + 1
        result = self.db.execute(
            update(EnrollmentRow)
            .where(
                EnrollmentRow.user_id == enrollment.user_id,
                EnrollmentRow.plan_id == enrollment.plan_id,
                EnrollmentRow.version == enrollment.version,
            )
            .values(**self._row_values(enrollment), version=new_version)
        )
        
        if result.rowcount == 0:
            if not self._get_row(enrollment.user_id, enrollment.plan_id):
                raise EnrollmentNotFound(enrollment.user_id, enrollment.plan_id)
            logger.warning(
                "Stale write rejected for enrollment %s/%s at version %s",
                enrollment.user_id,
                enrollment.plan_id,
                enrollment.version,
            )
            raise ConcurrentModification(
                enrollment.user_id, enrollment.plan_id, enrollment.version
            )
        
        return enrollment.model_copy(update={"version": new_version})
    
    # ============== User stats ==============
    
    def load_user_stats(self, user_id: str) -> UserStats:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            return UserStats(user_id=user_id)
        return UserStats(
            user_id=user.id,
            total_workouts_completed=user.total_workouts_completed or 0,
            current_streak=user.current_streak or 0,
            longest_streak=user.longest_streak or 0,
            last_workout_date=user.last_workout_date,
        )
    
    def save_user_stats(self, stats: UserStats) -> UserStats:
        user = self._get_or_create_user(stats.user_id)
        user.total_workouts_completed = stats.total_workouts_completed
        user.current_streak = stats.current_streak
        user.longest_streak = stats.longest_streak
        user.last_workout_date = stats.last_workout_date
        self.db.flush()
        return stats
    
    # ============== Transactions ==============
    
    def commit(self) -> None:
        self.db.commit()
    
    def rollback(self) -> None:
        self.db.rollback()
    
    # ============== Helpers ==============
    
    def _get_row(self, user_id: str, plan_id: str) -> Optional[EnrollmentRow]:
        return (
            self.db.query(EnrollmentRow)
            .filter(EnrollmentRow.user_id == user_id, EnrollmentRow.plan_id == plan_id)
            .first()
        )
    
    def _get_or_create_user(self, user_id: str) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            user = User(id=user_id)
            self.db.add(user)
            self.db.flush()
        return user
    
    @staticmethod
    def _row_values(enrollment: Enrollment) -> dict:
        return {
            "plan_name": enrollment.plan_name,
            "total_weeks": enrollment.total_weeks,
            "started_at": enrollment.started_at,
            "completed_at": enrollment.completed_at,
            "is_active": enrollment.is_active,
            "current_week": enrollment.current_week,
            "current_day_index": enrollment.current_day_index,
            "last_progress_update": enrollment.last_progress_update,
            "overrides": [o.model_dump(mode="json") for o in enrollment.overrides],
            "progress_log": [log.model_dump(mode="json") for log in enrollment.progress_log],
        }
    
    @staticmethod
    def _to_schema(row: EnrollmentRow) -> Enrollment:
        return Enrollment(
            user_id=row.user_id,
            plan_id=row.plan_id,
            plan_name=row.plan_name or "",
            total_weeks=row.total_weeks,
            started_at=row.started_at,
            completed_at=row.completed_at,
            current_week=row.current_week or 1,
            current_day_index=row.current_day_index or 0,
            is_active=bool(row.is_active),
            overrides=row.overrides or [],
            progress_log=row.progress_log or [],
            last_progress_update=row.last_progress_update,
            version=row.version or 0,
        )
