"""
Recompute every user's cached workout stats from their enrollment logs.

The completed counter is summed across all enrollments. Streaks are taken
from the enrollment with the most recent log, the same single-plan view the
live log endpoints use.
Run: python scripts/recalculate_stats.py
"""

import logging
from datetime import datetime, timezone

from plan_tracker.database import SessionLocal
from plan_tracker.logging_config import setup_logging
from plan_tracker.models import User
from plan_tracker.repositories import EnrollmentRepository
from plan_tracker.schemas import LogStatus, UserStats
from plan_tracker.services.streak_service import apply_streaks

logger = logging.getLogger(__name__)


def recalculate_stats(now: datetime):
    """Rewrite total/streak fields for all users."""
    db = SessionLocal()
    try:
        repository = EnrollmentRepository(db)
        user_ids = [user_id for (user_id,) in db.query(User.id).all()]
        
        for user_id in user_ids:
            enrollments = repository.list_enrollments(user_id)
            total = sum(
                1
                for e in enrollments
                for log in e.progress_log
                if log.status == LogStatus.COMPLETED
            )
            
            stats = UserStats(user_id=user_id, total_workouts_completed=total)
            logged = [e for e in enrollments if e.progress_log]
            if logged:
                latest = max(logged, key=lambda e: max(log.date for log in e.progress_log))
                stats = apply_streaks(stats, latest.progress_log, now)
            
            repository.save_user_stats(stats)
            logger.info(
                "User %s: total=%s current=%s longest=%s",
                user_id,
                stats.total_workouts_completed,
                stats.current_streak,
                stats.longest_streak,
            )
        
        repository.commit()
        logger.info("Recalculated stats for %d users", len(user_ids))
    finally:
        db.close()


if __name__ == "__main__":
    setup_logging()
    recalculate_stats(datetime.now(timezone.utc))
