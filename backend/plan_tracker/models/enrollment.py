"""Enrollment model: a user's progress document for one plan."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from datetime import datetime

from plan_tracker.database import Base


class Enrollment(Base):
    """Per-user, per-plan progress state."""
    
    __tablename__ = "enrollments"
    __table_args__ = (
        UniqueConstraint("user_id", "plan_id", name="uq_enrollment_user_plan"),
    )
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), ForeignKey("users.id"), nullable=False, index=True)
    plan_id = Column(String(128), nullable=False, index=True)  # weak reference into the catalog
    plan_name = Column(String(255), default="")
    total_weeks = Column(Integer, nullable=False)
    
    # Lifecycle
    started_at = Column(DateTime(timezone=True), nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    is_active = Column(Boolean, default=True)
    
    # Cursor
    current_week = Column(Integer, default=1)  # 1-indexed
    current_day_index = Column(Integer, default=0)  # 0 = Mon ... 6 = Sun
    last_progress_update = Column(DateTime(timezone=True), nullable=True)
    
    # Personalization and history
    overrides = Column(JSON, default=list)
    progress_log = Column(JSON, default=list)
    
    # Optimistic concurrency token, bumped on every save
    version = Column(Integer, nullable=False, default=0)
    
    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    user = relationship("User", back_populates="enrollments")
    
    def __repr__(self):
        return f"<Enrollment {self.user_id}/{self.plan_id} - week {self.current_week}, day {self.current_day_index}>"
