"""Training plan template model (read-only catalog data)."""

from sqlalchemy import Column, Integer, String, Text, DateTime, JSON
from datetime import datetime

from plan_tracker.database import Base


class TrainingPlan(Base):
    """A multi-week plan template."""
    
    __tablename__ = "training_plans"
    
    id = Column(String(128), primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    sport = Column(String(50), nullable=True)
    level = Column(String(50), nullable=True)  # beginner, intermediate, advanced
    description = Column(Text, nullable=True)
    tags = Column(JSON, default=list)
    
    duration_weeks = Column(Integer, nullable=False)
    
    # Schedule
    weeks = Column(JSON, nullable=False, default=list)
    # Example: [{"week_number": 1, "days": [{"day_of_week": "Mon", "workout_template_id": "rest_day"}]}]
    
    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    def __repr__(self):
        return f"<TrainingPlan {self.id}: {self.name} ({self.duration_weeks} weeks)>"
