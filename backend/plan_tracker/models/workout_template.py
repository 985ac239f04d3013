"""Workout template model (read-only catalog data)."""

from sqlalchemy import Column, String, Text, DateTime, JSON
from datetime import datetime

from plan_tracker.database import Base


class WorkoutTemplate(Base):
    """A reusable workout referenced from plan days."""
    
    __tablename__ = "workout_templates"
    
    id = Column(String(128), primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    sport = Column(String(50), nullable=True)
    category = Column(String(50), nullable=True)
    description = Column(Text, nullable=True)
    difficulty = Column(String(20), default="beginner")  # beginner, intermediate, advanced
    tags = Column(JSON, default=list)
    
    # Targets
    metrics = Column(JSON, default=dict)
    # Example: {"distance_miles": 3.0, "duration_mins": null}
    
    # Exercise structure
    structure = Column(JSON, default=list)
    # Example: [{"exercise_id": "push-up", "sets": 3, "reps": 12, "rest_seconds": 60}]
    
    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    def __repr__(self):
        return f"<WorkoutTemplate {self.id}: {self.name}>"
