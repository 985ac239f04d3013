"""Exercise model (read-only catalog data)."""

from sqlalchemy import Column, Float, String, Text, DateTime, JSON
from datetime import datetime

from plan_tracker.database import Base


class Exercise(Base):
    
    __tablename__ = "exercises"
    
    id = Column(String(128), primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    type = Column(String(20), default="drill")  # strength, stretch, drill, warmup, cooldown, conditioning
    category = Column(String(100), nullable=True)
    sport = Column(String(50), nullable=True)
    focus = Column(JSON, default=list)
    difficulty = Column(String(20), nullable=True)
    equipment = Column(JSON, default=list)
    description = Column(Text, nullable=True)
    instructions = Column(Text, nullable=True)
    duration_minutes = Column(Float, nullable=True)
    tags = Column(JSON, default=list)
    
    created_at = Column(DateTime, default=datetime.utcnow)
    
    def __repr__(self):
        return f"<Exercise {self.id}: {self.name}>"
