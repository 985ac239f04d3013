"""SQLAlchemy-backed catalog store."""

from sqlalchemy.orm import Session
from typing import List, Sequence

from plan_tracker.models import Exercise, TrainingPlan, WorkoutTemplate
from plan_tracker.schemas import (
    ExerciseRecord,
    PlanTemplate,
    WorkoutTemplate as WorkoutTemplateSchema,
)


class CatalogRepository:
    """Batch lookups of plans, workout templates and exercises by id."""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_plan_templates(self, ids: Sequence[str]) -> List[PlanTemplate]:
        ids = list(dict.fromkeys(ids))
        if not ids:
            return []
        
        plans = self.db.query(TrainingPlan).filter(TrainingPlan.id.in_(ids)).all()
        
        return [
            PlanTemplate(
                id=p.id,
                name=p.name,
                sport=p.sport,
                level=p.level,
                description=p.description,
                tags=p.tags or [],
                duration_weeks=p.duration_weeks,
                weeks=p.weeks or [],
            )
            for p in plans
        ]
    
    def get_workout_templates(self, ids: Sequence[str]) -> List[WorkoutTemplateSchema]:
        ids = list(dict.fromkeys(ids))
        if not ids:
            return []
        
        templates = (
            self.db.query(WorkoutTemplate)
            .filter(WorkoutTemplate.id.in_(ids))
            .all()
        )
        
        return [
            WorkoutTemplateSchema(
                id=t.id,
                name=t.name,
                sport=t.sport,
                category=t.category,
                description=t.description,
                difficulty=t.difficulty or "beginner",
                tags=t.tags or [],
                metrics=t.metrics or {},
                structure=t.structure or [],
            )
            for t in templates
        ]
    
    def get_exercise_records(self, ids: Sequence[str]) -> List[ExerciseRecord]:
        ids = list(dict.fromkeys(ids))
        if not ids:
            return []
        
        exercises = self.db.query(Exercise).filter(Exercise.id.in_(ids)).all()
        
        return [
            ExerciseRecord(
                id=e.id,
                name=e.name,
                type=e.type or "drill",
                category=e.category,
                sport=e.sport,
                focus=e.focus or [],
                difficulty=e.difficulty,
                equipment=e.equipment or [],
                description=e.description,
                instructions=e.instructions,
                duration_minutes=e.duration_minutes,
                tags=e.tags or [],
            )
            for e in exercises
        ]
