"""Pydantic schemas for catalog data, enrollments and workout logs."""

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator
from typing import Annotated, Dict, List, Literal, Optional, Union
from datetime import datetime
from enum import Enum

from plan_tracker.date_utils import as_utc


UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class DayOfWeek(str, Enum):
    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"
    SUN = "Sun"

    @property
    def index(self) -> int:
        """0 for Mon through 6 for Sun."""
        return list(DayOfWeek).index(self)

    @classmethod
    def from_index(cls, index: int) -> "DayOfWeek":
        return list(cls)[index]


class LogStatus(str, Enum):
    COMPLETED = "completed"
    SKIPPED = "skipped"
    MISSED = "missed"


class DayStatus(str, Enum):
    COMPLETED = "completed"
    SKIPPED = "skipped"
    MISSED = "missed"
    CURRENT = "current"
    UPCOMING = "upcoming"


# ============== Catalog Schemas ==============

class PlanDay(BaseModel):
    day_of_week: DayOfWeek
    workout_template_id: str

    model_config = ConfigDict(from_attributes=True)


class PlanWeek(BaseModel):
    week_number: int = Field(..., ge=1)
    days: List[PlanDay] = []

    model_config = ConfigDict(from_attributes=True)


class PlanTemplate(BaseModel):
    """Immutable multi-week plan template from the catalog."""
    id: str
    name: str = ""
    sport: Optional[str] = None
    level: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = []
    duration_weeks: int = Field(..., ge=1)
    weeks: List[PlanWeek] = []

    model_config = ConfigDict(from_attributes=True)

    def find_day(self, week_number: int, day_of_week: DayOfWeek) -> Optional[PlanDay]:
        for week in self.weeks:
            if week.week_number != week_number:
                continue
            for day in week.days:
                if day.day_of_week == day_of_week:
                    return day
        return None


class WorkoutMetrics(BaseModel):
    distance_miles: Optional[float] = None
    duration_mins: Optional[float] = None


class WorkoutStructureItem(BaseModel):
    exercise_id: str
    sets: Optional[int] = None
    reps: Optional[int] = None
    duration_mins: Optional[float] = None
    duration_secs: Optional[int] = None
    rest_seconds: Optional[int] = None
    notes: Optional[str] = None


class WorkoutTemplate(BaseModel):
    id: str
    name: str = ""
    sport: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    difficulty: str = "beginner"
    tags: List[str] = []
    metrics: WorkoutMetrics = Field(default_factory=WorkoutMetrics)
    structure: List[WorkoutStructureItem] = []

    model_config = ConfigDict(from_attributes=True)


class ExerciseRecord(BaseModel):
    id: str
    name: str
    type: str = "drill"
    category: Optional[str] = None
    sport: Optional[str] = None
    focus: List[str] = []
    difficulty: Optional[str] = None
    equipment: List[str] = []
    description: Optional[str] = None
    instructions: Optional[str] = None
    duration_minutes: Optional[float] = None
    tags: List[str] = []

    model_config = ConfigDict(from_attributes=True)


# ============== Override Schemas ==============

class Override(BaseModel):
    """User substitution of the plan's workout for one week/day slot."""
    week_number: int = Field(..., ge=1)
    day_of_week: DayOfWeek
    custom_workout_id: str = Field(..., min_length=1)

    @property
    def slot(self) -> tuple:
        return (self.week_number, self.day_of_week)


# ============== Completion Payloads ==============

class Distance(BaseModel):
    value: float = Field(..., gt=0)
    unit: Literal["miles", "kilometers"]


class Pace(BaseModel):
    average: float = Field(..., gt=0)
    unit: Literal["min/mile", "min/km"]


class HeartRate(BaseModel):
    average: float = Field(..., ge=0, le=300)


class StrengthSet(BaseModel):
    set_number: int = Field(..., gt=0)
    reps: int = Field(..., ge=0)
    weight: float = Field(..., ge=0)
    completed: bool


class StrengthExercise(BaseModel):
    exercise_id: str
    exercise_name: str
    sets: List[StrengthSet] = []


class StrengthSession(BaseModel):
    exercises: List[StrengthExercise]
    total_volume: float = Field(..., ge=0)
    volume_unit: Literal["kgs", "lbs"]


class DrillActivity(BaseModel):
    exercise_id: str
    name: str
    duration_minutes: Optional[float] = Field(None, ge=0)
    repetitions: Optional[int] = Field(None, ge=0)
    sets: Optional[int] = Field(None, gt=0)
    notes: Optional[str] = None
    completed: bool
    quality_rating: int = Field(..., ge=1, le=5)


class DrillSession(BaseModel):
    activities: List[DrillActivity]
    custom_metrics: Optional[Dict[str, Union[float, str]]] = None


class _CompletionBase(BaseModel):
    duration_minutes: float = Field(..., ge=0, le=1440)
    sport: Optional[str] = None
    perceived_effort: Optional[int] = Field(None, ge=1, le=10)
    heart_rate: Optional[HeartRate] = None


class EnduranceCompletion(_CompletionBase):
    """Running, cycling, swimming: distance-based work."""
    activity_type: Literal["endurance"] = "endurance"
    distance: Distance
    pace: Optional[Pace] = None


class StrengthCompletion(_CompletionBase):
    activity_type: Literal["strength"] = "strength"
    strength_session: StrengthSession


class DrillCompletion(_CompletionBase):
    """Sport-specific drills (soccer, basketball, ...)."""
    activity_type: Literal["drill"] = "drill"
    drill_session: DrillSession


Completion = Annotated[
    Union[EnduranceCompletion, StrengthCompletion, DrillCompletion],
    Field(discriminator="activity_type"),
]


# ============== Workout Log Schemas ==============

class _LogFields(BaseModel):
    date: UtcDatetime
    workout_template_id: str = Field(..., min_length=1)
    status: LogStatus
    notes: Optional[str] = None
    completion: Optional[Completion] = None

    @model_validator(mode="after")
    def _completion_only_when_completed(self):
        if self.status != LogStatus.COMPLETED and self.completion is not None:
            raise ValueError("completion data is only allowed when status is 'completed'")
        return self


class WorkoutLogInput(_LogFields):
    """Payload for creating or updating a workout log."""
    pass


class WorkoutLog(_LogFields):
    """Record of what actually happened on a given day."""
    id: str


# ============== Enrollment Schemas ==============

class Enrollment(BaseModel):
    """A user's live progress state against one plan template."""
    user_id: str
    plan_id: str
    plan_name: str = ""
    total_weeks: int = Field(..., ge=1)

    started_at: UtcDatetime
    completed_at: Optional[UtcDatetime] = None
    current_week: int = Field(1, ge=1)
    current_day_index: int = Field(0, ge=0, le=6)
    is_active: bool = True

    overrides: List[Override] = []
    progress_log: List[WorkoutLog] = []

    last_progress_update: Optional[UtcDatetime] = None
    version: int = 0

    model_config = ConfigDict(from_attributes=True)

    @property
    def cursor(self) -> tuple:
        return (self.current_week, self.current_day_index)

    def find_log_index(self, log_id: str) -> Optional[int]:
        for index, log in enumerate(self.progress_log):
            if log.id == log_id:
                return index
        return None


class UserStats(BaseModel):
    """Aggregate counters cached on the user."""
    user_id: str
    total_workouts_completed: int = Field(0, ge=0)
    current_streak: int = Field(0, ge=0)
    longest_streak: int = Field(0, ge=0)
    last_workout_date: Optional[UtcDatetime] = None

    model_config = ConfigDict(from_attributes=True)


class StreakStats(BaseModel):
    current_streak: int = 0
    longest_streak: int = 0
    last_workout_date: Optional[UtcDatetime] = None


class LogMutation(BaseModel):
    """Result of a log create/update: the new enrollment, stats and log."""
    enrollment: Enrollment
    stats: UserStats
    log: WorkoutLog


# ============== Enriched Schemas ==============

class EnrichedStructureItem(WorkoutStructureItem):
    exercise: Optional[ExerciseRecord] = None


class EnrichedWorkoutTemplate(WorkoutTemplate):
    structure: List[EnrichedStructureItem] = []


class EnrichedPlanDay(PlanDay):
    workout_details: Optional[EnrichedWorkoutTemplate] = None
    status: Optional[DayStatus] = None


class EnrichedPlanWeek(BaseModel):
    week_number: int
    days: List[EnrichedPlanDay] = []


class EnrichedTrainingPlan(BaseModel):
    id: str
    name: str = ""
    sport: Optional[str] = None
    level: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = []
    duration_weeks: int
    weeks: List[EnrichedPlanWeek] = []


class PlanTotals(BaseModel):
    total_active_minutes: float = 0
    average_workout_duration: float = 0
    total_distance_miles: float = 0
    total_weight_lifted: float = 0  # kgs


class EnrichedUserPlanProgress(EnrichedTrainingPlan):
    """Enriched plan overlaid with one enrollment's live progress."""
    started_at: UtcDatetime
    completed_at: Optional[UtcDatetime] = None
    current_week: int
    current_day_index: int
    is_active: bool
    overrides: List[Override] = []
    progress_log: List[WorkoutLog] = []
    totals: PlanTotals = Field(default_factory=PlanTotals)


class UserDashboard(BaseModel):
    stats: UserStats
    training_plans: List[EnrichedUserPlanProgress] = []
