"""Error taxonomy for progress operations.

Every error here is an expected outcome returned to the caller; none of them
are retried inside the core.
"""

from typing import Any, Dict, List, Optional


class ApplicationException(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


# ============== Not found ==============

class NotFound(ApplicationException):
    pass


class EnrollmentNotFound(NotFound):
    def __init__(self, user_id: str, plan_id: str):
        super().__init__(f"User {user_id} is not enrolled in the training plan {plan_id}")
        self.user_id = user_id
        self.plan_id = plan_id


class PlanNotFound(NotFound):
    def __init__(self, plan_id: str):
        super().__init__(f"Training plan {plan_id} not found")
        self.plan_id = plan_id


class LogNotFound(NotFound):
    def __init__(self, log_id: str):
        super().__init__(f"Workout log {log_id} not found")
        self.log_id = log_id


class ScheduleSlotNotFound(NotFound):
    def __init__(self, week_number: int, day_of_week: str):
        super().__init__(f"No scheduled day for week {week_number}, {day_of_week}")
        self.week_number = week_number
        self.day_of_week = day_of_week


# ============== Conflicts ==============

class Conflict(ApplicationException):
    pass


class EnrollmentConflict(Conflict):
    def __init__(self, user_id: str, plan_id: str):
        super().__init__(f"User {user_id} is already enrolled in the training plan {plan_id}")
        self.user_id = user_id
        self.plan_id = plan_id


class ConcurrentModification(Conflict):
    """The enrollment changed underneath a read-modify-write."""

    def __init__(self, user_id: str, plan_id: str, expected_version: int):
        super().__init__(
            f"Enrollment {user_id}/{plan_id} was modified concurrently "
            f"(expected version {expected_version})"
        )
        self.user_id = user_id
        self.plan_id = plan_id
        self.expected_version = expected_version


# ============== Validation ==============

class ValidationError(ApplicationException):
    def __init__(self, message: str, details: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.details = details or []

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "details": self.details}


class PastWeekOverrideRejected(ApplicationException):
    def __init__(self, current_week: int, invalid_overrides: list):
        super().__init__("Cannot modify overrides for past weeks")
        self.current_week = current_week
        self.invalid_overrides = invalid_overrides

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "current_week": self.current_week,
            "invalid_overrides": [o.model_dump(mode="json") for o in self.invalid_overrides],
        }
