"""Catalog and persistence stores."""

from plan_tracker.repositories.base import CatalogStore, EnrollmentStore
from plan_tracker.repositories.catalog_repository import CatalogRepository
from plan_tracker.repositories.enrollment_repository import EnrollmentRepository

__all__ = [
    "CatalogStore",
    "EnrollmentStore",
    "CatalogRepository",
    "EnrollmentRepository",
]
