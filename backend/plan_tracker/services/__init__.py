"""Services package."""

from plan_tracker.services.enrichment_service import EnrichmentService
from plan_tracker.services.progress_service import ProgressService

__all__ = [
    "EnrichmentService",
    "ProgressService",
]
