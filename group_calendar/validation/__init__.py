from .collection import check_collection, CollectionViolation
from .report import availability_summary, generate_report, schedule_frame

__all__ = [
    "check_collection", "CollectionViolation",
    "availability_summary", "generate_report", "schedule_frame",
]
