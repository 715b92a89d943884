from .api_client import ApiClient, ApiError, SaveResult
from .excel_reader import ExcelReader
from .excel_writer import ExcelWriter
from .schedule_store import load_schedules, save_schedules

__all__ = [
    "ApiClient", "ApiError", "SaveResult",
    "ExcelReader", "ExcelWriter",
    "load_schedules", "save_schedules",
]
