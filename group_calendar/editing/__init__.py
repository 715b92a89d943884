from .toggle import toggle_day
from .bulk import bulk_apply, normalize_day_filter
from .cursor import ViewCursor

__all__ = ["toggle_day", "bulk_apply", "normalize_day_filter", "ViewCursor"]
