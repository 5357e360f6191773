"""Filter and sort operations over a problem dataset."""

from .collation import collation_key, use_user_collation
from .criteria import SORT_COLUMNS, CompletionMode, FilterCriteria, SortDirection
from .engine import DIFFICULTY_RANK, filter_records, matches, query, sort_key, sort_records
from .numbers import number_or_zero, parse_number
from .summary import ViewSummary, summarize_view

__all__ = [
    "SORT_COLUMNS",
    "CompletionMode",
    "DIFFICULTY_RANK",
    "FilterCriteria",
    "SortDirection",
    "ViewSummary",
    "collation_key",
    "filter_records",
    "matches",
    "number_or_zero",
    "parse_number",
    "query",
    "sort_key",
    "sort_records",
    "summarize_view",
    "use_user_collation",
]
