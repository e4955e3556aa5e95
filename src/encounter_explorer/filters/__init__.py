"""
Filters Package - Row Filtering.

    - RowFilter: keeps rows satisfying every configured predicate
    - predicate_mask: row-wise evaluation of a single predicate
"""

from encounter_explorer.filters.row_filter import FilterError, RowFilter, predicate_mask

__all__ = [
    "RowFilter",
    "FilterError",
    "predicate_mask",
]
