"""
Search Service Module
End-to-end search over a catalog snapshot.
"""

from .search_service import (
    SearchRequest,
    SearchResponse,
    SearchService,
    SortField,
    SortOrder,
    sort_results,
)

__all__ = [
    "SearchRequest",
    "SearchResponse",
    "SearchService",
    "SortField",
    "SortOrder",
    "sort_results",
]
