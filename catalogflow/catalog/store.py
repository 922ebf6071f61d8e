"""
Read-only course catalog.

The search service never talks to the database directly; it asks a
catalog for the published courses matching the active filters.  The
in-memory implementation here serves the CLI and the tests from a
loaded export.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .filters import filter_courses
from .schema import CourseRecord


class InMemoryCatalog:
    """Catalog backed by a list of course records."""

    def __init__(self, courses: Iterable[CourseRecord]) -> None:
        self._courses: List[CourseRecord] = list(courses)

    def __len__(self) -> int:
        return len(self._courses)

    def find(self, filters: Optional[Dict[str, object]] = None) -> List[CourseRecord]:
        return filter_courses(self._courses, filters)
