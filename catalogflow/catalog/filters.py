"""
Catalog filtering stage.

This module narrows the course collection before scoring.  Only
published courses are searchable, and the caller may restrict the
search to one company, course type, category or segment.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from .schema import CourseRecord

logger = logging.getLogger(__name__)

PUBLISHED = "published"

# Filter key -> CourseRecord attribute.
FILTER_FIELDS = {
    "empresa": "company",
    "tipo": "course_type",
    "categoria": "category",
    "segmento": "segment",
}


def clean_filters(filters: Optional[Dict[str, object]]) -> Dict[str, object]:
    """Return the active filters, dropping keys with empty values.

    Raises:
        ValueError: If a filter key is not supported.
    """
    if not filters:
        return {}
    unknown = sorted(set(filters) - set(FILTER_FIELDS))
    if unknown:
        raise ValueError(f"Unsupported course filters: {', '.join(unknown)}")
    return {key: value for key, value in filters.items() if value not in (None, "")}


def filter_courses(courses: Iterable[CourseRecord], filters: Optional[Dict[str, object]] = None) -> List[CourseRecord]:
    """Return published courses that satisfy the given filters.

    Args:
        courses: Iterable of CourseRecord objects.
        filters: Dictionary that may contain keys `empresa`, `tipo`,
            `categoria` and `segmento`.  Each present key must equal
            the course's value exactly.

    Returns:
        A list of courses that pass the filter, in input order.
    """
    active = clean_filters(filters)
    kept: List[CourseRecord] = []
    seen = 0
    for course in courses:
        seen += 1
        if course.status != PUBLISHED:
            logger.debug("Filtering out %s due to status %s", course.course_id, course.status)
            continue
        mismatch = next(
            (key for key, value in active.items() if getattr(course, FILTER_FIELDS[key]) != value),
            None,
        )
        if mismatch:
            logger.debug("Filtering out %s due to %s", course.course_id, mismatch)
            continue
        kept.append(course)
    logger.info("Filtered %d -> %d courses", seen, len(kept))
    return kept
