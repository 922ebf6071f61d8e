"""
Text normalization and course text extraction.

Every comparison in the scorer runs on normalized text: accents are
stripped, case is folded and whitespace is collapsed.  The same
`normalize_text` must be applied to course text, expanded terms and
target roles, otherwise scores are not comparable across courses.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Any, Iterable, List

from ..catalog.schema import CourseRecord

_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: Any) -> str:
    """Lowercase, strip diacritics and collapse whitespace.

    >>> normalize_text("  Pregão   Eletrônico ")
    'pregao eletronico'
    """
    if text is None or text == "":
        return ""
    decomposed = unicodedata.normalize("NFD", str(text))
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _WHITESPACE.sub(" ", stripped.lower()).strip()


def _join(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value if v is not None)
    return str(value) if value else ""


def _program_text(program: Iterable[Any]) -> str:
    sections: List[str] = []
    for section in program:
        if isinstance(section, dict):
            sections.append(
                f"{section.get('title') or ''} {section.get('description') or ''} {_join(section.get('topics'))}"
            )
        elif section:
            sections.append(str(section))
    return " ".join(sections)


def extract_course_text(course: CourseRecord) -> str:
    """Return the normalized searchable text of a course.

    Speakers and teachers are not part of the searchable text.
    """
    parts = [
        course.title,
        course.title_complement,
        course.category,
        course.segment,
        _join(course.extra_segments),
        _join(course.tags),
        _join(course.badges),
        course.summary,
        course.description,
        course.presentation,
        course.methodology,
        _program_text(course.program),
        _join(course.objectives),
        _join(course.learnings),
        _join(course.reasons_to_attend),
        _join(course.advantages),
        _join(course.online_advantages),
        _join(course.audience),
        " ".join(_join(v) for v in course.custom_fields.values()),
    ]
    return normalize_text(" ".join(str(p) for p in parts if p))


def audience_text(course: CourseRecord) -> str:
    """Return the normalized target audience description."""
    return normalize_text(_join(course.audience))
