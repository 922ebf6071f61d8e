"""
Relevance scoring for the course search.

Each course is scored against an `ExpandedQuery`:

* every expanded term carries an importance weight ``1 + 1/(i+1)``
  that decays with its position in the list;
* a term found verbatim in the course text earns
  ``full_term_bonus × importance``;
* each word of the term found as a whole token earns
  ``word_bonus × importance``, provided the word is long enough or is
  a known acronym;
* each target role found in the course's audience text earns a flat
  ``role_bonus``.

Courses below ``min_score`` are dropped and the rest are sorted by
descending score.  All constants come from `SearchSettings`.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from ..catalog.schema import CourseRecord
from ..config import SearchSettings
from .schema import ExpandedQuery, ScoredCourse
from .text import audience_text, extract_course_text, normalize_text

logger = logging.getLogger(__name__)


def importance_weight(index: int) -> float:
    """Positional weight of the expanded term at 0‑based ``index``."""
    return 1 + 1 / (index + 1)


def _counts_as_word(word: str, settings: SearchSettings) -> bool:
    return len(word) >= settings.min_word_length or word in settings.acronyms


def score_course(
    course: CourseRecord,
    course_text: str,
    expansion: ExpandedQuery,
    settings: Optional[SearchSettings] = None,
) -> float:
    """Score one course against an expanded query.

    Args:
        course: The course being scored; only its audience is read
            here, the rest of its text comes in ``course_text``.
        course_text: Output of `extract_course_text` for the course.
        expansion: Expanded query to score against.
        settings: Scoring constants; defaults apply when omitted.

    Returns:
        A non‑negative score.  There is no upper bound.
    """
    settings = settings or SearchSettings()
    score = 0.0
    course_tokens = set(course_text.split(" "))

    for index, term in enumerate(expansion.expanded_terms):
        normalized_term = normalize_text(term)
        if not normalized_term:
            continue
        importance = importance_weight(index)
        if normalized_term in course_text:
            score += settings.full_term_bonus * importance
        for word in normalized_term.split(" "):
            if _counts_as_word(word, settings) and word in course_tokens:
                score += settings.word_bonus * importance

    if expansion.target_roles:
        audience = audience_text(course)
        for role in expansion.target_roles:
            normalized_role = normalize_text(role)
            if normalized_role and normalized_role in audience:
                score += settings.role_bonus

    return score


def matched_terms(course_text: str, expansion: ExpandedQuery, limit: int = 3) -> List[str]:
    """Return up to ``limit`` expanded terms found verbatim in the course text."""
    found: List[str] = []
    for term in expansion.expanded_terms:
        normalized_term = normalize_text(term)
        if normalized_term and normalized_term in course_text:
            found.append(term)
            if len(found) >= limit:
                break
    return found


def rank_courses(
    courses: Iterable[CourseRecord],
    expansion: ExpandedQuery,
    settings: Optional[SearchSettings] = None,
) -> List[ScoredCourse]:
    """Score, threshold and sort courses.

    Args:
        courses: Candidate courses, already filtered by the catalog.
        expansion: Expanded query to score against.
        settings: Scoring constants; defaults apply when omitted.

    Returns:
        Courses scoring at least ``min_score``, sorted by descending
        score.  Equal scores keep the candidates' order.
    """
    settings = settings or SearchSettings()
    scored: List[ScoredCourse] = []
    for course in courses:
        text = extract_course_text(course)
        score = score_course(course, text, expansion, settings)
        logger.debug("Course %s scored %.2f", course.course_id, score)
        if score < settings.min_score:
            continue
        scored.append(
            ScoredCourse(
                course=course,
                score=score,
                matched_terms=matched_terms(text, expansion, settings.matched_terms_limit),
            )
        )
    scored.sort(key=lambda x: x.score, reverse=True)
    logger.debug("Ranked %d courses above %.1f", len(scored), settings.min_score)
    return scored
