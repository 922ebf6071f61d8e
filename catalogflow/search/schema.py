"""
Search result schema.

Dataclasses exchanged between the search stages.  `ExpandedQuery` is
what the expander produces from the user's phrase; `ScoredCourse`
pairs a course with its relevance score for one response; and
`SearchResponse` is the value the service returns and caches.  The
``to_dict`` methods produce the camelCase wire format the catalog
frontend consumes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from ..catalog.schema import CourseRecord


@dataclass(frozen=True)
class ExpandedQuery:
    """Result of expanding a search phrase."""

    expanded_terms: Tuple[str, ...]
    intent: str
    target_roles: Tuple[str, ...] = ()
    used_fallback: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "expandedTerms": list(self.expanded_terms),
            "intent": self.intent,
            "targetRoles": list(self.target_roles),
            "usedFallback": self.used_fallback,
        }


@dataclass
class ScoredCourse:
    """A course with its score for one search."""

    course: CourseRecord
    score: float
    matched_terms: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        d = self.course.to_dict()
        d["score"] = self.score
        d["matchedTerms"] = list(self.matched_terms)
        return d


@dataclass
class SearchResponse:
    """Ranked results plus the query context they were computed for."""

    query: str
    expansion: ExpandedQuery
    results: List[ScoredCourse]
    total_searched: int

    @property
    def total_found(self) -> int:
        return len(self.results)

    @property
    def max_score(self) -> float:
        return self.results[0].score if self.results else 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query": {
                "original": self.query,
                "intent": self.expansion.intent,
                "categories": list(self.expansion.target_roles),
                "usedFallback": self.expansion.used_fallback,
            },
            "results": [r.to_dict() for r in self.results],
            "meta": {
                "totalFound": self.total_found,
                "totalSearched": self.total_searched,
                "maxScore": self.max_score,
            },
        }
