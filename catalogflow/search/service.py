"""
Cached course search.

`CourseSearch` wires the stages together: derive the cache key, serve
a cached response when one is fresh, otherwise expand the query, read
the filtered catalog, rank the courses and cache the response.  The
cache is passed in by the host so its lifetime follows the
application rather than the module.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Protocol

from ..catalog.filters import clean_filters
from ..catalog.schema import CourseRecord
from ..config import SearchSettings
from .cache import SearchCache, make_cache_key
from .expander import QueryExpander
from .schema import SearchResponse
from .scorer import rank_courses

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


class CourseSource(Protocol):
    def find(self, filters: Optional[Dict[str, object]] = None) -> Iterable[CourseRecord]:
        ...


class CourseSearch:
    """AI-assisted course search with response caching."""

    def __init__(
        self,
        catalog: CourseSource,
        expander: QueryExpander,
        cache: Optional[SearchCache] = None,
        settings: Optional[SearchSettings] = None,
    ) -> None:
        self.catalog = catalog
        self.expander = expander
        self.settings = settings or SearchSettings()
        if cache is None:
            cache = SearchCache(
                ttl_seconds=self.settings.cache_ttl_seconds,
                max_entries=self.settings.cache_max_entries,
            )
        self.cache = cache

    def search(self, query: str, filters: Optional[Dict[str, object]] = None) -> SearchResponse:
        """Run a search, serving it from the cache when possible.

        Args:
            query: Raw phrase typed by the user.
            filters: Optional `empresa`, `tipo`, `categoria` and
                `segmento` restrictions.

        Returns:
            The ranked `SearchResponse`.

        Raises:
            ValueError: If the query is shorter than two characters or
                a filter key is unsupported.
        """
        if not query or len(query.strip()) < MIN_QUERY_LENGTH:
            raise ValueError("Query must have at least 2 characters")
        active = clean_filters(filters)
        key = make_cache_key(query, active)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info("Cache hit for %r", query)
            return cached

        logger.info("Expanding new search for %r", query)
        expansion = self.expander.expand(query)
        try:
            courses = list(self.catalog.find(active))
            results = rank_courses(courses, expansion, self.settings)
        except Exception:
            logger.exception("Course search failed for %r", query)
            raise
        response = SearchResponse(
            query=query,
            expansion=expansion,
            results=results,
            total_searched=len(courses),
        )
        logger.info(
            "Search %r matched %d of %d courses", query, response.total_found, response.total_searched
        )
        self.cache.put(key, response)
        return response
