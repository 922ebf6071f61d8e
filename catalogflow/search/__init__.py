"""
Search subsystem for the course catalog.

The `search` package combines the stages of the AI-assisted search:

* `expander` – Calls an LLM provider to expand the user's phrase into
  related terms, an intent and target roles, with a local fallback.
* `scorer` – Scores each course's normalized text against the
  expansion, drops weak matches and sorts by score.
* `cache` – Keeps responses for 24 hours, evicting the oldest entry
  when full.
* `service` – `CourseSearch`, which runs the stages behind the cache.
"""

from .cache import SearchCache, make_cache_key  # noqa: F401
from .expander import QueryExpander  # noqa: F401
from .schema import ExpandedQuery, ScoredCourse, SearchResponse  # noqa: F401
from .scorer import rank_courses, score_course  # noqa: F401
from .service import CourseSearch  # noqa: F401
