"""
Catalog subsystem.

This package holds the read side of the course catalog: the
`CourseRecord` dataclass mirroring the store's course table, a loader
for JSON/YAML exports, the published/company/type/segment filter and
an in-memory catalog the search service reads from.
"""

from .schema import CourseRecord  # noqa: F401
from .loader import load_courses  # noqa: F401
from .filters import filter_courses  # noqa: F401
from .store import InMemoryCatalog  # noqa: F401
