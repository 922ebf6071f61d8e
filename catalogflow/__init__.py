"""
Catalogflow package for the course catalog search.

This package contains the pieces behind the AI-assisted course search
of the catalog application: loading and filtering course records,
expanding a raw search phrase through an LLM, scoring every course
against the expansion and caching the final response.

The high‑level flow is:

1. **catalog** – Load course records exported by the catalog store
   into `CourseRecord` dataclasses and keep only the published
   courses that match the caller's filters (company, type, category,
   segment).
2. **search.expander** – Send the user's phrase to an LLM provider
   (Gemini by default) and parse the reply into an `ExpandedQuery`
   holding related terms, the inferred intent and the job roles that
   usually buy such a course.  When the provider fails the expander
   degrades to the raw query and its tokens.
3. **search.scorer** – Score each course's normalized text against the
   expanded terms and target roles, drop weak matches and sort the
   rest by score.
4. **search.cache** – Keep recent responses in memory for 24 hours so
   repeated searches do not pay for another LLM call.
5. **cli** – Command line entry point wiring together the above
   components.
"""

from importlib import metadata  # noqa: F401 (expose package version)
