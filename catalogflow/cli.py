"""
Command line interface for the course catalog search.

This module exposes subcommands to run the AI-assisted search over a
course export, to inspect how a phrase is expanded by the configured
LLM provider and to print a human‑readable report from a saved search
response.  The CLI is intentionally lightweight and delegates most of
the work to the `catalog` and `search` packages.

Provider selection follows `get_default_provider`: ``LLM_PROVIDER`` and
the API key variables, which may also come from a ``.env`` file.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Dict, List

from dotenv import load_dotenv

from .catalog.loader import load_courses
from .catalog.store import InMemoryCatalog
from .config import load_settings
from .search.expander import QueryExpander
from .search.service import CourseSearch

logger = logging.getLogger("catalogflow.cli")


def _filters_from_args(args: argparse.Namespace) -> Dict[str, object]:
    filters: Dict[str, object] = {}
    for key in ("empresa", "tipo", "categoria", "segmento"):
        value = getattr(args, key, None)
        if value:
            filters[key] = value
    return filters


def _print_report(response: Dict[str, object], limit: int) -> None:
    query = response["query"]
    meta = response["meta"]
    print(f"Query: {query['original']}")
    print(f"Intent: {query['intent']}")
    if query.get("categories"):
        print(f"Target roles: {', '.join(query['categories'])}")
    if query.get("usedFallback"):
        print("(AI expansion unavailable; local fallback used)")
    print(f"Found {meta['totalFound']} of {meta['totalSearched']} courses\n")
    for i, row in enumerate(response["results"][:limit]):
        print(f"{i+1:02d}. {row['titulo']} [{row.get('empresa') or '-'}] – {row['score']:.1f}")
        if row.get("matchedTerms"):
            print(f"   Matched: {', '.join(row['matchedTerms'])}")
    print()


def cmd_search(args: argparse.Namespace) -> None:
    """Search a course export and print or save the response."""
    settings = load_settings(args.config)
    catalog = InMemoryCatalog(load_courses(args.courses))
    search = CourseSearch(catalog, QueryExpander(), settings=settings)
    response = search.search(args.query, _filters_from_args(args)).to_dict()
    if args.out:
        # YAML exports may carry dates in extra columns
        payload = json.dumps(response, ensure_ascii=False, indent=2, default=str)
        with open(args.out, "w", encoding="utf-8") as f:
            f.write(payload)
        logger.info("Wrote %d results to %s", response["meta"]["totalFound"], args.out)
    else:
        _print_report(response, args.limit)


def cmd_expand(args: argparse.Namespace) -> None:
    """Print the expansion of a phrase as JSON."""
    load_settings(args.config)
    expansion = QueryExpander().expand(args.query)
    print(json.dumps(expansion.to_dict(), ensure_ascii=False, indent=2))


def cmd_report(args: argparse.Namespace) -> None:
    """Print a simple report from a saved search response."""
    with open(args.results, "r", encoding="utf-8") as f:
        response = json.load(f)
    _print_report(response, args.limit)


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="catalogflow", description="Course catalog AI search")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Search
    search_cmd = subparsers.add_parser("search", help="Search a course export")
    search_cmd.add_argument("--courses", required=True, help="Path to courses JSON or YAML export")
    search_cmd.add_argument("--query", required=True, help="Search phrase")
    search_cmd.add_argument("--empresa", help="Only courses from this company")
    search_cmd.add_argument("--tipo", help="Only courses of this type")
    search_cmd.add_argument("--categoria", help="Only courses in this category")
    search_cmd.add_argument("--segmento", help="Only courses in this segment")
    search_cmd.add_argument("--config", default="config.yaml", help="YAML config file")
    search_cmd.add_argument("--limit", type=int, default=20, help="Number of results to display")
    search_cmd.add_argument("--out", help="Write the JSON response to this path instead of printing")
    search_cmd.set_defaults(func=cmd_search)

    # Expand
    expand_cmd = subparsers.add_parser("expand", help="Show how a phrase is expanded")
    expand_cmd.add_argument("--query", required=True, help="Search phrase")
    expand_cmd.add_argument("--config", default="config.yaml", help="YAML config file")
    expand_cmd.set_defaults(func=cmd_expand)

    # Report
    report_cmd = subparsers.add_parser("report", help="Print a report from a saved search response")
    report_cmd.add_argument("--results", required=True, help="Path to search response JSON")
    report_cmd.add_argument("--limit", type=int, default=20, help="Number of results to display")
    report_cmd.set_defaults(func=cmd_report)

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    load_dotenv()
    args.func(args)


if __name__ == "__main__":
    main(sys.argv[1:])
