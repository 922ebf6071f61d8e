"""
Course export loader.

The catalog store can export its course table as JSON or YAML.  This
module reads such an export and turns each row into a `CourseRecord`.
Both a bare list of rows and an object with a ``courses`` list are
accepted, which covers the seed file format and the admin export.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List

import yaml  # type: ignore

from .schema import CourseRecord

logger = logging.getLogger(__name__)


def _read_rows(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            try:
                return yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
        try:
            return json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {path}: {exc}") from exc


def load_courses(path: str) -> List[CourseRecord]:
    """Load course records from a JSON or YAML export.

    Args:
        path: Path to the export file.

    Returns:
        A list of `CourseRecord` objects in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a list of course rows.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Course export not found: {file_path}")
    data = _read_rows(file_path)
    if isinstance(data, dict):
        data = data.get("courses")
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of courses in {file_path}")
    courses = [CourseRecord.from_dict(row) for row in data]
    logger.info("Loaded %d courses from %s", len(courses), file_path)
    return courses
