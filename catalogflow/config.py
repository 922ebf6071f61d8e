"""
Configuration loading.

Settings live in a YAML file with two sections:

* ``search`` – scoring constants, the acronym allow‑list and the
  cache limits.  Parsed into `SearchSettings`.
* ``llm`` – provider preferences.  These are exported as environment
  defaults (``LLM_PROVIDER``, ``GEMINI_MODEL``, ``OPENAI_MODEL``) so
  that the provider factory picks them up; variables that are
  already set win over the file.

API keys are never read from the YAML file; they come from the
environment (optionally through a ``.env`` file loaded by the CLI).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional

import yaml  # type: ignore

logger = logging.getLogger(__name__)

# Short institutional abbreviations that still count as words.
DEFAULT_ACRONYMS: FrozenSet[str] = frozenset({"tcu", "agu", "stf", "rh", "ti"})

LLM_ENV_KEYS = {
    "provider": "LLM_PROVIDER",
    "gemini_model": "GEMINI_MODEL",
    "openai_model": "OPENAI_MODEL",
}


def _acronym_set(value: Any) -> FrozenSet[str]:
    """Normalize the configured acronyms the same way course words are."""
    from .search.text import normalize_text

    if value is None:
        return frozenset()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple, set, frozenset)):
        raise ValueError(f"acronyms must be a list, got {type(value).__name__}")
    return frozenset(filter(None, (normalize_text(a) for a in value)))


@dataclass
class SearchSettings:
    """Tunable constants of the course search."""

    min_score: float = 10.0
    full_term_bonus: float = 15.0
    word_bonus: float = 5.0
    role_bonus: float = 20.0
    min_word_length: int = 3
    acronyms: FrozenSet[str] = field(default_factory=lambda: DEFAULT_ACRONYMS)
    matched_terms_limit: int = 3
    cache_ttl_hours: float = 24.0
    cache_max_entries: int = 1000

    @property
    def cache_ttl_seconds(self) -> float:
        return self.cache_ttl_hours * 3600

    @classmethod
    def from_mapping(cls, section: Optional[Dict[str, Any]]) -> "SearchSettings":
        section = dict(section or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(section) - known)
        if unknown:
            raise ValueError(f"Unknown search settings: {', '.join(unknown)}")
        if "acronyms" in section:
            section["acronyms"] = _acronym_set(section["acronyms"])
        settings = cls(**section)
        if settings.cache_max_entries < 1:
            raise ValueError("cache_max_entries must be at least 1")
        if settings.cache_ttl_hours <= 0:
            raise ValueError("cache_ttl_hours must be positive")
        return settings


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Read the YAML config file; a missing file yields an empty config."""
    if not config_path:
        return {}
    path = Path(config_path)
    if not path.exists():
        logger.info("Config file %s not found; using defaults", path)
        return {}
    with open(path, "r", encoding="utf-8") as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ValueError(f"Failed to parse YAML configuration {path}: {exc}") from exc
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"Configuration {path} must be a mapping")
    logger.info("Loaded configuration from %s", path)
    return config


def apply_llm_environment(config: Dict[str, Any]) -> None:
    """Export the ``llm`` section as environment defaults."""
    llm_config = config.get("llm") or {}
    for key, env_name in LLM_ENV_KEYS.items():
        if key in llm_config and not os.getenv(env_name):
            os.environ[env_name] = str(llm_config[key])


def load_settings(config_path: Optional[str]) -> SearchSettings:
    config = load_config(config_path)
    apply_llm_environment(config)
    return SearchSettings.from_mapping(config.get("search"))
