"""
LLM query expansion stage.

This module turns the phrase typed by a sales consultant into an
`ExpandedQuery`: technical keywords, synonyms and acronyms related to
the request, a one‑sentence summary of the underlying need and the
job roles that usually buy such a course.  The expansion is delegated
to an LLM provider; when the provider fails or replies with something
that is not the expected JSON, the expander degrades to the raw query
and its tokens and marks the result with ``used_fallback``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

from .llm_providers import LLMProvider, get_default_provider
from .schema import ExpandedQuery

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """
Atue como um especialista em vendas de cursos corporativos e jurídicos.
Contexto: um consultor comercial está atendendo um cliente e digitou: "{query}".

Sua missão:
1. Identificar a dor ou necessidade técnica por trás do pedido.
2. Gerar palavras-chave técnicas, sinônimos, siglas (ex: TCU, AGU) e leis associadas.
3. Identificar os cargos que compram esse tipo de solução.

Retorne APENAS um JSON:
{{
  "expandedTerms": ["termo1", "termo2"],
  "intent": "Resumo da necessidade em uma frase",
  "targetRoles": ["cargo1", "cargo2"]
}}
"""


def build_prompt(query: str) -> str:
    return PROMPT_TEMPLATE.format(query=query)


def _strip_code_fences(content: str) -> str:
    return content.replace("```json", "").replace("```", "").strip()


def _clean_strings(values: Any, field_name: str) -> List[str]:
    if values is None:
        return []
    if not isinstance(values, list):
        raise ValueError(f"'{field_name}' must be a list")
    return [str(v).strip() for v in values if v is not None and str(v).strip()]


def parse_expansion(content: str, query: str) -> ExpandedQuery:
    """Parse the provider's reply into an `ExpandedQuery`.

    Raises:
        ValueError: If the reply is not a JSON object with a non‑empty
            ``expandedTerms`` list.
    """
    data = json.loads(_strip_code_fences(content))
    if not isinstance(data, dict):
        raise ValueError("Expansion reply is not a JSON object")
    terms = _clean_strings(data.get("expandedTerms"), "expandedTerms")
    if not terms:
        raise ValueError("Expansion reply has no expandedTerms")
    intent = data.get("intent")
    return ExpandedQuery(
        expanded_terms=tuple(terms),
        intent=str(intent).strip() if intent else query,
        target_roles=tuple(_clean_strings(data.get("targetRoles"), "targetRoles")),
    )


def fallback_expansion(query: str) -> ExpandedQuery:
    """Expansion used when the LLM is unavailable: the query and its words."""
    return ExpandedQuery(
        expanded_terms=tuple([query, *query.split()]),
        intent=query,
        target_roles=(),
        used_fallback=True,
    )


class QueryExpander:
    """Expand search phrases through an LLM provider."""

    def __init__(self, provider: Optional[LLMProvider] = None) -> None:
        self.provider = provider or get_default_provider()

    def expand(self, query: str) -> ExpandedQuery:
        try:
            content = self.provider.complete(build_prompt(query))
            expansion = parse_expansion(content, query)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Query expansion failed for %r, using local fallback: %s", query, exc)
            return fallback_expansion(query)
        logger.debug(
            "Expanded %r into %d terms via %s",
            query,
            len(expansion.expanded_terms),
            self.provider.__class__.__name__,
        )
        return expansion
