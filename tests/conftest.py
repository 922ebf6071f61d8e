"""Shared fixtures for the catalogflow tests."""

from __future__ import annotations

import json
from typing import Dict, List

import pytest

from catalogflow.catalog.schema import CourseRecord
from catalogflow.search.llm_providers import LLMProvider


COURSE_ROWS: List[Dict[str, object]] = [
    {
        "id": "1",
        "titulo": "Contratação Direta: Dispensa e Inexigibilidade",
        "empresa": "JML",
        "tipo": "ead",
        "segmento": "Estatais",
        "categoria": "Estatais",
        "tags": ["contratação direta", "dispensa", "inexigibilidade"],
        "summary": "Entenda quando e como contratar sem licitar.",
        "publico_alvo": ["Gestores de contratos", "pregoeiros", "agentes de contratação"],
        "status": "published",
    },
    {
        "id": "3",
        "titulo": "Pregão Eletrônico: Licitação e Contratos",
        "empresa": "Conecta",
        "tipo": "aberto",
        "segmento": "Sistema S",
        "categoria": "Sistema S",
        "tags": ["pregão eletrônico", "termo de referência"],
        "summary": "Domine todas as fases do pregão eletrônico.",
        "publico_alvo": ["Pregoeiros, equipes de apoio"],
        "status": "published",
    },
    {
        "id": "9",
        "titulo": "Compliance e Integridade nas Estatais",
        "empresa": "JML",
        "tipo": "incompany",
        "segmento": "Estatais",
        "categoria": "Estatais",
        "tags": ["compliance", "integridade", "lei anticorrupção"],
        "summary": "Programas de integridade alinhados às orientações do TCU.",
        "publico_alvo": ["Auditores", "Controladores internos"],
        "status": "published",
    },
    {
        "id": "12",
        "titulo": "Rascunho de Curso de Licitação",
        "empresa": "JML",
        "tipo": "ead",
        "status": "draft",
    },
]


class FakeProvider(LLMProvider):
    """Provider returning a canned reply and counting calls."""

    def __init__(self, reply: str = "", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: List[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


def expansion_reply(terms, intent: str = "need", roles=None, fenced: bool = False) -> str:
    body = json.dumps(
        {"expandedTerms": list(terms), "intent": intent, "targetRoles": list(roles or [])},
        ensure_ascii=False,
    )
    return f"```json\n{body}\n```" if fenced else body


@pytest.fixture
def course_rows() -> List[Dict[str, object]]:
    return [dict(row) for row in COURSE_ROWS]


@pytest.fixture
def courses(course_rows) -> List[CourseRecord]:
    return [CourseRecord.from_dict(row) for row in course_rows]


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
