"""Tests for relevance scoring and ranking."""

from __future__ import annotations

import pytest

from catalogflow.catalog.schema import CourseRecord
from catalogflow.config import SearchSettings
from catalogflow.search.schema import ExpandedQuery
from catalogflow.search.scorer import importance_weight, matched_terms, rank_courses, score_course
from catalogflow.search.text import extract_course_text


def _course(**fields) -> CourseRecord:
    row = {"id": fields.pop("id", "1"), "status": "published"}
    row.update(fields)
    return CourseRecord.from_dict(row)


def _score(course: CourseRecord, expansion: ExpandedQuery, settings: SearchSettings | None = None) -> float:
    return score_course(course, extract_course_text(course), expansion, settings)


def test_importance_weight_decreases_towards_one() -> None:
    weights = [importance_weight(i) for i in range(50)]
    assert weights[0] == 2
    assert weights[1] == 1.5
    assert all(a > b for a, b in zip(weights, weights[1:]))
    assert all(w > 1 for w in weights)


def test_full_term_and_word_bonus() -> None:
    course = _course(titulo="Pregão Eletrônico: Licitação e Contratos")
    expansion = ExpandedQuery(expanded_terms=("licitação",), intent="")
    # 15 * 2 for the full term plus 5 * 2 for the word token
    assert _score(course, expansion) == pytest.approx(40)


def test_diacritic_query_matches_course_title() -> None:
    course = _course(titulo="Pregão Eletrônico: Licitação e Contratos")
    expansion = ExpandedQuery(expanded_terms=("licitação", "licitação"), intent="licitação", used_fallback=True)
    text = extract_course_text(course)
    assert "licitacao" in text
    assert _score(course, expansion) >= 15 * importance_weight(0)
    assert [s.course.course_id for s in rank_courses([course], expansion)] == ["1"]


def test_short_words_only_count_when_allow_listed() -> None:
    course = _course(titulo="Auditoria do TCU em contratos de TI e de RH")
    # "do" and "em" are short and not acronyms
    expansion = ExpandedQuery(expanded_terms=("xx do em",), intent="")
    assert _score(course, expansion) == 0
    expansion = ExpandedQuery(expanded_terms=("zz ti rh",), intent="")
    assert _score(course, expansion) == pytest.approx(5 * 2 * 2)
    custom = SearchSettings(acronyms=frozenset({"ti"}))
    assert _score(course, expansion, custom) == pytest.approx(5 * 2)


def test_role_bonus_added_once_per_matching_role() -> None:
    course = _course(titulo="Curso", publico_alvo=["Pregoeiros, equipes de apoio"])
    without_roles = ExpandedQuery(expanded_terms=("curso",), intent="")
    with_roles = ExpandedQuery(expanded_terms=("curso",), intent="", target_roles=("pregoeiro", "contador"))
    assert _score(course, with_roles) - _score(course, without_roles) == pytest.approx(20)


def test_role_only_matches_audience_text() -> None:
    course = _course(titulo="Formação de pregoeiro", publico_alvo=["Gestores"])
    expansion = ExpandedQuery(expanded_terms=("zzz",), intent="", target_roles=("pregoeiro",))
    assert _score(course, expansion) == 0


def test_blank_terms_and_roles_score_nothing() -> None:
    course = _course(titulo="Compliance", publico_alvo=["Auditores"])
    expansion = ExpandedQuery(expanded_terms=("   ",), intent="", target_roles=("",))
    assert _score(course, expansion) == 0


def test_score_is_non_negative_and_monotonic() -> None:
    expansion = ExpandedQuery(expanded_terms=("compliance", "integridade", "tcu"), intent="")
    base = _course(titulo="Programa de compliance")
    richer = _course(titulo="Programa de compliance", tags=["integridade"])
    richest = _course(titulo="Programa de compliance", tags=["integridade", "TCU"])
    scores = [_score(c, expansion) for c in (base, richer, richest)]
    assert all(s >= 0 for s in scores)
    assert scores[0] <= scores[1] <= scores[2]


def test_rank_courses_thresholds_and_sorts(courses) -> None:
    expansion = ExpandedQuery(expanded_terms=("pregão eletrônico", "contratação direta"), intent="")
    ranked = rank_courses(courses, expansion)
    assert [r.course.course_id for r in ranked] == ["3", "1"]
    assert all(r.score >= 10 for r in ranked)
    assert ranked[0].score >= ranked[1].score
    assert ranked[0].matched_terms == ["pregão eletrônico"]


def test_rank_courses_drops_scores_below_threshold() -> None:
    weak = _course(id="a", titulo="Introdução aos contratos")
    expansion = ExpandedQuery(expanded_terms=("zzz", "yyy", "xxx", "contratos"), intent="")
    # Only the fourth term matches: 15 * 1.25 + 5 * 1.25 = 25
    assert [r.course.course_id for r in rank_courses([weak], expansion)] == ["a"]
    strict = SearchSettings(min_score=30)
    assert rank_courses([weak], expansion, strict) == []


def test_rank_courses_keeps_catalog_order_on_ties() -> None:
    first = _course(id="a", titulo="Compliance")
    second = _course(id="b", titulo="Compliance")
    expansion = ExpandedQuery(expanded_terms=("compliance",), intent="")
    assert [r.course.course_id for r in rank_courses([first, second], expansion)] == ["a", "b"]
    assert [r.course.course_id for r in rank_courses([second, first], expansion)] == ["b", "a"]


def test_matched_terms_limit() -> None:
    text = "licitacao pregao contrato dispensa"
    expansion = ExpandedQuery(expanded_terms=("Licitação", "Pregão", "Contrato", "Dispensa"), intent="")
    assert matched_terms(text, expansion) == ["Licitação", "Pregão", "Contrato"]
    assert matched_terms(text, expansion, limit=1) == ["Licitação"]
