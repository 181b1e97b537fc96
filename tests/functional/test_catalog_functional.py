"""Functional tests for the question catalog."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from frd_wizard.logic.catalog import CatalogError, FRD_QUESTIONS, QuestionCatalog, default_catalog
from frd_wizard.models.conversation import ANSWER_COLUMNS
from frd_wizard.models.question import QuestionDefinition
from frd_wizard.models.question_kind import AnswerType


def test_default_catalog_order_and_flags():
    catalog = default_catalog()
    assert len(catalog) == 16
    assert catalog[0].field == "product_name"
    assert catalog.last_index == 15
    assert [q.field for q in catalog.required_questions()][-1] == "success_metrics"
    assert len(catalog.required_questions()) == 10
    assert all(not q.required for q in list(catalog)[10:])
    assert {q.field for q in catalog if q.answer_type is AnswerType.LIST} == {"product_goals", "key_features"}


def test_catalog_fields_match_record_columns():
    assert set(default_catalog().fields) == set(ANSWER_COLUMNS)


def test_duplicate_field_rejected():
    dup = FRD_QUESTIONS[0].model_copy(update={"id": "99"})
    with pytest.raises(CatalogError, match="duplicate field"):
        QuestionCatalog([*FRD_QUESTIONS, dup])


def test_duplicate_id_rejected():
    dup = FRD_QUESTIONS[0].model_copy(update={"field": "other"})
    with pytest.raises(CatalogError, match="duplicate id"):
        QuestionCatalog([*FRD_QUESTIONS, dup])


def test_empty_catalog_rejected():
    with pytest.raises(CatalogError):
        QuestionCatalog([])


def test_at_returns_none_out_of_range():
    catalog = default_catalog()
    assert catalog.at(-1) is None
    assert catalog.at(16) is None
    assert catalog.at(4).field == "product_goals"


def test_question_definition_is_frozen_and_validated():
    question = FRD_QUESTIONS[0]
    with pytest.raises(ValidationError):
        question.prompt = "changed"
    with pytest.raises(ValidationError):
        QuestionDefinition(id="1", prompt="p", field=" ", answer_type=AnswerType.TEXT)
    assert QuestionDefinition(id="1", prompt="p", field="f", answer_type="array").required is True
