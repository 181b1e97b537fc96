"""Functional tests for completeness checks and answer value helpers."""

from __future__ import annotations

import pytest

from frd_wizard.logic.catalog import default_catalog
from frd_wizard.logic.completeness import count_answered, is_ready_to_generate, missing_required
from frd_wizard.logic.response_store import ResponseStore
from frd_wizard.models.answers import (
    ListAnswer,
    TextAnswer,
    is_answered,
    parse_raw_answer,
    to_input_text,
    to_storage,
    to_summary_text,
)
from frd_wizard.models.question_kind import AnswerType

from conftest import SAMPLE_ANSWERS


def _store_with(answers: dict) -> ResponseStore:
    catalog = default_catalog()
    store = ResponseStore()
    for question in catalog:
        if question.field in answers:
            store.set(question.field, parse_raw_answer(question.answer_type, answers[question.field]))
    return store


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, False),
        (TextAnswer(text=""), False),
        (TextAnswer(text=" \n\t "), False),
        (TextAnswer(text=" x "), True),
        (ListAnswer(items=()), False),
        (ListAnswer(items=("one",)), True),
    ],
)
def test_is_answered_rules(value, expected):
    assert is_answered(value) is expected


def test_list_parsing_keeps_carriage_returns():
    value = parse_raw_answer(AnswerType.LIST, "a\r\nb\r\n")
    # Only "\n" splits entries; "\r" stays on the entry it follows
    assert value.items == ("a\r", "b\r")


def test_whitespace_only_list_is_unanswered():
    assert is_answered(parse_raw_answer(AnswerType.LIST, "\n   \n\t")) is False


def test_value_renderings():
    listed = ListAnswer(items=("Boards", "Reminders"))
    assert to_storage(listed) == ["Boards", "Reminders"]
    assert to_input_text(listed) == "Boards\nReminders"
    assert to_summary_text(listed) == "Boards, Reminders"
    assert to_storage(TextAnswer(text=" raw ")) == " raw "
    assert to_input_text(None) == ""


def test_ready_when_all_required_answered():
    catalog = default_catalog()
    store = _store_with(SAMPLE_ANSWERS)
    assert missing_required(catalog, store) == []
    assert is_ready_to_generate(catalog, store) is True
    assert count_answered(catalog, store) == 10


def test_optional_answers_never_block():
    catalog = default_catalog()
    store = _store_with({**SAMPLE_ANSWERS, "competitors": "   ", "timeline": ""})
    assert is_ready_to_generate(catalog, store) is True
    assert count_answered(catalog, store) == 10


@pytest.mark.parametrize("field, blank", [("product_name", "   "), ("key_features", "\n \n"), ("tech_stack", "")])
def test_blank_required_answer_blocks(field, blank):
    catalog = default_catalog()
    store = _store_with({**SAMPLE_ANSWERS, field: blank})
    assert is_ready_to_generate(catalog, store) is False
    assert [q.field for q in missing_required(catalog, store)] == [field]


def test_missing_required_in_catalog_order():
    catalog = default_catalog()
    store = _store_with({"product_name": "X"})
    fields = [q.field for q in missing_required(catalog, store)]
    assert fields[0] == "product_description"
    assert fields[-1] == "success_metrics"
    assert len(fields) == 9


def test_verdict_follows_each_mutation():
    catalog = default_catalog()
    store = _store_with(SAMPLE_ANSWERS)
    assert is_ready_to_generate(catalog, store)
    store.set("user_journey", TextAnswer(text=" ", kind=AnswerType.TEXTAREA))
    assert not is_ready_to_generate(catalog, store)
    store.set("user_journey", TextAnswer(text="Log in", kind=AnswerType.TEXTAREA))
    assert is_ready_to_generate(catalog, store)
