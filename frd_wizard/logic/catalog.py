"""Question catalog for the FRD questionnaire.

The catalog is static data: an ordered, immutable sequence of
`QuestionDefinition` objects. Order defines traversal order.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from frd_wizard.models.question import QuestionDefinition
from frd_wizard.models.question_kind import AnswerType


class CatalogError(ValueError):
    pass


class QuestionCatalog:
    def __init__(self, questions: Iterable[QuestionDefinition]) -> None:
        items = tuple(questions)
        if not items:
            raise CatalogError("catalog must contain at least one question")
        seen_fields: set[str] = set()
        seen_ids: set[str] = set()
        for q in items:
            if q.field in seen_fields:
                raise CatalogError(f"duplicate field in catalog: {q.field}")
            if q.id in seen_ids:
                raise CatalogError(f"duplicate id in catalog: {q.id}")
            seen_fields.add(q.field)
            seen_ids.add(q.id)
        self._questions = items

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self) -> Iterator[QuestionDefinition]:
        return iter(self._questions)

    def __getitem__(self, index: int) -> QuestionDefinition:
        return self._questions[index]

    @property
    def last_index(self) -> int:
        return len(self._questions) - 1

    def at(self, index: int) -> Optional[QuestionDefinition]:
        """Return the question at `index`, or None when out of range (no negative indexing)."""
        if 0 <= index < len(self._questions):
            return self._questions[index]
        return None

    def contains_index(self, index: int) -> bool:
        return 0 <= index < len(self._questions)

    @property
    def fields(self) -> list[str]:
        return [q.field for q in self._questions]

    def required_questions(self) -> list[QuestionDefinition]:
        return [q for q in self._questions if q.required]


def _q(id: str, prompt: str, field: str, answer_type: AnswerType, hint: str, required: bool = True) -> QuestionDefinition:
    return QuestionDefinition(
        id=id,
        prompt=prompt,
        field=field,
        answer_type=answer_type,
        placeholder_hint=hint,
        required=required,
    )


FRD_QUESTIONS: tuple[QuestionDefinition, ...] = (
    _q("1", "What is the name of your product?", "product_name", AnswerType.TEXT,
       "e.g., TaskMaster Pro"),
    _q("2", "Describe your product in one sentence.", "product_description", AnswerType.TEXTAREA,
       "e.g., A comprehensive task management platform that helps teams collaborate and track project progress in real-time."),
    _q("3", "Who are your target users?", "target_users", AnswerType.TEXTAREA,
       "e.g., Project managers, team leads, and individual contributors in tech companies and startups."),
    _q("4", "What problem does your product solve?", "problem_solved", AnswerType.TEXTAREA,
       "e.g., Teams struggle with scattered communication, missed deadlines, and lack of visibility into project progress."),
    _q("5", "What are the top 3 goals for this product?", "product_goals", AnswerType.LIST,
       "Enter each goal on a new line"),
    _q("6", "List the key features you want to include.", "key_features", AnswerType.LIST,
       "Enter each feature on a new line"),
    _q("7", "Describe a typical user journey or flow.", "user_journey", AnswerType.TEXTAREA,
       "e.g., User logs in → Creates a project → Adds team members → Creates tasks → Tracks progress → Reviews completion"),
    _q("8", "Do you have a preferred tech stack?", "tech_stack", AnswerType.TEXTAREA,
       "e.g., React, Node.js, PostgreSQL, AWS"),
    _q("9", "Any known constraints or dependencies?", "constraints", AnswerType.TEXTAREA,
       "e.g., Must integrate with existing CRM system, Budget constraints, Timeline limitations"),
    _q("10", "How will you measure success (KPIs, metrics)?", "success_metrics", AnswerType.TEXTAREA,
       "e.g., User adoption rate, Task completion time, Team productivity increase"),
    _q("11", "What is your product's current stage?", "product_stage", AnswerType.TEXT,
       "e.g., Idea, MVP, Beta, Live", required=False),
    _q("12", "Who are your competitors, and how is your product different?", "competitors", AnswerType.TEXTAREA,
       "e.g., Slack, Trello, Asana - We differentiate with AI-powered task prioritization", required=False),
    _q("13", "What platforms will your product support?", "platforms", AnswerType.TEXTAREA,
       "e.g., Web, iOS, Android", required=False),
    _q("14", "Are there any compliance or regulatory requirements?", "compliance", AnswerType.TEXTAREA,
       "e.g., GDPR, SOC 2, HIPAA compliance required", required=False),
    _q("15", "Do you have any timeline or launch goals?", "timeline", AnswerType.TEXTAREA,
       "e.g., MVP in 3 months, Public beta in 6 months", required=False),
    _q("16", "Is there anything else you'd like to share about your product?", "additional_info", AnswerType.TEXTAREA,
       "Any other important details, special requirements, or context you'd like to include", required=False),
)


def default_catalog() -> QuestionCatalog:
    return QuestionCatalog(FRD_QUESTIONS)


__all__ = ["QuestionCatalog", "CatalogError", "FRD_QUESTIONS", "default_catalog"]
