"""
Form definition models: questions, sections and the schema that orders them
"""
from typing import Any, Dict, Iterator, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from recruitment.conditions import BaseCondition
from recruitment.errors import SchemaError

QuestionType = Literal["text", "textarea", "radio", "checkbox", "select", "scale", "ranking"]
RuleKind = Literal["regex", "email", "url", "min_length", "digits"]


# ==================== QUESTION MODELS ====================
class Rule(BaseModel):
    """A format check applied after the required check, in declaration order"""
    model_config = ConfigDict(frozen=True)

    kind: RuleKind
    message: str
    pattern: Optional[str] = None
    length: Optional[int] = None


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    type: QuestionType
    text: str
    description: Optional[str] = None
    placeholder: Optional[str] = None
    required: bool = False
    options: List[str] = Field(default_factory=list)
    min: Optional[int] = None
    max: Optional[int] = None
    min_label: Optional[str] = None
    max_label: Optional[str] = None
    rules: List[Rule] = Field(default_factory=list)


class Section(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str
    title: str
    description: Optional[str] = None
    questions: List[Question]
    condition: Optional[BaseCondition] = None

    def is_visible(self, answers: Dict[str, Any]) -> bool:
        if self.condition is None:
            return True
        return self.condition.evaluate(answers)


# ==================== FORM SCHEMA ====================
class FormSchema:
    """
    Ordered sections with two invariants checked on construction:
    - question ids are unique across the whole form
    - a section condition only references questions from earlier sections
    """

    def __init__(self, sections: List[Section]):
        seen: Dict[str, str] = {}
        for section in sections:
            if section.condition is not None:
                for field_id in section.condition.field_ids():
                    if field_id not in seen:
                        raise SchemaError(
                            f"Section '{section.id}' depends on '{field_id}', "
                            f"which is not defined in an earlier section"
                        )
            for question in section.questions:
                if question.id in seen:
                    raise SchemaError(
                        f"Question id '{question.id}' is defined in both "
                        f"'{seen[question.id]}' and '{section.id}'"
                    )
                seen[question.id] = section.id
        self.sections = list(sections)
        self._questions = {
            question.id: question for section in self.sections for question in section.questions
        }

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections)

    def question(self, question_id: str) -> Question:
        return self._questions[question_id]

    def question_ids(self) -> List[str]:
        return list(self._questions)

    def visible_sections(self, answers: Dict[str, Any]) -> List[Section]:
        # Conditions only see answers from sections that are themselves visible,
        # so a stale value in a hidden section cannot re-open a later one
        visible: List[Section] = []
        in_scope: Dict[str, Any] = {}
        for section in self.sections:
            if not section.is_visible(in_scope):
                continue
            visible.append(section)
            for question in section.questions:
                if question.id in answers:
                    in_scope[question.id] = answers[question.id]
        return visible

    def section_of(self, question_id: str) -> Section:
        for section in self.sections:
            if any(q.id == question_id for q in section.questions):
                return section
        raise KeyError(question_id)
