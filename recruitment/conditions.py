"""
Section visibility conditions.

The common case is a single prior question whose answer must equal a value
(``Condition``). ``AllOf``, ``AnyOf`` and ``Not`` combine conditions when a
section depends on more than one answer.
"""
from typing import Any, Dict, Iterable, Set


class BaseCondition:
    def evaluate(self, answers: Dict[str, Any]) -> bool:
        raise NotImplementedError

    def field_ids(self) -> Set[str]:
        raise NotImplementedError


class Condition(BaseCondition):
    """Visible iff ``answers[field_id] == value``"""

    def __init__(self, field_id: str, value: Any):
        self.field_id = field_id
        self.value = value

    def evaluate(self, answers: Dict[str, Any]) -> bool:
        return answers.get(self.field_id) == self.value

    def field_ids(self) -> Set[str]:
        return {self.field_id}

    def __repr__(self) -> str:
        return f"Condition({self.field_id!r}, {self.value!r})"


class AllOf(BaseCondition):
    def __init__(self, *conditions: BaseCondition):
        self.conditions = list(conditions)

    def evaluate(self, answers: Dict[str, Any]) -> bool:
        return all(c.evaluate(answers) for c in self.conditions)

    def field_ids(self) -> Set[str]:
        return _union(self.conditions)


class AnyOf(BaseCondition):
    def __init__(self, *conditions: BaseCondition):
        self.conditions = list(conditions)

    def evaluate(self, answers: Dict[str, Any]) -> bool:
        return any(c.evaluate(answers) for c in self.conditions)

    def field_ids(self) -> Set[str]:
        return _union(self.conditions)


class Not(BaseCondition):
    def __init__(self, condition: BaseCondition):
        self.condition = condition

    def evaluate(self, answers: Dict[str, Any]) -> bool:
        return not self.condition.evaluate(answers)

    def field_ids(self) -> Set[str]:
        return self.condition.field_ids()


def _union(conditions: Iterable[BaseCondition]) -> Set[str]:
    ids: Set[str] = set()
    for condition in conditions:
        ids |= condition.field_ids()
    return ids
