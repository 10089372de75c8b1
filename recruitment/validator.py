"""
Conditional form validation.

validate() walks the schema in order, skips sections hidden by their
condition, and returns a fresh {question_id: message} map. It never looks at
answers to hidden questions, so errors from a section that has since been
hidden cannot survive a validation pass.
"""
import re
from typing import Any, Dict, Optional

from pydantic import EmailStr, HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from recruitment.errors import ValidationError
from recruitment.fields import field_for
from recruitment.models import FormSchema, Question, Rule

REQUIRED_MESSAGE = "This is a required question"

_email_adapter = TypeAdapter(EmailStr)
_url_adapter = TypeAdapter(HttpUrl)


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


# -------------------------------------------------------
# FORMAT RULES
# -------------------------------------------------------
def check_rule(rule: Rule, value: Any) -> Optional[str]:
    """Return the rule's message if ``value`` fails it"""
    text = value if isinstance(value, str) else str(value)

    if rule.kind == "regex":
        if not re.fullmatch(rule.pattern or "", text):
            return rule.message
    elif rule.kind == "email":
        try:
            _email_adapter.validate_python(text)
        except PydanticValidationError:
            return rule.message
    elif rule.kind == "url":
        try:
            _url_adapter.validate_python(text)
        except PydanticValidationError:
            return rule.message
    elif rule.kind == "min_length":
        if len(text) < (rule.length or 0):
            return rule.message
    elif rule.kind == "digits":
        if not re.fullmatch(r"\d{%d}" % (rule.length or 1), text):
            return rule.message
    return None


def validate_question(question: Question, value: Any) -> Optional[str]:
    if is_empty(value):
        return REQUIRED_MESSAGE if question.required else None

    error = field_for(question).validate(question, value)
    if error:
        return error

    for rule in question.rules:
        error = check_rule(rule, value)
        if error:
            return error
    return None


# -------------------------------------------------------
# SCHEMA VALIDATION
# -------------------------------------------------------
def validate(schema: FormSchema, answers: Dict[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for section in schema.visible_sections(answers):
        for question in section.questions:
            error = validate_question(question, answers.get(question.id))
            if error:
                errors[question.id] = error
    return errors


def validate_or_raise(schema: FormSchema, answers: Dict[str, Any]) -> None:
    errors = validate(schema, answers)
    if errors:
        raise ValidationError(errors)


def clear_error(errors: Dict[str, str], question_id: str) -> Dict[str, str]:
    """Drop one field's error as soon as the applicant edits it"""
    return {key: message for key, message in errors.items() if key != question_id}


def parse_answers(schema: FormSchema, raw: Dict[str, Any]) -> Dict[str, Any]:
    """Coerce raw form/JSON input into typed answers; unknown keys pass through"""
    answers: Dict[str, Any] = {}
    for key, value in raw.items():
        try:
            question = schema.question(key)
        except KeyError:
            answers[key] = value
            continue
        answers[key] = field_for(question).parse(value)
    return answers


def prune_hidden(schema: FormSchema, answers: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of ``answers`` without values belonging to currently hidden sections"""
    visible_ids = {s.id for s in schema.visible_sections(answers)}
    hidden = {
        question.id
        for section in schema
        if section.id not in visible_ids
        for question in section.questions
    }
    return {key: value for key, value in answers.items() if key not in hidden}
