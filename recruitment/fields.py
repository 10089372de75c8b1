"""
Per-type field capabilities.

Every question type provides the same three operations:
- render(question, value, error) -> HTML for the form page
- parse(raw) -> typed answer value from form or JSON input
- validate(question, value) -> error message or None for type-intrinsic checks

Rule-based format checks (regex, email, url...) live in the validator and run
after these.
"""
from typing import Any, Dict, List, Optional

from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup

from recruitment.errors import SchemaError
from recruitment.models import Question

_env = Environment(
    loader=PackageLoader("recruitment", "templates"),
    autoescape=select_autoescape(["html"]),
)


class FieldType:
    template_name = ""

    def render(self, question: Question, value: Any = None, error: Optional[str] = None) -> Markup:
        template = _env.get_template(f"fields/{self.template_name}")
        return Markup(template.render(question=question, value=value, error=error))

    def parse(self, raw: Any) -> Any:
        if raw is None:
            return None
        if isinstance(raw, list):
            raw = raw[0] if raw else ""
        return str(raw)

    def validate(self, question: Question, value: Any) -> Optional[str]:
        if not isinstance(value, str):
            return "Expected a text answer"
        return None


class TextField(FieldType):
    template_name = "text.html"


class TextAreaField(FieldType):
    template_name = "textarea.html"


class RankingField(FieldType):
    # Collected as free text: the applicant lists the ranking and explains it
    template_name = "textarea.html"


class ChoiceField(FieldType):
    """Single choice from ``question.options`` (radio buttons or a dropdown)"""

    def __init__(self, template_name: str):
        self.template_name = template_name

    def validate(self, question: Question, value: Any) -> Optional[str]:
        if not isinstance(value, str):
            return "Please choose one of the listed options"
        if question.options and value not in question.options:
            return "Please choose one of the listed options"
        return None


class CheckboxField(FieldType):
    template_name = "checkbox.html"

    def parse(self, raw: Any) -> List[str]:
        if raw is None or raw == "":
            return []
        if isinstance(raw, (list, tuple)):
            return [str(item) for item in raw if str(item) != ""]
        return [str(raw)]

    def validate(self, question: Question, value: Any) -> Optional[str]:
        if not isinstance(value, list):
            return "Expected a list of selected options"
        for item in value:
            if question.options and item not in question.options:
                return f"Unknown option: {item}"
        return None


class ScaleField(FieldType):
    template_name = "scale.html"

    def parse(self, raw: Any) -> Any:
        if isinstance(raw, list):
            raw = raw[0] if raw else None
        if raw is None or raw == "":
            return None
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, int):
            return raw
        if isinstance(raw, float):
            return int(raw) if raw.is_integer() else raw
        try:
            return int(str(raw).strip())
        except ValueError:
            pass
        try:
            number = float(str(raw).strip())
        except ValueError:
            # Left as-is so validate() reports it
            return str(raw)
        return int(number) if number.is_integer() else str(raw)

    def validate(self, question: Question, value: Any) -> Optional[str]:
        low = question.min if question.min is not None else 1
        high = question.max if question.max is not None else 5
        if isinstance(value, bool) or not isinstance(value, int):
            return f"Choose a value between {low} and {high}"
        if value < low or value > high:
            return f"Choose a value between {low} and {high}"
        return None


FIELD_TYPES: Dict[str, FieldType] = {
    "text": TextField(),
    "textarea": TextAreaField(),
    "ranking": RankingField(),
    "radio": ChoiceField("radio.html"),
    "select": ChoiceField("select.html"),
    "checkbox": CheckboxField(),
    "scale": ScaleField(),
}


def field_for(question: Question) -> FieldType:
    try:
        return FIELD_TYPES[question.type]
    except KeyError:
        raise SchemaError(f"No field type registered for '{question.type}'")
