from itertools import count

from formbuilder.core.suffix import SuffixGenerator
from formbuilder.schemas.forms import FieldDescriptor, FormTemplate


def counter_suffix(start: int = 1) -> SuffixGenerator:
    """Deterministic suffixes: 0001, 0002, ..."""
    it = count(start)

    def _next() -> str:
        return f"{next(it):04d}"

    return _next


def fixed_suffix(token: str = "mock") -> SuffixGenerator:
    return lambda: token


def make_template(name: str = "testForm", fields: list[dict] | None = None) -> FormTemplate:
    """
    fields example:
      [{"field_name": "name", "type": "text", "label": "名前"},
       {"field_name": "email", "type": "email"}]
    """
    if fields is None:
        fields = [{"field_name": "testField", "type": "text", "label": "テストフィールド"}]
    return FormTemplate(
        name=name,
        sub_fields=tuple(FieldDescriptor(**f) for f in fields),
    )


CONTACT_FIELDS = [
    {"field_name": "name", "type": "text", "label": "名前"},
    {"field_name": "email", "type": "email", "label": "メールアドレス"},
]
