from __future__ import annotations

import logging
from typing import Any

from fastapi import Request

from formbuilder.core.config import Settings
from formbuilder.core.dynamic_form import DynamicForm
from formbuilder.core.form_store import FormStore
from formbuilder.core.form_validation import build_validation_schema
from formbuilder.core.suffix import SuffixGenerator, make_suffix_generator, random_suffix
from formbuilder.schemas.forms import FieldDescriptor, FormTemplate, FormValue

logger = logging.getLogger(__name__)

CONTACT_TEMPLATE = FormTemplate(
    name="form",
    sub_fields=(
        FieldDescriptor(field_name="name", type="text", label="名前"),
        FieldDescriptor(field_name="email", type="email", label="メールアドレス"),
    ),
)


class FormSession:
    """
    State behind one form view: the active form instances and their
    contact records, kept 1:1 (record i belongs to instance i).
    """

    def __init__(
        self,
        template: FormTemplate = CONTACT_TEMPLATE,
        field_min: int = 1,
        field_max: int = 3,
        suffix: SuffixGenerator = random_suffix,
    ):
        self.template = template
        self.dynamic_form = DynamicForm([], field_min, field_max, suffix=suffix)
        self.store = FormStore()

    @property
    def can_add(self) -> bool:
        return self.dynamic_form.field_length < self.dynamic_form.field_max

    @property
    def can_remove(self) -> bool:
        return self.dynamic_form.field_length > self.dynamic_form.field_min

    def add(self) -> bool:
        before = self.dynamic_form.field_length
        self.dynamic_form.add_field(self.template)
        if self.dynamic_form.field_length == before:
            return False
        self.store.add_form()
        return True

    def remove(self, index: int) -> bool:
        if not self.can_remove:
            return False
        before = self.dynamic_form.field_length
        self.dynamic_form.remove_field(index)
        if self.dynamic_form.field_length == before:
            return False
        self.store.remove_form(index)
        return True

    def reset(self) -> None:
        self.dynamic_form.remove_all_fields()
        self.store.reset_store()

    def update(self, index: int, **values: Any) -> FormValue:
        if not 0 <= index < len(self.store.form_values):
            raise IndexError(f"No form at index {index}")
        record = self.store.form_values[index]
        for key, value in values.items():
            if value is not None:
                setattr(record, key, value)
        return record

    def preview(self) -> dict[str, list[dict]]:
        """JSON preview: {template name: [record, ...]}"""
        return {self.template.name: [v.model_dump() for v in self.store.form_values]}

    def validate(self) -> dict:
        schema = build_validation_schema(self.dynamic_form.fields)
        return schema.validate(self.preview())

    def collect_errors(self) -> list[dict]:
        schema = build_validation_schema(self.dynamic_form.fields)
        return schema.collect_errors(self.preview())


def create_form_session(settings: Settings) -> FormSession:
    return FormSession(
        field_min=settings.FORM_FIELD_MIN,
        field_max=settings.FORM_FIELD_MAX,
        suffix=make_suffix_generator(settings.FORM_ID_SUFFIX_LENGTH),
    )


def get_form_session(request: Request) -> FormSession:
    return request.app.state.form_session
