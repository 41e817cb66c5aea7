from __future__ import annotations

import logging
from typing import Any

from formbuilder.core.suffix import SuffixGenerator, random_suffix
from formbuilder.schemas.forms import FormInstance, FormTemplate, InstanceField

logger = logging.getLogger(__name__)


def splice_index(length: int, index: int) -> int | None:
    """
    Position removed by a one-element array splice, or None when nothing is:
      -1         -> last element
      -length-5  -> clamped to the first element
      >= length  -> nothing
    """
    if index < 0:
        index = max(length + index, 0)
    if index >= length:
        return None
    return index


def remove_at(items: list[Any], index: int) -> bool:
    pos = splice_index(len(items), index)
    if pos is None:
        return False
    del items[pos]
    return True


class DynamicForm:
    """
    Bounded, ordered set of form instances created from templates.

    Adding past ``field_max`` and removing at ``field_min`` are silently
    ignored; callers observe them only through ``field_length``.
    """

    def __init__(
        self,
        fields: list[FormInstance] | None = None,
        field_min: int = 1,
        field_max: int = 1,
        suffix: SuffixGenerator = random_suffix,
    ):
        self._fields: list[FormInstance] = list(fields or [])
        self._field_min = field_min
        self._field_max = field_max
        self._suffix = suffix

    @property
    def fields(self) -> list[FormInstance]:
        return self._fields

    @property
    def field_min(self) -> int:
        return self._field_min

    @property
    def field_max(self) -> int:
        return self._field_max

    @property
    def field_length(self) -> int:
        return len(self._fields)

    def add_field(self, template: FormTemplate) -> None:
        if self.field_length >= self.field_max:
            logger.debug("add_field ignored: %s at max=%s", template.name, self.field_max)
            return

        base_name = template.name
        sub_fields = [
            InstanceField(
                name=f"{base_name}_{sf.field_name}_{self._suffix()}",
                field_name=sf.field_name,
                type=sf.type,
                label=sf.label,
            )
            for sf in template.sub_fields
        ]

        instance = FormInstance(
            id=f"{base_name}_{self._suffix()}",
            name=base_name,
            sub_fields=sub_fields,
        )
        self._fields.append(instance)
        logger.debug("add_field: %s (%s/%s)", instance.id, self.field_length, self.field_max)

    def remove_field(self, index: int) -> None:
        if self.field_length <= self.field_min:
            logger.debug("remove_field ignored: at min=%s", self.field_min)
            return

        if remove_at(self._fields, index):
            logger.debug("remove_field: index=%s (%s left)", index, self.field_length)

    def remove_all_fields(self) -> None:
        self._fields.clear()
