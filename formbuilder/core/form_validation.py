from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, ClassVar, Sequence

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, create_model, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from formbuilder.schemas.forms import FormInstance, FormTemplate

logger = logging.getLogger(__name__)

REQUIRED_MESSAGE = "必須項目です"
EMAIL_MESSAGE = "有効なメールアドレスを入力してください"
NUMBER_MESSAGE = "数値で入力してください"
STRING_MESSAGE = "文字列で入力してください"


class FieldType(str, Enum):
    TEXT = "text"
    EMAIL = "email"
    NUMBER = "number"

    @classmethod
    def parse(cls, value: str) -> "FieldType":
        # unknown types validate as free text
        try:
            return cls(value)
        except ValueError:
            return cls.TEXT


class FormValidationError(Exception):
    """
    First failing field of a validation run.
    `errors` keeps every error found, in field order.
    """

    def __init__(self, errors: list[dict]):
        first = errors[0]
        self.errors = errors
        self.message: str = first["message"]
        self.path: str = first["field"]
        self.code: str = first["code"]
        super().__init__(self.message)


def _required(value: Any) -> None:
    if value is None or value == "":
        raise PydanticCustomError("required", REQUIRED_MESSAGE)


def _as_text(value: Any) -> str:
    _required(value)
    if isinstance(value, bool):
        raise PydanticCustomError("string_type", STRING_MESSAGE)
    if isinstance(value, (int, float)):
        return str(value)
    if not isinstance(value, str):
        raise PydanticCustomError("string_type", STRING_MESSAGE)
    return value


@dataclass(frozen=True)
class TextRule:
    kind: ClassVar[FieldType] = FieldType.TEXT

    def check(self, value: Any) -> str:
        return _as_text(value)


@dataclass(frozen=True)
class EmailRule:
    kind: ClassVar[FieldType] = FieldType.EMAIL

    def check(self, value: Any) -> str:
        s = _as_text(value)
        try:
            # bare address only, no "Name <addr>" display form
            validate_email(s, check_deliverability=False)
        except EmailNotValidError:
            raise PydanticCustomError("email", EMAIL_MESSAGE)
        return s


@dataclass(frozen=True)
class NumberRule:
    kind: ClassVar[FieldType] = FieldType.NUMBER

    def check(self, value: Any) -> int | float:
        # "" is a bad number, not a missing one
        if value is None:
            raise PydanticCustomError("required", REQUIRED_MESSAGE)
        if isinstance(value, bool):
            raise PydanticCustomError("number", NUMBER_MESSAGE)
        if isinstance(value, (int, float)):
            if isinstance(value, float) and math.isnan(value):
                raise PydanticCustomError("number", NUMBER_MESSAGE)
            return value
        if not isinstance(value, str):
            raise PydanticCustomError("number", NUMBER_MESSAGE)

        s = "".join(value.split())
        if "_" in s:
            raise PydanticCustomError("number", NUMBER_MESSAGE)
        try:
            return int(s)
        except ValueError:
            pass
        try:
            x = float(s)
        except ValueError:
            raise PydanticCustomError("number", NUMBER_MESSAGE)
        if math.isnan(x):
            raise PydanticCustomError("number", NUMBER_MESSAGE)
        return x


FieldRule = TextRule | EmailRule | NumberRule

_RULES: dict[FieldType, type[FieldRule]] = {
    FieldType.TEXT: TextRule,
    FieldType.EMAIL: EmailRule,
    FieldType.NUMBER: NumberRule,
}


def rule_for(field_type: str) -> FieldRule:
    return _RULES[FieldType.parse(field_type)]()


def _error_path(loc: tuple) -> str:
    """('form', 0, 'email') -> 'form[0].email'"""
    out = ""
    for part in loc:
        if isinstance(part, int):
            out += f"[{part}]"
        elif out:
            out += f".{part}"
        else:
            out = str(part)
    return out


def _to_errors(exc: PydanticValidationError) -> list[dict]:
    return [
        {"field": _error_path(err["loc"]), "code": err["type"], "message": err["msg"]}
        for err in exc.errors()
    ]


def _record_model(form: FormTemplate | FormInstance) -> type[BaseModel]:
    # last descriptor wins for a repeated field_name
    rules = {sf.field_name: rule_for(sf.type) for sf in form.sub_fields}

    # python attribute names are positional; the data keys live in aliases
    fields: dict[str, Any] = {
        f"field_{i}": (
            Annotated[Any, BeforeValidator(rule.check)],
            Field(default=None, alias=field_name),
        )
        for i, (field_name, rule) in enumerate(rules.items())
    }
    aliases = list(rules)

    def _fill_missing(cls, data: Any) -> Any:
        # absent keys go through the rule as None, reported under their own name
        if isinstance(data, dict):
            return {**{alias: None for alias in aliases}, **data}
        return data

    return create_model(
        "FormRecord",
        __config__=ConfigDict(extra="allow"),
        __validators__={"fill_missing": model_validator(mode="before")(_fill_missing)},
        **fields,
    )


class FormSchema:
    """
    Validator for data shaped as
      {form_name: [{field_name: value, ...}, ...]}
    """

    def __init__(self, record_models: dict[str, type[BaseModel]]):
        self._record_models = record_models
        fields: dict[str, Any] = {
            f"form_{i}": (list[model] | None, Field(default=None, alias=name))
            for i, (name, model) in enumerate(record_models.items())
        }
        self._model = create_model(
            "FormSchemaModel",
            __config__=ConfigDict(extra="allow"),
            **fields,
        )

    @property
    def fields(self) -> dict[str, type[BaseModel]]:
        return dict(self._record_models)

    def collect_errors(self, data: Any) -> list[dict]:
        try:
            self._model.model_validate(data)
        except PydanticValidationError as e:
            return _to_errors(e)
        return []

    def validate(self, data: Any) -> dict:
        """
        Raises FormValidationError for the first failing field.
        Returns the coerced data (numbers parsed, passthrough keys kept).
        """
        try:
            validated = self._model.model_validate(data)
        except PydanticValidationError as e:
            errors = _to_errors(e)
            logger.debug("validation failed at %s: %s", errors[0]["field"], errors[0]["code"])
            raise FormValidationError(errors) from None
        # absent forms stay absent instead of coming back as None
        dumped = validated.model_dump(by_alias=True)
        return {key: value for key, value in dumped.items() if key in data}

    def is_valid(self, data: Any) -> bool:
        return not self.collect_errors(data)


def build_validation_schema(forms: Sequence[FormTemplate | FormInstance]) -> FormSchema:
    record_models: dict[str, type[BaseModel]] = {}
    for form in forms:
        # later forms replace earlier ones with the same name
        record_models[form.name] = _record_model(form)
    return FormSchema(record_models)
