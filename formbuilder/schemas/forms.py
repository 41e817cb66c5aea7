from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FieldDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    field_name: str = Field(min_length=1, max_length=120)
    type: str = "text"  # text|email|number, anything else validates as text
    label: str = ""


class FormTemplate(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, max_length=200)
    sub_fields: tuple[FieldDescriptor, ...] = ()


class InstanceField(BaseModel):
    name: str  # {form}_{field_name}_{suffix}
    field_name: str
    type: str
    label: str


class FormInstance(BaseModel):
    id: str  # {form}_{suffix}
    name: str
    sub_fields: list[InstanceField] = Field(default_factory=list)


class FormValue(BaseModel):
    name: str = ""
    email: str = ""


class FormValueUpdate(BaseModel):
    name: str | None = None
    email: str | None = None


class FormSessionOut(BaseModel):
    fields: list[FormInstance]
    values: list[FormValue]
    field_min: int
    field_max: int
    field_length: int
    can_add: bool
    can_remove: bool


class SchemaValidateRequest(BaseModel):
    forms: list[FormTemplate] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict)


class SubmitOut(BaseModel):
    status: str
    data: dict[str, Any]
