from pydantic import BaseModel


class ValidationError(BaseModel):
    """One failing field, addressed like form[0].email"""
    field: str
    code: str  # required | email | number | string_type | pydantic type codes
    message: str


class ValidationPreviewResponse(BaseModel):
    valid: bool
    errors: list[ValidationError]
    warnings: list[str]  # informational only, never block a submit
