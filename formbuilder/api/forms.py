from fastapi import APIRouter, Depends, HTTPException, status

from formbuilder.core.audit import log_event
from formbuilder.core.form_validation import FormValidationError, build_validation_schema
from formbuilder.core.session import FormSession, get_form_session
from formbuilder.schemas.forms import (
    FormSessionOut,
    FormValue,
    FormValueUpdate,
    SchemaValidateRequest,
    SubmitOut,
)
from formbuilder.schemas.validation import ValidationError, ValidationPreviewResponse

router = APIRouter(prefix="/forms", tags=["forms"])


def _session_out(session: FormSession) -> FormSessionOut:
    return FormSessionOut(
        fields=session.dynamic_form.fields,
        values=session.store.form_values,
        field_min=session.dynamic_form.field_min,
        field_max=session.dynamic_form.field_max,
        field_length=session.dynamic_form.field_length,
        can_add=session.can_add,
        can_remove=session.can_remove,
    )


def _preview_response(errors: list[dict], ready_warning: str) -> ValidationPreviewResponse:
    return ValidationPreviewResponse(
        valid=len(errors) == 0,
        errors=[ValidationError(field=e["field"], code=e["code"], message=e["message"]) for e in errors],
        warnings=[ready_warning] if not errors else [],
    )


@router.get("", response_model=FormSessionOut)
def get_forms(session: FormSession = Depends(get_form_session)):
    return _session_out(session)


@router.post("", response_model=FormSessionOut)
def add_form(session: FormSession = Depends(get_form_session)):
    """
    Add one contact form. At the maximum this is a no-op and the
    unchanged state is returned.
    """
    if session.add():
        added = session.dynamic_form.fields[-1]
        log_event(
            action="FORM_ADDED",
            entity_type="form_instance",
            entity_id=added.id,
            metadata={"field_length": session.dynamic_form.field_length},
        )
    return _session_out(session)


@router.delete("", response_model=FormSessionOut)
def reset_forms(session: FormSession = Depends(get_form_session)):
    removed = session.dynamic_form.field_length
    session.reset()
    log_event(
        action="FORMS_RESET",
        entity_type="form_session",
        entity_id=session.template.name,
        metadata={"removed": removed},
    )
    return _session_out(session)


@router.delete("/{index}", response_model=FormSessionOut)
def remove_form(index: int, session: FormSession = Depends(get_form_session)):
    """
    Remove the form at `index` (negative counts from the end).
    At the minimum, or for an index past the end, nothing is removed.
    """
    if session.remove(index):
        log_event(
            action="FORM_REMOVED",
            entity_type="form_instance",
            entity_id=index,
            metadata={"field_length": session.dynamic_form.field_length},
        )
    return _session_out(session)


@router.put("/{index}/values", response_model=FormValue)
def update_form_values(
    index: int,
    payload: FormValueUpdate,
    session: FormSession = Depends(get_form_session),
):
    try:
        return session.update(index, **payload.model_dump(exclude_unset=True))
    except IndexError:
        raise HTTPException(status_code=404, detail="Form not found")


@router.get("/preview")
def preview_forms(session: FormSession = Depends(get_form_session)):
    return session.preview()


@router.post("/validate", response_model=ValidationPreviewResponse)
def validate_forms(session: FormSession = Depends(get_form_session)):
    """
    Preview validation errors without submitting.
    Useful for showing users what needs to be fixed before submission.
    """
    return _preview_response(session.collect_errors(), "Form is ready to submit")


@router.post("/submit", response_model=SubmitOut)
def submit_forms(session: FormSession = Depends(get_form_session)):
    try:
        data = session.validate()
    except FormValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": "Submit validation failed",
                "errors": [{"field": e.path, "code": e.code, "message": e.message}],
            },
        )

    log_event(
        action="FORMS_SUBMITTED",
        entity_type="form_session",
        entity_id=session.template.name,
        metadata={"field_length": session.dynamic_form.field_length},
    )
    return SubmitOut(status="ok", data=data)


@router.post("/schema/validate", response_model=ValidationPreviewResponse)
def validate_against_templates(payload: SchemaValidateRequest):
    """Validate arbitrary data against a schema built from the given templates."""
    schema = build_validation_schema(payload.forms)
    return _preview_response(schema.collect_errors(payload.data), "Data is valid")
