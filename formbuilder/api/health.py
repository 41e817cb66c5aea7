from fastapi import APIRouter, Depends

from formbuilder.core.session import FormSession, get_form_session

router = APIRouter(tags=["health"])


@router.get("/health")
def health(session: FormSession = Depends(get_form_session)):
    return {"status": "ok", "forms": session.dynamic_form.field_length}
