from fastapi import APIRouter, Depends

from formbuilder.core.session import FormSession, get_form_session

router = APIRouter()


@router.get("/")
def service_info(session: FormSession = Depends(get_form_session)):
    return {
        "name": "Dynamic Form Builder",
        "status": "ok",
        "template": session.template.name,
        "limits": {
            "min": session.dynamic_form.field_min,
            "max": session.dynamic_form.field_max,
        },
        "links": {"docs": "/docs", "health": "/health", "forms": "/forms"},
    }
