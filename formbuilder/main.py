from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from formbuilder.api.health import router as health_router
from formbuilder.api.root import router as root_router
from formbuilder.api.forms import router as forms_router
from formbuilder.core.config import settings
from formbuilder.core.logging_config import configure_logging
from formbuilder.core.session import create_form_session

configure_logging(settings.LOG_LEVEL)

app = FastAPI(title="Dynamic Form Builder")

# One form view per app instance; routes reach it through get_form_session
app.state.form_session = create_form_session(settings)

# CORS middleware for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(root_router)
app.include_router(health_router)
app.include_router(forms_router)
