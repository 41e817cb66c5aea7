import pytest
from fastapi.testclient import TestClient

from formbuilder.main import app
from formbuilder.core.session import FormSession, get_form_session
from tests.helpers import counter_suffix


@pytest.fixture()
def form_session():
    return FormSession(field_min=1, field_max=3, suffix=counter_suffix())


@pytest.fixture(autouse=True)
def override_get_form_session(form_session):
    def _get_form_session_override():
        return form_session

    app.dependency_overrides[get_form_session] = _get_form_session_override
    yield
    app.dependency_overrides.clear()


@pytest.fixture()
def client():
    return TestClient(app)
