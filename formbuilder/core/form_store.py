from formbuilder.core.dynamic_form import remove_at
from formbuilder.schemas.forms import FormValue


class FormStore:
    """Contact records shown in the form view, one per active form."""

    def __init__(self, form_values: list[FormValue] | None = None):
        self.form_values: list[FormValue] = list(form_values or [])

    def add_form(self) -> None:
        self.form_values.append(FormValue(name="", email=""))

    def remove_form(self, index: int) -> None:
        remove_at(self.form_values, index)

    def reset_store(self) -> None:
        self.form_values = []
