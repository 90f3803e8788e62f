from __future__ import annotations

from typing import List

from dea.form222 import validate_form
from dea.form41 import validate_destruction_form
from models.forms import DestructionForm, RegulatedForm


class FormNotSubmittable(Exception):
    """Raised at the download/submit edge when a form still has violations."""

    def __init__(self, form_id: str, violations: List[str]):
        super().__init__("form_not_submittable")
        self.form_id = form_id
        self.violations = list(violations)


def require_submittable(form: RegulatedForm) -> RegulatedForm:
    violations = validate_form(form)
    if violations:
        raise FormNotSubmittable(form.form_number, violations)
    return form


def require_destruction_submittable(form: DestructionForm) -> DestructionForm:
    violations = validate_destruction_form(form)
    if violations:
        raise FormNotSubmittable(form.id, violations)
    return form
