from __future__ import annotations

from typing import List

from config.settings import settings
from models.forms import DestructionForm, RegulatedForm
from models.schema import FORM222_TITLE, FORM41_SUBTITLE, FORM41_TITLE


def _method_label(form: DestructionForm) -> str:
    m = form.method_of_destruction
    return m.value if m is not None else ""


def render_form222(form: RegulatedForm) -> str:
    """
    Plain-text rendition of a Form 222. Order is fixed:
    form number, registrant block, each line (number/name, NDC, packages x size), execution date.
    """
    reg = form.registrant_info
    lines: List[str] = [
        FORM222_TITLE,
        f"Form Number: {form.form_number}",
        "",
        "Registrant Information:",
        f"Name: {reg.name}",
        f"DEA Number: {reg.dea_number}",
        f"Address: {reg.address}",
        f"City: {reg.city}, {reg.state} {reg.zip}",
        "",
        "Line Items:",
    ]
    for item in form.line_items:
        lines.append(f"Line {item.line_number}: {item.name_of_item}")
        lines.append(f"NDC: {item.ndc}")
        lines.append(f"Packages: {item.number_of_packages} x {item.size_of_package}")
        lines.append("")
    lines.append(f"Date Executed: {form.date_executed.strftime(settings.EXPORT_DATE_FORMAT)}")
    return "\n".join(lines) + "\n"


def export_to_pdf(form: RegulatedForm) -> bytes:
    # PDF layout is not produced; the payload is the UTF-8 text rendition.
    return render_form222(form).encode("utf-8")


def render_form41(form: DestructionForm) -> str:
    reg = form.registrant_info
    lines: List[str] = [
        FORM41_TITLE,
        FORM41_SUBTITLE,
        "",
        f"Registrant: {reg.name}",
        f"DEA Number: {reg.dea_number}",
        "",
        "Substances Destroyed:",
    ]
    for s in form.substances_destroyed:
        lines.append(f"{s.name} {s.strength}".strip())
        lines.append(f"NDC: {s.ndc} | Lot: {s.lot_number}")
        lines.append(f"Schedule: {s.dea_schedule} | Quantity: {s.quantity}")
        lines.append("")
    lines.extend([
        f"Method of Destruction: {_method_label(form)}",
        f"Date: {form.date_of_destruction.strftime(settings.EXPORT_DATE_FORMAT)}",
        f"Location: {form.location}",
        "",
        "Witnesses:",
    ])
    lines.extend(f"{w.name} - {w.title}" for w in form.witnesses)
    if form.notes:
        lines.extend(["", f"Notes: {form.notes}"])
    return "\n".join(lines) + "\n"


def export_destruction_form(form: DestructionForm) -> bytes:
    return render_form41(form).encode("utf-8")
