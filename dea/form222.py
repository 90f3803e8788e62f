from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import List, Optional, Sequence, TypeVar

from models.forms import (
    ControlledLineItem,
    FormLineItem,
    FormStatus,
    Registrant,
    RegistrantInfo,
    RegulatedForm,
)
from models.schema import DEA_NUMBER_PATTERN, DEFAULT_PACKAGE_SIZE, FORM222_MAX_LINES
from utils.ids import form222_number

log = logging.getLogger("compliance.dea.form222")

_DEA_RE = re.compile(DEA_NUMBER_PATTERN)

T = TypeVar("T")


def chunk_items(items: Sequence[T], size: int = FORM222_MAX_LINES) -> List[List[T]]:
    """Consecutive runs of `size`, input order kept; the last run may be shorter."""
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def mask_dea_number(dea_number: str) -> str:
    dea = dea_number or ""
    return dea[:2] + "*" * max(len(dea) - 2, 0)


def item_name(item: ControlledLineItem) -> str:
    parts = [
        item.non_proprietary_name or item.product_name or "",
        item.strength or "",
        item.dosage_form or "",
    ]
    return " ".join(p.strip() for p in parts if p and p.strip())


def registrant_info(registrant: Registrant) -> RegistrantInfo:
    addr = registrant.addresses.registered
    return RegistrantInfo(
        name=registrant.business_name,
        dea_number=registrant.dea_number,
        address=addr.street,
        city=addr.city,
        state=addr.state,
        zip=addr.zip,
    )


def _line_item(item: ControlledLineItem, line_number: int) -> FormLineItem:
    return FormLineItem(
        line_number=line_number,
        number_of_packages=item.quantity,
        size_of_package=str(item.package_size) if item.package_size is not None else DEFAULT_PACKAGE_SIZE,
        ndc=item.ndc,
        name_of_item=item_name(item),
    )


def generate_forms(
    registrant: Registrant,
    items: Sequence[ControlledLineItem],
    now: Optional[datetime] = None,
) -> List[RegulatedForm]:
    """
    Partition controlled items into DEA Form 222 drafts of at most 10 lines.

    - Items are filled in submission order; no grouping or repacking.
    - Every form in the batch shares one generation timestamp.
    - Regulatory problems are not raised here; run validate_form on each result.
    """
    ts = now or datetime.now(timezone.utc)
    info = registrant_info(registrant)

    forms: List[RegulatedForm] = []
    for index, chunk in enumerate(chunk_items(items, FORM222_MAX_LINES)):
        lines = [_line_item(item, n) for n, item in enumerate(chunk, start=1)]
        forms.append(
            RegulatedForm(
                form_number=form222_number(registrant.dea_number, ts, index),
                registrant_info=info.model_copy(),
                line_items=lines,
                total_lines=len(lines),
                date_executed=ts,
                status=FormStatus.DRAFT,
            )
        )

    log.info(
        "form222_generated",
        extra={"extra": {
            "event": "form222_generated",
            "dea_number": mask_dea_number(registrant.dea_number),
            "items": len(items),
            "forms": len(forms),
        }},
    )
    return forms


def validate_form(form: RegulatedForm) -> List[str]:
    """Human-readable violations; an empty list means the form can be submitted."""
    errors: List[str] = []
    dea = form.registrant_info.dea_number or ""

    if not dea:
        errors.append("DEA number is required")

    # Also fires for an empty number, so both messages appear together in that case.
    if not _DEA_RE.fullmatch(dea):
        errors.append("Invalid DEA number format (should be 2 letters + 7 digits)")

    if len(form.line_items) == 0:
        errors.append("At least one line item is required")

    if len(form.line_items) > FORM222_MAX_LINES:
        errors.append(f"Maximum {FORM222_MAX_LINES} line items per form")

    for n, item in enumerate(form.line_items, start=1):
        if not item.ndc:
            errors.append(f"Line {n}: NDC is required")
        if not item.name_of_item:
            errors.append(f"Line {n}: Item name is required")
        if item.number_of_packages <= 0:
            errors.append(f"Line {n}: Quantity must be greater than 0")

    return errors
