from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from models.forms import (
    DestroyedSubstance,
    DestructionForm,
    DestructionMethod,
    DestructionRegistrant,
    Witness,
)
from models.schema import FORM41_ID_PREFIX, FORM41_MIN_WITNESSES
from utils.ids import form41_id

log = logging.getLogger("compliance.dea.form41")


def generate_destruction_form(
    registrant_info: DestructionRegistrant,
    substances_destroyed: Sequence[DestroyedSubstance],
    method_of_destruction: Optional[DestructionMethod],
    date_of_destruction: datetime,
    location: str,
    witnesses: Sequence[Witness],
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> DestructionForm:
    ts = now or datetime.now(timezone.utc)
    form = DestructionForm(
        id=form41_id(FORM41_ID_PREFIX, ts),
        registrant_info=registrant_info,
        substances_destroyed=list(substances_destroyed),
        method_of_destruction=method_of_destruction,
        date_of_destruction=date_of_destruction,
        location=location,
        witnesses=list(witnesses),
        notes=notes,
    )
    log.info(
        "form41_generated",
        extra={"extra": {
            "event": "form41_generated",
            "form_id": form.id,
            "substances": len(form.substances_destroyed),
            "witnesses": len(form.witnesses),
        }},
    )
    return form


def validate_destruction_form(form: DestructionForm) -> List[str]:
    errors: List[str] = []

    if not form.registrant_info.dea_number:
        errors.append("DEA number is required")

    if len(form.substances_destroyed) == 0:
        errors.append("At least one substance must be listed for destruction")

    if len(form.witnesses) < FORM41_MIN_WITNESSES:
        errors.append("At least two witnesses are required for controlled substance destruction")

    if not form.method_of_destruction:
        errors.append("Method of destruction is required")

    return errors
