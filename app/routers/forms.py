from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, Field

from config.settings import settings
from dea.export import export_destruction_form, export_to_pdf
from dea.form222 import generate_forms, validate_form
from dea.form41 import generate_destruction_form, validate_destruction_form
from dea.submission import require_destruction_submittable, require_submittable
from models.forms import (
    ControlledLineItem,
    DestroyedSubstance,
    DestructionForm,
    DestructionMethod,
    DestructionRegistrant,
    Registrant,
    RegulatedForm,
    Witness,
)
from ops.metrics import Timer

router = APIRouter()
log = logging.getLogger("compliance.routers.forms")


class GenerateForm222Request(BaseModel):
    registrant: Registrant
    items: List[ControlledLineItem] = Field(default_factory=list)


class Form222Request(BaseModel):
    form: RegulatedForm


class GenerateForm41Request(BaseModel):
    registrant_info: DestructionRegistrant
    substances_destroyed: List[DestroyedSubstance] = Field(default_factory=list)
    method_of_destruction: Optional[DestructionMethod] = None
    date_of_destruction: datetime
    location: str = ""
    witnesses: List[Witness] = Field(default_factory=list)
    notes: Optional[str] = None


class Form41Request(BaseModel):
    form: DestructionForm


def _text_attachment(body: bytes, filename: str) -> Response:
    return Response(
        content=body,
        media_type="text/plain; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/forms/222/generate")
def generate_222(req: GenerateForm222Request):
    if settings.MAX_ITEMS_PER_BATCH and len(req.items) > settings.MAX_ITEMS_PER_BATCH:
        raise HTTPException(status_code=400, detail="too_many_items")

    t = Timer()
    forms = generate_forms(req.registrant, req.items)
    violations = {f.form_number: validate_form(f) for f in forms}
    log.info(
        "form222_batch",
        extra={"extra": {
            "event": "form222_batch",
            "forms": len(forms),
            "invalid_forms": sum(1 for v in violations.values() if v),
            "latency_ms": t.ms(),
        }},
    )
    # An empty batch is not an error here; the UI reports "no controlled substances found".
    return {
        "ok": all(not v for v in violations.values()),
        "forms": [f.model_dump(mode="json") for f in forms],
        "violations": violations,
    }


@router.post("/forms/222/validate")
def validate_222(req: Form222Request):
    violations = validate_form(req.form)
    return {"ok": not violations, "form_number": req.form.form_number, "violations": violations}


@router.post("/forms/222/export")
def export_222(req: Form222Request):
    form = require_submittable(req.form)
    return _text_attachment(export_to_pdf(form), f"dea-form-222-{form.form_number}.txt")


@router.post("/forms/41/generate")
def generate_41(req: GenerateForm41Request):
    form = generate_destruction_form(
        registrant_info=req.registrant_info,
        substances_destroyed=req.substances_destroyed,
        method_of_destruction=req.method_of_destruction,
        date_of_destruction=req.date_of_destruction,
        location=req.location,
        witnesses=req.witnesses,
        notes=req.notes,
    )
    violations = validate_destruction_form(form)
    return {"ok": not violations, "form": form.model_dump(mode="json"), "violations": violations}


@router.post("/forms/41/validate")
def validate_41(req: Form41Request):
    violations = validate_destruction_form(req.form)
    return {"ok": not violations, "form_id": req.form.id, "violations": violations}


@router.post("/forms/41/export")
def export_41(req: Form41Request):
    form = require_destruction_submittable(req.form)
    return _text_attachment(export_destruction_form(form), f"dea-form-41-{form.id}.txt")
