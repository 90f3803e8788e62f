from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from config.settings import settings
from ndc.identifier_parser import parse_identifier
from ndc.normalizer import is_valid_ndc_format, normalize_date, normalize_ndc

router = APIRouter()


class ParseRequest(BaseModel):
    raw: str = ""


class NormalizeNDCRequest(BaseModel):
    ndc: str = Field(default="", max_length=64)


class NormalizeDateRequest(BaseModel):
    date: str = Field(default="", max_length=64)


@router.post("/identifiers/parse")
def parse(req: ParseRequest):
    if settings.MAX_SCAN_LENGTH and len(req.raw) > settings.MAX_SCAN_LENGTH:
        raise HTTPException(status_code=422, detail="scan_too_long")

    ident = parse_identifier(req.raw)
    # ndc_valid=False tells the UI to prompt for manual correction.
    return {"ok": True, "identifier": ident.model_dump(), "ndc_valid": is_valid_ndc_format(ident.ndc)}


@router.post("/ndc/normalize")
def normalize(req: NormalizeNDCRequest):
    ndc = normalize_ndc(req.ndc)
    return {"ok": True, "ndc": ndc, "valid": is_valid_ndc_format(ndc)}


@router.post("/dates/normalize")
def normalize_expiration(req: NormalizeDateRequest):
    return {"ok": True, "date": normalize_date(req.date)}
