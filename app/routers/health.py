from __future__ import annotations

import os
from typing import Any, Dict

from fastapi import APIRouter

from config.settings import settings
from models.schema import FORM222_MAX_LINES

router = APIRouter()


@router.get("/health")
def health():
    rev = os.getenv("K_REVISION") or ""
    svc = os.getenv("K_SERVICE") or settings.SERVICE_NAME

    payload: Dict[str, Any] = {
        "ok": True,
        "service": settings.SERVICE_NAME,
        "cloudrun_service": svc,
        "revision": rev,
        "environment": settings.ENVIRONMENT,
        "limits": {
            "form222_max_lines": FORM222_MAX_LINES,
            "max_items_per_batch": settings.MAX_ITEMS_PER_BATCH,
            "max_scan_length": settings.MAX_SCAN_LENGTH,
        },
    }
    return payload
