from __future__ import annotations

import uuid
from contextvars import ContextVar
from typing import Optional

# Correlates log lines emitted while serving one HTTP request.
_request_id_var: ContextVar[str] = ContextVar("compliance_request_id", default="")


def resolve_request_id(header_value: Optional[str]) -> str:
    rid = (header_value or "").strip()
    return rid[:128] if rid else uuid.uuid4().hex


def set_request_id(rid: str) -> None:
    _request_id_var.set(rid or "")


def get_request_id() -> str:
    return _request_id_var.get() or ""


def clear_request_id() -> None:
    _request_id_var.set("")
