from __future__ import annotations

import logging
import re
from typing import Callable, List, NamedTuple, Optional

from models.forms import NormalizedIdentifier
from ndc.normalizer import normalize_date, normalize_ndc

log = logging.getLogger("compliance.ndc.parser")

# 5-11 digits, optional dash, 3-4 digits, optional dash, 1-2 digits.
_NDC_PATTERN = r"[0-9]{5,11}-?[0-9]{3,4}-?[0-9]{1,2}"
_NDC_RE = re.compile(_NDC_PATTERN)
_EMBEDDED_NDC_RE = re.compile(f"({_NDC_PATTERN})")
_GS1_RE = re.compile(r"[0-9]{14,}")
_GS1_NDC_RUN_RE = re.compile(r"[0-9]{5,11}")
_DATE_RE = re.compile(r"[0-9]{4}[-/][0-9]{2}[-/][0-9]{2}")
_ALNUM_LOT_RE = re.compile(r"[A-Za-z0-9]{4,}")
_LOT_PREFIX_RE = re.compile(r"^LOT", flags=re.I)
_LOT_TOKEN_RE = re.compile(r"LOT#?\s*:?\s*([A-Z0-9]+)", flags=re.I)


class _Format(NamedTuple):
    name: str
    matches: Callable[[str], bool]
    extract: Callable[[str], NormalizedIdentifier]


def _looks_like_ndc(s: str) -> bool:
    return bool(_NDC_RE.fullmatch(s.replace("-", "")))


def _strip_lot_prefix(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return _LOT_PREFIX_RE.sub("", value).strip() or None


def _parse_pipe(s: str) -> NormalizedIdentifier:
    parts = [p.strip() for p in s.split("|")]
    ndc = parts[0] if parts else ""
    lot = parts[1] if len(parts) > 1 and parts[1] else None
    exp = parts[2] if len(parts) > 2 and parts[2] else None
    return NormalizedIdentifier(
        ndc=normalize_ndc(ndc),
        lot_number=lot,
        expiration_date=normalize_date(exp),
        source="pipe",
    )


def _parse_colon(s: str) -> NormalizedIdentifier:
    parts = [p.strip() for p in s.split(":")]

    ndc = next((p for p in parts if _looks_like_ndc(p)), parts[0] if parts else "")

    # First part passing either test wins, so a dashless NDC ahead of the lot is also taken as the lot.
    lot = next(
        (p for p in parts if p.upper().startswith("LOT") or _ALNUM_LOT_RE.fullmatch(p)),
        None,
    )
    exp = next((p for p in parts if _DATE_RE.fullmatch(p)), None)

    return NormalizedIdentifier(
        ndc=normalize_ndc(ndc),
        lot_number=_strip_lot_prefix(lot),
        expiration_date=normalize_date(exp),
        source="colon",
    )


def _parse_gs1(s: str) -> NormalizedIdentifier:
    # Simplified: no Application Identifier (01/10/17) decoding, so lot and expiry are never read.
    m = _GS1_NDC_RUN_RE.search(s)
    ndc = m.group(0) if m else s[:11]
    return NormalizedIdentifier(ndc=normalize_ndc(ndc), source="gs1")


def _parse_embedded(s: str) -> NormalizedIdentifier:
    m = _EMBEDDED_NDC_RE.search(s)
    ndc = m.group(1) if m else ""
    remaining = s.replace(ndc, "", 1).strip()

    lot_m = _LOT_TOKEN_RE.search(remaining)
    exp_m = _DATE_RE.search(remaining)
    return NormalizedIdentifier(
        ndc=normalize_ndc(ndc),
        lot_number=lot_m.group(1) if lot_m else None,
        expiration_date=normalize_date(exp_m.group(0) if exp_m else None),
        source="embedded",
    )


def _parse_bare(s: str) -> NormalizedIdentifier:
    return NormalizedIdentifier(ndc=normalize_ndc(s), source="bare")


def _parse_fallback(s: str) -> NormalizedIdentifier:
    log.debug(
        "identifier_unparsed",
        extra={"extra": {"event": "identifier_unparsed", "length": len(s)}},
    )
    return NormalizedIdentifier(ndc=normalize_ndc(s), source="fallback")


# Tried top to bottom; first match wins.
FORMATS: List[_Format] = [
    _Format("pipe", lambda s: "|" in s, _parse_pipe),
    _Format("colon", lambda s: ":" in s, _parse_colon),
    _Format("gs1", lambda s: bool(_GS1_RE.fullmatch(s)), _parse_gs1),
    _Format("embedded", lambda s: bool(_EMBEDDED_NDC_RE.search(s)), _parse_embedded),
    _Format("bare", _looks_like_ndc, _parse_bare),
    _Format("fallback", lambda s: True, _parse_fallback),
]


def parse_identifier(raw: str) -> NormalizedIdentifier:
    """Parse a barcode scan or typed entry into NDC / lot / expiration.

    Best effort, never raises: an unreadable scan yields its own text as the NDC so the
    user can correct it. Callers check the result with `is_valid_ndc_format`.

    Supported inputs, in priority order:
    - "00071-0156-23|LOT123|2024-12-31"
    - "00071-0156-23:LOT123:2024-12-31"
    - "0100071015623..." (14+ digits, GS1-like; NDC only)
    - "Oxycodone 00071-0156-23 LOT A12 EXP 2024/12/31"
    - "00071-0156-23"
    """
    if raw is None:
        return NormalizedIdentifier()
    s = raw.strip() if isinstance(raw, str) else str(raw).strip()
    if not s:
        return NormalizedIdentifier()

    for fmt in FORMATS:
        if fmt.matches(s):
            return fmt.extract(s)
    return _parse_fallback(s)
