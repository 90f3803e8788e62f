from __future__ import annotations

import re
from typing import Optional

# Dashed layouts by digit count. Anything else is returned untouched rather than forced into a wrong shape.
_NDC_GROUPS = {
    11: (5, 4, 2),
    10: (5, 4, 1),
    9: (4, 4, 1),
}

# Layouts accepted as already-correct manual entry.
_VALID_NDC_FORMATS = (
    re.compile(r"[0-9]{5}-[0-9]{4}-[0-9]{2}"),
    re.compile(r"[0-9]{4}-[0-9]{4}-[0-9]{2}"),
    re.compile(r"[0-9]{5}-[0-9]{3}-[0-9]{2}"),
)

_ISO_DATE_RE = re.compile(r"([0-9]{4})[-/]([0-9]{2})[-/]([0-9]{2})")
_US_DATE_RE = re.compile(r"([0-9]{1,2})/([0-9]{1,2})/([0-9]{4})")


def normalize_ndc(ndc: str) -> str:
    digits = re.sub(r"\D", "", ndc or "")
    if not digits:
        return ndc or ""
    groups = _NDC_GROUPS.get(len(digits))
    if not groups:
        return ndc
    out = []
    pos = 0
    for size in groups:
        out.append(digits[pos:pos + size])
        pos += size
    return "-".join(out)


def normalize_date(value: Optional[str]) -> Optional[str]:
    """
    Normalize to YYYY-MM-DD.
    - YYYY-MM-DD / YYYY/MM/DD pass through with dashes.
    - M/D/YYYY is read US month-first and zero-padded.
    Unrecognized values come back unchanged.
    """
    if not value:
        return None
    m = _ISO_DATE_RE.search(value)
    if m:
        return f"{m.group(1)}-{m.group(2)}-{m.group(3)}"
    m = _US_DATE_RE.search(value)
    if m:
        month = m.group(1).zfill(2)
        day = m.group(2).zfill(2)
        return f"{m.group(3)}-{month}-{day}"
    return value


def is_valid_ndc_format(ndc: str) -> bool:
    s = ndc or ""
    return any(p.fullmatch(s) for p in _VALID_NDC_FORMATS)
