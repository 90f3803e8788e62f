from __future__ import annotations

from datetime import datetime


def timestamp_ms(ts: datetime) -> int:
    return int(ts.timestamp() * 1000)


def form222_number(dea_number: str, ts: datetime, index: int) -> str:
    # {dea}-{epoch ms}-{1-based position in the batch}. Unique per form within one generation call.
    return f"{dea_number}-{timestamp_ms(ts)}-{index + 1}"


def form41_id(prefix: str, ts: datetime) -> str:
    return f"{prefix}-{timestamp_ms(ts)}"
