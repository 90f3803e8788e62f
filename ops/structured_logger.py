from __future__ import annotations

import json
import logging
import os
import sys
import time
from typing import Any, Dict, Optional

from config.settings import settings
from utils.request_context import get_request_id


class JsonFormatter(logging.Formatter):
    """One JSON object per line on stdout, Cloud Logging field names."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "severity": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "time_unix": time.time(),
            "service": settings.SERVICE_NAME,
            "environment": settings.ENVIRONMENT,
            "revision": os.getenv("K_REVISION") or "",
        }
        rid = get_request_id()
        if rid:
            payload["request_id"] = rid
        if hasattr(record, "extra") and isinstance(record.extra, dict):
            payload.update(record.extra)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: Optional[str] = None) -> None:
    root = logging.getLogger()
    root.setLevel((level or settings.LOG_LEVEL).upper())
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    # Access logs duplicate the request events we already emit.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    root.handlers[:] = [handler]
