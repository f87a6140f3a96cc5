# siteadmin/utils/payload_guard.py
from __future__ import annotations

import json

from siteadmin.core.errors import PayloadTooLargeError, ValidationError
from siteadmin.core.settings import settings


def enforce_config_size(data: dict) -> None:
    """
    Enforces a maximum serialized JSON size (in KB) for a config value.
    Raises PayloadTooLargeError (413) on overflow, ValidationError on invalid JSON.
    """
    limit_kb = float(getattr(settings, "MAX_CONFIG_DATA_KB", 0) or 0)
    if limit_kb <= 0:
        return
    try:
        # compact JSON to measure true wire-size
        b = json.dumps(data, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
        kb = len(b) / 1024.0
    except (TypeError, ValueError):
        raise ValidationError("Invalid JSON in config value")
    if kb > limit_kb:
        raise PayloadTooLargeError(
            f"Payload too large: config is {kb:.1f}KB, limit is {limit_kb:.0f}KB",
        )
