import math
from typing import Any, Optional


def _as_text(value: Any) -> Optional[str]:
    """JSON numbers are accepted for phone/code; everything non-scalar is dropped."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        # 9876543210.0 is a phone number, 1.5 is not
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return None
    if isinstance(value, str):
        return value
    return None


def normalize_dispatch_payload(payload: Any, fields) -> dict:
    """
    Coerce an arbitrary request body into {field: str|None} for the given fields.

    Non-dict bodies (missing, malformed, a bare string) count as empty, so the
    dispatcher reports the missing fields instead of the framework rejecting
    the request.
    """
    if not isinstance(payload, dict):
        payload = {}
    return {f: _as_text(payload.get(f)) for f in fields}


def normalize_transport_event(payload: Any) -> dict:
    if not isinstance(payload, dict):
        return {}
    out = dict(payload)
    # Bridges differ on naming; accept the common variants
    if "from" not in out:
        sender = out.get("sender") or out.get("chatId")
        if sender is not None:
            out["from"] = sender
    if "body" not in out and "text" in out:
        out["body"] = out.get("text")
    if out.get("body") is None:
        out["body"] = ""
    for key in ("from", "id", "body"):
        if key in out and out[key] is not None:
            out[key] = _as_text(out[key]) or ""
    return out
