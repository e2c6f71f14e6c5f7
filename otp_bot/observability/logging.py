import json
import re
import time
from otp_bot.settings import settings

# Free-text fields that may carry message bodies, codes or login tokens
SENSITIVE_KEYS = {"text", "body", "reply", "code", "hash", "token", "message"}
# Fields holding phone numbers or transport addresses
PHONE_KEYS = {"phone", "sender", "address", "to"}

_DIGITS = re.compile(r"\d")


def _redact_value(v):
    if isinstance(v, str) and len(v) > 0:
        return f"[REDACTED:{len(v)}chars]"
    if isinstance(v, dict):
        return {k: _redact_value(val) for k, val in v.items()}
    return v


def _mask_phone(v):
    if not isinstance(v, str):
        return v
    digits = _DIGITS.findall(v)
    if len(digits) <= 4:
        return v
    return f"***{''.join(digits[-4:])}"


def _clean(k, v):
    if k in SENSITIVE_KEYS:
        return _redact_value(v)
    if k in PHONE_KEYS:
        return _mask_phone(v)
    if isinstance(v, dict):
        return {sk: _clean(sk, sv) for sk, sv in v.items()}
    return v


def log(event: str, **fields):
    payload = {"ts": int(time.time()), "event": event}

    if settings.ENABLE_PII_REDACTION:
        payload.update({k: _clean(k, v) for k, v in fields.items()})
    else:
        payload.update(fields)

    print(json.dumps(payload, ensure_ascii=False, default=str), flush=True)
