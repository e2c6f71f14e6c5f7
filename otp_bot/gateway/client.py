"""
Outbound Gateway Client
-----------------------
JSON POST calls to the backend verification and opt-out endpoints.

Every call returns a GatewayResponse instead of raising: a transport error or
an unparseable body becomes a non-success value, so callers branch on the
result rather than catching exceptions.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

import httpx

from otp_bot.observability.logging import log
from otp_bot.settings import settings

VERIFY_PATH = "/auth/verify-hash-code"
OPTOUT_PATH = "/bot/whatsapp-optout"
INTERNAL_KEY_HEADER = "x-internal-key"


class Backend(str, Enum):
    PRIMARY = "primary"      # API_BASE (BACKEND_API_URL or APP_URL/api)
    SECONDARY = "secondary"  # application server, always APP_URL/api


@dataclass(frozen=True)
class GatewayResponse:
    ok: bool
    status: int = 0
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.ok and bool(self.data.get("success"))

    @property
    def transport_failed(self) -> bool:
        return self.error is not None


class GatewayClient:
    def __init__(
        self,
        api_base_url: str,
        app_api_url: str,
        internal_key: str,
        *,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_base_url = api_base_url.rstrip("/")
        self.app_api_url = app_api_url.rstrip("/")
        self.internal_key = internal_key
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, http_client: Optional[httpx.AsyncClient] = None) -> "GatewayClient":
        timeout = settings.GATEWAY_TIMEOUT_SEC or None
        return cls(
            settings.api_base_url,
            settings.app_api_url,
            settings.BOT_INTERNAL_KEY,
            timeout=timeout,
            http_client=http_client,
        )

    def base_url(self, backend: Backend) -> str:
        if backend is Backend.SECONDARY:
            return self.app_api_url
        return self.api_base_url

    async def post_json(self, url: str, body: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> GatewayResponse:
        start = time.monotonic()
        try:
            resp = await self._client.post(
                url,
                json=body,
                headers={"Content-Type": "application/json", **(headers or {})},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            log(
                event="gateway_request_failed",
                url=url,
                elapsedMs=int((time.monotonic() - start) * 1000),
                errorType=type(e).__name__,
                error=str(e)[:300],
            )
            return GatewayResponse(ok=False, error=f"{type(e).__name__}:{str(e)[:200]}")

        try:
            data = resp.json()
        except (ValueError, RecursionError):
            data = {}
        if not isinstance(data, dict):
            data = {}

        return GatewayResponse(ok=resp.is_success, status=resp.status_code, data=data)

    async def verify_hash_code(self, backend: Backend, hash_code: str, phone: Optional[str] = None) -> GatewayResponse:
        """POST {hash, phone?}; phone is left out entirely when None."""
        body: Dict[str, Any] = {"hash": hash_code}
        if phone is not None:
            body["phone"] = phone
        return await self.post_json(f"{self.base_url(backend)}{VERIFY_PATH}", body)

    async def opt_out(self, phone: str) -> GatewayResponse:
        return await self.post_json(
            f"{self.api_base_url}{OPTOUT_PATH}",
            {"phone": phone},
            headers={INTERNAL_KEY_HEADER: self.internal_key},
        )

    async def aclose(self) -> None:
        await self._client.aclose()
