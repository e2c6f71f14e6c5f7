from __future__ import annotations

from typing import Optional

import httpx

from otp_bot.gateway.client import INTERNAL_KEY_HEADER
from otp_bot.settings import settings

SEND_PATH = "/messages"


class HttpBridgeTransport:
    """
    Sends chat messages through an external session bridge over HTTP.

    The bridge holds the authenticated chat-network session and forwards
    inbound events to POST /transport/events on this service.
    """

    def __init__(
        self,
        base_url: str,
        internal_key: str,
        client_id: str,
        *,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.internal_key = internal_key
        self.client_id = client_id
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, http_client: Optional[httpx.AsyncClient] = None) -> "HttpBridgeTransport":
        return cls(
            settings.TRANSPORT_BRIDGE_URL,
            settings.BOT_INTERNAL_KEY,
            settings.BOT_CLIENT_ID,
            timeout=settings.TRANSPORT_TIMEOUT_SEC or None,
            http_client=http_client,
        )

    async def send_message(self, address: str, text: str) -> None:
        resp = await self._client.post(
            f"{self.base_url}{SEND_PATH}",
            json={"to": address, "text": text, "clientId": self.client_id},
            headers={INTERNAL_KEY_HEADER: self.internal_key},
        )
        resp.raise_for_status()

    async def aclose(self) -> None:
        await self._client.aclose()
