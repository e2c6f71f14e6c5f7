"""
Notification Dispatcher
-----------------------
Sends backend-originated texts (OTP codes, generic notifications) to a phone.

Checks run in a fixed order before anything is sent: transport readiness,
required fields, phone normalisation. The shared-secret check happens at the
HTTP boundary (api/auth.py) before the dispatcher is reached. One send per
call; failures are not retried.
"""
from typing import Optional

from otp_bot.core.phone import address_for
from otp_bot.core.replies import otp_text
from otp_bot.errors import BadRequest, DispatchFailure, ServiceUnavailable
from otp_bot.observability.logging import log
from otp_bot.settings import settings
from otp_bot.transport.adapter import TransportAdapter


class NotificationDispatcher:
    def __init__(
        self,
        transport: TransportAdapter,
        app_name: Optional[str] = None,
        default_country_code: Optional[str] = None,
    ):
        self.transport = transport
        self.app_name = app_name or settings.APP_NAME
        self.default_country_code = default_country_code

    def _ensure_ready(self) -> None:
        if not self.transport.is_ready():
            raise ServiceUnavailable()

    async def send_message(self, phone: Optional[str], text: Optional[str]) -> dict:
        self._ensure_ready()
        if not phone or not text:
            raise BadRequest("phone and text are required")
        address = address_for(phone, self.default_country_code)
        await self._deliver(address, str(text), kind="message", failure_message="Failed to send message")
        return {"success": True}

    async def send_otp(self, phone: Optional[str], code: Optional[str], otp_type: Optional[str] = None) -> dict:
        self._ensure_ready()
        if not phone or not code:
            raise BadRequest("phone and code are required")
        address = address_for(phone, self.default_country_code)
        text = otp_text(self.app_name, str(code), otp_type)
        await self._deliver(address, text, kind=f"otp:{otp_type or 'login'}", failure_message="Failed to send OTP")
        return {"success": True}

    async def _deliver(self, address: str, text: str, *, kind: str, failure_message: str) -> None:
        try:
            await self.transport.send_message(address, text)
        except Exception as e:
            log(
                event="dispatch_failed",
                kind=kind,
                address=address,
                errorType=type(e).__name__,
                error=str(e)[:300],
            )
            raise DispatchFailure(failure_message) from e
        log(event="dispatch_sent", kind=kind, address=address)
