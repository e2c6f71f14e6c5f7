"""
Transport adapter
-----------------
The chat network client is an external collaborator. This module only knows
that it can send a text to an address and that it reports lifecycle events.
The adapter owns the connection state; everything else asks `is_ready()`.
Updates come from a single writer (lifecycle events) so no locking is used.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional, Protocol

from otp_bot.observability.logging import log


class Transport(Protocol):
    async def send_message(self, address: str, text: str) -> None: ...


class ConnectionState(str, Enum):
    CONNECTING = "connecting"
    READY = "ready"
    DISCONNECTED = "disconnected"
    AUTH_FAILED = "auth_failed"


class TransportAdapter:
    def __init__(self, transport: Transport):
        self.transport = transport
        self.state = ConnectionState.CONNECTING
        self._ready = False
        self.last_reason: Optional[str] = None

    def is_ready(self) -> bool:
        return self._ready

    def on_ready(self) -> None:
        self._ready = True
        self.state = ConnectionState.READY
        self.last_reason = None
        log(event="transport_ready")

    def on_disconnected(self, reason: Optional[str] = None) -> None:
        self._ready = False
        self.state = ConnectionState.DISCONNECTED
        self.last_reason = reason
        log(event="transport_disconnected", reason=reason)

    def on_auth_failure(self, message: Optional[str] = None) -> None:
        # Readiness is left alone; a disconnect event follows if the session drops.
        self.state = ConnectionState.AUTH_FAILED
        self.last_reason = message
        log(event="transport_auth_failure", reason=message)

    def snapshot(self) -> dict:
        return {"state": self.state.value, "ready": self._ready, "reason": self.last_reason}

    async def send_message(self, address: str, text: str) -> None:
        await self.transport.send_message(address, text)
