from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from otp_bot.core.state_machine import ESCALATION_SEQUENCE, AttemptSpec, Escalation, EscalationState
from otp_bot.gateway.client import GatewayClient, GatewayResponse
from otp_bot.observability.logging import log


@dataclass(frozen=True)
class VerificationResult:
    success: bool
    token: Optional[str] = None
    user_phone: Optional[str] = None
    message: Optional[str] = None
    attempts: int = 0


def _as_dict(v: Any) -> Dict[str, Any]:
    return v if isinstance(v, dict) else {}


def _text_or_none(v: Any) -> Optional[str]:
    if v is None or v == "":
        return None
    return str(v)


def _result_from(escalation: Escalation) -> VerificationResult:
    if escalation.state == EscalationState.SUCCEEDED and escalation.success is not None:
        data = _as_dict(escalation.success.data.get("data"))
        user = _as_dict(data.get("user"))
        return VerificationResult(
            success=True,
            token=_text_or_none(data.get("token")),
            user_phone=_text_or_none(user.get("phone")),
            attempts=escalation.attempts_made,
        )

    failure: Optional[GatewayResponse] = escalation.last_failure
    message = _text_or_none(failure.data.get("message")) if failure else None
    return VerificationResult(success=False, message=message, attempts=escalation.attempts_made)


class VerificationOrchestrator:
    """
    Verifies a login code against the backends in escalation order.

    Attempts run strictly one after another and stop at the first
    `ok && data.success`. Never raises for backend trouble: an attempt that
    errors counts as a transport failure and the escalation moves on.
    """

    def __init__(self, gateway: GatewayClient, sequence: Sequence[AttemptSpec] = ESCALATION_SEQUENCE):
        self.gateway = gateway
        self.sequence = tuple(sequence)

    async def verify(self, token: str, sender_phone: str) -> VerificationResult:
        escalation = Escalation(self.sequence)

        while True:
            attempt = escalation.next_attempt()
            if attempt is None:
                break
            phone = sender_phone if attempt.include_phone else None
            try:
                resp = await self.gateway.verify_hash_code(attempt.backend, token, phone)
            except Exception as e:
                resp = GatewayResponse(ok=False, error=f"{type(e).__name__}:{str(e)[:200]}")
            escalation.record(resp)
            log(
                event="verify_attempt",
                attempt=escalation.attempts_made,
                backend=attempt.backend.value,
                includePhone=attempt.include_phone,
                statusCode=resp.status,
                transportError=resp.transport_failed,
                success=resp.succeeded,
            )

        result = _result_from(escalation)
        log(
            event="verify_outcome",
            state=escalation.state.value,
            attempts=result.attempts,
            success=result.success,
        )
        return result
