"""
Escalation state machine for login-code verification.

The attempt order is data, not control flow: ESCALATION_SEQUENCE lists the
(backend, include-phone) pairs tried in turn. Omitting the phone is a second
chance for codes whose stored phone format differs from the chat sender's.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from otp_bot.gateway.client import Backend, GatewayResponse


class EscalationState(str, Enum):
    PENDING = "PENDING"
    ATTEMPTING = "ATTEMPTING"
    SUCCEEDED = "SUCCEEDED"
    EXHAUSTED = "EXHAUSTED"


@dataclass(frozen=True)
class AttemptSpec:
    backend: Backend
    include_phone: bool


ESCALATION_SEQUENCE: Tuple[AttemptSpec, ...] = (
    AttemptSpec(Backend.PRIMARY, include_phone=True),
    AttemptSpec(Backend.SECONDARY, include_phone=True),
    AttemptSpec(Backend.PRIMARY, include_phone=False),
    AttemptSpec(Backend.SECONDARY, include_phone=False),
)


class Escalation:
    """One walk through the attempt sequence. Not reusable."""

    def __init__(self, sequence: Sequence[AttemptSpec] = ESCALATION_SEQUENCE):
        self.sequence = tuple(sequence)
        self.state = EscalationState.PENDING
        self.attempts_made = 0
        self.success: Optional[GatewayResponse] = None
        # Last response the backend actually returned; transport errors never replace it
        self.last_failure: Optional[GatewayResponse] = None

    @property
    def finished(self) -> bool:
        return self.state in (EscalationState.SUCCEEDED, EscalationState.EXHAUSTED)

    def next_attempt(self) -> Optional[AttemptSpec]:
        if self.finished:
            return None
        if self.attempts_made >= len(self.sequence):
            self.state = EscalationState.EXHAUSTED
            return None
        self.state = EscalationState.ATTEMPTING
        return self.sequence[self.attempts_made]

    def record(self, response: GatewayResponse) -> None:
        if self.state != EscalationState.ATTEMPTING:
            raise RuntimeError(f"cannot record a response in state {self.state.value}")
        self.attempts_made += 1
        if response.succeeded:
            self.success = response
            self.state = EscalationState.SUCCEEDED
        elif not response.transport_failed:
            self.last_failure = response
