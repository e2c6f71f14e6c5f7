from dataclasses import dataclass
from typing import Optional

from otp_bot.core.commands import CommandKind, classify
from otp_bot.core.orchestrator import VerificationOrchestrator
from otp_bot.core.phone import digits_only
from otp_bot.core.replies import PROCESSING_ERROR, login_reply, opt_out_reply, purchase_reply
from otp_bot.gateway.client import GatewayClient
from otp_bot.observability.logging import log
from otp_bot.settings import settings
from otp_bot.transport.adapter import TransportAdapter


@dataclass(frozen=True)
class InboundMessage:
    sender: str
    body: str
    message_id: Optional[str] = None


class InboundHandler:
    def __init__(
        self,
        transport: TransportAdapter,
        gateway: GatewayClient,
        orchestrator: Optional[VerificationOrchestrator] = None,
        purchase_link: Optional[str] = None,
    ):
        self.transport = transport
        self.gateway = gateway
        self.orchestrator = orchestrator or VerificationOrchestrator(gateway)
        self.purchase_link = purchase_link or settings.purchase_link

    async def handle(self, message: InboundMessage) -> Optional[str]:
        """
        Handle one inbound chat message and send at most one reply.

        Returns the reply text (None when the message is ignored). Nothing
        raised while working out the reply escapes: it becomes the generic
        error reply instead.
        """
        try:
            reply = await self._compose(message)
        except Exception as e:
            log(
                event="inbound_handler_error",
                sender=message.sender,
                messageId=message.message_id,
                errorType=type(e).__name__,
                error=str(e)[:300],
            )
            reply = PROCESSING_ERROR

        if reply is None:
            return None
        await self._send_reply(message, reply)
        return reply

    async def _compose(self, message: InboundMessage) -> Optional[str]:
        command = classify(message.body)
        log(
            event="inbound_message",
            sender=message.sender,
            messageId=message.message_id,
            body=message.body,
            command=command.kind.value,
        )

        if command.kind is CommandKind.IGNORE:
            return None
        if command.kind is CommandKind.BUY:
            return purchase_reply(self.purchase_link)

        phone = digits_only(message.sender)

        if command.kind is CommandKind.STOP:
            resp = await self.gateway.opt_out(phone)
            log(event="opt_out_result", phone=phone, statusCode=resp.status, success=resp.succeeded)
            return opt_out_reply(resp.succeeded)

        result = await self.orchestrator.verify(command.token, phone)
        return login_reply(result)

    async def _send_reply(self, message: InboundMessage, reply: str) -> None:
        try:
            await self.transport.send_message(message.sender, reply)
        except Exception as e:
            # Not retried: a second delivery could duplicate the reply.
            log(
                event="reply_send_failed",
                sender=message.sender,
                messageId=message.message_id,
                errorType=type(e).__name__,
                error=str(e)[:300],
            )
