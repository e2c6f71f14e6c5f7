from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from pydantic import ValidationError

from otp_bot.api.auth import require_internal_key
from otp_bot.api.deps import get_dispatcher, get_inbound_handler, get_transport
from otp_bot.api.normalize import normalize_dispatch_payload, normalize_transport_event
from otp_bot.api.schemas import DispatchResponse, SendMessageRequest, SendOtpRequest, TransportEvent
from otp_bot.core.dispatcher import NotificationDispatcher
from otp_bot.core.inbound import InboundHandler, InboundMessage
from otp_bot.errors import BadRequest
from otp_bot.observability.logging import log
from otp_bot.transport.adapter import TransportAdapter

router = APIRouter()


async def _read_json(request: Request) -> Any:
    """Body as parsed JSON, or None when it is missing or malformed."""
    try:
        return await request.json()
    except Exception:
        return None


# ---------------------------------------------------------------------------
# Backend -> chat user dispatch
# ---------------------------------------------------------------------------
@router.post(
    "/send-message",
    response_model=DispatchResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(require_internal_key)],
)
async def send_message(request: Request, dispatcher: NotificationDispatcher = Depends(get_dispatcher)):
    raw = await _read_json(request)
    req = SendMessageRequest.model_validate(normalize_dispatch_payload(raw, ("phone", "text")))
    return await dispatcher.send_message(req.phone, req.text)


@router.post(
    "/send-otp",
    response_model=DispatchResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(require_internal_key)],
)
async def send_otp(request: Request, dispatcher: NotificationDispatcher = Depends(get_dispatcher)):
    raw = await _read_json(request)
    req = SendOtpRequest.model_validate(normalize_dispatch_payload(raw, ("phone", "code", "type")))
    return await dispatcher.send_otp(req.phone, req.code, req.type)


# ---------------------------------------------------------------------------
# Transport bridge -> this service
# ---------------------------------------------------------------------------
@router.post(
    "/transport/events",
    response_model=DispatchResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(require_internal_key)],
)
async def transport_event(
    request: Request,
    background_tasks: BackgroundTasks,
    transport: TransportAdapter = Depends(get_transport),
    handler: InboundHandler = Depends(get_inbound_handler),
):
    raw = await _read_json(request)
    try:
        evt = TransportEvent.model_validate(normalize_transport_event(raw))
    except ValidationError:
        raise BadRequest("invalid transport event") from None

    if evt.event == "ready":
        transport.on_ready()
    elif evt.event == "disconnected":
        transport.on_disconnected(evt.reason)
    elif evt.event == "auth_failure":
        transport.on_auth_failure(evt.message or evt.reason)
    else:
        if not evt.sender:
            raise BadRequest("from is required for message events")
        message = InboundMessage(sender=evt.sender, body=evt.body, message_id=evt.id)
        # Ack the bridge now; verification may take several backend round-trips.
        background_tasks.add_task(handler.handle, message)
        log(event="transport_message_queued", sender=evt.sender, messageId=evt.id)

    return {"success": True}


@router.get("/transport/status", dependencies=[Depends(require_internal_key)])
def transport_status(transport: TransportAdapter = Depends(get_transport)):
    return transport.snapshot()
