from fastapi import Request

from otp_bot.core.dispatcher import NotificationDispatcher
from otp_bot.core.inbound import InboundHandler
from otp_bot.transport.adapter import TransportAdapter


def get_dispatcher(request: Request) -> NotificationDispatcher:
    return request.app.state.dispatcher


def get_inbound_handler(request: Request) -> InboundHandler:
    return request.app.state.inbound_handler


def get_transport(request: Request) -> TransportAdapter:
    return request.app.state.transport
