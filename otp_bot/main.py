from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from otp_bot.api.routes import router
from otp_bot.core.dispatcher import NotificationDispatcher
from otp_bot.core.inbound import InboundHandler
from otp_bot.errors import RelayError
from otp_bot.gateway.client import GatewayClient
from otp_bot.observability.logging import log
from otp_bot.settings import settings
from otp_bot.transport.adapter import TransportAdapter
from otp_bot.transport.bridge import HttpBridgeTransport

gateway = GatewayClient.from_settings()
bridge = HttpBridgeTransport.from_settings()
transport = TransportAdapter(bridge)


@asynccontextmanager
async def lifespan(app: FastAPI):
    log(
        event="boot",
        host=settings.HOST,
        port=settings.PORT,
        apiBaseUrl=settings.api_base_url,
        appApiUrl=settings.app_api_url,
        bridgeUrl=settings.TRANSPORT_BRIDGE_URL,
    )
    yield
    await gateway.aclose()
    await bridge.aclose()
    log(event="shutdown")


app = FastAPI(title="OTP Chat Bot", lifespan=lifespan)
app.state.transport = transport
app.state.dispatcher = NotificationDispatcher(transport)
app.state.inbound_handler = InboundHandler(transport, gateway)

app.include_router(router)


@app.get("/")
def root():
    return {"ok": True, "status": "ok"}


@app.get("/health")
def health():
    return {"ok": True}


@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError):
    if exc.status_code >= 500:
        log(event="request_failed", path=request.url.path, statusCode=exc.status_code, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"success": False, "message": exc.message})


@app.exception_handler(Exception)
async def universal_exception_handler(request: Request, exc: Exception):
    # Never leak exception details to the caller.
    log(event="unhandled_exception", path=request.url.path, errorType=type(exc).__name__, error=str(exc)[:500])
    return JSONResponse(status_code=500, content={"success": False, "message": "Internal server error"})


def run():
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
