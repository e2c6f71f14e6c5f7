import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock, patch

from otp_bot.api.deps import get_inbound_handler, get_transport
from otp_bot.core.inbound import InboundHandler
from otp_bot.core.orchestrator import VerificationResult
from otp_bot.main import app
from otp_bot.settings import settings
from otp_bot.transport.adapter import TransportAdapter

client = TestClient(app)
KEY = "test-internal-key"
HEADERS = {"x-internal-key": KEY}
SENDER = "919876543210@c.us"


@pytest.fixture(autouse=True)
def internal_key():
    with patch.object(settings, "BOT_INTERNAL_KEY", KEY):
        yield


@pytest.fixture
def wired(recording_transport):
    adapter = TransportAdapter(recording_transport)
    gateway = MagicMock()
    gateway.opt_out = AsyncMock()
    orchestrator = MagicMock()
    orchestrator.verify = AsyncMock(return_value=VerificationResult(success=True, user_phone="919876543210"))
    handler = InboundHandler(adapter, gateway, orchestrator=orchestrator, purchase_link="https://pay.example/p")
    app.dependency_overrides[get_transport] = lambda: adapter
    app.dependency_overrides[get_inbound_handler] = lambda: handler
    yield adapter, orchestrator
    app.dependency_overrides = {}


def test_events_require_internal_key(wired):
    adapter, _ = wired
    resp = client.post("/transport/events", headers={"x-internal-key": "nope"}, json={"event": "ready"})
    assert resp.status_code == 403
    assert adapter.is_ready() is False


def test_lifecycle_events_drive_readiness(wired):
    adapter, _ = wired
    assert client.post("/transport/events", headers=HEADERS, json={"event": "ready"}).json() == {"success": True}
    assert adapter.is_ready() is True

    client.post("/transport/events", headers=HEADERS, json={"event": "disconnected", "reason": "LOGOUT"})
    assert adapter.is_ready() is False

    client.post("/transport/events", headers=HEADERS, json={"event": "auth_failure", "message": "bad session"})
    status = client.get("/transport/status", headers=HEADERS).json()
    assert status == {"state": "auth_failed", "ready": False, "reason": "bad session"}


def test_message_event_is_handled_and_replied(wired, recording_transport):
    _, orchestrator = wired
    resp = client.post(
        "/transport/events",
        headers=HEADERS,
        json={"event": "message", "from": SENDER, "body": "/login abc123", "id": "wamid.1"},
    )
    assert resp.status_code == 200
    orchestrator.verify.assert_awaited_once_with("abc123", "919876543210")
    assert len(recording_transport.sent) == 1
    assert recording_transport.sent[0][0] == SENDER
    assert "for 919876543210" in recording_transport.sent[0][1]


def test_message_event_accepts_bridge_field_variants(wired, recording_transport):
    client.post("/transport/events", headers=HEADERS, json={"event": "message", "sender": SENDER, "text": "buy"})
    assert recording_transport.sent == [(SENDER, "🛒 Purchase link: https://pay.example/p")]


def test_ignored_message_sends_nothing(wired, recording_transport):
    resp = client.post("/transport/events", headers=HEADERS, json={"event": "message", "from": SENDER, "body": "hi"})
    assert resp.status_code == 200
    assert recording_transport.sent == []


def test_message_without_sender_is_400(wired):
    resp = client.post("/transport/events", headers=HEADERS, json={"event": "message", "body": "buy"})
    assert resp.status_code == 400
    assert resp.json()["success"] is False


def test_unknown_event_is_400(wired):
    resp = client.post("/transport/events", headers=HEADERS, json={"event": "qr", "qr": "2@abc"})
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "invalid transport event"}
