import pytest

from otp_bot.transport.adapter import TransportAdapter


class RecordingTransport:
    """Stands in for the chat network: records sends, optionally fails them."""

    def __init__(self, fail: bool = False):
        self.sent = []
        self.fail = fail

    async def send_message(self, address, text):
        if self.fail:
            raise RuntimeError("bridge unreachable")
        self.sent.append((address, text))


@pytest.fixture
def recording_transport():
    return RecordingTransport()


@pytest.fixture
def ready_adapter(recording_transport):
    adapter = TransportAdapter(recording_transport)
    adapter.on_ready()
    return adapter


@pytest.fixture
def failing_transport():
    return RecordingTransport(fail=True)
