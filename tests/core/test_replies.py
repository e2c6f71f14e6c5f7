import re

from otp_bot.core.orchestrator import VerificationResult
from otp_bot.core.replies import (
    LOGIN_FAILED_DEFAULT,
    UNSUBSCRIBE_FAILED,
    UNSUBSCRIBED,
    login_reply,
    opt_out_reply,
    otp_text,
    purchase_reply,
)

URL_RE = re.compile(r"https?://|www\.", re.IGNORECASE)


def test_login_success_with_phone():
    reply = login_reply(VerificationResult(success=True, token="secret-jwt", user_phone="919123456789"))
    assert "for 919123456789" in reply
    assert reply.startswith("✅ Login successful for 919123456789.\n\n")
    assert "on your computer" in reply
    assert "on your phone" in reply
    assert not URL_RE.search(reply)
    assert "secret-jwt" not in reply


def test_login_success_without_phone():
    reply = login_reply(VerificationResult(success=True))
    assert reply.startswith("✅ Login successful.\n\n")
    assert " for " not in reply.split("\n")[0]


def test_login_failure_uses_backend_message():
    assert login_reply(VerificationResult(success=False, message="Code already used")) == (
        "❌ Login failed: Code already used"
    )


def test_login_failure_default_message():
    assert login_reply(VerificationResult(success=False)) == f"❌ Login failed: {LOGIN_FAILED_DEFAULT}"
    assert LOGIN_FAILED_DEFAULT == "Invalid or expired code."


def test_purchase_reply():
    assert purchase_reply("https://example.com/pricing") == "🛒 Purchase link: https://example.com/pricing"


def test_opt_out_replies():
    assert opt_out_reply(True) == UNSUBSCRIBED
    assert opt_out_reply(False) == UNSUBSCRIBE_FAILED


def test_otp_text_login_and_reset():
    assert otp_text("True-OTP", "123456") == (
        "Your True-OTP OTP is 123456. It expires in 10 minutes. Do not share this code."
    )
    assert otp_text("Acme", "9999", "reset") == (
        "Your Acme Password Reset OTP is 9999. It expires in 10 minutes. Do not share this code."
    )
    assert "Password Reset" not in otp_text("Acme", "9999", "signup")
