"""User-facing texts. Login replies never carry a login link or credential."""
from typing import Optional

from otp_bot.core.orchestrator import VerificationResult

PURCHASE_TEMPLATE = "🛒 Purchase link: {link}"

UNSUBSCRIBED = "✅ You have been unsubscribed from WhatsApp notifications."
UNSUBSCRIBE_FAILED = "⚠️ Unable to unsubscribe at the moment. Please try again later."

LOGIN_SUCCESS_INSTRUCTIONS = (
    "• If you are on your computer, your browser will log in automatically within a few seconds.\n"
    "• If you are on your phone, please open the app or website directly to continue."
)
LOGIN_FAILED_DEFAULT = "Invalid or expired code."

PROCESSING_ERROR = "⚠️ An error occurred while processing your request. Please try again."

OTP_TEMPLATE = "Your {app_name} {label}OTP is {code}. It expires in 10 minutes. Do not share this code."
RESET_LABEL = "Password Reset "


def purchase_reply(link: str) -> str:
    return PURCHASE_TEMPLATE.format(link=link)


def opt_out_reply(succeeded: bool) -> str:
    return UNSUBSCRIBED if succeeded else UNSUBSCRIBE_FAILED


def login_reply(result: VerificationResult) -> str:
    if result.success:
        suffix = f" for {result.user_phone}" if result.user_phone else ""
        return f"✅ Login successful{suffix}.\n\n{LOGIN_SUCCESS_INSTRUCTIONS}"
    return f"❌ Login failed: {result.message or LOGIN_FAILED_DEFAULT}"


def otp_text(app_name: str, code: str, otp_type: Optional[str] = None) -> str:
    label = RESET_LABEL if otp_type == "reset" else ""
    return OTP_TEMPLATE.format(app_name=app_name, label=label, code=code)
