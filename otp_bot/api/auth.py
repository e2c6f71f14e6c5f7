import hmac

from fastapi import Header

from otp_bot.errors import Forbidden
from otp_bot.settings import settings


def require_internal_key(x_internal_key: str = Header(default="", alias="x-internal-key")):
    """
    Shared-secret check for backend-facing routes.
    The header must equal BOT_INTERNAL_KEY exactly; anything else is 403.
    """
    if not hmac.compare_digest(x_internal_key.encode(), settings.BOT_INTERNAL_KEY.encode()):
        raise Forbidden()
