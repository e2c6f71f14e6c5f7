import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    # Application server (Next.js). Its /api prefix doubles as the secondary verify backend.
    APP_URL: str = os.getenv("APP_URL", "http://localhost:3000")
    # Primary backend; empty means "use the application server's /api".
    BACKEND_API_URL: str = os.getenv("BACKEND_API_URL", "")

    # Shared secret, checked on inbound dispatch requests and sent on opt-out calls
    BOT_INTERNAL_KEY: str = os.getenv("BOT_INTERNAL_KEY", "dev-secret-key")
    BOT_CLIENT_ID: str = os.getenv("BOT_CLIENT_ID", "bot-dev")

    # Applied to numbers submitted without a country code (heuristic, see core/phone.py)
    DEFAULT_COUNTRY_CODE: str = os.getenv("DEFAULT_COUNTRY_CODE", "91")

    PAYMENT_LINK_URL: str = os.getenv("PAYMENT_LINK_URL") or os.getenv("NEXT_PUBLIC_PAYMENT_LINK_URL", "")
    APP_NAME: str = os.getenv("APP_NAME", "True-OTP")

    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT") or os.getenv("BOT_PORT") or "4002")

    # Per-call timeout for verify/opt-out calls. 0 disables the timeout.
    GATEWAY_TIMEOUT_SEC: float = float(os.getenv("GATEWAY_TIMEOUT_SEC", "15"))

    # Chat-session bridge that owns the messaging network session
    TRANSPORT_BRIDGE_URL: str = os.getenv("TRANSPORT_BRIDGE_URL", "http://localhost:3001")
    TRANSPORT_TIMEOUT_SEC: float = float(os.getenv("TRANSPORT_TIMEOUT_SEC", "30"))

    ENABLE_PII_REDACTION: bool = os.getenv("ENABLE_PII_REDACTION", "true").lower() == "true"

    @property
    def app_api_url(self) -> str:
        return f"{self.APP_URL.rstrip('/')}/api"

    @property
    def api_base_url(self) -> str:
        if self.BACKEND_API_URL:
            return self.BACKEND_API_URL.rstrip("/")
        return self.app_api_url

    @property
    def purchase_link(self) -> str:
        return self.PAYMENT_LINK_URL or f"{self.APP_URL.rstrip('/')}/pricing"


settings = Settings()
