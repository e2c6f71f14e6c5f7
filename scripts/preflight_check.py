#!/usr/bin/env python3
import sys
import os

print("Running preflight import check...")
try:
    os.environ.setdefault("BOT_INTERNAL_KEY", "preflight-key")

    import otp_bot.main
    print("Import otp_bot.main: OK")

    routes = sorted(getattr(r, "path", "") for r in otp_bot.main.app.routes)
    for required in ("/health", "/send-message", "/send-otp", "/transport/events"):
        if required not in routes:
            raise RuntimeError(f"route missing: {required}")
    print(f"Routes: {', '.join(routes)}")

    print("Preflight check passed.")
    sys.exit(0)
except Exception as e:
    print(f"Preflight check FAILED: {e}")
    import traceback
    traceback.print_exc()
    sys.exit(1)
