import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CommandKind(str, Enum):
    BUY = "buy"
    STOP = "stop"
    LOGIN = "login"
    IGNORE = "ignore"


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    token: Optional[str] = None


BUY_WORDS = frozenset({"buy", "/buy", "buy plan"})
STOP_WORDS = frozenset({"stop", "/stop", "unsubscribe"})
LOGIN_PREFIX = "/login"

# A bare message that looks like a login code
_BARE_TOKEN = re.compile(r"[A-Za-z0-9]{6,}")


def classify(body: Optional[str]) -> Command:
    """
    Decide what an inbound chat message asks for.

    Order matters: buy, stop, `/login <token>`, then a bare token. Anything
    else is ignored and gets no reply.
    """
    text = (body or "").strip()
    lower = text.lower()

    if lower in BUY_WORDS:
        return Command(CommandKind.BUY)
    if lower in STOP_WORDS:
        return Command(CommandKind.STOP)

    parts = text.split()
    if len(parts) > 1 and parts[0].lower() == LOGIN_PREFIX:
        return Command(CommandKind.LOGIN, token=parts[1].strip())

    if _BARE_TOKEN.fullmatch(text):
        return Command(CommandKind.LOGIN, token=text)

    return Command(CommandKind.IGNORE)
