"""
Phone normalisation for the chat transport.

Canonical form is digits only, `<countrycode><localnumber>`, no leading zeros.
The default country code is a heuristic for numbers submitted without one:
it is applied to numbers of at most 10 digits. It is not validated against
any numbering plan, so short numbers under other plans can be misclassified;
the code is configurable through DEFAULT_COUNTRY_CODE.
"""
import re
from typing import Optional

from otp_bot.errors import InvalidPhone
from otp_bot.settings import settings

# Suffix the transport uses for direct-message (one-to-one chat) addresses
DIRECT_MESSAGE_SUFFIX = "@c.us"
MAX_LOCAL_DIGITS = 10

_NON_DIGITS = re.compile(r"\D")


def digits_only(value) -> str:
    if value is None:
        return ""
    return _NON_DIGITS.sub("", str(value))


def normalize_phone(raw, default_country_code: Optional[str] = None) -> str:
    if default_country_code is None:
        default_country_code = settings.DEFAULT_COUNTRY_CODE
    cc = digits_only(default_country_code).lstrip("0")

    digits = digits_only(raw)
    if not digits:
        raise InvalidPhone()

    # A leading trunk zero marks a national-format number: the country code is
    # missing even when the remaining digits happen to begin with it.
    national = digits.startswith("0")
    digits = digits.lstrip("0")

    if cc and len(digits) <= MAX_LOCAL_DIGITS and (national or not digits.startswith(cc)):
        digits = f"{cc}{digits}"

    if not digits:
        raise InvalidPhone()
    return digits


def to_address(phone: str) -> str:
    return f"{phone}{DIRECT_MESSAGE_SUFFIX}"


def address_for(raw, default_country_code: Optional[str] = None) -> str:
    """Normalise a user-supplied number straight into a transport address."""
    return to_address(normalize_phone(raw, default_country_code))
