#Purpose: Strip what riders must not see from order payloads.
#Money fields (price, totals, payouts, ...) and the customer's delivery code
#are dropped recursively before an order reaches a rider's device.

import re
from typing import Any

SENSITIVE_KEY_RE = re.compile(
    r"^(payout|price|amount|fare|tip|earnings|commission|total|sub_?total|rider_?earning|order_?total"
    r"|delivery_?fee)$",
    re.IGNORECASE,
)

# The rider has to get this from the customer, not from the payload.
SECRET_KEY_RE = re.compile(r"^delivery_?code$", re.IGNORECASE)


def _is_hidden(key: Any) -> bool:
    key = str(key)
    return bool(SENSITIVE_KEY_RE.match(key) or SECRET_KEY_RE.match(key))


def sanitize_for_rider(payload: Any) -> Any:
    """
    Returns a copy of payload with sensitive keys removed at any depth.
    Lists and dicts are rebuilt; other values pass through unchanged.
    """
    if isinstance(payload, list):
        return [sanitize_for_rider(item) for item in payload]
    if isinstance(payload, dict):
        return {key: sanitize_for_rider(value) for key, value in payload.items() if not _is_hidden(key)}
    return payload
