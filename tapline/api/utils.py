from decimal import Decimal

import requests

RATE_LIMIT_HEADER = "X-Ratelimit-Remaining"


def get_session() -> requests.Session:
    """Create the HTTP session used when the caller doesn't provide one.

    Returns:
        A plain requests Session, without retries
    """
    return requests.Session()


def format_float(value: float) -> str:
    """Format a float in its shortest form, without exponent or trailing zeros.

    >>> format_float(3.5), format_float(1.0), format_float(1e-5)
    ('3.5', '1', '0.00001')
    """
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def rate_limit_remaining(res: requests.Response | None) -> str | None:
    if res is None:
        return None
    return res.headers.get(RATE_LIMIT_HEADER)
