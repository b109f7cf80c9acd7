import re

_NON_NUMERIC = re.compile(r"[^0-9.]")
_LEADING_DECIMAL = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def parse_price(text: str) -> float | None:
    """Parse a displayed price such as "$1,299.00" or "1 299 zł".

    Everything except digits and dots is dropped, then the longest leading
    decimal is read, so "1.2.3" parses as 1.2. Returns None when nothing
    numeric is left.
    """
    cleaned = _NON_NUMERIC.sub("", text)
    match = _LEADING_DECIMAL.match(cleaned)
    if match is None:
        return None
    return float(match.group(0))
