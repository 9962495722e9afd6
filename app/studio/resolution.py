"""
Resolution Codec

Parses "WxH" resolution tokens into integer dimensions.
"""

from math import gcd


def parse_resolution(token: str) -> tuple[int, int]:
    """Parse a resolution token like '1024x768' into (width, height).

    Raises:
        ValueError: if the token is not two positive base-10 integers
            joined by a literal 'x'.
    """
    parts = str(getattr(token, "value", token)).split("x")
    if len(parts) != 2:
        raise ValueError(f"Malformed resolution token: {token!r}")

    w_text, h_text = (p.strip() for p in parts)
    if not all(t.isascii() and t.isdecimal() for t in (w_text, h_text)):
        raise ValueError(f"Malformed resolution token: {token!r}")

    width, height = int(w_text, 10), int(h_text, 10)
    if width <= 0 or height <= 0:
        raise ValueError(f"Resolution must be positive: {token!r}")
    return width, height


def aspect_ratio(token: str) -> str:
    """Reduced aspect ratio label, e.g. '1536x1024' -> '3:2'."""
    width, height = parse_resolution(token)
    d = gcd(width, height)
    return f"{width // d}:{height // d}"
