"""
Pollinations request builder.

Turns a prompt and generation parameters into the image URL served by the
Pollinations image service. The image is rendered on request, so the URL
itself is the generation request.
"""

from typing import Optional
from urllib.parse import quote

import httpx

IMAGE_SERVICE_URL = "https://image.pollinations.ai"


def encode_prompt(prompt: str) -> str:
    """Percent-encode a prompt for use as a single path segment."""
    return quote(prompt, safe="")


def build_image_url(
    prompt: str,
    width: int,
    height: int,
    seed: int,
    model: Optional[str] = None,
    enhance: bool = False,
    base_url: str = IMAGE_SERVICE_URL,
) -> str:
    """Build the image URL for one generation request.

    `model` and `enhance` are only sent when set; Pollinations branding is
    always suppressed with nologo=true.
    """
    params = {
        "width": str(int(width)),
        "height": str(int(height)),
        "seed": str(int(seed)),
        "nologo": "true",
    }
    if model:
        params["model"] = model
    if enhance:
        params["enhance"] = "true"

    query = httpx.QueryParams(params)
    return f"{base_url.rstrip('/')}/prompt/{encode_prompt(prompt)}?{query}"
