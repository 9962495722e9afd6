"""
Filename helpers for saved and downloaded images.
"""

import re

# Fixed suffix appended to every downloaded image name
DOWNLOAD_SUFFIX = "gemvie"

# Characters of the prompt that feed into a download name
PROMPT_FRAGMENT_LENGTH = 30

_UNSAFE_RUN = re.compile(r"[^a-z0-9]+", re.IGNORECASE | re.ASCII)


def sanitize_filename(text: str) -> str:
    """Collapse every run of non-alphanumerics to '-', trim hyphens, lower-case.

    >>> sanitize_filename("Hello World!")
    'hello-world'
    """
    return _UNSAFE_RUN.sub("-", text).strip("-").lower()


def download_filename(prompt: str, suffix: str = DOWNLOAD_SUFFIX) -> str:
    """Name for a downloaded image, built from the start of its prompt."""
    fragment = sanitize_filename(prompt[:PROMPT_FRAGMENT_LENGTH])
    return f"ai-generated-{fragment}-{suffix}.jpg"
