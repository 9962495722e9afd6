"""
Gallery and full-size viewer state.

The gallery mirrors the session's latest results. Each browser connection
has its own viewer, opened and closed only by that user.
"""

import html
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .session import GeneratedImage, Generating, SessionState, Succeeded

if TYPE_CHECKING:
    from .session import GenerationSession

IMAGE_FAILED_TEXT = "Failed to generate image"


@dataclass(frozen=True)
class ViewerEntry:
    url: str
    prompt: str


class GalleryState:
    def __init__(self):
        self._images: tuple[GeneratedImage, ...] = ()

    @property
    def images(self) -> tuple[GeneratedImage, ...]:
        return self._images

    def bind(self, session: "GenerationSession") -> None:
        """Follow `session`: clear on a new batch, fill on success."""
        self._images = session.images
        session.add_listener(self._on_session_state)

    def _on_session_state(self, state: SessionState) -> None:
        if isinstance(state, Generating):
            self._images = ()
        elif isinstance(state, Succeeded):
            self._images = state.images

    def image_at(self, index: Optional[int]) -> Optional[GeneratedImage]:
        if index is None or not 0 <= index < len(self._images):
            return None
        return self._images[index]


class ViewerState:
    """The full-size view open in one browser connection."""

    def __init__(self):
        self.entry: Optional[ViewerEntry] = None

    def select(self, url: str, prompt: str) -> ViewerEntry:
        self.entry = ViewerEntry(url, prompt)
        return self.entry

    def select_image(self, image: Optional[GeneratedImage]) -> Optional[ViewerEntry]:
        if image is None:
            return None
        return self.select(image.url, image.original_prompt)

    def dismiss(self) -> None:
        self.entry = None

    @property
    def is_open(self) -> bool:
        return self.entry is not None


def _image_tag(url: str, alt: str, css_class: str, failed_class: str) -> str:
    """<img> that replaces itself with a failure note if it can't load."""
    fallback = f"<div class={failed_class}>{IMAGE_FAILED_TEXT}</div>"
    return (
        f"<img src=\"{html.escape(url, quote=True)}\" alt=\"{html.escape(alt, quote=True)}\" "
        f"class='{css_class}' loading='lazy' "
        f"onerror=\"this.outerHTML='{fallback}'\">"
    )


def card_html(image: GeneratedImage) -> str:
    """Result card: thumbnail at its real aspect ratio plus prompt and settings."""
    prompt = html.escape(image.original_prompt)
    return (
        "<div class='result-card'>"
        f"<div class='result-frame' style='aspect-ratio: {image.width} / {image.height}'>"
        f"{_image_tag(image.url, f'Generated: {image.original_prompt}', 'result-image', 'result-failed')}"
        "</div>"
        f"<p class='result-prompt'>&quot;{prompt}&quot;</p>"
        "<div class='result-meta'>"
        f"<span>{image.resolution.value}</span>"
        f"<span>{image.style.value} style</span>"
        f"<span>{image.quality.value} quality</span>"
        "</div>"
        "</div>"
    )


def viewer_html(entry: Optional[ViewerEntry]) -> str:
    """Full-size viewer markup."""
    if entry is None:
        return ""
    prompt = html.escape(entry.prompt)
    return (
        "<div class='viewer'>"
        f"<div class='viewer-prompt'>&quot;{prompt}&quot;</div>"
        f"{_image_tag(entry.url, 'Full size', 'viewer-image', 'viewer-failed')}"
        "</div>"
    )
