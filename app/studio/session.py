"""
Generation Session

Owns the generation lifecycle for one UI instance:

    Idle -> Generating -> Succeeded | Failed -> Generating -> ...

`start()` is the only way to move between states. A batch is built locally
(the image URL is the generation request), so once Generating begins it
always ends in Succeeded.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

from .pollinations import IMAGE_SERVICE_URL, build_image_url
from .presets import (
    BATCH_COUNTS,
    MODEL_BY_STYLE,
    QUALITY_PRESETS,
    Quality,
    Resolution,
    Style,
    enhance_prompt,
)
from .seeds import SeedGenerator
from .status import ERROR, INFO, SUCCESS, StatusBoard

logger = logging.getLogger(__name__)

# Seconds to hold the loader before publishing results
PACING_DELAY = 0.6

EMPTY_PROMPT_REASON = "empty prompt"
EMPTY_PROMPT_MESSAGE = "Please enter a description for your image."


@dataclass(frozen=True)
class GenerationOptions:
    """Snapshot of the generator form at the moment Generate was pressed."""
    prompt_text: str
    style: Style = Style.REALISTIC
    resolution: Resolution = Resolution.SQUARE_512
    quality: Quality = Quality.STANDARD
    count: int = 1

    def __post_init__(self):
        # Coerce raw dropdown values; unknown values raise ValueError here
        object.__setattr__(self, "style", Style(self.style))
        object.__setattr__(self, "resolution", Resolution(self.resolution))
        object.__setattr__(self, "quality", Quality(self.quality))
        count = int(self.count)
        if count not in BATCH_COUNTS:
            raise ValueError(f"Image count must be one of {BATCH_COUNTS}, got {self.count}")
        object.__setattr__(self, "count", count)
        object.__setattr__(self, "prompt_text", self.prompt_text or "")

    @property
    def trimmed_prompt(self) -> str:
        return self.prompt_text.strip()


@dataclass(frozen=True)
class GeneratedImage:
    url: str
    original_prompt: str
    style: Style
    resolution: Resolution
    quality: Quality
    seed: int
    width: int
    height: int

    @property
    def caption(self) -> str:
        return f"{self.resolution.value} · {self.style.value} style · {self.quality.value} quality"


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Generating:
    options: GenerationOptions


@dataclass(frozen=True)
class Succeeded:
    images: tuple[GeneratedImage, ...]


@dataclass(frozen=True)
class Failed:
    reason: str


SessionState = Union[Idle, Generating, Succeeded, Failed]
StateListener = Callable[[SessionState], None]


class GenerationSession:
    def __init__(
        self,
        seeds: Optional[SeedGenerator] = None,
        status: Optional[StatusBoard] = None,
        pacing_delay: float = PACING_DELAY,
        base_url: str = IMAGE_SERVICE_URL,
    ):
        self.seeds = seeds or SeedGenerator()
        self.status = status or StatusBoard()
        self.pacing_delay = pacing_delay
        self.base_url = base_url
        self._state: SessionState = Idle()
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_generating(self) -> bool:
        return isinstance(self._state, Generating)

    @property
    def images(self) -> tuple[GeneratedImage, ...]:
        if isinstance(self._state, Succeeded):
            return self._state.images
        return ()

    def add_listener(self, listener: StateListener) -> None:
        """Call `listener(state)` after every state transition."""
        self._listeners.append(listener)

    def _transition(self, state: SessionState) -> None:
        self._state = state
        for listener in self._listeners:
            listener(state)

    def build_batch(self, options: GenerationOptions) -> list[GeneratedImage]:
        """Build one GeneratedImage per seed. Does not touch session state."""
        prompt = options.trimmed_prompt
        enhanced = enhance_prompt(prompt, options.style, options.quality)
        width, height = options.resolution.dimensions
        model = MODEL_BY_STYLE[options.style]
        enhance = QUALITY_PRESETS[options.quality].enhance

        images = []
        for seed in self.seeds.next_batch(options.count):
            url = build_image_url(
                enhanced, width, height, seed,
                model=model, enhance=enhance, base_url=self.base_url,
            )
            images.append(GeneratedImage(
                url=url,
                original_prompt=prompt,
                style=options.style,
                resolution=options.resolution,
                quality=options.quality,
                seed=seed,
                width=width,
                height=height,
            ))
        return images

    async def start(self, options: GenerationOptions) -> SessionState:
        """Run one generation batch. Returns the resulting state."""
        if self.is_generating:
            logger.info("Generation already in progress, ignoring request")
            return self._state

        if not options.trimmed_prompt:
            self._transition(Failed(EMPTY_PROMPT_REASON))
            self.status.show(ERROR, EMPTY_PROMPT_MESSAGE)
            return self._state

        images = self.build_batch(options)

        self._transition(Generating(options))
        self.status.show(INFO, "Generating your images...")
        logger.info(
            f"Batch of {len(images)} built: style={options.style.value}, "
            f"resolution={options.resolution.value}, quality={options.quality.value}, "
            f"seeds={[img.seed for img in images]}"
        )

        try:
            await asyncio.sleep(self.pacing_delay)
        finally:
            # Publish even when the awaiting caller is cancelled
            self._publish(images)
        return self._state

    def _publish(self, images: list[GeneratedImage]) -> None:
        self._transition(Succeeded(tuple(images)))
        plural = "s" if len(images) > 1 else ""
        self.status.show(SUCCESS, f"Successfully generated {len(images)} image{plural}!")
