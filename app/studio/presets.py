"""
Generation Presets

Closed option sets for the generator (style, resolution, quality, batch
count) and the static lookup tables that turn them into request parameters.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .resolution import parse_resolution


class Style(str, Enum):
    REALISTIC = "realistic"
    ARTISTIC = "artistic"
    CARTOON = "cartoon"
    ABSTRACT = "abstract"
    CYBERPUNK = "cyberpunk"
    VINTAGE = "vintage"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Resolution(str, Enum):
    SQUARE_512 = "512x512"
    SQUARE_768 = "768x768"
    SQUARE_1024 = "1024x1024"
    LANDSCAPE_1536 = "1536x1024"

    @property
    def dimensions(self) -> tuple[int, int]:
        return parse_resolution(self.value)

    @property
    def label(self) -> str:
        width, height = self.dimensions
        return f"{width} × {height}"


class Quality(str, Enum):
    STANDARD = "standard"
    HIGH = "high"
    ULTRA = "ultra"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class QualityPreset:
    suffix: Optional[str]
    enhance: bool


# Batch sizes offered in the UI
BATCH_COUNTS = (1, 2, 4)

DEFAULT_STYLE = Style.REALISTIC
DEFAULT_RESOLUTION = Resolution.SQUARE_512
DEFAULT_QUALITY = Quality.STANDARD
DEFAULT_COUNT = 1

STYLE_PRESETS: dict[Style, str] = {
    Style.REALISTIC: "photorealistic, natural lighting, DSLR depth of field, highly detailed",
    Style.ARTISTIC: "digital painting, painterly brushstrokes, dramatic lighting",
    Style.CARTOON: "cartoon, cel-shaded, bold outlines, flat colors",
    Style.ABSTRACT: "abstract, geometric shapes, minimalism",
    Style.CYBERPUNK: "cyberpunk, neon lights, rain-soaked streets, holograms, high contrast",
    Style.VINTAGE: "vintage, film grain, faded colors, 35mm photo, 1970s aesthetic",
}

# Pollinations model per style
MODEL_BY_STYLE: dict[Style, str] = {style: "flux" for style in Style}

QUALITY_PRESETS: dict[Quality, QualityPreset] = {
    Quality.STANDARD: QualityPreset(suffix=None, enhance=False),
    Quality.HIGH: QualityPreset(suffix="high detail, sharp focus", enhance=True),
    Quality.ULTRA: QualityPreset(suffix="ultra-detailed, crisp focus, 8k", enhance=True),
}

SAMPLE_PROMPTS = [
    "A neon-lit cyberpunk street market at night with flying cars overhead",
    "A serene tropical beach with crystal-clear turquoise water and palm trees swaying in the wind",
    "An epic fantasy castle floating above the clouds with waterfalls cascading off its edges",
    "A bustling space station orbiting a colorful gas giant planet",
    "A cozy cabin in the snowy mountains with smoke rising from the chimney under the northern lights",
]


def enhance_prompt(prompt: str, style: Style, quality: Quality) -> str:
    """Prefix the style phrase and append the quality suffix, if any."""
    text = f"{STYLE_PRESETS[Style(style)]}, {prompt}"
    suffix = QUALITY_PRESETS[Quality(quality)].suffix
    if suffix:
        text += f", {suffix}"
    return text


def dropdown_choices(options) -> list[tuple[str, str]]:
    """(label, value) pairs for a gr.Dropdown over an option enum."""
    return [(opt.label, opt.value) for opt in options]
