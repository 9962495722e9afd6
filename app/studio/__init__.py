"""
AI Image Studio

Shared services handed to every tab module: the settings file, the single
generation session and its gallery, the status board and the theme.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from .gallery import GalleryState
from .pollinations import IMAGE_SERVICE_URL
from .session import GenerationSession
from .status import StatusBoard
from .theme import ThemePreference

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"


class SettingsManager:
    """Small JSON-backed key/value store. Every `set` is written to disk."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read settings from {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings file {self.path}: not a JSON object")
            return {}
        return data

    def save(self, settings: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(settings, f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        return self.load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        settings = self.load()
        settings[key] = value
        self.save(settings)

    def delete(self, key: str) -> None:
        settings = self.load()
        if key in settings:
            del settings[key]
            self.save(settings)


class SharedServices:
    """Process-wide state for one UI instance."""

    def __init__(self, app_dir: Path, settings: Optional[SettingsManager] = None):
        self.app_dir = Path(app_dir)
        self.settings = settings or SettingsManager(self.app_dir / SETTINGS_FILENAME)
        self.status = StatusBoard()
        self.session = GenerationSession(status=self.status, base_url=self.image_service_url)
        self.gallery = GalleryState()
        self.gallery.bind(self.session)
        self.theme = ThemePreference(self.settings)

    @property
    def image_service_url(self) -> str:
        return self.settings.get("image_service_url", None) or IMAGE_SERVICE_URL

    def get_outputs_dir(self) -> Path:
        custom = self.settings.get("outputs_dir", None)
        if custom:
            return Path(custom)
        return self.app_dir / "outputs"
