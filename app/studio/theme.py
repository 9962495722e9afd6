"""
Persisted light/dark theme preference.
"""

import logging

logger = logging.getLogger(__name__)

LIGHT = "light"
DARK = "dark"
THEMES = (LIGHT, DARK)

SETTINGS_KEY = "theme"

# Applies a theme to the page; used as the `js` of Gradio events
APPLY_THEME_JS = """
(theme) => {
    document.body.classList.toggle('dark', theme === 'dark');
    return theme;
}
"""


class ThemePreference:
    """Theme read once from settings and written back on every change."""

    def __init__(self, settings_manager):
        self._settings = settings_manager
        stored = settings_manager.get(SETTINGS_KEY, None)
        self._theme = LIGHT if stored == LIGHT else DARK

    @property
    def theme(self) -> str:
        return self._theme

    def set(self, theme: str) -> str:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme: {theme!r}")
        self._theme = theme
        self._settings.set(SETTINGS_KEY, theme)
        logger.info(f"Theme set to {theme}")
        return theme

    def toggle(self) -> str:
        return self.set(LIGHT if self._theme == DARK else DARK)
