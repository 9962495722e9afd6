"""
App Settings Module

Provides the application-wide settings tab: theme, image service URL and
the folder downloads are saved to.
"""

import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import gradio as gr
import httpx

from .pollinations import IMAGE_SERVICE_URL
from .theme import APPLY_THEME_JS, DARK

if TYPE_CHECKING:
    from . import SharedServices

logger = logging.getLogger(__name__)

# Module metadata
TAB_ID = "app_settings"
TAB_LABEL = "🛠️ App Settings"
TAB_ORDER = 1


def open_folder(folder_path: Path):
    """Cross-platform folder opener."""
    folder_path.mkdir(parents=True, exist_ok=True)
    if sys.platform == "win32":
        os.startfile(folder_path)
    elif sys.platform == "darwin":
        subprocess.run(["open", str(folder_path)])
    else:
        subprocess.run(["xdg-open", str(folder_path)])


def theme_button_label(theme: str) -> str:
    return "☀️ Switch to Light" if theme == DARK else "🌙 Switch to Dark"


def save_image_service_url(url: str, services: "SharedServices") -> str:
    """Validate and store the image service URL. Empty resets to the default."""
    url = url.strip()
    if not url:
        services.settings.delete("image_service_url")
        services.session.base_url = IMAGE_SERVICE_URL
        return f"✓ Reset to default: {IMAGE_SERVICE_URL}"

    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        return f"❌ Invalid URL: {e}"
    if parsed.scheme not in ("http", "https") or not parsed.host:
        return "❌ Please enter an http(s) URL (e.g. https://image.pollinations.ai)"

    url = url.rstrip("/")
    services.settings.set("image_service_url", url)
    services.session.base_url = url
    logger.info(f"Image service URL set to {url}")
    return f"✓ Saved: {url}"


def save_outputs_dir(path_str: str, services: "SharedServices") -> str:
    """Save custom downloads directory. Empty resets to the default."""
    path_str = path_str.strip()

    if not path_str:
        services.settings.delete("outputs_dir")
        return f"✓ Reset to default: {services.get_outputs_dir()}"

    path = Path(path_str)
    if not path.is_absolute():
        return "❌ Please enter an absolute path (e.g. C:\\Users\\...)"

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return f"❌ Invalid path: {e}"
    services.settings.set("outputs_dir", str(path))
    return f"✓ Saved: {path}"


def create_tab(services: "SharedServices") -> gr.TabItem:
    """
    Create the App Settings tab.

    Args:
        services: SharedServices instance with all dependencies

    Returns:
        gr.TabItem containing the App Settings interface
    """
    default_outputs_dir = services.app_dir / "outputs"

    with gr.TabItem(TAB_LABEL, id=TAB_ID) as tab:
        gr.Markdown("### Appearance")
        theme_state = gr.State(value=services.theme.theme)
        theme_btn = gr.Button(theme_button_label(services.theme.theme), size="sm")

        gr.Markdown("---")
        gr.Markdown("### Image Service")
        gr.Markdown("*Base URL of the Pollinations-compatible image service.*")
        with gr.Row():
            service_url = gr.Textbox(
                label="Service URL",
                value=services.image_service_url,
                placeholder=IMAGE_SERVICE_URL,
                scale=3,
            )
            service_url_save_btn = gr.Button("💾 Save", variant="primary", size="sm", scale=0)

        gr.Markdown("---")
        gr.Markdown("### Download Folder")
        gr.Markdown("*Folder that downloaded images are saved to.*")
        with gr.Row():
            outputs_dir = gr.Textbox(
                label="Download Folder",
                value=str(services.get_outputs_dir()),
                placeholder="Leave empty for default",
                scale=3,
            )
            outputs_browse_btn = gr.Button("📂 Open", size="sm", scale=0)
        with gr.Row():
            outputs_save_btn = gr.Button("💾 Save", variant="primary", size="sm")
            outputs_reset_btn = gr.Button("↩️ Reset to Default", size="sm")
        gr.Markdown(f"*Default: `{default_outputs_dir}`*")

        settings_status = gr.Textbox(label="", interactive=False, show_label=False)

        # ===== EVENT HANDLERS =====

        def on_toggle_theme():
            theme = services.theme.toggle()
            return theme, gr.update(value=theme_button_label(theme)), f"✓ Theme: {theme}"

        theme_btn.click(
            fn=on_toggle_theme,
            outputs=[theme_state, theme_btn, settings_status],
        ).then(
            fn=None,
            inputs=[theme_state],
            js=APPLY_THEME_JS,
        )

        service_url_save_btn.click(
            fn=lambda url: save_image_service_url(url, services),
            inputs=[service_url],
            outputs=[settings_status],
        )

        def reset_outputs_dir():
            services.settings.delete("outputs_dir")
            return str(services.get_outputs_dir()), "✓ Reset to default"

        def browse_outputs_dir():
            open_folder(services.get_outputs_dir())
            return "📂 Opened download folder"

        outputs_save_btn.click(
            fn=lambda path: save_outputs_dir(path, services),
            inputs=[outputs_dir],
            outputs=[settings_status],
        )
        outputs_reset_btn.click(fn=reset_outputs_dir, outputs=[outputs_dir, settings_status])
        outputs_browse_btn.click(fn=browse_outputs_dir, outputs=[settings_status])

    return tab
