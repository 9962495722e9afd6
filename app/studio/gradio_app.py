import argparse
import json
import logging
from pathlib import Path

import gradio as gr

from . import SETTINGS_FILENAME, SettingsManager, SharedServices
from . import app_settings, generator_ui
from .theme import DARK

logger = logging.getLogger(__name__)

# Tab modules, ordered by their TAB_ORDER
TAB_MODULES = sorted([generator_ui, app_settings], key=lambda m: m.TAB_ORDER)

css = """
textarea {
    overflow-y: auto !important;
    resize: vertical;
}
.viewer { text-align: center; }
.viewer-prompt { font-size: 0.9em; margin-bottom: 8px; }
.viewer-image { max-width: 100%; max-height: 80vh; object-fit: contain; border-radius: 8px; }
.viewer-failed { padding: 48px; opacity: 0.6; }
.result-card { display: flex; flex-direction: column; gap: 6px; }
.result-frame { width: 100%; overflow: hidden; border-radius: 8px; background: rgba(127, 127, 127, 0.12); }
.result-image { width: 100%; height: 100%; object-fit: cover; }
.result-failed { display: flex; align-items: center; justify-content: center; height: 100%; font-size: 0.85em; opacity: 0.6; }
.result-prompt { font-size: 0.85em; margin: 0; overflow: hidden; text-overflow: ellipsis; white-space: nowrap; }
.result-meta { display: flex; flex-wrap: wrap; gap: 6px; font-size: 0.75em; opacity: 0.75; }
.results-empty { text-align: center; opacity: 0.6; padding: 48px 0; }
"""


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="AI Image Generator")
    parser.add_argument("--server_name", type=str, default="127.0.0.1")
    parser.add_argument("--server_port", type=int, default=7860)
    parser.add_argument("--share", action="store_true")
    parser.add_argument(
        "--settings",
        type=Path,
        default=Path.cwd() / SETTINGS_FILENAME,
        help="Path to the settings JSON file",
    )
    return parser.parse_args(argv)


def build_app(services: SharedServices) -> gr.Blocks:
    """Build the Blocks app with every tab module."""
    with gr.Blocks(css=css, title="AI Image Generator") as demo:
        gr.Markdown("## AI Image Generator")
        gr.Markdown("*Create stunning images from text descriptions using advanced AI technology*")

        with gr.Tabs():
            for module in TAB_MODULES:
                module.create_tab(services)
                logger.info(f"Loaded tab: {module.TAB_ID}")

        # Apply the stored theme once on page load
        is_dark = json.dumps(services.theme.theme == DARK)
        demo.load(
            fn=None,
            js=f"() => {{ document.body.classList.toggle('dark', {is_dark}); }}",
        )

    return demo


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings_path = args.settings.resolve()
    services = SharedServices(app_dir=settings_path.parent, settings=SettingsManager(settings_path))
    logger.info(f"Settings: {settings_path}, theme: {services.theme.theme}")

    demo = build_app(services)
    demo.queue().launch(
        server_name=args.server_name,
        server_port=args.server_port,
        share=args.share,
        allowed_paths=[str(services.get_outputs_dir())],
    )


if __name__ == "__main__":
    main()
