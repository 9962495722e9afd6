"""
Generator Tab

Prompt entry, generation options, the results gallery and the full-size
viewer with download.
"""

import asyncio
import logging
import random
from typing import TYPE_CHECKING

import gradio as gr

from .downloader import DownloadError, download_image
from .gallery import ViewerState, card_html, viewer_html
from .presets import (
    BATCH_COUNTS,
    DEFAULT_COUNT,
    DEFAULT_QUALITY,
    DEFAULT_RESOLUTION,
    DEFAULT_STYLE,
    SAMPLE_PROMPTS,
    Quality,
    Resolution,
    Style,
    dropdown_choices,
)
from .session import GeneratedImage, GenerationOptions, GenerationSession

if TYPE_CHECKING:
    from . import SharedServices

logger = logging.getLogger(__name__)

# Module metadata
TAB_ID = "generator"
TAB_LABEL = "🎨 Generate"
TAB_ORDER = 0

DOWNLOAD_FAILED_MESSAGE = "Failed to download the image. Please try again."

# Seconds between status line refreshes
STATUS_REFRESH_INTERVAL = 1.0

# Running generation tasks; held here so a dropped handler can't orphan one
_generation_tasks: set[asyncio.Task] = set()


def start_generation(session: GenerationSession, options: GenerationOptions) -> asyncio.Task:
    """Run `session.start(options)` as a task that outlives its caller."""
    task = asyncio.create_task(session.start(options))
    _generation_tasks.add(task)
    task.add_done_callback(_generation_tasks.discard)
    return task


async def save_download(url: str, prompt: str, services: "SharedServices", client=None) -> str:
    """Download one image into the download folder. Failures raise gr.Error."""
    try:
        path = await download_image(url, prompt, services.get_outputs_dir(), client=client)
    except DownloadError as e:
        logger.error(f"Download failed: {e}", exc_info=True)
        raise gr.Error(DOWNLOAD_FAILED_MESSAGE)
    return str(path)


async def download_viewer_image(viewer: ViewerState, services: "SharedServices", client=None) -> str:
    """Download the image open in this connection's viewer."""
    if not viewer.is_open:
        raise gr.Error("Open an image before downloading.")
    return await save_download(viewer.entry.url, viewer.entry.prompt, services, client=client)


def random_sample_prompt() -> str:
    return random.choice(SAMPLE_PROMPTS)


def count_choices() -> list[tuple[str, str]]:
    return [(f"{n} Image" + ("s" if n > 1 else ""), str(n)) for n in BATCH_COUNTS]


def create_tab(services: "SharedServices") -> gr.TabItem:
    """
    Create the generator tab with all UI components and event handlers.

    Args:
        services: SharedServices instance with all dependencies

    Returns:
        gr.TabItem containing the complete generator interface
    """
    with gr.TabItem(TAB_LABEL, id=TAB_ID) as tab:
        with gr.Row():
            with gr.Column(scale=1):
                with gr.Row():
                    gr.Markdown("**Enter your image description**")
                    random_btn = gr.Button("🎲 Try a random prompt", size="sm", scale=0)
                prompt = gr.Textbox(
                    label="Prompt",
                    show_label=False,
                    placeholder=SAMPLE_PROMPTS[0],
                    lines=5,
                    max_lines=20,
                )
                with gr.Group():
                    with gr.Row():
                        style = gr.Dropdown(
                            label="Art Style",
                            choices=dropdown_choices(Style),
                            value=DEFAULT_STYLE.value,
                        )
                        resolution = gr.Dropdown(
                            label="Resolution",
                            choices=dropdown_choices(Resolution),
                            value=DEFAULT_RESOLUTION.value,
                        )
                    with gr.Row():
                        quality = gr.Dropdown(
                            label="Quality",
                            choices=dropdown_choices(Quality),
                            value=DEFAULT_QUALITY.value,
                        )
                        count = gr.Dropdown(
                            label="Number of Images",
                            choices=count_choices(),
                            value=str(DEFAULT_COUNT),
                        )
                generate_btn = gr.Button("Generate Images", variant="primary")

            # Right column - output
            with gr.Column(scale=1):
                gen_status = gr.Textbox(
                    value=services.status.text(),
                    label="Status",
                    show_label=False,
                    interactive=False,
                    placeholder="Your generated images will appear here",
                )
                # Latest results and the open viewer, per browser connection
                results = gr.State(value=services.gallery.images)
                viewer_state = gr.State(value=ViewerState())
                with gr.Column(visible=False) as viewer_box:
                    viewer = gr.HTML(value="")
                    with gr.Row():
                        download_btn = gr.Button("⬇️ Download", size="sm", variant="primary")
                        close_btn = gr.Button("✖ Close", size="sm", variant="stop")
                    download_file = gr.File(label="Download", visible=False, interactive=False)
                _create_results_grid(
                    services,
                    results=results,
                    viewer_outputs=[viewer_state, viewer, viewer_box, download_file],
                    download_file=download_file,
                )

    _setup_event_handlers(
        services,
        prompt=prompt,
        random_btn=random_btn,
        style=style,
        resolution=resolution,
        quality=quality,
        count=count,
        generate_btn=generate_btn,
        gen_status=gen_status,
        results=results,
        viewer_state=viewer_state,
        viewer_box=viewer_box,
        viewer=viewer,
        download_btn=download_btn,
        close_btn=close_btn,
        download_file=download_file,
    )

    return tab


def _create_results_grid(services: "SharedServices", results, viewer_outputs, download_file):
    """One card per result, each with its own View Full and Download buttons.

    `viewer_outputs` is [viewer_state, viewer, viewer_box, download_file].
    """
    def open_handler(image: GeneratedImage):
        def open_viewer(state: ViewerState):
            entry = state.select_image(image)
            return state, viewer_html(entry), gr.update(visible=True), gr.update(value=None, visible=False)
        return open_viewer

    def download_handler(image: GeneratedImage):
        async def download_card():
            path = await save_download(image.url, image.original_prompt, services)
            return gr.update(value=path, visible=True)
        return download_card

    @gr.render(inputs=[results])
    def render_results(images):
        if not images:
            gr.Markdown("*Your generated images will appear here*", elem_classes=["results-empty"])
            return
        with gr.Row(elem_classes=["results-grid"]):
            for image in images:
                with gr.Column(min_width=220):
                    gr.HTML(card_html(image))
                    with gr.Row():
                        card_download_btn = gr.Button("Download", size="sm", variant="primary")
                        card_view_btn = gr.Button("View Full", size="sm")
                card_view_btn.click(
                    fn=open_handler(image),
                    inputs=[viewer_outputs[0]],
                    outputs=viewer_outputs,
                )
                # Downloads are independent of each other and of generation
                card_download_btn.click(
                    fn=download_handler(image),
                    outputs=[download_file],
                    concurrency_limit=None,
                )


def _setup_event_handlers(
    services: "SharedServices",
    prompt, random_btn, style, resolution, quality, count,
    generate_btn, gen_status, results, viewer_state,
    viewer_box, viewer, download_btn, close_btn, download_file,
):
    session = services.session

    def snapshot():
        """Current results, status and button state."""
        busy = session.is_generating
        return (
            services.gallery.images,
            services.status.text(),
            gr.update(
                value="Generating…" if busy else "Generate Images",
                interactive=not busy,
            ),
        )

    async def generate(prompt_text, style_value, resolution_value, quality_value, count_value):
        options = GenerationOptions(
            prompt_text=prompt_text,
            style=style_value,
            resolution=resolution_value,
            quality=quality_value,
            count=int(count_value),
        )
        run = start_generation(session, options)
        # Let the session enter Generating before the first refresh
        await asyncio.sleep(0)
        yield snapshot()
        await asyncio.shield(run)
        yield snapshot()

    generate_outputs = [results, gen_status, generate_btn]
    generate_inputs = [prompt, style, resolution, quality, count]

    # Overlapping requests are collapsed by the session itself
    generate_btn.click(
        fn=generate,
        inputs=generate_inputs,
        outputs=generate_outputs,
        concurrency_limit=None,
    )
    prompt.submit(
        fn=generate,
        inputs=generate_inputs,
        outputs=generate_outputs,
        concurrency_limit=None,
    )

    random_btn.click(fn=random_sample_prompt, outputs=[prompt])

    viewer_outputs = [viewer_state, viewer, viewer_box, download_file]

    def close_viewer(state: ViewerState):
        state.dismiss()
        return state, "", gr.update(visible=False), gr.update(value=None, visible=False)

    close_btn.click(fn=close_viewer, inputs=[viewer_state], outputs=viewer_outputs)

    async def download_opened(state: ViewerState):
        path = await download_viewer_image(state, services)
        return gr.update(value=path, visible=True)

    download_btn.click(
        fn=download_opened,
        inputs=[viewer_state],
        outputs=[download_file],
        concurrency_limit=None,
    )

    status_timer = gr.Timer(STATUS_REFRESH_INTERVAL, active=True)
    status_timer.tick(fn=services.status.text, outputs=[gen_status])
