"""
Gradio web UI for makeimage.

Single page: two images with a "+" between them and a Generate button. Each
click picks a random prompt per side and runs one coordinator round; the
button stays disabled while the round is busy.
"""

import argparse
import html
import os
from collections.abc import Generator
from pathlib import Path
from typing import Any, cast

import gradio as gr

from makeimage import (
    CoordinatorState,
    DualRequestCoordinator,
    ImageRequestService,
    MakeImageError,
    Settings,
    __version__,
    random_prompt_pair,
)
from makeimage.logging_config import (
    configure_logging,
    get_logger,
    get_verbosity_from_env,
    log_prompts,
)
from makeimage.utils.images import to_pil

logger = get_logger(__name__)

DEFAULT_UI_PORT = 7860
DEFAULT_UI_HOST = "127.0.0.1"
PAGE_TITLE = "makeimage"

# Shared queue so clicks run serially
_UI_CONCURRENCY_ID = "makeimage_ui"


def share_from_env() -> bool:
    """True when MAKEIMAGE_UI_SHARE is 1, true or yes."""
    return os.environ.get("MAKEIMAGE_UI_SHARE", "").strip().lower() in ("1", "true", "yes")


def _port_from_env() -> int:
    raw = os.getenv("MAKEIMAGE_UI_PORT", "")
    if not raw.strip().isdigit():
        if raw:
            logger.warning("Ignoring MAKEIMAGE_UI_PORT=%r; using %d", raw, DEFAULT_UI_PORT)
        return DEFAULT_UI_PORT
    return int(raw)


# status kind -> (icon, CSS color)
_STATUS_STYLES = {
    "info": ("⏳", "#3b82f6"),
    "success": ("✅", "#10b981"),
    "error": ("❌", "#ef4444"),
}


def _format_status(message: str, kind: str = "info") -> str:
    icon, color = _STATUS_STYLES.get(kind, _STATUS_STYLES["info"])
    return f'<div style="color: {color}; font-weight: 500;">{icon} {html.escape(message)}</div>'


def _exception_to_message(exc: BaseException) -> str:
    """Short user-facing message for an exception."""
    if isinstance(exc, MakeImageError):
        return str(exc) or "An error occurred."
    return str(exc) or "An unexpected error occurred."


def _images(state: CoordinatorState) -> tuple[Any, Any]:
    return to_pil(state.left_image), to_pil(state.right_image)


def _generate_click_handler(
    coordinator: DualRequestCoordinator,
    prompts: tuple[str, str] | None = None,
) -> Generator[tuple[Any, ...], None, None]:
    """Generate button logic: start a round, yield busy then final updates. Used by UI and tests.

    Yields (status_html, left_image, right_image, generate_button_update).
    """
    current = coordinator.state
    if current.busy:
        left_img, right_img = _images(current)
        yield (
            _format_status("A generation is already running.", "info"),
            left_img,
            right_img,
            gr.update(interactive=False),
        )
        return

    try:
        coordinator.service.validate()
    except MakeImageError as e:
        left_img, right_img = _images(current)
        yield (
            _format_status(_exception_to_message(e), "error"),
            left_img,
            right_img,
            gr.update(interactive=True),
        )
        return

    left, right = prompts or random_prompt_pair()
    if log_prompts():
        logger.info("UI prompts: left=%r right=%r", left, right)
    errors_before = coordinator.state.error_count
    try:
        coordinator.generate(left, right)
    except RuntimeError as e:
        failed = coordinator.state
        left_img, right_img = _images(failed)
        yield (
            _format_status(_exception_to_message(e), "error"),
            left_img,
            right_img,
            gr.update(interactive=not failed.busy),
        )
        return

    left_img, right_img = _images(coordinator.state)
    yield (
        _format_status(f"Generating {left} + {right}…", "info"),
        left_img,
        right_img,
        gr.update(interactive=False),
    )

    coordinator.wait()
    final = coordinator.state
    left_img, right_img = _images(final)
    if final.error_count > errors_before:
        status = _format_status(final.last_error_message, "error")
    else:
        status = _format_status(f"{left} + {right}", "success")
    yield (status, left_img, right_img, gr.update(interactive=not final.busy))


def _build_blocks(coordinator: DualRequestCoordinator) -> gr.Blocks:
    """Build the Gradio Blocks UI around one coordinator."""
    with gr.Blocks(title=PAGE_TITLE) as app:
        gr.Markdown(f"# {PAGE_TITLE}")
        status_html = gr.HTML(value="", visible=True)
        with gr.Row(equal_height=True):
            left_image = gr.Image(label="Left", type="pil", interactive=False)
            gr.Markdown("## +")
            right_image = gr.Image(label="Right", type="pil", interactive=False)
        generate_btn = gr.Button("Generate", variant="primary")

        def on_generate() -> Generator[tuple[Any, ...], None, None]:
            yield from _generate_click_handler(coordinator)

        generate_btn.click(
            fn=on_generate,
            inputs=[],
            outputs=[status_html, left_image, right_image, generate_btn],
            concurrency_id=_UI_CONCURRENCY_ID,
        )
        gr.Markdown(f"makeimage v{__version__}")

    return cast(gr.Blocks, app)


def launch(
    server_name: str | None = None,
    server_port: int | None = None,
    share: bool = False,
    settings_path: str | Path | None = None,
) -> None:
    """
    Build the Gradio app and launch the server.

    Args:
        server_name: Host to bind (default: MAKEIMAGE_UI_HOST or 127.0.0.1).
        server_port: Port (default: MAKEIMAGE_UI_PORT or 7860).
        share: If True, create a public share link (e.g. gradio.live).
        settings_path: Optional settings file; defaults to Settings.from_env() resolution.
    """
    host = server_name or os.getenv("MAKEIMAGE_UI_HOST") or DEFAULT_UI_HOST
    port = server_port if server_port is not None else _port_from_env()

    settings = Settings.from_env(settings_path)
    coordinator = DualRequestCoordinator(ImageRequestService(settings))
    logger.info("Starting web UI v%s on http://%s:%s", __version__, host, port)
    app = _build_blocks(coordinator)
    try:
        app.launch(server_name=host, server_port=port, share=share, inbrowser=True)
    finally:
        coordinator.close()


def main() -> None:
    """Entry point for the makeimage-ui console script. Parses --port, --host, --share."""
    parser = argparse.ArgumentParser(
        description="Launch the makeimage Gradio web UI.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--port", type=int, default=None, metavar="PORT")
    parser.add_argument("--host", type=str, default=None, metavar="HOST")
    parser.add_argument("--settings", type=str, default=None, metavar="PATH")
    parser.add_argument(
        "--share",
        action="store_true",
        help="Create a public share link (e.g. gradio.live). MAKEIMAGE_UI_SHARE=1 does the same.",
    )
    args = parser.parse_args()
    configure_logging(verbose_level=get_verbosity_from_env())
    launch(
        server_name=args.host,
        server_port=args.port,
        share=args.share or share_from_env(),
        settings_path=args.settings,
    )


if __name__ == "__main__":
    main()
