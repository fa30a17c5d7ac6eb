"""makeimage command line: generate, prompts and ui."""

import sys
import time
from pathlib import Path

import click

from makeimage import (
    DualRequestCoordinator,
    ImageRequestService,
    Settings,
    __version__,
    random_prompt_pair,
)
from makeimage.cli import progress
from makeimage.cli.handlers import report_error, run_with_error_handling
from makeimage.cli.utils import EXIT_API_OR_NETWORK, image_output_path
from makeimage.core.coordinator import SIDES
from makeimage.core.prompts import get_prompt_words
from makeimage.core.settings import KEY_API_KEY
from makeimage.logging_config import configure_logging, get_verbosity_from_env
from makeimage.utils.images import image_extension


@click.group()
@click.version_option(version=__version__, package_name="makeimage")
def cli() -> None:
    """Generate two images side by side from random prompts."""


@cli.command()
@click.option("--left", "-l", "prompt_left", help="Prompt for the left image (random if omitted).")
@click.option(
    "--right", "-r", "prompt_right", help="Prompt for the right image (random if omitted)."
)
@click.option(
    "--out-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory for left.<ext> and right.<ext>.",
)
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Settings file (YAML or plist) with an OpenAI section [default: MAKEIMAGE_SETTINGS].",
)
@click.option(
    "--api-key",
    help="API key; takes precedence over the settings file and OPENAI_API_KEY.",
)
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Per-request timeout in seconds (default: no timeout).",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Minimize progress messages; only print saved paths or errors.",
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Increase verbosity: -v also show prompts, -vv show request detail.",
)
def generate(
    prompt_left: str | None,
    prompt_right: str | None,
    out_dir: Path,
    settings_path: Path | None,
    api_key: str | None,
    timeout: float | None,
    quiet: bool,
    verbose_count: int,
) -> None:
    """Generate a left and a right image concurrently and save both."""
    # CLI flags override MAKEIMAGE_VERBOSITY
    verbose_level = min(verbose_count, 2) if verbose_count > 0 else get_verbosity_from_env()
    configure_logging(verbose_level=verbose_level, quiet=quiet)

    def do_generate() -> None:
        # 1. Settings
        settings = Settings.from_env(settings_path)
        if api_key:
            settings = settings.with_overrides(**{KEY_API_KEY: api_key})
        service = ImageRequestService(settings, timeout=timeout)

        # 2. Prompts
        left, right = prompt_left, prompt_right
        if not left or not right:
            random_left, random_right = random_prompt_pair()
            left = left or random_left
            right = right or random_right

        # 3. Fail fast on configuration and URL problems before starting the round
        service.validate()

        # 4. Run one round and wait for both sides
        start = time.time()
        with DualRequestCoordinator(service) as coordinator:
            coordinator.generate(left, right)
            if quiet:
                coordinator.wait()
            else:
                with progress.round_spinner(left, right):
                    coordinator.wait()
            state = coordinator.state
        elapsed = time.time() - start

        # 5. Save populated slots
        out_dir.mkdir(parents=True, exist_ok=True)
        results: list[tuple[str, str, Path | None]] = []
        for side, prompt, data in zip(
            SIDES, (left, right), (state.left_image, state.right_image)
        ):
            path: Path | None = None
            if data:
                path = image_output_path(out_dir, side, image_extension(data))
                path.write_bytes(data)
                click.echo(str(path))
            results.append((side, prompt, path))

        if not quiet:
            progress.print_round_summary(results, elapsed, state.last_error_message)

        if any(path is None for _, _, path in results):
            report_error(
                state.last_error_message or "The API returned no decodable image.", quiet=quiet
            )
            sys.exit(EXIT_API_OR_NETWORK)

    run_with_error_handling(do_generate, quiet=quiet, debug=verbose_level >= 2)


@cli.command()
def prompts() -> None:
    """List the words that random prompts are picked from."""

    def do_list() -> None:
        for side in SIDES:
            click.echo(f"{side}: " + ", ".join(get_prompt_words(side)))

    run_with_error_handling(do_list)


@cli.command()
@click.option(
    "--port", "-p", type=int, envvar="MAKEIMAGE_UI_PORT", help="Server port [default: 7860]."
)
@click.option(
    "--host",
    envvar="MAKEIMAGE_UI_HOST",
    help="Address to bind [default: 127.0.0.1]; 0.0.0.0 exposes it on the LAN.",
)
@click.option("--share", is_flag=True, help="Also create a public gradio.live link.")
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Settings file (YAML or plist) with an OpenAI section.",
)
def ui(port: int | None, host: str | None, share: bool, settings_path: Path | None) -> None:
    """Launch the Gradio web UI."""
    from makeimage.ui.gradio_app import launch, share_from_env

    configure_logging(verbose_level=get_verbosity_from_env())
    launch(
        server_name=host,
        server_port=port,
        share=share or share_from_env(),
        settings_path=settings_path,
    )


def main() -> None:
    """Entry point for the makeimage console script."""
    cli()


__all__ = ["cli", "main", "generate", "prompts", "ui"]
