"""
Utility functions for the CLI.

Exit code constants and output path helpers.
"""

from pathlib import Path

# Exit codes
EXIT_SUCCESS = 0
EXIT_API_OR_NETWORK = 1
EXIT_CONFIGURATION = 2


def image_output_path(out_dir: Path, side: str, extension: str) -> Path:
    """Return <out_dir>/<side>.<extension>, e.g. out/left.png."""
    return out_dir / f"{side}.{extension or 'png'}"


__all__ = [
    "EXIT_SUCCESS",
    "EXIT_API_OR_NETWORK",
    "EXIT_CONFIGURATION",
    "image_output_path",
]
