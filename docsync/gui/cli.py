import argparse
from pathlib import Path
from typing import Optional, Sequence, Tuple

from docsync.configs import USER_CONFIG_FILENAME, get_config

__all__ = ["build_parser", "parse_cli"]


def build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser used by the viewer entry point."""
    parser = argparse.ArgumentParser(
        description="View a PDF side by side with its extracted content graph."
    )
    parser.add_argument(
        "pdf",
        nargs="?",
        default=argparse.SUPPRESS,
        help="PDF path or http(s) URL",
    )
    parser.add_argument(
        "content",
        nargs="?",
        default=argparse.SUPPRESS,
        help="content graph JSON path or http(s) URL",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="store_true",
        help="show version and exit",
    )

    default_config_file = str(Path.home() / USER_CONFIG_FILENAME)
    parser.add_argument(
        "--config",
        dest="config",
        default=default_config_file,
        help=f"config file or yaml format string (default {default_config_file})",
    )
    parser.add_argument(
        "--padding",
        dest="overlay_padding",
        type=float,
        help="document units added around each overlay box",
        default=argparse.SUPPRESS,
    )
    parser.add_argument(
        "--heading-labels",
        dest="heading_labels",
        help="comma separated text labels rendered as headings",
        default=argparse.SUPPRESS,
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        help="logging level (DEBUG, INFO, WARNING, ...)",
        default=argparse.SUPPRESS,
    )
    return parser


def _normalize_cli_collections(namespace: argparse.Namespace) -> None:
    """Mutate the namespace in-place to expand comma separated lists."""
    if hasattr(namespace, "heading_labels"):
        namespace.heading_labels = [
            item.strip()
            for item in namespace.heading_labels.split(",")
            if item.strip()
        ]


def parse_cli(
    argv: Optional[Sequence[str]] = None,
) -> Tuple[dict, argparse.Namespace, bool]:
    """Parse CLI arguments and return `(config, namespace, version_requested)`."""
    parser = build_parser()
    namespace = parser.parse_args(argv)
    _normalize_cli_collections(namespace)

    overrides = vars(namespace).copy()
    version_requested = overrides.pop("version", False)
    config_file_or_yaml = overrides.pop("config")
    if config_file_or_yaml == str(Path.home() / USER_CONFIG_FILENAME) and not Path(
        config_file_or_yaml
    ).is_file():
        config_file_or_yaml = None
    config = get_config(config_file_or_yaml, overrides)
    return config, namespace, bool(version_requested)
