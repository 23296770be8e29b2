"""CLI adapter exporting the portfolio to CSV and JSON files."""

import argparse
from pathlib import Path

from asset_monitor.infrastructure.container import build_services
from asset_monitor.infrastructure.logging.logger import get_usage_logger


FORMATS = {
    "csv": ("csv",),
    "json": ("json",),
    "all": ("csv", "json"),
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Export portfolio data")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path.home() / "Downloads",
        help="Destination folder (default: ~/Downloads)",
    )
    parser.add_argument(
        "--format",
        choices=sorted(FORMATS),
        default="all",
        help="Which files to write",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Write export files and print their paths."""
    args = _build_parser().parse_args(argv)
    services = build_services()
    result = services.export.write(
        args.output.expanduser(),
        formats=FORMATS[args.format],
    )
    get_usage_logger().info(f"Exported {len(result.paths)} file(s)")
    for path in result.paths:
        print(path)


if __name__ == "__main__":  # pragma: no cover
    main()
