"""Command line entry point: api.json files in, Markdown pages out."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from api_documenter.api_item import ApiModel
from api_documenter.documenter import MarkdownDocumenter
from api_documenter.exceptions import ApiDocumenterError
from api_documenter.load_api_package import load_api_package
from api_documenter.load_config import load_config
from api_documenter.write_pages import clear_output_dir, write_pages

logger = logging.getLogger(__name__)


def run(args: argparse.Namespace) -> int:
    """Load every input package, generate its pages and write them."""
    config = load_config(args.config)
    pattern = config["input"]["pattern"]
    input_files = sorted(args.input.glob(pattern))
    if not input_files:
        msg = f"No {pattern} files found under: {args.input}"
        raise SystemExit(msg)

    model = ApiModel()
    for path in input_files:
        logger.info("Loading %s", path)
        model.add_package(load_api_package(path, config))

    out_root = args.output.resolve()
    if config["output"]["clear"]:
        clear_output_dir(out_root)

    documenter = MarkdownDocumenter(config)
    written = 0
    for package in model.packages:
        print(f"Writing {package.display_name} package")
        written += write_pages(documenter.generate_package(package), out_root)

    print(f"Generated {written} pages into: {out_root}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, configure logging and run the generator."""
    ap = argparse.ArgumentParser(
        description="Generate Markdown API reference pages from *.api.json files."
    )
    ap.add_argument(
        "-i",
        "--input",
        type=Path,
        default=Path("./input"),
        help="Folder containing *.api.json files (default: ./input)",
    )
    ap.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("./markdown"),
        help="Folder for the generated Markdown (default: ./markdown)",
    )
    ap.add_argument(
        "--config",
        help="Path to configuration file",
    )
    ap.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug diagnostics",
    )
    args = ap.parse_args(argv)

    level = "DEBUG" if args.verbose else load_config(args.config)["logging"]["level"]
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    try:
        return run(args)
    except ApiDocumenterError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
