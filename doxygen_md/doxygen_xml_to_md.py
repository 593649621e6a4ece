"""Convert Doxygen XML output into Markdown pages and a MkDocs navigation file."""

import argparse
import logging
from pathlib import Path

import yaml

from doxygen_md.build_site import build_site, write_site
from doxygen_md.errors import DoxygenMdError
from doxygen_md.input_provider import DirectoryInputProvider
from doxygen_md.load_config import load_config
from doxygen_md.output_sink import DirectorySink

logger = logging.getLogger(__name__)


def run_conversion(args: argparse.Namespace) -> int:
    """Execute the full conversion pipeline."""
    try:
        config = load_config(args.config)
    except (ValueError, yaml.YAMLError):
        logger.exception("Invalid configuration file %s", args.config)
        return 1
    if args.workers is not None:
        config["parse"]["workers"] = args.workers
    if args.include_private:
        config["members"]["include_private"] = True

    try:
        provider = DirectoryInputProvider(args.xml_dir)
        site = build_site(provider, config)
    except (DoxygenMdError, FileNotFoundError):
        logger.exception("Conversion failed")
        return 1

    for warning in site.report.warnings:
        logger.warning("%s: %s", warning.kind, warning.message)

    written = write_site(site, DirectorySink(args.out_dir))
    if args.report:
        site.report.write(args.report)
        logger.info("Wrote run report to %s", args.report)

    logger.info(
        "Generated %d files (%d pages, %d skipped) into %s",
        written,
        site.report.counts.get("pages", 0),
        len(site.report.skipped),
        args.out_dir,
    )
    return 0


def main() -> int:
    """Run the conversion process."""
    ap = argparse.ArgumentParser(
        description="Convert Doxygen XML output to Markdown for a static site.",
    )
    ap.add_argument(
        "xml_dir",
        type=Path,
        help="Directory containing Doxygen XML (index.xml and compound files)",
    )
    ap.add_argument(
        "out_dir",
        type=Path,
        help="Output directory for the Markdown pages and nav.yml",
    )
    ap.add_argument(
        "--config",
        help="Path to configuration file",
    )
    ap.add_argument(
        "--report",
        type=Path,
        help="Write a JSON run report to this path",
    )
    ap.add_argument(
        "--workers",
        type=int,
        help="Number of parser threads (default: from config)",
    )
    ap.add_argument(
        "--include-private",
        action="store_true",
        help="Document private members",
    )
    ap.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return run_conversion(args)


if __name__ == "__main__":
    raise SystemExit(main())
