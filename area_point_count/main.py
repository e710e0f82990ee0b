#!/usr/bin/env python3
"""
Area Point Count - Main Entry Point

Assigns point observations to area regions and annotates every area with
the number of points that fall inside it.

Usage:
    area-point-count --areas areas.geojson --points points.geojson

    Or:
    python -m area_point_count.main --areas areas.geojson --points points.geojson

The enriched area FeatureCollection is printed to stdout (or written to
--output). Progress and diagnostics go to stderr so stdout stays a clean
GeoJSON document. A run is all-or-nothing: on any error nothing is printed
to stdout and the exit status is non-zero.
"""

import argparse
import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Sequence, Union

from area_point_count.aggregation.aggregator import aggregate
from area_point_count.config import CONFIG
from area_point_count.config_types import AppConfig
from area_point_count.errors import AreaPointCountError
from area_point_count.geojson_io import (
    load_area_features,
    load_point_features,
    write_text,
)
from area_point_count.geometry.builder import build_region_definition, definition_stats
from area_point_count.report import (
    assemble_report,
    build_summary_frame,
    export_summary_csv,
    log_summary,
)

LOGGER_NAME = "AreaPointCount"

# ═══════════════════════════════════════════════════════════════════════════
# 🎯 MODULE-LEVEL CONFIG (Single Source of Truth)
# ═══════════════════════════════════════════════════════════════════════════
APP_CONFIG = AppConfig.from_dict(CONFIG)


# ═══════════════════════════════════════════════════════════════════════════
# 📋 LOGGING SETUP
# ═══════════════════════════════════════════════════════════════════════════


def setup_logging(app_config: AppConfig = APP_CONFIG) -> logging.Logger:
    """Configure logging with a stderr handler and an optional file handler.

    Handlers are attached to the package logger so module loggers
    (``area_point_count.*``) and the run logger share them.

    Returns:
        The run logger.
    """
    log_config = app_config.logging
    formatter = logging.Formatter(log_config.format, datefmt=log_config.datefmt)

    package_logger = logging.getLogger("area_point_count")
    package_logger.setLevel(log_config.level_value)
    package_logger.handlers.clear()

    # Console handler (stderr: stdout carries the document)
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(log_config.level_value)
    ch.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(ch)

    # File handler
    log_dir = log_config.log_path
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%m%d_%H%M%S")
        fh = logging.FileHandler(log_dir / f"run_{timestamp}.log", encoding="utf-8")
        fh.setLevel(log_config.level_value)
        fh.setFormatter(formatter)
        package_logger.addHandler(fh)

    logger = logging.getLogger(f"area_point_count.{LOGGER_NAME}")
    return logger


# ═══════════════════════════════════════════════════════════════════════════
# 🎯 MAIN WORKFLOW
# ═══════════════════════════════════════════════════════════════════════════


def run_report(
    areas_path: Union[str, Path],
    points_path: Union[str, Path],
    app_config: Optional[AppConfig] = None,
    logger: Optional[logging.Logger] = None,
    output_path: Optional[Union[str, Path]] = None,
) -> str:
    """
    Run the full load -> build -> aggregate -> assemble workflow.

    Args:
        areas_path: Area FeatureCollection file
        points_path: Point FeatureCollection file
        app_config: AppConfig (defaults to the module-level APP_CONFIG)
        logger: Optional logger instance
        output_path: Write the document here; the summary CSV is only
            written after this succeeds

    Returns:
        The enriched area collection as GeoJSON text.

    Raises:
        InputReadError, ParseError, SerializationError
    """
    app_config = app_config or APP_CONFIG
    logger = logger or logging.getLogger(f"area_point_count.{LOGGER_NAME}")
    timings: Dict[str, float] = {}
    total_start = time.perf_counter()

    # Phase 1: Load both collections
    step_start = time.perf_counter()
    area_collection, area_features = load_area_features(areas_path)
    _, _, points = load_point_features(points_path)
    timings["1_load"] = time.perf_counter() - step_start

    # Phase 2: Build region definitions
    step_start = time.perf_counter()
    definition = build_region_definition(area_features)
    stats = definition_stats(definition)
    timings["2_build"] = time.perf_counter() - step_start
    logger.info(
        f"   🔷 Areas: {stats['areas']}, parts: {stats['parts']}, "
        f"rings: {stats['rings']}, vertices: {stats['vertices']}"
    )

    # Phase 3: Aggregate points into area counters
    step_start = time.perf_counter()
    aggregate(definition, points, area_features, app_config)
    timings["3_aggregate"] = time.perf_counter() - step_start

    # Phase 4: Assemble output (and optional summary)
    step_start = time.perf_counter()
    document = assemble_report(area_collection, indent=app_config.output.indent)
    if output_path is not None:
        path = write_text(output_path, document)
        logger.info(f"📤 Output written: {path}")
    summary_path = app_config.output.summary_csv_path
    if summary_path is not None or logger.isEnabledFor(logging.DEBUG):
        summary = build_summary_frame(
            area_collection, definition, app_config.output.name_property
        )
        if summary_path is not None:
            export_summary_csv(summary, summary_path)
        if logger.isEnabledFor(logging.DEBUG):
            log_summary(summary, logger)
    timings["4_assemble"] = time.perf_counter() - step_start

    timings["total"] = time.perf_counter() - total_start
    for step, seconds in timings.items():
        logger.debug(f"   ⏱️ {step}: {seconds:.3f}s")
    logger.info(f"✅ Report complete in {timings['total']:.2f}s")
    return document


# ═══════════════════════════════════════════════════════════════════════════
# 🚀 ENTRY POINT
# ═══════════════════════════════════════════════════════════════════════════


def build_parser() -> argparse.ArgumentParser:
    """Command-line parser; --areas and --points are required."""
    parser = argparse.ArgumentParser(
        prog="area-point-count",
        description="Count GeoJSON points inside GeoJSON (multi)polygon areas.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the enriched area collection
  area-point-count --areas areas.geojson --points points.geojson

  # Write to a file with a per-area summary CSV
  area-point-count --areas areas.geojson --points points.geojson \\
      --output out/areas_counted.geojson --summary-csv out/summary.csv
""",
    )
    parser.add_argument("--areas", required=True, help="area geojson file")
    parser.add_argument("--points", required=True, help="points geojson file")
    parser.add_argument("--output", help="write the result here instead of stdout")
    parser.add_argument("--indent", type=int, help="JSON indent (default: compact)")
    parser.add_argument(
        "--workers", type=int, help="parallel workers (1 = sequential, -1 = auto)"
    )
    parser.add_argument(
        "--no-bounds-filter",
        action="store_true",
        help="always run the full ring scan",
    )
    parser.add_argument("--summary-csv", help="write a per-area summary CSV")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="log verbosity on stderr",
    )
    return parser


def config_from_args(args: argparse.Namespace, base: AppConfig = APP_CONFIG) -> AppConfig:
    """Apply command-line overrides over the configured defaults."""
    return base.with_overrides(
        aggregation={"use_bounds_filter": False if args.no_bounds_filter else None},
        parallel={"max_workers": args.workers},
        output={"indent": args.indent, "summary_csv": args.summary_csv},
        logging={"level": args.log_level},
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Command-line entry point.

    Returns:
        0 on success, 1 on a read, parse or serialization failure.
        Missing required flags exit with argparse's usage error (status 2).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        app_config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    logger = setup_logging(app_config)

    try:
        document = run_report(
            args.areas, args.points, app_config, logger, output_path=args.output
        )
        if not args.output:
            print(document)
    except AreaPointCountError as e:
        logger.error(f"❌ {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
