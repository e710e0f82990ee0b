#!/usr/bin/env python3
"""
Area Point Count - Configuration

ARCHITECTURAL OVERVIEW:
=======================
Responsibility: Centralized configuration for the area point counter.
Single source of truth for aggregation, parallel dispatch, output and logging.

Configuration Sections (ordered by importance for tuning):
1. aggregation: Containment scan options
2. parallel: Point-chunk parallel processing settings
3. output: Serialization and summary export settings
4. logging: Log level, format and optional log folder

All coordinates are consumed as-is (longitude/latitude pairs). There is no
CRS handling and no environment-variable configuration; command-line flags
are the only runtime overrides (see main.build_parser).

Navigation Guide:
- Use VS Code outline (Ctrl+Shift+O) to jump between sections
"""

from typing import Dict, Any

# ═══════════════════════════════════════════════════════════════════════════
# ⚙️ MASTER CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════

CONFIG: Dict[str, Any] = {
    # ═══════════════════════════════════════════════════════════════════════
    # 🎯 AGGREGATION
    # ═══════════════════════════════════════════════════════════════════════
    "aggregation": {
        # Reject a point early when it lies outside an area's bounding box.
        # Result is identical to the full ring scan, only faster.
        "use_bounds_filter": True,
    },
    # ═══════════════════════════════════════════════════════════════════════
    # ⚡ PARALLEL PROCESSING
    # ═══════════════════════════════════════════════════════════════════════
    "parallel": {
        # Master toggle - set False to always scan sequentially
        "enabled": True,
        # Number of worker processes (-1 = auto, based on CPU cores)
        "max_workers": -1,
        # Default worker count when auto-detecting
        "optimal_workers_default": 8,
        # Minimum point count needed to justify parallel overhead
        "min_points_for_parallel": 50000,
        # Points per dispatched chunk
        "chunk_size": 10000,
        # Joblib backend ("loky" = process-based, safe for CPU-bound)
        "backend": "loky",
        # Verbosity level for joblib progress output (0-10)
        "verbose": 0,
        # Fall back to a sequential scan on any dispatch error
        "fallback_on_error": True,
    },
    # ═══════════════════════════════════════════════════════════════════════
    # 📤 OUTPUT
    # ═══════════════════════════════════════════════════════════════════════
    "output": {
        # JSON indent for the enriched collection (None = compact)
        "indent": None,
        # Optional per-area summary CSV path (None = no export)
        "summary_csv": None,
        # Area property used as the display name in summaries
        "name_property": "name",
    },
    # ═══════════════════════════════════════════════════════════════════════
    # 📋 LOGGING
    # ═══════════════════════════════════════════════════════════════════════
    "logging": {
        "level": "INFO",
        # Folder for run log files (None = stderr only)
        "log_dir": None,
        "format": "%(asctime)s | %(levelname)-8s | %(message)s",
        "datefmt": "%Y-%m-%d %H:%M:%S",
    },
}
