"""
═══════════════════════════════════════════════════════════════════════════════
📋 UNIFIED CONFIGURATION TYPES
═══════════════════════════════════════════════════════════════════════════════

ARCHITECTURAL OVERVIEW
----------------------
Responsibility: Define all configuration dataclasses for the area point
counter. Wraps the CONFIG dictionary in typed, validated config objects.

Usage:
    from area_point_count.config import CONFIG
    from area_point_count.config_types import AppConfig

    # Create once at application startup
    app_config = AppConfig.from_dict(CONFIG)

    # Apply command-line overrides
    app_config = app_config.with_overrides(parallel={"max_workers": 4})

For Navigation: Use VS Code outline (Ctrl+Shift+O)

NAVIGATION GUIDE
----------------
# ═════ 1. AGGREGATION CONFIGURATION
# ═════ 2. PARALLEL PROCESSING CONFIGURATION
# ═════ 3. OUTPUT CONFIGURATION
# ═════ 4. LOGGING CONFIGURATION
# ═════ 5. APP CONFIG (MASTER FACADE)

═══════════════════════════════════════════════════════════════════════════════
"""

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, Any, Optional

VALID_BACKENDS = ("loky", "threading", "multiprocessing", "sequential")


# ═══════════════════════════════════════════════════════════════════════════════
# 🎯 1. AGGREGATION CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class AggregationConfig:
    """
    Containment scan options.

    Attributes:
        use_bounds_filter: Skip the ring scan for points outside an area's
            bounding box.
    """

    use_bounds_filter: bool = True

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AggregationConfig":
        """Create AggregationConfig from CONFIG['aggregation'] dictionary."""
        return cls(use_bounds_filter=d.get("use_bounds_filter", True))


# ═══════════════════════════════════════════════════════════════════════════════
# ⚡ 2. PARALLEL PROCESSING CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class ParallelConfig:
    """
    Configuration for point-chunk parallel processing.

    Attributes:
        enabled: Master toggle for parallel processing.
        max_workers: Number of workers (-1 = auto).
        optimal_workers_default: Default worker count when auto-detecting.
        min_points_for_parallel: Minimum point count to justify parallel.
        chunk_size: Points per dispatched chunk.
        backend: Joblib backend ("loky" = process-based).
        verbose: Verbosity level (0-10).
        fallback_on_error: Fall back to sequential on dispatch errors.
    """

    enabled: bool = True
    max_workers: int = -1
    optimal_workers_default: int = 8
    min_points_for_parallel: int = 50000
    chunk_size: int = 10000
    backend: str = "loky"
    verbose: int = 0
    fallback_on_error: bool = True

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ParallelConfig":
        """Create ParallelConfig from CONFIG['parallel'] dictionary."""
        return cls(
            enabled=d.get("enabled", True),
            max_workers=d.get("max_workers", -1),
            optimal_workers_default=d.get("optimal_workers_default", 8),
            min_points_for_parallel=d.get("min_points_for_parallel", 50000),
            chunk_size=d.get("chunk_size", 10000),
            backend=d.get("backend", "loky"),
            verbose=d.get("verbose", 0),
            fallback_on_error=d.get("fallback_on_error", True),
        )

    def __post_init__(self) -> None:
        """Validate parallel configuration."""
        if self.max_workers == 0 or self.max_workers < -1:
            raise ValueError(
                f"max_workers must be -1 (auto) or >= 1, got {self.max_workers}"
            )
        if self.optimal_workers_default < 1:
            raise ValueError(
                f"optimal_workers_default must be >= 1, got {self.optimal_workers_default}"
            )
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")
        if self.min_points_for_parallel < 0:
            raise ValueError(
                f"min_points_for_parallel must be >= 0, got {self.min_points_for_parallel}"
            )
        if self.backend not in VALID_BACKENDS:
            raise ValueError(
                f"backend must be one of {VALID_BACKENDS}, got '{self.backend}'"
            )


# ═══════════════════════════════════════════════════════════════════════════════
# 📤 3. OUTPUT CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class OutputConfig:
    """
    Serialization and summary export settings.

    Attributes:
        indent: JSON indent for the enriched collection (None = compact).
        summary_csv: Optional path for the per-area summary CSV.
        name_property: Area property shown as the name in summaries.
    """

    indent: Optional[int] = None
    summary_csv: Optional[str] = None
    name_property: str = "name"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "OutputConfig":
        """Create OutputConfig from CONFIG['output'] dictionary."""
        return cls(
            indent=d.get("indent"),
            summary_csv=d.get("summary_csv"),
            name_property=d.get("name_property", "name"),
        )

    def __post_init__(self) -> None:
        """Validate output configuration."""
        if self.indent is not None and self.indent < 0:
            raise ValueError(f"indent must be >= 0 or None, got {self.indent}")

    @property
    def summary_csv_path(self) -> Optional[Path]:
        """Get summary CSV path as Path object (None if disabled)."""
        return Path(self.summary_csv) if self.summary_csv else None


# ═══════════════════════════════════════════════════════════════════════════════
# 📋 4. LOGGING CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class LoggingConfig:
    """Log level, format and optional log folder."""

    level: str = "INFO"
    log_dir: Optional[str] = None
    format: str = "%(asctime)s | %(levelname)-8s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "LoggingConfig":
        """Create LoggingConfig from CONFIG['logging'] dictionary."""
        return cls(
            level=str(d.get("level", "INFO")).upper(),
            log_dir=d.get("log_dir"),
            format=d.get("format", "%(asctime)s | %(levelname)-8s | %(message)s"),
            datefmt=d.get("datefmt", "%Y-%m-%d %H:%M:%S"),
        )

    def __post_init__(self) -> None:
        """Validate logging configuration."""
        if not isinstance(logging.getLevelName(self.level), int):
            raise ValueError(f"Unknown log level: '{self.level}'")

    @property
    def level_value(self) -> int:
        """Numeric logging level."""
        return logging.getLevelName(self.level)

    @property
    def log_path(self) -> Optional[Path]:
        """Get log directory as Path object (None if file logging is off)."""
        return Path(self.log_dir) if self.log_dir else None


# ═══════════════════════════════════════════════════════════════════════════════
# 🏛️ 5. APP CONFIG (MASTER FACADE)
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class AppConfig:
    """
    Master configuration object for the area point counter.

    Create it once at application startup using AppConfig.from_dict(CONFIG)
    and pass it to every function that needs settings.

    Attributes:
        aggregation: Containment scan options.
        parallel: Parallel processing configuration.
        output: Serialization and summary settings.
        logging: Logging settings.

    Example:
        from area_point_count.config import CONFIG
        from area_point_count.config_types import AppConfig

        app_config = AppConfig.from_dict(CONFIG)
    """

    aggregation: AggregationConfig = field(default_factory=AggregationConfig)
    parallel: ParallelConfig = field(default_factory=ParallelConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Raw config dict the facade was built from
    _raw_config: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "AppConfig":
        """
        Create AppConfig from the CONFIG dictionary.

        Args:
            config_dict: The CONFIG dictionary from config.py.

        Returns:
            AppConfig instance with all settings populated.

        Raises:
            ValueError: If any section holds an invalid value.
        """
        return cls(
            aggregation=AggregationConfig.from_dict(
                config_dict.get("aggregation", {})
            ),
            parallel=ParallelConfig.from_dict(config_dict.get("parallel", {})),
            output=OutputConfig.from_dict(config_dict.get("output", {})),
            logging=LoggingConfig.from_dict(config_dict.get("logging", {})),
            _raw_config=config_dict,
        )

    def with_overrides(self, **sections: Dict[str, Any]) -> "AppConfig":
        """
        Return a new AppConfig with per-section values replaced.

        Keys of ``sections`` are section names ("parallel", "output", ...);
        values are partial dictionaries merged over the current settings.
        None values are ignored so unset CLI flags keep configured defaults.
        """
        merged = dict(self._raw_config)
        # Start from the typed sections so directly built configs keep their values
        merged.update(
            aggregation=asdict(self.aggregation),
            parallel=asdict(self.parallel),
            output=asdict(self.output),
            logging=asdict(self.logging),
        )
        for section, overrides in sections.items():
            current = dict(merged.get(section) or {})
            current.update({k: v for k, v in overrides.items() if v is not None})
            merged[section] = current
        return AppConfig.from_dict(merged)

    def get_raw(self, key: str, default: Any = None) -> Any:
        """Get a value from the raw CONFIG dictionary."""
        return self._raw_config.get(key, default)
