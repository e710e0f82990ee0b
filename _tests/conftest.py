"""Shared fixtures for the area point count tests."""

import json
import logging
from pathlib import Path
from typing import Any, Dict

import pytest

from helpers import multipolygon_feature, square_ring


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers main.setup_logging() attached during a test."""
    package_logger = logging.getLogger("area_point_count")
    level = package_logger.level
    yield
    package_logger.handlers.clear()
    package_logger.setLevel(level)


@pytest.fixture
def write_geojson(tmp_path: Path):
    """Write a dict (or raw text) to a file under tmp_path, return the path."""

    def _write(name: str, content: Any) -> Path:
        path = tmp_path / name
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def square_area() -> Dict[str, Any]:
    """One-part, one-ring 10x10 square at the origin."""
    return multipolygon_feature([[square_ring(0, 0, 10)]], name="square")


@pytest.fixture
def holed_area() -> Dict[str, Any]:
    """20x20 square with a 10x10 hole in the middle."""
    return multipolygon_feature(
        [[square_ring(0, 0, 20), square_ring(5, 5, 10)]], name="holed"
    )


@pytest.fixture
def two_part_area() -> Dict[str, Any]:
    """Two disjoint 10x10 squares in one area."""
    return multipolygon_feature(
        [[square_ring(0, 0, 10)], [square_ring(100, 100, 10)]], name="pair"
    )
