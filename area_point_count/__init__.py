"""
Area Point Count

Assigns point observations to (multi)polygon areas and annotates each area
with the count of points inside it. Single-pass, exhaustive, even/odd rule.
"""

from area_point_count.main import run_report
from area_point_count.config import CONFIG

__all__ = ["run_report", "CONFIG"]

__version__ = "1.0.0"
