"""Mini README: Height oracle subsystem.

Re-exports the abstract ``HeightOracle`` interface consumed by segment
validation and the grid-backed implementation shipped with the package.
"""

from .base import HeightOracle
from .grid_oracle import GridHeightOracle

__all__ = ["GridHeightOracle", "HeightOracle"]
