"""
Area-Law Metrics
================
Samples rectangular sub-regions of a field and regresses their entropy
against perimeter and against area.

A perimeter fit that dominates the area fit indicates boundary-dominated
(area-law) scaling of the entropy-like statistic; the reverse indicates
bulk/volume scaling.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional
import logging

import numpy as np
import matplotlib.pyplot as plt

from solislab.analysis.entropy import shannon_entropy
from solislab.analysis.regression import RegressionResult, ZERO_FIT, linear_regression
from solislab.config import DEFAULT_SAMPLE_LIMIT, MIN_REGION_SIZE
from solislab.utils import as_field

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Region:
    """Rectangular sub-region of a field with its entropy."""
    x: int
    y: int
    width: int
    height: int
    entropy: float

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def perimeter(self) -> int:
        return 2 * (self.width + self.height)


@dataclass(frozen=True)
class AreaLawMetrics:
    regions: List[Region] = field(default_factory=list)
    perimeter_fit: RegressionResult = ZERO_FIT
    area_fit: RegressionResult = ZERO_FIT

    @property
    def dominant_scaling(self) -> str:
        """'perimeter' when the perimeter fit explains the entropy at least as well as the area fit."""
        return "perimeter" if self.perimeter_fit.r2 >= self.area_fit.r2 else "area"

    def plot(self, filename: Optional[str] = None) -> None:
        """
        Plot entropy against perimeter and area with both fitted lines.

        Args:
            filename: If given, the figure is saved there instead of shown.
        """
        perimeters = np.array([r.perimeter for r in self.regions], dtype=np.float64)
        areas = np.array([r.area for r in self.regions], dtype=np.float64)
        entropies = np.array([r.entropy for r in self.regions], dtype=np.float64)

        plt.rcParams["figure.constrained_layout.use"] = True
        fig, (ax_p, ax_a) = plt.subplots(1, 2, figsize=(10, 4))

        for ax, xs, fit, label in (
            (ax_p, perimeters, self.perimeter_fit, "Perimeter"),
            (ax_a, areas, self.area_fit, "Area"),
        ):
            ax.scatter(xs, entropies, s=12, color="tab:blue", alpha=0.7)
            if xs.size:
                line_x = np.linspace(xs.min(), xs.max(), 50)
                ax.plot(line_x, fit.predict(line_x), 'r', lw=2)
            ax.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)
            ax.set_title(f"{label} fit (R² = {fit.r2:.3f})")
            ax.set_xlabel(label)
            ax.set_ylabel("Entropy (nats)")

        if filename:
            fig.savefig(filename, dpi=120)
            plt.close(fig)
            logger.info(f"Area-law plot saved to {filename}")
        else:
            plt.show()


def build_sample_sizes(grid: int) -> List[int]:
    """
    Candidate rectangle side lengths for a grid.

    Multiples of max(4, grid // 6) up to grid, plus grid, grid // 2, grid // 3
    and grid // 4, each kept within [3, grid]. Sorted ascending, no duplicates.
    """
    base = max(4, grid // 6)
    sizes = set()
    for step in range(base, grid + 1, base):
        sizes.add(max(MIN_REGION_SIZE, min(grid, step)))
    sizes.add(grid)
    sizes.add(max(MIN_REGION_SIZE, grid // 2))
    sizes.add(max(MIN_REGION_SIZE, grid // 3))
    sizes.add(max(MIN_REGION_SIZE, grid // 4))
    return sorted(size for size in sizes if MIN_REGION_SIZE <= size <= grid)


def collect_region_values(
    field: npt.NDArray[np.float64],
    grid: int,
    x: int,
    y: int,
    width: int,
    height: int,
) -> npt.NDArray[np.float64]:
    """
    Values of the rectangle (x, y, width, height), row by row.

    Coordinates outside the field are clamped to the nearest edge pixel.
    """
    xs = np.clip(np.arange(x, x + width), 0, grid - 1)
    ys = np.clip(np.arange(y, y + height), 0, grid - 1)
    return field[(ys[:, None] * grid + xs[None, :]).ravel()]


def compute_area_law(
    field: npt.ArrayLike,
    grid: int,
    sample_limit: int = DEFAULT_SAMPLE_LIMIT,
) -> AreaLawMetrics:
    """
    Sample rectangular regions and fit entropy against perimeter and area.

    Regions are visited size pair by size pair (width outer, height inner),
    then row by row with a stride of half the rectangle side. Sampling stops
    as soon as sample_limit regions were collected.

    Args:
        field: Flat row-major field of grid * grid values.
        grid: Side length of the field.
        sample_limit: Maximum number of regions.

    Returns:
        Sampled regions and the two fits. Empty metrics when grid <= 0 or no
        region could be sampled.
    """
    if grid <= 0 or sample_limit <= 0:
        return AreaLawMetrics()

    values = as_field(field, grid)
    sizes = build_sample_sizes(grid)
    regions: List[Region] = []

    for width in sizes:
        for height in sizes:
            stride_x = max(1, width // 2)
            stride_y = max(1, height // 2)
            for y in range(0, grid - height + 1, stride_y):
                for x in range(0, grid - width + 1, stride_x):
                    region_values = collect_region_values(values, grid, x, y, width, height)
                    regions.append(Region(
                        x=x,
                        y=y,
                        width=width,
                        height=height,
                        entropy=shannon_entropy(region_values),
                    ))
                    if len(regions) >= sample_limit:
                        break
                if len(regions) >= sample_limit:
                    break
            if len(regions) >= sample_limit:
                break
        if len(regions) >= sample_limit:
            break

    if not regions:
        return AreaLawMetrics()

    perimeters = [r.perimeter for r in regions]
    areas = [r.area for r in regions]
    entropies = [r.entropy for r in regions]

    perimeter_fit = linear_regression(perimeters, entropies)
    area_fit = linear_regression(areas, entropies)
    logger.debug(
        f"Area law on {grid}x{grid}: {len(regions)} regions, "
        f"R²(perimeter)={perimeter_fit.r2:.4f}, R²(area)={area_fit.r2:.4f}"
    )

    return AreaLawMetrics(regions=regions, perimeter_fit=perimeter_fit, area_fit=area_fit)
