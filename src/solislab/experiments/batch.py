"""
Batch Experiment Runner
=======================
Sweeps the cartesian grid depth x boundary noise x kernel mix x seed and
collects one result row per combination:

1. Lattice vector from the seed, field from the holographic bulk generator.
2. Area-law fits of the field.
3. One-sample linear decoder, evaluated under the configured boundary mask.
4. Resonance statistics of a seeded particle set against the lattice.
5. Entropy-flow summary of the field.

Runs are deterministic for a given configuration. Errors in any run
propagate and abort the whole sweep.
"""
from __future__ import annotations

import csv
import io
import itertools
import math
from dataclasses import dataclass, field, fields, asdict, replace
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Union
import logging

import numpy as np

from solislab.analysis.area_law import compute_area_law
from solislab.field.generator import compute_holographic_bulk
from solislab.field.particles import generate_particles, lattice_from_seed
from solislab.field.resonance import resonance_stats
from solislab.flow.perturb import EntropyForceOptions, measure_entropy_forces
from solislab.reconstruction.masking import MaskMode, MaskOptions
from solislab.reconstruction.metrics import evaluate_reconstruction
from solislab.reconstruction.models import DecoderType, TrainOptions, train_decoder
from solislab.reconstruction.sample import capture_sample

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExperimentConfig:
    depths: Tuple[int, ...] = (2, 4, 6)
    boundary_noises: Tuple[float, ...] = (0.0, 0.1, 0.2)
    kernel_mixes: Tuple[float, ...] = (0.0, 0.5, 1.0)
    seeds: Tuple[int, ...] = (11, 23, 37, 53)
    particle_count: int = 96
    dims: int = 3
    coverage: float = 0.65
    mask_offset: float = 0.2
    mask_mode: MaskMode = MaskMode.CONTIGUOUS

    def __post_init__(self) -> None:
        # Lists from JSON or callers are stored as tuples
        for name in ("depths", "boundary_noises", "kernel_mixes", "seeds"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        object.__setattr__(self, "mask_mode", MaskMode(self.mask_mode))

    @property
    def total_runs(self) -> int:
        return len(self.depths) * len(self.boundary_noises) * len(self.kernel_mixes) * len(self.seeds)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for name in ("depths", "boundary_noises", "kernel_mixes", "seeds"):
            data[name] = list(data[name])
        data["mask_mode"] = str(self.mask_mode)
        return data

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> ExperimentConfig:
        """
        Build a config from a mapping of overrides.

        Raises:
            ValueError: If the mapping holds an unknown key.
        """
        known = {f.name for f in fields(ExperimentConfig)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown experiment config keys: {sorted(unknown)}")
        return ExperimentConfig(**dict(data))


DEFAULT_BATCH_CONFIG = ExperimentConfig()


@dataclass(frozen=True)
class ExperimentResult:
    depth: int
    boundary_noise: float
    kernel_mix: float
    seed: int
    r2_perimeter: float
    r2_area: float
    resonance_mean: float
    resonance_variance: float
    reconstruction_mse: float
    reconstruction_mse_interior: float
    reconstruction_psnr: float
    flow_mean_magnitude: float
    flow_mean_alignment: float
    flow_std_alignment: float
    flow_dominant_magnitude: float
    flow_dominant_alignment: float
    flow_count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SummaryStat:
    mean: float
    stdev: float


@dataclass(frozen=True)
class ExperimentSummary:
    total_runs: int
    metrics: Dict[str, SummaryStat] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BatchResult:
    results: List[ExperimentResult]
    summary: ExperimentSummary


SUMMARY_KEYS: Dict[str, str] = {
    "r2_perimeter": "R² perimeter",
    "r2_area": "R² area",
    "reconstruction_mse": "Reconstruction MSE",
    "resonance_variance": "Var(resonance)",
    "flow_mean_magnitude": "Mean |flow|",
    "flow_mean_alignment": "Mean alignment",
}

CSV_COLUMNS: List[Tuple[str, str]] = [
    ("depth", "depth"),
    ("boundaryNoise", "boundary_noise"),
    ("kernelMix", "kernel_mix"),
    ("seed", "seed"),
    ("r2_perimeter", "r2_perimeter"),
    ("r2_area", "r2_area"),
    ("resonance_mean", "resonance_mean"),
    ("resonance_variance", "resonance_variance"),
    ("mse", "reconstruction_mse"),
    ("mse_interior", "reconstruction_mse_interior"),
    ("psnr", "reconstruction_psnr"),
    ("flow_mean_magnitude", "flow_mean_magnitude"),
    ("flow_mean_alignment", "flow_mean_alignment"),
    ("flow_std_alignment", "flow_std_alignment"),
    ("flow_dominant_magnitude", "flow_dominant_magnitude"),
    ("flow_dominant_alignment", "flow_dominant_alignment"),
    ("flow_count", "flow_count"),
]

LINEAR_CHECK_OPTIONS = TrainOptions(type=DecoderType.LINEAR, include_bias=True, ridge=1e-3, l2=1e-5)


def resolve_config(
    config: Union[ExperimentConfig, Mapping[str, Any], None] = None,
    **overrides: Any,
) -> ExperimentConfig:
    """Merge a config object or mapping and keyword overrides onto the defaults."""
    if config is None:
        base = DEFAULT_BATCH_CONFIG
    elif isinstance(config, ExperimentConfig):
        base = config
    else:
        base = ExperimentConfig.from_dict(config)
    if overrides:
        ExperimentConfig.from_dict(overrides)  # validates the keys
        base = replace(base, **overrides)
    return base


def stats(values: Sequence[float]) -> SummaryStat:
    """Sample mean and Bessel-corrected standard deviation."""
    n = len(values)
    if n == 0:
        return SummaryStat(mean=0.0, stdev=0.0)
    arr = np.asarray(values, dtype=np.float64)
    mean = float(arr.mean())
    if n == 1:
        return SummaryStat(mean=mean, stdev=0.0)
    variance = float(np.sum((arr - mean) ** 2) / (n - 1))
    return SummaryStat(mean=mean, stdev=math.sqrt(max(variance, 0.0)))


def aggregate_summary(results: Sequence[ExperimentResult]) -> ExperimentSummary:
    metrics = {
        key: stats([getattr(res, key) for res in results])
        for key in SUMMARY_KEYS
    }
    return ExperimentSummary(total_runs=len(results), metrics=metrics)


def run_single_experiment(
    config: ExperimentConfig,
    depth: int,
    boundary_noise: float,
    kernel_mix: float,
    seed: int,
) -> ExperimentResult:
    """Compute one result row for a single parameter combination."""
    lattice = lattice_from_seed(seed, config.dims)
    holo = compute_holographic_bulk(lattice, config.particle_count, depth, boundary_noise, kernel_mix)
    grid = holo.grid or 1
    field_values = holo.field[0] if holo.field else np.zeros(grid * grid)

    area_law = compute_area_law(field_values, grid)

    sample = capture_sample(field_values, grid)
    model = train_decoder([sample], LINEAR_CHECK_OPTIONS)
    evaluation = evaluate_reconstruction(
        sample,
        model,
        MaskOptions(coverage=config.coverage, mode=config.mask_mode, offset=config.mask_offset),
    )

    particles = generate_particles(seed, config.particle_count, config.dims)
    _, resonance_mean, resonance_variance = resonance_stats([p.features for p in particles], lattice)

    flows = measure_entropy_forces(
        field_values, grid, EntropyForceOptions(arc_length=max(6, grid // 8))
    )
    flow_count = len(flows)
    if flow_count:
        magnitudes = np.array([f.flow.magnitude for f in flows], dtype=np.float64)
        alignments = np.array([f.flow.alignment for f in flows], dtype=np.float64)
        flow_mean_magnitude = float(magnitudes.mean())
        flow_mean_alignment = float(alignments.mean())
        flow_std_alignment = float(np.sqrt(np.mean((alignments - flow_mean_alignment) ** 2)))
        # First of the largest magnitudes
        dominant = flows[int(np.argmax(magnitudes))].flow
        dominant_magnitude, dominant_alignment = dominant.magnitude, dominant.alignment
    else:
        flow_mean_magnitude = flow_mean_alignment = flow_std_alignment = 0.0
        dominant_magnitude = dominant_alignment = 0.0

    return ExperimentResult(
        depth=depth,
        boundary_noise=boundary_noise,
        kernel_mix=kernel_mix,
        seed=seed,
        r2_perimeter=area_law.perimeter_fit.r2,
        r2_area=area_law.area_fit.r2,
        resonance_mean=resonance_mean,
        resonance_variance=resonance_variance,
        reconstruction_mse=evaluation.metrics.mse,
        reconstruction_mse_interior=evaluation.metrics.mse_interior,
        reconstruction_psnr=evaluation.metrics.psnr,
        flow_mean_magnitude=flow_mean_magnitude,
        flow_mean_alignment=flow_mean_alignment,
        flow_std_alignment=flow_std_alignment,
        flow_dominant_magnitude=dominant_magnitude,
        flow_dominant_alignment=dominant_alignment,
        flow_count=flow_count,
    )


def run_batch_experiments(
    config: Union[ExperimentConfig, Mapping[str, Any], None] = None,
    **overrides: Any,
) -> BatchResult:
    """
    Run every parameter combination and summarise the results.

    Args:
        config: Full config, or a mapping of overrides onto the defaults.
        **overrides: Further field overrides, e.g. seeds=[11].

    Returns:
        Result rows in depth, noise, mix, seed order, and their summary.
    """
    cfg = resolve_config(config, **overrides)
    total = cfg.total_runs
    logger.info(f"Starting batch of {total} runs")

    results: List[ExperimentResult] = []
    grid_iter = itertools.product(cfg.depths, cfg.boundary_noises, cfg.kernel_mixes, cfg.seeds)
    for run, (depth, noise, mix, seed) in enumerate(grid_iter, start=1):
        result = run_single_experiment(cfg, depth, noise, mix, seed)
        results.append(result)
        logger.debug(
            f"Run {run}/{total} depth={depth} noise={noise} mix={mix} seed={seed}: "
            f"R²p={result.r2_perimeter:.4f} R²a={result.r2_area:.4f} mse={result.reconstruction_mse:.3e}"
        )

    summary = aggregate_summary(results)
    logger.info(f"Batch finished: {summary.total_runs} runs")
    return BatchResult(results=results, summary=summary)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    number = float(value)
    if not math.isfinite(number):
        return ""
    if number.is_integer():
        return str(int(number))
    return repr(number)


def format_experiment_csv(results: Sequence[ExperimentResult]) -> str:
    """
    CSV text of the result rows, one header line then one line per row.

    Non-finite values are written as empty fields.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow([header for header, _ in CSV_COLUMNS])
    for res in results:
        writer.writerow([_format_value(getattr(res, attr)) for _, attr in CSV_COLUMNS])
    return buffer.getvalue().rstrip("\n")
