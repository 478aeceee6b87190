"""
Report Input/Output
Writes batch results as CSV and JSON reports and archives them in HDF5.
"""
from __future__ import annotations

import json
import logging
import math
import os
from dataclasses import fields
from datetime import datetime
from importlib.metadata import version, PackageNotFoundError
from typing import Any, Dict, List, Optional

import h5py
import numpy as np

from solislab.config import get_reports_path
from solislab.experiments.batch import (
    BatchResult,
    ExperimentConfig,
    ExperimentResult,
    ExperimentSummary,
    SummaryStat,
    format_experiment_csv,
)

logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("solislab")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"

RESULT_FIELDS: List[str] = [f.name for f in fields(ExperimentResult)]
INTEGER_FIELDS = {"depth", "seed", "flow_count"}


def _json_safe(value: Any) -> Any:
    """Non-finite floats become None so the JSON stays standard."""
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def load_config(filepath: str) -> ExperimentConfig:
    """
    Read a JSON file of config overrides.

    Raises:
        ValueError: If the file does not hold a JSON object or has unknown keys.
    """
    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file '{filepath}' must contain a JSON object.")
    logger.info(f"Loaded experiment config from: {filepath}")
    return ExperimentConfig.from_dict(data)


class ReportWriter:
    """Saves one batch run under a common timestamped base name."""

    def __init__(self, out_dir: Optional[str] = None, prefix: str = "experiments") -> None:
        self.out_dir = out_dir or get_reports_path()
        stamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S")
        self.base_name = f"{prefix}-{stamp}"

    def path_for(self, extension: str) -> str:
        return os.path.join(self.out_dir, f"{self.base_name}.{extension}")

    def _ensure_dir(self) -> None:
        os.makedirs(self.out_dir, exist_ok=True)

    def write_csv(self, batch: BatchResult) -> str:
        self._ensure_dir()
        path = self.path_for("csv")
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(format_experiment_csv(batch.results))
        logger.info(f"CSV report saved to: {path}")
        return path

    def write_json(self, batch: BatchResult, config: ExperimentConfig) -> str:
        self._ensure_dir()
        path = self.path_for("json")
        payload = {
            "version": APP_VERSION,
            "config": config.to_dict(),
            "summary": batch.summary.to_dict(),
            "results": [res.to_dict() for res in batch.results],
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(_json_safe(payload), f, indent=2)
        logger.info(f"JSON report saved to: {path}")
        return path

    def write_hdf5(self, batch: BatchResult, config: ExperimentConfig) -> str:
        self._ensure_dir()
        path = self.path_for("h5")
        save_hdf5(batch, config, path)
        return path


def save_hdf5(batch: BatchResult, config: ExperimentConfig, filepath: str) -> None:
    """
    Archive a batch run.

    Layout: root attrs (version, config JSON), group 'results' with one
    dataset per result column, group 'summary' with one attr pair per metric.
    """
    logger.info(f"Saving batch archive to: {filepath}")
    with h5py.File(filepath, "w") as f:
        f.attrs["version"] = APP_VERSION
        f.attrs["config_json"] = json.dumps(config.to_dict())
        f.attrs["total_runs"] = batch.summary.total_runs

        grp_res = f.create_group("results")
        for name in RESULT_FIELDS:
            column = [getattr(res, name) for res in batch.results]
            dtype = np.int64 if name in INTEGER_FIELDS else np.float64
            grp_res.create_dataset(name, data=np.asarray(column, dtype=dtype))

        grp_sum = f.create_group("summary")
        for key, stat in batch.summary.metrics.items():
            grp_metric = grp_sum.create_group(key)
            grp_metric.attrs["mean"] = stat.mean
            grp_metric.attrs["stdev"] = stat.stdev


def load_hdf5(filepath: str) -> tuple[BatchResult, ExperimentConfig]:
    """Read an archive written by save_hdf5."""
    logger.info(f"Loading batch archive from: {filepath}")
    with h5py.File(filepath, "r") as f:
        config = ExperimentConfig.from_dict(json.loads(f.attrs["config_json"]))

        grp_res = f["results"]
        columns: Dict[str, np.ndarray] = {name: grp_res[name][()] for name in RESULT_FIELDS}
        n_rows = len(columns[RESULT_FIELDS[0]]) if RESULT_FIELDS else 0
        results = []
        for i in range(n_rows):
            row = {
                name: int(columns[name][i]) if name in INTEGER_FIELDS else float(columns[name][i])
                for name in RESULT_FIELDS
            }
            results.append(ExperimentResult(**row))

        metrics = {
            key: SummaryStat(mean=float(grp.attrs["mean"]), stdev=float(grp.attrs["stdev"]))
            for key, grp in f["summary"].items()
        }
        summary = ExperimentSummary(total_runs=int(f.attrs["total_runs"]), metrics=metrics)

    return BatchResult(results=results, summary=summary), config
