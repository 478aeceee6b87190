from solislab.experiments.batch import (
    ExperimentConfig,
    ExperimentResult,
    ExperimentSummary,
    SummaryStat,
    BatchResult,
    DEFAULT_BATCH_CONFIG,
    SUMMARY_KEYS,
    resolve_config,
    aggregate_summary,
    run_single_experiment,
    run_batch_experiments,
    format_experiment_csv,
)
from solislab.experiments.io import ReportWriter, load_config, save_hdf5, load_hdf5

__all__ = [
    "ExperimentConfig",
    "ExperimentResult",
    "ExperimentSummary",
    "SummaryStat",
    "BatchResult",
    "DEFAULT_BATCH_CONFIG",
    "SUMMARY_KEYS",
    "resolve_config",
    "aggregate_summary",
    "run_single_experiment",
    "run_batch_experiments",
    "format_experiment_csv",
    "ReportWriter",
    "load_config",
    "save_hdf5",
    "load_hdf5",
]
