"""Command-line interface: run a batch sweep and write the reports."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from solislab.experiments import (
    ReportWriter,
    SUMMARY_KEYS,
    load_config,
    resolve_config,
    run_batch_experiments,
)
from solislab.analysis import compute_area_law
from solislab.field import compute_holographic_bulk, lattice_from_seed
from solislab.logging_config import setup_logging

logger = logging.getLogger("solislab.cli")


def _int_list(text: str) -> List[int]:
    return [int(v) for v in text.split(",") if v.strip()]


def _float_list(text: str) -> List[float]:
    return [float(v) for v in text.split(",") if v.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solislab",
        description="Run the area-law / reconstruction / entropy-flow batch sweep.",
    )
    parser.add_argument("--config", help="JSON file with experiment config overrides")
    parser.add_argument("--out", help="Directory for the reports (default: ./reports)")
    parser.add_argument("--prefix", default="experiments", help="Report file name prefix")
    parser.add_argument("--depths", type=_int_list, help="Comma separated depths, e.g. 2,4")
    parser.add_argument("--noises", type=_float_list, help="Comma separated boundary noises")
    parser.add_argument("--mixes", type=_float_list, help="Comma separated kernel mixes")
    parser.add_argument("--seeds", type=_int_list, help="Comma separated seeds")
    parser.add_argument("--hdf5", action="store_true", help="Also write an HDF5 archive")
    parser.add_argument("--plot", action="store_true", help="Save the area-law plot of the first run")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--log-file", help="Also write the log to this file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)

    try:
        base = load_config(args.config) if args.config else None
        overrides = {
            key: value
            for key, value in (
                ("depths", args.depths),
                ("boundary_noises", args.noises),
                ("kernel_mixes", args.mixes),
                ("seeds", args.seeds),
            )
            if value
        }
        config = resolve_config(base, **overrides)
        batch = run_batch_experiments(config)

        writer = ReportWriter(out_dir=args.out, prefix=args.prefix)
        writer.write_csv(batch)
        writer.write_json(batch, config)
        if args.hdf5:
            writer.write_hdf5(batch, config)
        if args.plot and batch.results:
            first = batch.results[0]
            holo = compute_holographic_bulk(
                lattice_from_seed(first.seed, config.dims),
                config.particle_count,
                first.depth,
                first.boundary_noise,
                first.kernel_mix,
            )
            compute_area_law(holo.field[0], holo.grid).plot(filename=writer.path_for("png"))
    except (OSError, ValueError) as e:
        logger.error(f"Batch run failed: {e}")
        return 1

    print(f"Total runs: {batch.summary.total_runs}")
    for key, label in SUMMARY_KEYS.items():
        stat = batch.summary.metrics[key]
        print(f"  - {label}: {stat.mean:.4f} ± {stat.stdev:.4f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
