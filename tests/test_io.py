import json
import math

import pytest

from solislab.experiments import (
    BatchResult,
    ExperimentConfig,
    ReportWriter,
    aggregate_summary,
    load_config,
    load_hdf5,
    resolve_config,
    run_batch_experiments,
    save_hdf5,
)
from solislab.experiments.batch import ExperimentResult


@pytest.fixture(scope="module")
def small_batch():
    config = resolve_config(depths=[0], boundary_noises=[0.1], kernel_mixes=[0.0, 1.0], seeds=[11], particle_count=8)
    return run_batch_experiments(config), config


def test_csv_and_json_reports(tmp_path, small_batch):
    batch, config = small_batch
    writer = ReportWriter(out_dir=str(tmp_path / "out"), prefix="run")
    csv_path = writer.write_csv(batch)
    json_path = writer.write_json(batch, config)

    assert csv_path.endswith(".csv") and "run-" in csv_path
    with open(csv_path, encoding="utf-8") as f:
        assert len(f.read().split("\n")) == 1 + len(batch.results)

    with open(json_path, encoding="utf-8") as f:
        payload = json.load(f)
    assert payload["config"]["kernel_mixes"] == [0.0, 1.0]
    assert payload["summary"]["total_runs"] == 2
    assert len(payload["results"]) == 2


def test_json_writes_infinity_as_null(tmp_path):
    row = dict(
        depth=1, boundary_noise=0.0, kernel_mix=0.0, seed=1,
        r2_perimeter=1.0, r2_area=1.0, resonance_mean=0.5, resonance_variance=0.0,
        reconstruction_mse=0.0, reconstruction_mse_interior=0.0, reconstruction_psnr=math.inf,
        flow_mean_magnitude=0.0, flow_mean_alignment=0.0, flow_std_alignment=0.0,
        flow_dominant_magnitude=0.0, flow_dominant_alignment=0.0, flow_count=0,
    )
    results = [ExperimentResult(**row)]
    batch = BatchResult(results=results, summary=aggregate_summary(results))
    path = ReportWriter(out_dir=str(tmp_path)).write_json(batch, ExperimentConfig())
    with open(path, encoding="utf-8") as f:
        payload = json.load(f)
    assert payload["results"][0]["reconstruction_psnr"] is None


def test_hdf5_round_trip(tmp_path, small_batch):
    batch, config = small_batch
    path = str(tmp_path / "batch.h5")
    save_hdf5(batch, config, path)
    loaded, loaded_config = load_hdf5(path)

    assert loaded_config == config
    assert loaded.summary.total_runs == batch.summary.total_runs
    assert len(loaded.results) == len(batch.results)
    for original, restored in zip(batch.results, loaded.results):
        assert restored.seed == original.seed
        assert restored.flow_count == original.flow_count
        assert restored.r2_area == pytest.approx(original.r2_area)
    for key, stat in batch.summary.metrics.items():
        assert loaded.summary.metrics[key].mean == pytest.approx(stat.mean)


def test_load_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"depths": [3], "mask_mode": "alternate"}), encoding="utf-8")
    config = load_config(str(path))
    assert config.depths == (3,)
    assert config.mask_mode == "alternate"

    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(path))
