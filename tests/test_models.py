import numpy as np
import pytest

from solislab.reconstruction import (
    DecoderType,
    LinearModel,
    MLPModel,
    TrainOptions,
    capture_sample,
    compute_reconstruction_metrics,
    run_decoder,
    train_decoder,
)


def _random_samples(count, grid=4, seed=11):
    rng = np.random.default_rng(seed)
    return [capture_sample(rng.uniform(0.1, 0.9, grid * grid), grid) for _ in range(count)]


def _training_mse(model, samples):
    return float(np.mean([
        compute_reconstruction_metrics(s, run_decoder(model, s.boundary)).mse for s in samples
    ]))


def test_linear_recovers_constant_field():
    grid = 8
    sample = capture_sample(np.full(grid * grid, 0.5), grid)
    model = train_decoder([sample])
    assert isinstance(model, LinearModel)
    assert model.type is DecoderType.LINEAR
    assert model.weights.shape == (4 * grid - 4 + 1, grid * grid)
    predicted = run_decoder(model, sample.boundary)
    assert compute_reconstruction_metrics(sample, predicted).mse < 1e-6


def test_linear_without_bias():
    samples = _random_samples(3)
    model = train_decoder(samples, TrainOptions(include_bias=False))
    assert model.weights.shape == (12, 16)
    assert not model.weights.flags.writeable


def test_linear_fits_training_set_better_than_mean():
    samples = _random_samples(5)
    model = train_decoder(samples)
    baseline = float(np.mean([np.mean((s.bulk - 0.5) ** 2) for s in samples]))
    assert _training_mse(model, samples) < baseline


def test_predictions_are_clamped():
    samples = _random_samples(4)
    model = train_decoder(samples)
    out = run_decoder(model, np.full(12, 50.0))
    assert out.min() >= 0.0
    assert out.max() <= 1.0


def test_mlp_is_reproducible_with_seed():
    samples = _random_samples(4)
    options = TrainOptions(type=DecoderType.MLP, epochs=20, seed=42)
    first = train_decoder(samples, options)
    second = train_decoder(samples, options)
    assert isinstance(first, MLPModel)
    assert first.hidden_size == 8
    np.testing.assert_array_equal(first.w1, second.w1)
    np.testing.assert_array_equal(first.w2, second.w2)


def test_mlp_accepts_injected_rng():
    samples = _random_samples(2)
    options = TrainOptions(type="mlp", epochs=5, hidden_size=5)
    first = train_decoder(samples, options, rng=np.random.default_rng(9))
    second = train_decoder(samples, options, rng=np.random.default_rng(9))
    assert first.w1.shape == (5, 12)
    assert first.w2.shape == (16, 5)
    np.testing.assert_array_equal(first.b2, second.b2)


def test_mlp_training_reduces_loss():
    samples = _random_samples(6)
    untrained = train_decoder(samples, TrainOptions(type=DecoderType.MLP, epochs=0))
    trained = train_decoder(
        samples, TrainOptions(type=DecoderType.MLP, epochs=500, learning_rate=0.05)
    )
    assert _training_mse(trained, samples) < _training_mse(untrained, samples)


def test_training_errors():
    with pytest.raises(ValueError):
        train_decoder([])
    with pytest.raises(ValueError):
        train_decoder(_random_samples(1), TrainOptions(type="svm"))
    mixed = _random_samples(1, grid=4) + _random_samples(1, grid=5)
    with pytest.raises(ValueError):
        train_decoder(mixed)


def test_run_decoder_errors():
    samples = _random_samples(2)
    linear = train_decoder(samples)
    mlp = train_decoder(samples, TrainOptions(type=DecoderType.MLP, epochs=1))
    with pytest.raises(ValueError):
        run_decoder(linear, np.zeros(11))
    with pytest.raises(ValueError):
        run_decoder(mlp, np.zeros(13))
    with pytest.raises(TypeError):
        run_decoder(object(), np.zeros(12))
