"""
Boundary-to-Bulk Decoders
=========================
Supervised models that predict a full field from its boundary ring.

Two model families are available:

1. LinearModel: ridge-regularised least squares solved in closed form
   through the normal equations (Cholesky factorisation).
2. MLPModel: one ReLU hidden layer with a linear output, trained by
   full-batch gradient descent on the mean squared error.

Both are immutable once trained; `run_decoder` dispatches on the variant.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Optional, Sequence, Union
import logging

import numpy as np

from solislab.config import (
    DEFAULT_EPOCHS,
    DEFAULT_L2,
    DEFAULT_LEARNING_RATE,
    DEFAULT_MLP_SEED,
    DEFAULT_RIDGE,
)
from solislab.reconstruction.linalg import cholesky, cholesky_solve

if TYPE_CHECKING:
    import numpy.typing as npt
    from solislab.reconstruction.sample import BoundarySample

logger = logging.getLogger(__name__)


class DecoderType(StrEnum):
    LINEAR = "linear"
    MLP = "mlp"


@dataclass(frozen=True)
class TrainOptions:
    """
    Decoder training parameters.

    Attributes:
        type: Model family.
        include_bias: Linear only. Append a constant 1 feature to the boundary.
        ridge: Linear only. Diagonal regulariser.
        l2: Linear only. Extra diagonal regulariser, added to ridge.
        hidden_size: MLP only. Defaults to max(8, ceil(input_size / 2)).
        epochs: MLP only. Number of full-batch gradient steps.
        learning_rate: MLP only.
        seed: MLP only. Seed of the weight initialisation.
    """
    type: DecoderType = DecoderType.LINEAR
    include_bias: bool = True
    ridge: float = DEFAULT_RIDGE
    l2: float = DEFAULT_L2
    hidden_size: Optional[int] = None
    epochs: int = DEFAULT_EPOCHS
    learning_rate: float = DEFAULT_LEARNING_RATE
    seed: int = DEFAULT_MLP_SEED


@dataclass(frozen=True, eq=False)
class LinearModel:
    """
    Linear decoder.

    weights has shape (input_size + include_bias, output_size) and maps the
    (optionally bias-augmented) boundary vector to the flat field.
    """
    input_size: int
    output_size: int
    include_bias: bool
    weights: npt.NDArray[np.float64]

    @property
    def type(self) -> DecoderType:
        return DecoderType.LINEAR


@dataclass(frozen=True, eq=False)
class MLPModel:
    """
    Single hidden layer decoder.

    Shapes: w1 (hidden, input), b1 (hidden,), w2 (output, hidden), b2 (output,).
    """
    input_size: int
    hidden_size: int
    output_size: int
    w1: npt.NDArray[np.float64]
    b1: npt.NDArray[np.float64]
    w2: npt.NDArray[np.float64]
    b2: npt.NDArray[np.float64]

    @property
    def type(self) -> DecoderType:
        return DecoderType.MLP


ReconstructionModel = Union[LinearModel, MLPModel]


def _freeze(*arrays: npt.NDArray[np.float64]) -> None:
    for arr in arrays:
        arr.setflags(write=False)


def _stack_samples(samples: Sequence[BoundarySample]) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Stack boundaries and bulks into design and target matrices.

    Raises:
        ValueError: If the samples disagree on boundary or bulk length.
    """
    input_size = samples[0].boundary.size
    output_size = samples[0].bulk.size
    for i, sample in enumerate(samples):
        if sample.boundary.size != input_size:
            raise ValueError(
                f"Inconsistent boundary length in sample {i}: {sample.boundary.size} != {input_size}."
            )
        if sample.bulk.size != output_size:
            raise ValueError(
                f"Inconsistent bulk length in sample {i}: {sample.bulk.size} != {output_size}."
            )
    X = np.vstack([np.asarray(s.boundary, dtype=np.float64) for s in samples])
    Y = np.vstack([np.asarray(s.bulk, dtype=np.float64) for s in samples])
    return X, Y


def _augment(X: npt.NDArray[np.float64], include_bias: bool) -> npt.NDArray[np.float64]:
    if not include_bias:
        return X
    return np.hstack([X, np.ones((X.shape[0], 1), dtype=np.float64)])


def _train_linear(samples: Sequence[BoundarySample], options: TrainOptions) -> LinearModel:
    X, Y = _stack_samples(samples)
    Xa = _augment(X, options.include_bias)
    n_features = Xa.shape[1]

    xtx = Xa.T @ Xa
    xty = Xa.T @ Y
    xtx[np.diag_indices(n_features)] += options.ridge + options.l2

    L = cholesky(xtx)
    weights = cholesky_solve(L, xty)
    _freeze(weights)

    logger.debug(
        f"Trained linear decoder on {len(samples)} samples: "
        f"{X.shape[1]} inputs (bias={options.include_bias}) -> {Y.shape[1]} outputs"
    )
    return LinearModel(
        input_size=X.shape[1],
        output_size=Y.shape[1],
        include_bias=options.include_bias,
        weights=weights,
    )


def _train_mlp(
    samples: Sequence[BoundarySample],
    options: TrainOptions,
    rng: Optional[np.random.Generator] = None,
) -> MLPModel:
    X, Y = _stack_samples(samples)
    n, input_size = X.shape
    output_size = Y.shape[1]
    hidden_size = options.hidden_size or max(8, math.ceil(input_size / 2))
    if rng is None:
        rng = np.random.default_rng(options.seed)

    scale1 = math.sqrt(2.0 / max(1, input_size))
    scale2 = math.sqrt(2.0 / max(1, hidden_size))
    w1 = rng.uniform(-scale1, scale1, size=(hidden_size, input_size))
    b1 = np.zeros(hidden_size, dtype=np.float64)
    w2 = rng.uniform(-scale2, scale2, size=(output_size, hidden_size))
    b2 = np.zeros(output_size, dtype=np.float64)

    step = options.learning_rate / n
    for _ in range(options.epochs):
        # Forward pass
        z1 = X @ w1.T + b1
        a1 = np.maximum(z1, 0.0)
        delta_out = a1 @ w2.T + b2 - Y

        # Backward pass, gradients summed over the whole dataset
        grad_w2 = delta_out.T @ a1
        grad_b2 = delta_out.sum(axis=0)
        delta_hidden = (delta_out @ w2) * (z1 > 0)
        grad_w1 = delta_hidden.T @ X
        grad_b1 = delta_hidden.sum(axis=0)

        w1 -= step * grad_w1
        b1 -= step * grad_b1
        w2 -= step * grad_w2
        b2 -= step * grad_b2

    _freeze(w1, b1, w2, b2)
    logger.debug(
        f"Trained MLP decoder on {n} samples: {input_size} -> {hidden_size} -> {output_size}, "
        f"{options.epochs} epochs"
    )
    return MLPModel(
        input_size=input_size,
        hidden_size=hidden_size,
        output_size=output_size,
        w1=w1,
        b1=b1,
        w2=w2,
        b2=b2,
    )


def train_decoder(
    samples: Sequence[BoundarySample],
    options: Optional[TrainOptions] = None,
    rng: Optional[np.random.Generator] = None,
) -> ReconstructionModel:
    """
    Train a boundary-to-bulk decoder.

    Args:
        samples: Training samples; all must share boundary and bulk lengths.
        options: Model family and hyper-parameters. Defaults to a linear model.
        rng: Random source for the MLP initialisation. When omitted a generator
            seeded with options.seed is used, so training is reproducible.

    Raises:
        ValueError: If samples is empty, the samples are inconsistent or the
            model type is unknown.

    Returns:
        The trained, immutable model.
    """
    if not samples:
        raise ValueError("No samples provided to train the decoder.")
    options = options or TrainOptions()
    decoder_type = DecoderType(options.type)

    if decoder_type is DecoderType.LINEAR:
        return _train_linear(samples, options)
    if decoder_type is DecoderType.MLP:
        return _train_mlp(samples, options, rng=rng)
    raise ValueError(f"Unsupported decoder type: {options.type}")


def run_decoder(model: ReconstructionModel, boundary: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """
    Predict the full field from a boundary ring.

    Args:
        model: A trained decoder.
        boundary: Ring values, length model.input_size.

    Raises:
        ValueError: If the boundary length does not match the model.

    Returns:
        Flat predicted field, every value clamped to [0, 1].
    """
    x = np.asarray(boundary, dtype=np.float64).ravel()

    if isinstance(model, LinearModel):
        if x.size != model.input_size:
            raise ValueError(
                f"Boundary length mismatch for linear model: {x.size} != {model.input_size}."
            )
        if model.include_bias:
            x = np.append(x, 1.0)
        output = x @ model.weights
    elif isinstance(model, MLPModel):
        if x.size != model.input_size:
            raise ValueError(
                f"Boundary length mismatch for MLP model: {x.size} != {model.input_size}."
            )
        hidden = np.maximum(model.w1 @ x + model.b1, 0.0)
        output = model.w2 @ hidden + model.b2
    else:
        raise TypeError(f"Unknown reconstruction model: {type(model).__name__}")

    return np.clip(output, 0.0, 1.0)
