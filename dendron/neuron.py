"""A single dendritic neuron: tanh compartments feeding a sigmoid soma."""

from __future__ import annotations

import math
import random
import sys
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field


def _sigmoid(x: float) -> float:
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


def _uniform(rng: random.Random) -> float:
    return rng.random() * 2 - 1


@dataclass
class Compartment:
    """A dendritic branch computing tanh of a weighted sum of the inputs."""

    weights: list[float]
    bias: float

    @classmethod
    def random(cls, num_inputs: int, rng: random.Random | None = None) -> Compartment:
        """Create a compartment with weights and bias drawn from [-1, 1)."""
        if num_inputs < 0:
            raise ValueError("num_inputs must not be negative")
        rng = rng or random.Random()
        weights = [_uniform(rng) for _ in range(num_inputs)]
        return cls(weights=weights, bias=_uniform(rng))

    def process(self, inputs: Sequence[float]) -> float:
        """Return the compartment's activation for the given inputs."""
        if len(inputs) > len(self.weights):
            raise ValueError(
                f"expected at most {len(self.weights)} inputs, got {len(inputs)}"
            )
        total = self.bias
        for weight, value in zip(self.weights, inputs):
            total += value * weight
        return math.tanh(total)

    def _adjust(self, inputs: Sequence[float], scale: float) -> None:
        adjusted = [w + scale * x for w, x in zip(self.weights, inputs)]
        self.weights = adjusted + self.weights[len(adjusted):]
        self.bias += scale


@dataclass(frozen=True)
class Sample:
    """One training example: an input vector and its expected output."""

    inputs: tuple[float, ...]
    expected: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "inputs", tuple(float(x) for x in self.inputs))
        object.__setattr__(self, "expected", float(self.expected))


@dataclass(frozen=True)
class TrainingResult:
    """Summary of a training run."""

    epochs_run: int
    error: float
    best_error: float
    learning_rate: float
    stopped_early: bool


@dataclass
class DendriticNeuron:
    """Neuron whose soma combines the outputs of several dendritic compartments."""

    compartments: list[Compartment]
    soma_weights: list[float] = field(default_factory=list)
    soma_bias: float = 0.0

    def __post_init__(self) -> None:
        if len(self.soma_weights) != len(self.compartments):
            raise ValueError("need exactly one soma weight per compartment")

    @classmethod
    def random(
        cls,
        num_inputs: int,
        num_compartments: int,
        rng: random.Random | None = None,
    ) -> DendriticNeuron:
        """Create a neuron with all parameters drawn from [-1, 1)."""
        if num_compartments < 0:
            raise ValueError("num_compartments must not be negative")
        rng = rng or random.Random()
        compartments = [Compartment.random(num_inputs, rng) for _ in range(num_compartments)]
        soma_weights = [_uniform(rng) for _ in range(num_compartments)]
        return cls(compartments, soma_weights, _uniform(rng))

    def forward(self, inputs: Sequence[float]) -> tuple[float, list[float]]:
        """Return the neuron output and the individual compartment outputs."""
        outs = [comp.process(inputs) for comp in self.compartments]
        total = self.soma_bias
        for out, weight in zip(outs, self.soma_weights):
            total += out * weight
        return _sigmoid(total), outs

    def predict(self, inputs: Sequence[float]) -> float:
        """Return only the neuron output."""
        return self.forward(inputs)[0]

    def _step(self, sample: Sample, lr: float) -> float:
        pred, outs = self.forward(sample.inputs)
        err = sample.expected - pred
        delta = err * pred * (1.0 - pred)

        self.soma_weights = [w + lr * delta * o for w, o in zip(self.soma_weights, outs)]
        self.soma_bias += lr * delta

        for comp, weight, out in zip(self.compartments, self.soma_weights, outs):
            dc = delta * weight * (1.0 - out * out)
            comp._adjust(sample.inputs, lr * dc)
        return err * err

    def train(
        self,
        data: Iterable[Sample],
        epochs: int,
        learning_rate: float = 0.1,
        patience: int = 3000,
        min_delta: float = 1e-4,
        log: Callable[[str], object] | None = None,
    ) -> TrainingResult:
        """Train by per-sample gradient descent with early stopping and LR decay.

        The learning rate is multiplied by 0.9 every 2000 epochs; training stops
        once the mean squared error has failed to improve by more than
        ``min_delta`` for ``patience`` consecutive epochs.
        """
        samples = list(data)
        if not samples:
            raise ValueError("training data must not be empty")

        lr = learning_rate
        best = sys.float_info.max
        stale = 0
        avg = math.nan
        run = 0
        stopped = False

        for epoch in range(epochs):
            run = epoch + 1
            avg = sum(self._step(s, lr) for s in samples) / len(samples)

            if best - avg > min_delta:
                best = avg
                stale = 0
            else:
                stale += 1

            if log is not None and epoch % 1000 == 0:
                log(f"Epoch {epoch}, Error: {avg:.6f}, LR: {lr:.5f}")

            if stale >= patience:
                if log is not None:
                    log(f"Early stopping at epoch {epoch}, Error: {avg:.6f}")
                stopped = True
                break

            if epoch > 0 and epoch % 2000 == 0:
                lr *= 0.9

        return TrainingResult(
            epochs_run=run,
            error=avg,
            best_error=best,
            learning_rate=lr,
            stopped_early=stopped,
        )