"""A multi-output dendritic neuron trained on logic gates and adders at once."""

from __future__ import annotations

import argparse
import math
import os
import random
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from .neuron import Compartment

LABELS: tuple[str, ...] = (
    "AND", "OR", "NOT_A", "NOT_B", "NAND", "NOR", "XOR", "XNOR",
    "BUFFER_A", "BUFFER_B", "HALF_ADDER_SUM", "HALF_ADDER_CARRY",
    "FULL_ADDER_SUM", "FULL_ADDER_CARRY",
)
LABEL_INDEX: dict[str, int] = {label: i for i, label in enumerate(LABELS)}


def _sigmoid(x: float) -> float:
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


def _round(x: float) -> float:
    return math.copysign(math.floor(abs(x) + 0.5), x)


def _small(rng: random.Random) -> float:
    return rng.random() * 0.1 - 0.05


def _format_inputs(inputs: Sequence[float]) -> str:
    return "[" + " ".join(f"{x:g}" for x in inputs) + "]"


@dataclass(frozen=True)
class LogicSample:
    """An input vector with one expected value per output label."""

    inputs: tuple[float, ...]
    expected: tuple[float, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "inputs", tuple(float(x) for x in self.inputs))
        object.__setattr__(self, "expected", tuple(float(x) for x in self.expected))


@dataclass
class Gradients:
    """Accumulated parameter updates and squared error over a batch of samples."""

    soma_weights: list[list[float]]
    soma_bias: list[float]
    compartment_weights: list[list[float]]
    compartment_bias: list[float]
    loss: float = 0.0

    @classmethod
    def _zeros(cls, neuron: MultiOutputNeuron) -> Gradients:
        return cls(
            soma_weights=[[0.0] * len(row) for row in neuron.soma_weights],
            soma_bias=[0.0] * len(neuron.soma_bias),
            compartment_weights=[[0.0] * len(c.weights) for c in neuron.compartments],
            compartment_bias=[0.0] * len(neuron.compartments),
        )


@dataclass
class MultiOutputNeuron:
    """Shared dendritic compartments feeding one sigmoid soma per output label."""

    compartments: list[Compartment]
    soma_weights: list[list[float]] = field(default_factory=list)
    soma_bias: list[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.soma_weights) != len(self.soma_bias):
            raise ValueError("need exactly one soma bias per output")
        for row in self.soma_weights:
            if len(row) != len(self.compartments):
                raise ValueError("need exactly one soma weight per compartment")

    @property
    def num_outputs(self) -> int:
        return len(self.soma_bias)

    @classmethod
    def random(
        cls,
        num_inputs: int,
        num_compartments: int,
        num_outputs: int,
        rng: random.Random | None = None,
    ) -> MultiOutputNeuron:
        """Create a neuron with all parameters drawn from [-0.05, 0.05)."""
        if num_inputs < 0 or num_compartments < 0 or num_outputs < 0:
            raise ValueError("sizes must not be negative")
        rng = rng or random.Random()
        compartments = [
            Compartment([_small(rng) for _ in range(num_inputs)], _small(rng))
            for _ in range(num_compartments)
        ]
        soma_weights = []
        soma_bias = []
        for _ in range(num_outputs):
            soma_weights.append([_small(rng) for _ in range(num_compartments)])
            soma_bias.append(_small(rng))
        return cls(compartments, soma_weights, soma_bias)

    def forward(self, inputs: Sequence[float]) -> tuple[list[float], list[float]]:
        """Return the output for every label and the compartment outputs."""
        comp_outs = [comp.process(inputs) for comp in self.compartments]
        outputs = [
            _sigmoid(bias + sum(o * w for o, w in zip(comp_outs, row)))
            for row, bias in zip(self.soma_weights, self.soma_bias)
        ]
        return outputs, comp_outs

    def gradients(self, samples: Sequence[LogicSample]) -> Gradients:
        """Accumulate updates for ``samples`` without changing the neuron."""
        grads = Gradients._zeros(self)
        for sample in samples:
            if len(sample.expected) != self.num_outputs:
                raise ValueError(
                    f"expected {self.num_outputs} target values, got {len(sample.expected)}"
                )
            outputs, comp_outs = self.forward(sample.inputs)
            for label, (target, out) in enumerate(zip(sample.expected, outputs)):
                err = target - out
                grads.loss += err * err
                delta = err * out * (1 - out)

                soma_row = grads.soma_weights[label]
                for i, comp_out in enumerate(comp_outs):
                    soma_row[i] += delta * comp_out
                grads.soma_bias[label] += delta

                for i, (weight, comp_out) in enumerate(
                    zip(self.soma_weights[label], comp_outs)
                ):
                    delta_c = delta * weight * (1 - comp_out * comp_out)
                    comp_row = grads.compartment_weights[i]
                    for j, x in enumerate(sample.inputs):
                        comp_row[j] += delta_c * x
                    grads.compartment_bias[i] += delta_c
        return grads

    def apply(self, gradients: Gradients, learning_rate: float) -> None:
        """Add ``learning_rate`` times the gradients to the parameters."""
        self.soma_weights = [
            [w + learning_rate * g for w, g in zip(row, grow)]
            for row, grow in zip(self.soma_weights, gradients.soma_weights)
        ]
        self.soma_bias = [
            b + learning_rate * g for b, g in zip(self.soma_bias, gradients.soma_bias)
        ]
        for comp, grow, gbias in zip(
            self.compartments, gradients.compartment_weights, gradients.compartment_bias
        ):
            comp.weights = [w + learning_rate * g for w, g in zip(comp.weights, grow)]
            comp.bias += learning_rate * gbias

    def train_epoch(
        self,
        data: Sequence[LogicSample],
        learning_rate: float,
        workers: int = 1,
    ) -> float:
        """Run one epoch split into ``workers`` batches and return the mean error.

        Every batch's gradients are taken from the parameters as they were at
        the start of the epoch, then all of them are applied.
        """
        if workers < 1:
            raise ValueError("workers must be at least 1")
        if not data:
            raise ValueError("training data must not be empty")
        chunk = len(data) // workers
        batches = [
            data[i * chunk:(i + 1) * chunk if i < workers - 1 else len(data)]
            for i in range(workers)
        ]
        all_grads = [self.gradients(batch) for batch in batches]
        for grads in all_grads:
            self.apply(grads, learning_rate)
        total = sum(g.loss for g in all_grads)
        return total / (len(data) * self.num_outputs)


def make_multi_label_data() -> list[LogicSample]:
    """Return one sample per input pattern with all gate and adder targets.

    Labels that do not apply to a pattern's width are left at zero.
    """
    grouped: dict[tuple[float, ...], list[float]] = {}

    def put(inputs: tuple[float, ...], label: str, value: float) -> None:
        grouped.setdefault(inputs, [0.0] * len(LABELS))[LABEL_INDEX[label]] = value

    for a in (0, 1):
        for b in (0, 1):
            inputs = (float(a), float(b))
            targets = {
                "AND": a & b,
                "OR": a | b,
                "NOT_A": 1 - a,
                "NOT_B": 1 - b,
                "NAND": 1 - (a & b),
                "NOR": 1 - (a | b),
                "XOR": a ^ b,
                "XNOR": 1 - (a ^ b),
                "BUFFER_A": a,
                "BUFFER_B": b,
                "HALF_ADDER_SUM": a ^ b,
                "HALF_ADDER_CARRY": a & b,
            }
            for label, value in targets.items():
                put(inputs, label, float(value))

    for a in (0, 1):
        for b in (0, 1):
            for cin in (0, 1):
                inputs = (float(a), float(b), float(cin))
                put(inputs, "FULL_ADDER_SUM", float(a ^ b ^ cin))
                put(inputs, "FULL_ADDER_CARRY", float((a & b) | (b & cin) | (a & cin)))

    return [LogicSample(inputs, tuple(values)) for inputs, values in grouped.items()]


def _outcomes(
    neuron: MultiOutputNeuron, data: Sequence[LogicSample]
) -> Iterator[tuple[str, LogicSample, int, float, float, bool]]:
    for sample in data:
        preds, _ = neuron.forward(sample.inputs)
        for i, label in enumerate(LABELS):
            rounded = _round(preds[i])
            yield label, sample, i, preds[i], rounded, rounded == sample.expected[i]


def evaluate(neuron: MultiOutputNeuron, data: Sequence[LogicSample]) -> float:
    """Return the percentage of label predictions that round to the target."""
    results = [ok for *_, ok in _outcomes(neuron, data)]
    if not results:
        raise ValueError("data must not be empty")
    return sum(results) / len(results) * 100


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Train one multi-output neuron on logic gates and adders."
    )
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--epochs", type=int, default=40000, help="number of epochs")
    parser.add_argument(
        "--workers", type=int, default=os.cpu_count() or 1, help="batches per epoch"
    )
    args = parser.parse_args(argv)

    rng = random.Random(args.seed)
    print("Generating training data for gates and adders...")
    data = make_multi_label_data()
    neuron = MultiOutputNeuron.random(3, 64, len(LABELS), rng)

    print("Training universal neuron on all logic gates and blocks...")
    lr = 0.05
    for epoch in range(args.epochs):
        avg = neuron.train_epoch(data, lr, args.workers)
        if epoch % 1000 == 0:
            print(f"Epoch {epoch}, Error: {avg:.6f}, LR: {lr:.5f}")
        if epoch > 0 and epoch % 2000 == 0:
            lr *= 0.9

    print("\nTesting trained neuron...\n")
    for label, sample, i, pred, rounded, ok in _outcomes(neuron, data):
        print(
            f"Label: {label:<18s} Inputs: {_format_inputs(sample.inputs)}, "
            f"Exp: {sample.expected[i]:.0f}, Pred: {pred:.4f}, R: {rounded:.0f}, "
            f"Correct: {str(ok).lower()}"
        )
    print(f"\nOverall Accuracy: {evaluate(neuron, data):.2f}%")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())