"""Train a dendritic neuron to tell points inside a circle from points outside."""

from __future__ import annotations

import argparse
import math
import random
from collections.abc import Sequence

from .neuron import DendriticNeuron, Sample


def _round(x: float) -> float:
    return math.copysign(math.floor(abs(x) + 0.5), x)


def generate_circle_data(
    n: int, radius: float, rng: random.Random | None = None
) -> list[Sample]:
    """Draw ``n`` points from [-2, 2)² labelled 1 inside the circle, else 0."""
    if n < 0:
        raise ValueError("n must not be negative")
    rng = rng or random.Random()
    data = []
    for _ in range(n):
        x = rng.random() * 4 - 2
        y = rng.random() * 4 - 2
        label = 1.0 if x * x + y * y < radius * radius else 0.0
        data.append(Sample((x, y), label))
    return data


def accuracy(neuron: DendriticNeuron, data: Sequence[Sample]) -> float:
    """Return the percentage of samples whose rounded prediction is correct."""
    if not data:
        raise ValueError("data must not be empty")
    correct = sum(1 for s in data if _round(neuron.predict(s.inputs)) == s.expected)
    return correct / len(data) * 100.0


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Train a dendritic neuron on circle data.")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--epochs", type=int, default=20000, help="maximum epochs")
    parser.add_argument("--samples", type=int, default=200, help="number of points")
    args = parser.parse_args(argv)

    rng = random.Random(args.seed)
    data = generate_circle_data(args.samples, 1.0, rng)
    neuron = DendriticNeuron.random(2, 8, rng)
    neuron.train(data, args.epochs, 0.1, 3000, 1e-4, log=print)

    print(f"Final Accuracy: {accuracy(neuron, data):.2f}%")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())