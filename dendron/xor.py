"""Train a dendritic neuron on the XOR truth table."""

from __future__ import annotations

import argparse
import math
import random
from collections.abc import Sequence

from .neuron import DendriticNeuron, Sample


def _round(x: float) -> float:
    return math.copysign(math.floor(abs(x) + 0.5), x)


def _format_inputs(inputs: Sequence[float]) -> str:
    return "[" + " ".join(f"{x:g}" for x in inputs) + "]"


def xor_data() -> list[Sample]:
    """Return the four rows of the XOR truth table."""
    return [
        Sample((0, 0), 0),
        Sample((0, 1), 1),
        Sample((1, 0), 1),
        Sample((1, 1), 0),
    ]


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Train a dendritic neuron on XOR.")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--epochs", type=int, default=10000, help="maximum epochs")
    args = parser.parse_args(argv)

    rng = random.Random(args.seed)
    data = xor_data()
    neuron = DendriticNeuron.random(2, 4, rng)
    neuron.train(data, args.epochs, 0.1, 3000, 1e-4, log=print)

    print("--- Predictions ---")
    for sample in data:
        pred = neuron.predict(sample.inputs)
        print(
            f"Input: {_format_inputs(sample.inputs)}, Exp: {sample.expected:.0f}, "
            f"Pred: {pred:.4f}, R: {_round(pred):.0f}"
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())