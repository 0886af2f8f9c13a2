# dendron

Small dendritic neuron models in pure Python. A neuron has several
dendritic compartments, each a tanh unit over the inputs, feeding a
sigmoid soma. The weights are trained by plain gradient descent with a
learning rate multiplied by 0.9 every 2000 epochs.

## Installation

```
pip install .
```

No third-party libraries are needed.

## Commands

```
dendron-xor      [--seed N] [--epochs N]
dendron-circle   [--seed N] [--epochs N] [--samples N]
dendron-logic    [--seed N] [--epochs N] [--workers N]
```

- `dendron-xor` trains a 4-compartment neuron on the XOR truth table
  (default 10000 epochs, early stopping after 3000 epochs without
  improvement) and prints its prediction for each row.
- `dendron-circle` draws random points from [-2, 2)², labels those
  inside the unit circle 1, trains an 8-compartment neuron on them
  (default 200 points, 20000 epochs, early stopping) and prints the
  final accuracy.
- `dendron-logic` trains one 64-compartment neuron with a separate soma
  for each of 14 gate and adder labels (default 40000 epochs) and prints
  every prediction and the overall accuracy. `--workers` sets how many
  batches each epoch is split into; it defaults to the CPU count.

Each command prints its progress every 1000 epochs. `--seed` makes a run
repeatable.

## Library use

```python
import random

from dendron.neuron import DendriticNeuron
from dendron.xor import xor_data

rng = random.Random(1)
neuron = DendriticNeuron.random(2, 4, rng)
result = neuron.train(xor_data(), epochs=10000, learning_rate=0.1,
                      patience=3000, min_delta=1e-4, log=None)
print(result.epochs_run, result.error, result.stopped_early)
for sample in xor_data():
    print(sample.inputs, neuron.predict(sample.inputs))
```

- `dendron.neuron`: `Compartment`, `DendriticNeuron` (`random`,
  `forward`, `predict`, `train`), `Sample` and `TrainingResult`.
  `train` returns a `TrainingResult` and passes progress lines to `log`
  when one is given.
- `dendron.xor`: `xor_data`.
- `dendron.circle`: `generate_circle_data` and `accuracy`.
- `dendron.logic`: `MultiOutputNeuron` (`random`, `forward`,
  `gradients`, `apply`, `train_epoch`), `Gradients`, `LogicSample`,
  `make_multi_label_data` and `evaluate`. The labels are AND, OR, NOT_A,
  NOT_B, NAND, NOR, XOR, XNOR, BUFFER_A, BUFFER_B, HALF_ADDER_SUM,
  HALF_ADDER_CARRY, FULL_ADDER_SUM and FULL_ADDER_CARRY.

## Limits

- In `train_epoch`, the gradients of every batch are computed one after
  another from the parameters as they were at the start of the epoch,
  then all are applied. Nothing runs in parallel.
- Trained models cannot be saved or loaded; they live only for the
  process that trained them.

## Tests

```
pip install .[test]
pytest
```