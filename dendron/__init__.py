"""Dendritic neuron models trained by gradient descent on XOR, circle data and logic gates."""

__version__ = "0.1.0"