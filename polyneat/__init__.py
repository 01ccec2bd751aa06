"""Neuroevolution of polynomial neural network topologies, plus a small message-passing neuron model."""

__version__ = "0.1.0"