"""Mutation actions and the random choices that pick them."""

from __future__ import annotations

import enum
import random
from typing import Protocol


class MutationAction(enum.Enum):
    """A kind of change applied to a network topology during evolution."""

    SPLIT_CONNECTION = "SplitConnection"
    """Split a connection by inserting a new hidden neuron."""
    ADD_CONNECTION = "AddConnection"
    """Add a connection between two existing neurons."""
    REMOVE_NEURON = "RemoveNeuron"
    """Remove a hidden neuron from the network."""
    MUTATE_WEIGHT = "MutateWeight"
    """Nudge the weight of a connection."""
    MUTATE_EXPONENT = "MutateExponent"
    """Nudge the exponent of a connection."""


class _Chances(Protocol):
    split_connection: float
    add_connection: float
    remove_connection: float
    mutate_weight: float
    mutate_exponent: float


def gen_rate(rng: random.Random) -> int:
    """Return a random rate in the inclusive range 0 to 100."""
    return rng.randint(0, 100)


def gen_mutation_action(rng: random.Random, chances: _Chances) -> MutationAction:
    """Pick a mutation action weighted by the normalised percentages in ``chances``."""
    rate = float(gen_rate(rng))

    split = chances.split_connection
    add = chances.add_connection
    remove = chances.remove_connection
    weight = chances.mutate_weight

    if rate == 0.0:
        # A zero rate would otherwise pick an action whose chance is zero.
        if split > 0.0:
            return MutationAction.SPLIT_CONNECTION
        if add > 0.0:
            return MutationAction.ADD_CONNECTION
        if remove > 0.0:
            return MutationAction.REMOVE_NEURON
        if weight > 0.0:
            return MutationAction.MUTATE_WEIGHT
        return MutationAction.MUTATE_EXPONENT

    if rate <= split:
        return MutationAction.SPLIT_CONNECTION
    if rate <= split + add:
        return MutationAction.ADD_CONNECTION
    if rate <= split + add + remove:
        return MutationAction.REMOVE_NEURON
    if rate <= split + add + remove + weight:
        return MutationAction.MUTATE_WEIGHT
    return MutationAction.MUTATE_EXPONENT