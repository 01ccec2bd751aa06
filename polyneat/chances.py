"""Mutation probabilities and their own slow evolution."""

from __future__ import annotations

import copy
import math
import random
from dataclasses import dataclass

from .actions import MutationAction, gen_mutation_action, gen_rate

MAX_MUTATIONS = 200
"""Upper bound on the number of mutations generated in one evolution step."""

_MAX_ADJUST_LOOPS = 5

_FIELD_FOR_ACTION = {
    MutationAction.SPLIT_CONNECTION: "split_connection",
    MutationAction.ADD_CONNECTION: "add_connection",
    MutationAction.REMOVE_NEURON: "remove_connection",
    MutationAction.MUTATE_WEIGHT: "mutate_weight",
    MutationAction.MUTATE_EXPONENT: "mutate_exponent",
}
_ACTIONS = tuple(_FIELD_FOR_ACTION)
_CHANCE_FIELDS = tuple(_FIELD_FOR_ACTION.values())


def _normalise(value: float, total: float) -> float:
    if total == 0:
        # Follow IEEE float division rather than raising.
        return math.nan if value == 0 else math.copysign(math.inf, value)
    return value * 100.0 / total


@dataclass
class MutationChances:
    """How likely a network is to mutate, and how likely each kind of mutation is.

    ``self_mutation`` is a percentage (0-100) governing whether mutations happen
    at all; the five chance fields are relative weights normalised to sum to 100.
    """

    self_mutation: int
    split_connection: float
    add_connection: float
    remove_connection: float
    mutate_weight: float
    mutate_exponent: float

    def __post_init__(self) -> None:
        if not 0 <= self.self_mutation <= 255:
            raise ValueError(
                f"self_mutation must be between 0 and 255, got {self.self_mutation}"
            )

    @classmethod
    def equal(cls, self_mutation_rate: int) -> MutationChances:
        """Chances where every mutation kind is equally likely (20% each)."""
        value = 100.0 / 5.0
        return cls(self_mutation_rate, value, value, value, value, value)

    @classmethod
    def none(cls) -> MutationChances:
        """Chances that never mutate anything."""
        return cls(0, 0.0, 0.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_raw(
        cls,
        self_mutation: int,
        split_connection: float,
        add_connection: float,
        remove_connection: float,
        mutate_weight: float,
        mutate_exponent: float,
    ) -> MutationChances:
        """Build chances from relative weights, normalising them to sum to 100."""
        chances = cls(
            self_mutation,
            float(split_connection),
            float(add_connection),
            float(remove_connection),
            float(mutate_weight),
            float(mutate_exponent),
        )
        chances._recalculate()
        return chances

    def _recalculate(self) -> None:
        total = sum(getattr(self, name) for name in _CHANCE_FIELDS)
        for name in _CHANCE_FIELDS:
            setattr(self, name, _normalise(getattr(self, name), total))

    def _clamp_all_and_recalculate(self) -> None:
        for name in _CHANCE_FIELDS:
            if getattr(self, name) < 0.0:
                setattr(self, name, 0.0)
        self._recalculate()

    def _adjust_field(self, name: str, amount: float) -> None:
        value = getattr(self, name) + amount
        setattr(self, name, max(value, 0.0))
        self._recalculate()

    def adjust_split_connection(self, amount: float) -> None:
        """Shift the split-connection weight by ``amount`` and renormalise."""
        self._adjust_field("split_connection", amount)

    def adjust_add_connection(self, amount: float) -> None:
        """Shift the add-connection weight by ``amount`` and renormalise."""
        self._adjust_field("add_connection", amount)

    def adjust_remove_connection(self, amount: float) -> None:
        """Shift the remove-neuron weight by ``amount`` and renormalise."""
        self._adjust_field("remove_connection", amount)

    def adjust_mutate_weight(self, amount: float) -> None:
        """Shift the mutate-weight weight by ``amount`` and renormalise."""
        self._adjust_field("mutate_weight", amount)

    def adjust_mutate_exponent(self, amount: float) -> None:
        """Shift the mutate-exponent weight by ``amount`` and renormalise."""
        self._adjust_field("mutate_exponent", amount)

    def adjust_self_mutation(self, rng: random.Random) -> None:
        """Move ``self_mutation`` by -1, 0 or +1, kept within 0 to 100."""
        step = rng.randint(-1, 1)
        if step < 0 and self.self_mutation == 0:
            return
        if step > 0 and self.self_mutation == 100:
            return
        self.self_mutation = min(max(self.self_mutation + step, 0), 100)

    def adjust_mutation_chances(self, rng: random.Random) -> None:
        """Randomly perturb the chances themselves, then the overall rate."""
        loops = 0
        while gen_rate(rng) < self.self_mutation and loops < _MAX_ADJUST_LOOPS:
            action = _ACTIONS[rng.randrange(len(_ACTIONS))]
            value = rng.uniform(0.0, 5.0)
            amount = -value if rng.random() < 0.5 else value
            self._adjust_field(_FIELD_FOR_ACTION[action], amount)
            loops += 1

        self.adjust_self_mutation(rng)

    def gen_mutation_actions(self, rng: random.Random) -> list[MutationAction]:
        """Generate the mutations for one evolution step, at most ``MAX_MUTATIONS``."""
        actions: list[MutationAction] = []
        replica = copy.copy(self)

        while gen_rate(rng) < replica.self_mutation and len(actions) < MAX_MUTATIONS:
            picked = gen_mutation_action(rng, replica)
            name = _FIELD_FOR_ACTION[picked]
            setattr(replica, name, getattr(replica, name) / 2.0)
            replica._clamp_all_and_recalculate()

            actions.append(gen_mutation_action(rng, self))

        return actions