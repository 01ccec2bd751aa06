"""Evolvable network topologies: construction, mutation and conversion to runnable networks."""

from __future__ import annotations

import copy
import itertools
import random
import uuid
from dataclasses import dataclass
from operator import itemgetter
from typing import Callable, Iterable

from .actions import MutationAction
from .chances import MutationChances
from .cycles import remove_cycles
from .genome import NeuronTopology, TopologyInput, random_exponent, random_weight
from .simple import NeuronType, SimplePolyNetwork


@dataclass
class TopologyInfo:
    """Counts of each kind of neuron in a topology."""

    num_inputs: int = 0
    num_hidden: int = 0
    num_outputs: int = 0


def _random_connections(
    inputs: list[NeuronTopology], rng: random.Random
) -> list[TopologyInput]:
    """A random, duplicate-free selection of connections to ``inputs``, ordered by input."""
    count = 1 if len(inputs) == 1 else rng.randrange(1, len(inputs))
    chosen: list[tuple[int, TopologyInput]] = []
    for _ in range(count):
        index = rng.randrange(len(inputs))
        chosen.append((index, TopologyInput.random(inputs[index], rng)))
    chosen.sort(key=itemgetter(0))
    return [next(group)[1] for _, group in itertools.groupby(chosen, key=itemgetter(0))]


@dataclass(eq=False)
class PolyNetworkTopology:
    """The structure of a polynomial network together with its mutation chances.

    Connections refer weakly to their sources, so a neuron removed from
    ``neurons`` disappears from every connection that pointed at it.
    """

    neurons: list[NeuronTopology]
    mutation_chances: MutationChances

    @classmethod
    def new(
        cls,
        num_inputs: int,
        num_outputs: int,
        mutation_chances: MutationChances,
        rng: random.Random,
    ) -> PolyNetworkTopology:
        """Inputs plus outputs that each connect to a random subset of the inputs.

        Raises ``ValueError`` when outputs are requested without any inputs.
        """
        inputs = [NeuronTopology.input(uuid.uuid4()) for _ in range(num_inputs)]
        outputs = [
            NeuronTopology.output(uuid.uuid4(), _random_connections(inputs, rng))
            for _ in range(num_outputs)
        ]
        return cls([*inputs, *outputs], mutation_chances)

    @classmethod
    def thoroughly_connected(
        cls,
        num_inputs: int,
        num_outputs: int,
        mutation_chances: MutationChances,
        rng: random.Random,
    ) -> PolyNetworkTopology:
        """Inputs plus outputs that each connect to every input."""
        inputs = [NeuronTopology.input(uuid.uuid4()) for _ in range(num_inputs)]
        outputs = [
            NeuronTopology.output(
                uuid.uuid4(), [TopologyInput.random(source, rng) for source in inputs]
            )
            for _ in range(num_outputs)
        ]
        return cls([*inputs, *outputs], mutation_chances)

    def neuron_ids(self) -> list[uuid.UUID]:
        """The identifiers of all neurons, in order."""
        return [neuron.id for neuron in self.neurons]

    def info(self) -> TopologyInfo:
        """Count the input, hidden and output neurons."""
        info = TopologyInfo()
        for neuron in self.neurons:
            kind = neuron.neuron_type
            if kind is NeuronType.INPUT:
                info.num_inputs += 1
            elif kind is NeuronType.HIDDEN:
                info.num_hidden += 1
            else:
                info.num_outputs += 1
        return info

    def find_by_id(self, id: uuid.UUID) -> NeuronTopology | None:
        """The neuron with identifier ``id``, or ``None``."""
        return next((neuron for neuron in self.neurons if neuron.id == id), None)

    def random_neuron(self, rng: random.Random) -> NeuronTopology:
        """A uniformly chosen neuron; raises ``ValueError`` when there are none."""
        return self.neurons[rng.randrange(len(self.neurons))]

    def remove_random_neuron(self, rng: random.Random) -> None:
        """Remove a randomly picked neuron if it is hidden; inputs and outputs stay."""
        if len(self.neurons) <= 1:
            return
        index = rng.randrange(len(self.neurons))
        if self.neurons[index].is_input or self.neurons[index].is_output:
            return
        del self.neurons[index]

    def push(self, neuron: NeuronTopology) -> None:
        """Append a neuron."""
        self.neurons.append(neuron)

    def deep_clone(self) -> PolyNetworkTopology:
        """A structural copy with fresh neuron identifiers.

        Connections whose source is dropped or not part of this topology are left out.
        """
        clones = [neuron.deep_clone() for neuron in self.neurons]
        positions = {id(neuron): index for index, neuron in enumerate(self.neurons)}

        for original, clone in zip(self.neurons, clones):
            if original.props is None or clone.props is None:
                continue
            connections: list[TopologyInput] = []
            for connection in original.props.inputs:
                source = connection.neuron
                if source is None or id(source) not in positions:
                    continue
                connections.append(
                    TopologyInput(
                        clones[positions[id(source)]],
                        connection.weight,
                        connection.exponent,
                    )
                )
            clone.props.inputs = connections

        return PolyNetworkTopology(clones, copy.copy(self.mutation_chances))

    def replicate(self, rng: random.Random) -> PolyNetworkTopology:
        """A mutated child: cloned, mutated, with adjusted chances and no cycles."""
        child = self.deep_clone()
        actions = self.mutation_chances.gen_mutation_actions(rng)
        child.mutate(actions, rng)
        child.mutation_chances.adjust_mutation_chances(rng)
        child.remove_cycles()
        return child

    def mutate(self, actions: Iterable[MutationAction], rng: random.Random) -> None:
        """Apply each action in turn; actions that find nothing to change do nothing."""
        handlers: dict[MutationAction, Callable[[random.Random], None]] = {
            MutationAction.SPLIT_CONNECTION: self._split_connection,
            MutationAction.ADD_CONNECTION: self._add_connection,
            MutationAction.REMOVE_NEURON: self.remove_random_neuron,
            MutationAction.MUTATE_WEIGHT: self._mutate_weight,
            MutationAction.MUTATE_EXPONENT: self._mutate_exponent,
        }
        for action in actions:
            handlers[action](rng)

    def _split_connection(self, rng: random.Random) -> None:
        target = self.random_neuron(rng)
        if target.props is None:
            return
        removed = target.props.remove_random_input(rng)
        if removed is None:
            return
        hidden = NeuronTopology.hidden(uuid.uuid4(), [removed])
        self.push(hidden)
        target.props.add_input(
            TopologyInput(hidden, random_weight(rng), random_exponent(rng))
        )

    def _add_connection(self, rng: random.Random) -> None:
        target = self.random_neuron(rng)
        source = self.random_neuron(rng)
        if source.is_output or target.props is None:
            return
        target.props.add_input(
            TopologyInput(source, random_weight(rng), random_exponent(rng))
        )

    def _mutate_weight(self, rng: random.Random) -> None:
        neuron = self.random_neuron(rng)
        connection = None if neuron.props is None else neuron.props.random_input(rng)
        if connection is not None:
            connection.adjust_weight(rng.uniform(-1.0, 1.0))

    def _mutate_exponent(self, rng: random.Random) -> None:
        neuron = self.random_neuron(rng)
        connection = None if neuron.props is None else neuron.props.random_input(rng)
        if connection is not None:
            connection.adjust_exp(rng.randint(-1, 1))

    def remove_cycles(self) -> int:
        """Cut connections that close cycles; returns how many neurons were trimmed."""
        return remove_cycles(self.neurons)

    def to_simple_network(self) -> SimplePolyNetwork:
        """Build a runnable network from this topology."""
        return SimplePolyNetwork.from_topology(self)

    def debug_str(self) -> str:
        """Describe every neuron and the positions of its sources."""
        parts: list[str] = []
        for index, neuron in enumerate(self.neurons):
            text = f"\n(({index}) {neuron.id_short}[{neuron.neuron_type}]: "
            if neuron.props is None:
                text += "N/A"
            else:
                locations = []
                for connection in neuron.props.inputs:
                    source = connection.neuron
                    if source is None:
                        locations.append("(DROPPED)")
                        continue
                    position = next(
                        (i for i, n in enumerate(self.neurons) if n.id == source.id),
                        None,
                    )
                    if position is None:
                        raise LookupError(
                            f"neuron {source.id} is not part of the network"
                        )
                    locations.append(f"({position})")
                text += "[" + "".join(locations) + "]"
            parts.append(text + ")")
        return "".join(parts)