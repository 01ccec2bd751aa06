"""Evolvable neuron genomes: neurons, their props and weak connections between them."""

from __future__ import annotations

import random
import uuid
import weakref
from dataclasses import InitVar, dataclass, field

from .simple import NeuronInput, NeuronProps, NeuronType, PropsType, SimpleNeuron


def random_weight(rng: random.Random) -> float:
    """Return a random connection weight in the range -1 to 1."""
    return rng.uniform(-1.0, 1.0)


def random_exponent(rng: random.Random) -> int:
    """Return a random connection exponent between 0 and 2."""
    return rng.randint(0, 2)


@dataclass
class TopologyInput:
    """A weighted, exponentiated connection that refers weakly to its source neuron."""

    target: InitVar[NeuronTopology]
    weight: float
    exponent: int
    _ref: weakref.ref = field(init=False, repr=False, compare=False)

    def __post_init__(self, target: NeuronTopology) -> None:
        self._ref = weakref.ref(target)

    @classmethod
    def random(cls, neuron: NeuronTopology, rng: random.Random) -> TopologyInput:
        """A connection to ``neuron`` with a random weight and exponent."""
        return cls(neuron, random_weight(rng), random_exponent(rng))

    @property
    def neuron(self) -> NeuronTopology | None:
        """The source neuron, or ``None`` once it has been dropped."""
        return self._ref()

    def adjust_weight(self, amount: float) -> None:
        """Add ``amount`` to the weight."""
        self.weight += amount

    def adjust_exp(self, amount: int) -> None:
        """Add ``amount`` to the exponent."""
        self.exponent += amount


@dataclass
class TopologyProps:
    """The role and incoming connections of a hidden or output genome neuron."""

    props_type: PropsType
    inputs: list[TopologyInput] = field(default_factory=list)

    def add_input(self, connection: TopologyInput) -> None:
        """Append a connection."""
        self.inputs.append(connection)

    def trim_inputs(self, indices: list[int]) -> None:
        """Remove the connections at ``indices``, highest index first."""
        for index in sorted(indices, reverse=True):
            del self.inputs[index]

    def remove_random_input(self, rng: random.Random) -> TopologyInput | None:
        """Remove and return a random connection; the last one takes its place."""
        if not self.inputs:
            return None
        index = rng.randrange(len(self.inputs))
        last = self.inputs.pop()
        if index == len(self.inputs):
            return last
        removed = self.inputs[index]
        self.inputs[index] = last
        return removed

    def random_input(self, rng: random.Random) -> TopologyInput | None:
        """A random connection, or ``None`` when there are none."""
        if not self.inputs:
            return None
        return self.inputs[rng.randrange(len(self.inputs))]

    def deep_clone(self) -> TopologyProps:
        """A copy with the same role and no connections."""
        return TopologyProps(self.props_type)


@dataclass(eq=False)
class NeuronTopology:
    """A genome neuron: an identifier and, unless it is an input, its props."""

    id: uuid.UUID
    props: TopologyProps | None = None

    @classmethod
    def input(cls, id: uuid.UUID) -> NeuronTopology:
        """An input neuron, which has no props."""
        return cls(id)

    @classmethod
    def hidden(cls, id: uuid.UUID, inputs: list[TopologyInput]) -> NeuronTopology:
        """A hidden neuron fed by ``inputs``."""
        return cls(id, TopologyProps(PropsType.HIDDEN, list(inputs)))

    @classmethod
    def output(cls, id: uuid.UUID, inputs: list[TopologyInput]) -> NeuronTopology:
        """An output neuron fed by ``inputs``."""
        return cls(id, TopologyProps(PropsType.OUTPUT, list(inputs)))

    @property
    def id_short(self) -> str:
        return str(self.id)[:6]

    @property
    def neuron_type(self) -> NeuronType:
        if self.props is None:
            return NeuronType.INPUT
        return NeuronType(self.props.props_type.value)

    @property
    def is_input(self) -> bool:
        return self.neuron_type is NeuronType.INPUT

    @property
    def is_hidden(self) -> bool:
        return self.neuron_type is NeuronType.HIDDEN

    @property
    def is_output(self) -> bool:
        return self.neuron_type is NeuronType.OUTPUT

    def deep_clone(self) -> NeuronTopology:
        """A copy with a fresh identifier and no connections."""
        props = None if self.props is None else self.props.deep_clone()
        return NeuronTopology(uuid.uuid4(), props)

    def to_neuron(self, neurons: list[SimpleNeuron]) -> None:
        """Append this neuron, and any missing sources, to ``neurons`` as runnable neurons.

        Connections whose source has been dropped are left out.
        """
        if any(neuron.id == self.id for neuron in neurons):
            return

        props = None
        if self.props is not None:
            connections: list[NeuronInput] = []
            for connection in self.props.inputs:
                source = connection.neuron
                if source is None:
                    continue
                source.to_neuron(neurons)
                built = next(n for n in neurons if n.id == source.id)
                connections.append(
                    NeuronInput(built, connection.weight, connection.exponent)
                )
            props = NeuronProps(self.props.props_type, connections)

        neurons.append(SimpleNeuron(self.id, props))