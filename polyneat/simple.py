"""A plain CPU network of polynomial neurons for running predictions."""

from __future__ import annotations

import enum
import math
import uuid
from dataclasses import dataclass, field
from typing import Protocol, Sequence


class PropsType(enum.Enum):
    """The role of a neuron that has inputs."""

    HIDDEN = "hidden"
    OUTPUT = "output"


class NeuronType(enum.Enum):
    """The role of any neuron in a network."""

    INPUT = "input"
    HIDDEN = "hidden"
    OUTPUT = "output"

    def __str__(self) -> str:
        return self.value


def _powi(base: float, exponent: int) -> float:
    """Raise ``base`` to an integer power with IEEE results instead of errors."""
    if exponent == 0:
        return 1.0
    odd = exponent % 2 == 1
    try:
        return float(base) ** exponent
    except ZeroDivisionError:
        negative = odd and math.copysign(1.0, base) < 0
        return -math.inf if negative else math.inf
    except OverflowError:
        negative = odd and base < 0
        return -math.inf if negative else math.inf


@dataclass
class NeuronInput:
    """A weighted, exponentiated connection from another neuron."""

    neuron: SimpleNeuron
    weight: float
    exponent: int

    def value(self) -> float:
        """Return ``weight * activation ** exponent`` for the connected neuron.

        A zero activation with a negative exponent gives infinity on purpose.
        """
        if self.exponent == 0:
            # x^0 is 1, so the neuron never needs activating.
            return self.weight
        return _powi(self.neuron.activate(), self.exponent) * self.weight


@dataclass
class NeuronProps:
    """The role and incoming connections of a hidden or output neuron."""

    props_type: PropsType
    inputs: list[NeuronInput] = field(default_factory=list)


@dataclass(eq=False)
class SimpleNeuron:
    """A neuron whose activation is the sum of its input values, cached per pass."""

    id: uuid.UUID
    props: NeuronProps | None = None
    activated_value: float | None = field(default=None, init=False)

    @property
    def inputs(self) -> list[NeuronInput] | None:
        return None if self.props is None else self.props.inputs

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

    def flush_state(self) -> None:
        """Forget the cached activation."""
        self.activated_value = None

    def override_state(self, value: float) -> None:
        """Set the activation directly, as is done for input neurons."""
        self.activated_value = value

    def activate(self) -> float:
        """Return the cached activation, computing and caching it if needed.

        An input neuron with no state set activates to 0 without caching.
        """
        if self.activated_value is not None:
            return self.activated_value
        if self.props is None:
            return 0.0
        result = sum((connection.value() for connection in self.props.inputs), 0.0)
        self.activated_value = result
        return result


class _TopologyNeuron(Protocol):
    id: uuid.UUID

    def to_neuron(self, neurons: list[SimpleNeuron]) -> None: ...


class _Topology(Protocol):
    neurons: Sequence[_TopologyNeuron]


def _find_by_id(neurons: Sequence[SimpleNeuron], neuron_id: uuid.UUID) -> tuple[int, SimpleNeuron]:
    for index, neuron in enumerate(neurons):
        if neuron.id == neuron_id:
            return index, neuron
    raise LookupError(f"neuron {neuron_id} is not part of the network")


@dataclass
class SimplePolyNetwork:
    """An executable network; the layers refer to neurons held in ``neurons``."""

    neurons: list[SimpleNeuron] = field(default_factory=list)
    input_layer: list[SimpleNeuron] = field(default_factory=list)
    output_layer: list[SimpleNeuron] = field(default_factory=list)

    @property
    def num_nodes(self) -> int:
        return len(self.neurons)

    @property
    def num_inputs(self) -> int:
        return len(self.input_layer)

    @property
    def num_outputs(self) -> int:
        return len(self.output_layer)

    def predict(self, inputs: Sequence[float]) -> list[float]:
        """Run a forward pass and return one value per output neuron.

        Extra inputs are ignored; input neurons without a value activate to 0.
        """
        for neuron in self.neurons:
            neuron.flush_state()
        for neuron, value in zip(self.input_layer, inputs):
            neuron.override_state(value)
        return [neuron.activate() for neuron in self.output_layer]

    def summarize(self) -> str:
        """Describe the neuron counts of the network."""
        return (
            f"Network with \n{self.num_nodes} total nodes\n"
            f"{self.num_inputs} input nodes\n{self.num_outputs} output nodes"
        )

    def _describe(self, index: int, neuron: SimpleNeuron) -> str:
        text = f"\n(({index}) {neuron.id_short}[{neuron.neuron_type}]: "
        if neuron.props is None:
            text += "N/A"
        else:
            locations = "".join(
                f"({_find_by_id(self.neurons, connection.neuron.id)[0]})"
                for connection in neuron.props.inputs
            )
            text += f"[{locations}]"
        return text + ")"

    def debug_str(self) -> str:
        """Describe every neuron and where its inputs sit in ``neurons``."""
        parts = ["neurons: \n"]
        parts.extend(self._describe(i, n) for i, n in enumerate(self.neurons))
        parts.append("\n\ninput_layer:")
        parts.extend(self._describe(i, n) for i, n in enumerate(self.input_layer))
        parts.append("\n\noutput layer:")
        parts.extend(self._describe(i, n) for i, n in enumerate(self.output_layer))
        return "".join(parts)

    @classmethod
    def from_topology(cls, topology: _Topology) -> SimplePolyNetwork:
        """Build a network from a topology, keeping its neuron order for the layers."""
        neurons: list[SimpleNeuron] = []
        input_layer: list[SimpleNeuron] = []
        output_layer: list[SimpleNeuron] = []

        for topology_neuron in topology.neurons:
            topology_neuron.to_neuron(neurons)
            _, neuron = _find_by_id(neurons, topology_neuron.id)
            if neuron.is_input:
                input_layer.append(neuron)
            if neuron.is_output:
                output_layer.append(neuron)

        return cls(neurons, input_layer, output_layer)