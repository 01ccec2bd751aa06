"""A small spiking model: neurons that broadcast potentials through axons."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

_CHANNEL_CAPACITY = 20


class ChannelFull(Exception):
    """Raised when an axon cannot deliver because a receiver's queue is full."""

    def __init__(self, value: int) -> None:
        super().__init__(f"channel full, could not send {value}")
        self.value = value


def _check_potential(value: int) -> None:
    if not 0 <= value <= 255:
        raise ValueError(f"potential must be between 0 and 255, got {value}")


@dataclass
class Axon:
    """A broadcast channel carrying a neuron's outgoing potentials."""

    name: str
    capacity: int = _CHANNEL_CAPACITY
    _receivers: list[deque[int]] = field(default_factory=list, repr=False)

    def spawn_rx(self) -> deque[int]:
        """Create a new receiving queue that gets every later firing."""
        receiver: deque[int] = deque()
        self._receivers.append(receiver)
        return receiver

    def fire(self, value: int) -> None:
        """Broadcast ``value`` to every receiver, raising ``ChannelFull`` if any is full."""
        _check_potential(value)
        if any(len(receiver) >= self.capacity for receiver in self._receivers):
            raise ChannelFull(value)
        for receiver in self._receivers:
            receiver.append(value)


@dataclass
class Dendrite:
    """The receiving end of a connection from another neuron's axon."""

    name: str
    rx: deque[int] = field(repr=False)

    def read_potential(self) -> int:
        """Take the next waiting potential, or 0 when none is waiting."""
        if not self.rx:
            return 0
        value = self.rx.popleft()
        logger.info("\t%s - Received %s", self.name, value)
        return value


@dataclass
class Neuron:
    """A neuron that fires when its summed input exceeds its sensitisation."""

    name: str
    sensitization: int = 0
    axon: Axon = field(init=False)
    dendrites: list[Dendrite] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        self.axon = Axon(f"{self.name} Axon")

    def tx_to(self, receiver: Neuron) -> None:
        """Connect this neuron's axon to ``receiver``."""
        receiver.rx_from(self.axon)

    def rx_from(self, axon: Axon) -> None:
        """Grow a dendrite that listens to ``axon``."""
        self.dendrites.append(
            Dendrite(f"{axon.name} -> {self.name} Dendrite", axon.spawn_rx())
        )

    def fire(self, value: int) -> None:
        """Send ``value`` out along the axon."""
        self.axon.fire(value)

    def update(self) -> None:
        """Read every dendrite once and fire if the total exceeds the sensitisation."""
        logger.info("\t%s - Update", self.name)
        potential = sum(dendrite.read_potential() for dendrite in self.dendrites)
        if potential > self.sensitization:
            logger.info("\t%s - Firing", self.name)
            try:
                self.fire(1)
            except ChannelFull:
                pass
        logger.info("\t%s - End", self.name)


@dataclass
class Brain:
    """A named collection of neurons updated together."""

    name: str
    neurons: list[Neuron] = field(default_factory=list)

    def add(self, neuron: Neuron) -> None:
        """Add a neuron to the update schedule."""
        self.neurons.append(neuron)

    def update(self) -> None:
        """Update every neuron once, in the order they were added."""
        logger.info("%s - RUNNING UPDATE SCHEDULE", self.name)
        for neuron in self.neurons:
            neuron.update()
        logger.info("%s - SCHEDULE COMPLETE", self.name)