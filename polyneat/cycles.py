"""Removal of cyclic connections so a genome stays feed-forward."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Iterator

from .genome import NeuronTopology, TopologyInput


@dataclass
class _Removal:
    neuron_id: uuid.UUID
    indices: list[int] = field(default_factory=list)


def _dfs(
    root: NeuronTopology, stack: set[uuid.UUID], visited: set[uuid.UUID]
) -> list[_Removal]:
    """Walk back through inputs from ``root`` and collect connections that close a cycle."""
    visited.add(root.id)
    if root.props is None:
        return []

    removals: list[_Removal] = []
    stack.add(root.id)
    frames: list[tuple[NeuronTopology, Iterator[tuple[int, TopologyInput]], list[int]]] = [
        (root, enumerate(root.props.inputs), [])
    ]
    while frames:
        node, connections, own = frames[-1]
        for index, connection in connections:
            source = connection.neuron
            if source is None:
                continue
            if source.id not in visited:
                visited.add(source.id)
                if source.props is not None:
                    stack.add(source.id)
                    frames.append((source, enumerate(source.props.inputs), []))
                    break
            elif source.id in stack:
                own.append(index)
        else:
            frames.pop()
            if own:
                removals.append(_Removal(node.id, own))
            stack.discard(node.id)
    return removals


def remove_cycles(neurons: list[NeuronTopology]) -> int:
    """Cut every connection that closes a cycle among ``neurons``.

    Returns how many neurons had connections trimmed. Raises ``LookupError``
    if a neuron that must be trimmed is not in ``neurons``.
    """
    stack: set[uuid.UUID] = set()
    visited: set[uuid.UUID] = set()
    trimmed = 0

    while True:
        queue: list[_Removal] = []
        for neuron in neurons:
            if neuron.id in visited:
                continue
            found = _dfs(neuron, stack, visited)
            if found:
                queue = found
                break
        if not queue:
            return trimmed

        for removal in queue:
            target = next((n for n in neurons if n.id == removal.neuron_id), None)
            if target is None:
                raise LookupError(f"neuron {removal.neuron_id} is not part of the network")
            if target.props is None:
                raise ValueError("cannot remove connections from an input neuron")
            target.props.trim_inputs(removal.indices)
            trimmed += 1