# polyneat

Neuroevolution of polynomial neural networks in the style of NEAT
(NeuroEvolution of Augmenting Topologies).

A network is a directed graph of neurons that is kept acyclic. Every
connection carries a weight and an integer exponent, and a neuron's value is
the sum of `weight * source ** exponent` over its connections. Topologies
grow and shrink through random mutations: connections are split by new hidden
neurons or added, hidden neurons are removed, and weights and exponents are
nudged. The mutation probabilities evolve along with the network.

The package is pure Python and has no runtime dependencies.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Usage

```python
import random

from polyneat.chances import MutationChances
from polyneat.network import PolyNetworkTopology

rng = random.Random(42)

chances = MutationChances.from_raw(
    3,     # overall chance (0-100) of mutating at all
    80.0,  # split a connection (adds a hidden neuron)
    50.0,  # add a connection
    5.0,   # remove a hidden neuron
    60.0,  # mutate a weight
    20.0,  # mutate an exponent
)

topology = PolyNetworkTopology.new(2, 2, chances, rng)

for _ in range(100):
    topology = topology.replicate(rng)

network = topology.to_simple_network()
print(network.predict([1.0, 5.0]))
print(network.summarize())
```

Every function that draws random values takes a `random.Random`, so runs
can be reproduced from a seed.

### Mutation chances

`MutationChances.from_raw` normalises the five relative chances so that they
sum to 100; if all five are zero the normalised values are NaN.
`MutationChances.equal(rate)` gives every kind of mutation 20%, and
`MutationChances.none()` turns evolution off. `self_mutation` is the
percentage that decides whether mutations happen at all.

`gen_mutation_actions(rng)` draws the list of `MutationAction`s for one
step, never more than `polyneat.chances.MAX_MUTATIONS` (200).
`adjust_mutation_chances(rng)` perturbs the chances themselves and moves
`self_mutation` by at most one, keeping it between 0 and 100.

### Topologies

- `PolyNetworkTopology.new` connects each output to a random, duplicate-free
  subset of the inputs; it raises `ValueError` if outputs are requested
  without inputs.
- `PolyNetworkTopology.thoroughly_connected` wires every output to every input.
- `replicate(rng)` returns a mutated copy with fresh neuron identifiers,
  adjusted chances and any cycle-closing connections removed.
- `mutate(actions, rng)` applies a list of actions in place;
  `remove_cycles()` cuts connections that close cycles and returns how many
  neurons were trimmed.
- `info()` counts input, hidden and output neurons; `neuron_ids()`,
  `find_by_id(id)` and `debug_str()` help inspect the structure.

Connections refer weakly to their source neuron, so removing a hidden neuron
drops every connection that pointed at it.

### Running a network

`SimplePolyNetwork.predict(inputs)` returns a list with one value per output
neuron. Inputs beyond the number of input neurons are ignored; input neurons
left without a value contribute 0. A zero value raised to a negative exponent
gives an infinite result, which is returned as is. `debug_str()` lists each
neuron and the positions of its sources.

### The message-passing model

`polyneat.brain` holds a separate, small model: each `Neuron` broadcasts
potentials through its `Axon` to the `Dendrite`s of the neurons it is
connected to (`tx_to`), and a `Brain` updates its neurons in order. A neuron
fires 1 when the potentials it reads exceed its sensitisation. Each receiver
queue holds at most 20 values; `Axon.fire` raises `ChannelFull` when a queue
is full and `ValueError` for a potential outside 0-255. Progress is logged
through the standard `logging` module.

```python
from polyneat.brain import Brain, Neuron

first, second = Neuron("N1"), Neuron("N2")
second.tx_to(first)
second.fire(1)

brain = Brain("Brain")
brain.add(first)
brain.add(second)
brain.update()
```

## Modules

- `polyneat.actions` – the kinds of mutation and how one is drawn at random.
- `polyneat.chances` – mutation probabilities and their own evolution.
- `polyneat.genome` – neurons and connections of a topology.
- `polyneat.cycles` – removal of connections that would form cycles.
- `polyneat.network` – whole topologies: creation, mutation, replication.
- `polyneat.simple` – the executable network used for prediction.
- `polyneat.brain` – the message-passing neuron model.

## What it does not do

The package evolves and runs single topologies only. It has no population,
speciation or fitness-evaluation loop, no command-line program, no way to
save or load topologies, and no GPU or tensor back end: networks are
evaluated neuron by neuron in plain Python.