import copy
import math
import random
from collections import Counter

import pytest

from polyneat.actions import MutationAction, gen_mutation_action
from polyneat.chances import MAX_MUTATIONS, MutationChances


def _total(chances):
    return (
        chances.split_connection
        + chances.add_connection
        + chances.remove_connection
        + chances.mutate_weight
        + chances.mutate_exponent
    )


def test_adjust_mutation_chances_keeps_total():
    chances = MutationChances.equal(50)
    chances.adjust_split_connection(10.0)
    chances.adjust_add_connection(-10.0)
    chances.adjust_remove_connection(10.0)
    chances.adjust_mutate_weight(-10.0)
    assert abs(100.0 - _total(chances)) <= 0.0001


def test_check_mutate_repeatedly():
    rng = random.Random(7)
    chances = MutationChances.equal(50)
    for _ in range(100):
        chances.adjust_mutation_chances(rng)
        assert abs(100.0 - _total(chances)) <= 0.0001
        assert 0 <= chances.self_mutation <= 100


def test_gen_mutation_action_covers_all_kinds():
    rng = random.Random(12345)
    chances = MutationChances.equal(100)
    counts = Counter(gen_mutation_action(rng, chances) for _ in range(1000))
    assert set(counts) == set(MutationAction)


def test_equal():
    chances = MutationChances.equal(75)
    assert chances.self_mutation == 75
    for value in (
        chances.split_connection,
        chances.add_connection,
        chances.remove_connection,
        chances.mutate_weight,
        chances.mutate_exponent,
    ):
        assert value == pytest.approx(20.0, abs=0.001)
    assert _total(chances) == pytest.approx(100.0, abs=0.001)


def test_none():
    chances = MutationChances.none()
    assert chances.self_mutation == 0
    assert chances.split_connection == 0.0
    assert chances.add_connection == 0.0
    assert chances.remove_connection == 0.0
    assert chances.mutate_weight == 0.0
    assert chances.mutate_exponent == 0.0


def test_from_raw():
    chances = MutationChances.from_raw(80, 40.0, 30.0, 10.0, 15.0, 5.0)
    assert chances.self_mutation == 80
    assert _total(chances) == pytest.approx(100.0, abs=0.001)
    assert chances.split_connection > chances.add_connection
    assert chances.add_connection > chances.mutate_weight
    assert chances.mutate_weight > chances.remove_connection
    assert chances.remove_connection > chances.mutate_exponent
    assert chances.split_connection == pytest.approx(40.0)


def test_from_raw_normalises():
    chances = MutationChances.from_raw(10, 1.0, 1.0, 1.0, 1.0, 0.0)
    assert chances.split_connection == pytest.approx(25.0)
    assert chances.mutate_exponent == 0.0


def test_from_raw_zero_total():
    chances = MutationChances.from_raw(50, 0.0, 0.0, 0.0, 0.0, 0.0)
    assert chances.self_mutation == 50
    assert math.isnan(chances.split_connection)


def test_self_mutation_out_of_range():
    with pytest.raises(ValueError):
        MutationChances.equal(256)
    with pytest.raises(ValueError):
        MutationChances.equal(-1)


@pytest.mark.parametrize("seed", range(20))
def test_adjust_self_mutation(seed):
    rng = random.Random(seed)

    chances = MutationChances.equal(0)
    chances.adjust_self_mutation(rng)
    assert chances.self_mutation <= 1

    chances = MutationChances.equal(100)
    chances.adjust_self_mutation(rng)
    assert chances.self_mutation >= 99

    chances = MutationChances.equal(50)
    chances.adjust_self_mutation(rng)
    assert abs(chances.self_mutation - 50) <= 1


def test_individual_adjustments():
    chances = MutationChances.equal(50)

    chances.adjust_split_connection(10.0)
    assert _total(chances) == pytest.approx(100.0, abs=0.001)
    assert chances.split_connection > chances.add_connection

    chances.adjust_add_connection(-5.0)
    assert _total(chances) == pytest.approx(100.0, abs=0.001)

    chances.adjust_remove_connection(-100.0)
    assert chances.remove_connection == 0.0
    assert _total(chances) == pytest.approx(100.0, abs=0.001)

    chances.adjust_mutate_exponent(3.0)
    assert _total(chances) == pytest.approx(100.0, abs=0.001)


def test_gen_mutation_actions():
    rng = random.Random(9876)

    high = MutationChances.equal(90)
    lengths = [len(high.gen_mutation_actions(rng)) for _ in range(50)]
    assert any(lengths)
    assert max(lengths) <= MAX_MUTATIONS

    assert MutationChances.none().gen_mutation_actions(rng) == []

    moderate = MutationChances.equal(50)
    total = sum(len(moderate.gen_mutation_actions(rng)) for _ in range(100))
    assert total > 0


def test_gen_mutation_actions_distribution():
    rng = random.Random(5555)
    chances = MutationChances.from_raw(100, 50.0, 30.0, 5.0, 10.0, 5.0)
    counts = Counter()
    for _ in range(1000):
        counts.update(chances.gen_mutation_actions(rng))
    assert counts[MutationAction.SPLIT_CONNECTION] > counts[MutationAction.ADD_CONNECTION]
    assert counts[MutationAction.ADD_CONNECTION] > counts[MutationAction.REMOVE_NEURON]


def test_gen_mutation_actions_does_not_modify_chances():
    chances = MutationChances.from_raw(100, 50.0, 30.0, 5.0, 10.0, 5.0)
    before = copy.copy(chances)
    chances.gen_mutation_actions(random.Random(1))
    assert chances == before


def test_deterministic_mutations():
    chances = MutationChances.equal(75)
    first = chances.gen_mutation_actions(random.Random(1111))
    second = chances.gen_mutation_actions(random.Random(1111))
    assert first == second


def test_mutation_action_selection():
    rng = random.Random(7777)

    only_split = MutationChances.from_raw(100, 100.0, 0.0, 0.0, 0.0, 0.0)
    for _ in range(10):
        assert gen_mutation_action(rng, only_split) is MutationAction.SPLIT_CONNECTION

    only_exponent = MutationChances.from_raw(100, 0.0, 0.0, 0.0, 0.0, 100.0)
    for _ in range(10):
        assert gen_mutation_action(rng, only_exponent) is MutationAction.MUTATE_EXPONENT


def test_adjust_mutation_chances_evolution():
    changed_count = 0
    for seed in range(20):
        rng = random.Random(3333 + seed)
        chances = MutationChances.equal(100)
        original = copy.copy(chances)
        chances.adjust_mutation_chances(rng)
        if chances != original:
            changed_count += 1
        assert _total(chances) == pytest.approx(100.0, abs=0.001)
    assert changed_count >= 15


def test_adjust_mutation_chances_without_self_mutation_keeps_weights():
    chances = MutationChances.from_raw(0, 30.0, 25.0, 20.0, 15.0, 10.0)
    chances.adjust_mutation_chances(random.Random(4))
    assert chances.split_connection == pytest.approx(30.0)
    assert chances.mutate_exponent == pytest.approx(10.0)
    assert chances.self_mutation in (0, 1)


def test_copy_and_equality():
    first = MutationChances.from_raw(75, 30.0, 25.0, 20.0, 15.0, 10.0)
    second = copy.copy(first)
    assert first == second
    assert first.self_mutation == second.self_mutation
    assert first.split_connection == second.split_connection
    assert first.add_connection == second.add_connection
    assert first.remove_connection == second.remove_connection
    assert first.mutate_weight == second.mutate_weight
    assert first.mutate_exponent == second.mutate_exponent
    second.adjust_split_connection(5.0)
    assert first != second