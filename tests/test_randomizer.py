import random

from blockfall.randomizer import SevenBagRandomizer
from blockfall.tetromino import PieceType


def test_each_bag_is_a_permutation():
    randomizer = SevenBagRandomizer(random.Random(0))
    for _ in range(20):
        bag = [randomizer.next() for _ in range(7)]
        assert sorted(bag) == sorted(PieceType)


def test_seeded_randomizers_agree():
    first = SevenBagRandomizer(random.Random(42))
    second = SevenBagRandomizer(random.Random(42))
    assert [first.next() for _ in range(21)] == [second.next() for _ in range(21)]


def test_reset_starts_a_new_bag():
    randomizer = SevenBagRandomizer(random.Random(1))
    randomizer.next()
    randomizer.next()
    assert randomizer.remaining == 5
    randomizer.reset()
    assert randomizer.remaining == 0
    bag = [randomizer.next() for _ in range(7)]
    assert set(bag) == set(PieceType)
