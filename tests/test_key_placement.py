import numpy as np
import pytest

from layoutgen.adjacency import build_adjacency_model
from layoutgen.geometry import HAND_GEOMETRY, PhysicalKey, finger_map, keys_by_cost_group
from layoutgen.hand_assignment import split_from_mask
from layoutgen.key_placement import (
    KeyPlacer, assign_letters_to_keys, count_slot_priorities, finger_continuity_cost,
    iter_slot_priorities, place_keys_on_hands,
)


def _brute_force(letters, rank, weights, geometry):
    """Best (cost, slots) by scoring every priority order directly."""
    fingers = finger_map(geometry)
    order = [letter for letter in rank if letter in letters]
    best = None
    for priority in iter_slot_priorities(keys_by_cost_group(geometry)):
        slots = assign_letters_to_keys(priority, order, len(geometry))
        cost = 0
        for a in range(len(slots)):
            for b in range(a, len(slots)):
                if slots[a] is None or slots[b] is None:
                    continue
                if fingers[a] == fingers[b]:
                    cost += int(weights[slots[a], slots[b]])
        if best is None or cost < best[0]:
            best = (cost, slots)
    return best


def test_standard_geometry_candidate_count():
    groups = keys_by_cost_group(HAND_GEOMETRY)
    assert groups == [[7, 8], [2, 5, 6], [1, 3, 9, 12, 13], [4, 10, 11], [0, 14]]
    assert count_slot_priorities(groups) == 17280


def test_slot_priorities_unique_and_complete():
    priorities = list(iter_slot_priorities(keys_by_cost_group(HAND_GEOMETRY)))
    assert len(priorities) == 17280
    assert len(set(priorities)) == 17280
    assert priorities[0] == (7, 8, 2, 5, 6, 1, 3, 9, 12, 13, 4, 10, 11, 0, 14)
    assert all(sorted(p) == list(range(15)) for p in priorities[:100])


def test_priority_keeps_groups_in_cost_order():
    groups = [[1, 2], [0, 3]]
    assert list(iter_slot_priorities(groups)) == [
        (1, 2, 0, 3), (1, 2, 3, 0), (2, 1, 0, 3), (2, 1, 3, 0),
    ]


def test_assign_letters_to_keys_fills_priority_front_to_back():
    slots = assign_letters_to_keys((2, 0, 1, 3), [5, 9, 4], 4)
    assert slots == [9, 4, 5, None]


def test_finger_continuity_cost():
    weights = np.zeros((3, 3), dtype=np.int64)
    weights[0, 1] = weights[1, 0] = 4
    weights[2, 2] = 2
    assert finger_continuity_cost({0: [0, 1], 1: [2]}, weights) == 6
    assert finger_continuity_cost({0: [0, 2], 1: [1]}, weights) == 2


def test_placer_small_geometry(small_geometry):
    weights = np.zeros((3, 3), dtype=np.int64)
    weights[0, 1] = weights[1, 0] = 5
    weights[0, 2] = weights[2, 0] = 1
    weights[1, 2] = weights[2, 1] = 3

    result = KeyPlacer([0, 1, 2], (0, 1, 2), weights, small_geometry).solve()
    assert result.candidates == 4
    assert result.cost == 1
    assert result.hand_layout.slots == (None, 0, 1, 2)


def test_placer_matches_brute_force(small_geometry, random_weights):
    rank = tuple(np.argsort(-random_weights.sum(axis=1), kind='stable').tolist())
    letters = [1, 4, 6]
    result = KeyPlacer(letters, rank, random_weights, small_geometry).solve()
    cost, slots = _brute_force(letters, rank, random_weights, small_geometry)
    assert result.cost == cost
    assert list(result.hand_layout.slots) == slots


def test_two_letters_two_slots_first_seen_wins():
    geometry = (PhysicalKey(0, 0, 0), PhysicalKey(1, 1, 0))
    weights = np.zeros((2, 2), dtype=np.int64)
    weights[0, 1] = weights[1, 0] = 5
    result = KeyPlacer([0, 1], (1, 0), weights, geometry).solve()
    assert result.cost == 0
    # most frequent letter (b) takes the first slot of the first ordering
    assert result.hand_layout.slots == (1, 0)


def test_full_hand_places_each_letter_once(pangram_corpus):
    model = build_adjacency_model(pangram_corpus)
    letters = tuple(range(13))
    result = KeyPlacer(letters, model.frequency_rank, model.weights).solve()

    assert result.candidates == 17280
    assert sorted(result.hand_layout.letters()) == list(letters)
    # the two hardest keys stay empty
    assert result.hand_layout.empty_slots() == [0, 14]
    assert result.cost == finger_continuity_cost(result.hand_layout.finger_assignment(), model.weights)

    most_frequent = next(letter for letter in model.frequency_rank if letter in letters)
    assert result.hand_layout.slot_of()[most_frequent] in (7, 8)


def test_placer_rejects_too_many_letters():
    weights = np.zeros((26, 26), dtype=np.int64)
    with pytest.raises(ValueError):
        KeyPlacer(range(16), tuple(range(26)), weights)


def test_placer_rejects_letters_missing_from_rank(small_geometry):
    weights = np.zeros((3, 3), dtype=np.int64)
    with pytest.raises(ValueError):
        KeyPlacer([0, 2], (0, 1), weights, small_geometry)


def test_place_keys_on_hands(pangram_corpus):
    model = build_adjacency_model(pangram_corpus)
    split = split_from_mask(sum(1 << i for i in range(0, 26, 2)), 26, 0)
    first, second = place_keys_on_hands(split, model)

    assert sorted(first.hand_layout.letters()) == list(split.hand_letters[0])
    assert sorted(second.hand_layout.letters()) == list(split.hand_letters[1])
    assert first.candidates == second.candidates == 17280
