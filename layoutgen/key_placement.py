#!/usr/bin/env python3
"""
Key placement optimizer.

For one hand, every ordering of key slots within each cost group is tried
(2!*3!*5!*3!*2! = 17,280 orderings for the standard geometry). For each
ordering the groups are concatenated, cheapest first, into a priority list of
slots; the hand's letters, taken in frequency-rank order, are bound to slots
front to back. The ordering whose same-finger adjacency weight is smallest
wins, first seen on ties.
"""

import itertools
import logging
import multiprocessing
import time
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from layoutgen.adjacency import AdjacencyModel, same_group_cost
from layoutgen.geometry import HAND_GEOMETRY, PhysicalKey, finger_map, keys_by_cost_group
from layoutgen.hand_assignment import HandSplit
from layoutgen.layout import HandLayout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacementResult:
    """Best layout found for one hand."""
    hand_layout: HandLayout
    cost: int
    candidates: int


def iter_slot_priorities(groups: Sequence[Sequence[int]]) -> Iterator[Tuple[int, ...]]:
    """
    Lazily yield every slot priority order.

    Each group is permuted independently (lexicographic order, group 0
    varying slowest) and the groups are concatenated lowest cost group first.
    """
    group_orders = [itertools.permutations(sorted(group)) for group in groups]
    for combination in itertools.product(*group_orders):
        yield tuple(itertools.chain.from_iterable(combination))


def count_slot_priorities(groups: Sequence[Sequence[int]]) -> int:
    total = 1
    for group in groups:
        for factor in range(2, len(group) + 1):
            total *= factor
    return total


def assign_letters_to_keys(priority: Sequence[int],
                           placement_order: Sequence[int],
                           num_keys: int) -> List[Optional[int]]:
    """
    Bind letters to slots: the i-th letter takes the i-th slot of the priority list.

    Args:
        priority: Slot indices, most preferred first
        placement_order: Letters to place, most frequent first
        num_keys: Number of slots on the hand

    Returns:
        Slot list holding a letter index or None
    """
    slots: List[Optional[int]] = [None] * num_keys
    cursor = 0
    for letter in placement_order:
        slots[priority[cursor]] = letter
        cursor += 1
    return slots


def finger_continuity_cost(finger_assignment: Dict[int, Iterable[int]], weights: np.ndarray) -> int:
    """Sum of same-finger pair weights (i == j included) over all fingers."""
    return sum(same_group_cost(letters, weights) for letters in finger_assignment.values())


class KeyPlacer:
    """
    Searches slot orderings for one hand.

    Only read-only inputs are shared; the running minimum lives on the
    instance, so independent placers can run side by side.
    """

    def __init__(self, hand_letters: Iterable[int],
                 frequency_rank: Sequence[int],
                 weights: np.ndarray,
                 geometry: Sequence[PhysicalKey] = HAND_GEOMETRY):
        """
        Initialize the placer.

        Args:
            hand_letters: Letters assigned to this hand
            frequency_rank: All letters by descending frequency
            weights: Weight graph
            geometry: Physical key table for the hand

        Raises:
            ValueError: If the hand has more letters than key slots
        """
        letter_set = set(hand_letters)
        if len(letter_set) > len(geometry):
            raise ValueError(f"{len(letter_set)} letters do not fit on {len(geometry)} keys")

        self.weights = weights
        self.geometry = tuple(geometry)
        self.placement_order = [letter for letter in frequency_rank if letter in letter_set]
        missing = letter_set - set(self.placement_order)
        if missing:
            raise ValueError(f"Letters missing from frequency rank: {sorted(missing)}")

        self.groups = keys_by_cost_group(self.geometry)
        self.key_fingers = finger_map(self.geometry)

        self.min_cost: Optional[int] = None
        self.best_slots: List[Optional[int]] = [None] * len(self.geometry)
        self.candidates = 0

    def evaluate(self, priority: Sequence[int]) -> int:
        """Place letters for one priority order and keep it if it beats the best so far."""
        slots = assign_letters_to_keys(priority, self.placement_order, len(self.geometry))

        fingers: Dict[int, List[int]] = {}
        for slot, letter in enumerate(slots):
            if letter is not None:
                fingers.setdefault(self.key_fingers[slot], []).append(letter)

        cost = finger_continuity_cost(fingers, self.weights)
        self.candidates += 1
        if self.min_cost is None or cost < self.min_cost:
            self.min_cost = cost
            self.best_slots = slots
        return cost

    def solve(self) -> PlacementResult:
        """Try every slot ordering and return the cheapest layout."""
        logger.debug("Placing %d letters over %d slot orderings",
                     len(self.placement_order), count_slot_priorities(self.groups))
        for priority in iter_slot_priorities(self.groups):
            self.evaluate(priority)
        return PlacementResult(
            hand_layout=HandLayout(tuple(self.best_slots)),
            cost=self.min_cost,
            candidates=self.candidates,
        )


def place_hand(hand_letters: Sequence[int], frequency_rank: Sequence[int],
               weights: np.ndarray) -> PlacementResult:
    """Run a KeyPlacer for one hand with the standard geometry."""
    return KeyPlacer(hand_letters, frequency_rank, weights).solve()


def place_keys_on_hands(split: HandSplit, model: AdjacencyModel,
                        workers: int = 1) -> Tuple[PlacementResult, PlacementResult]:
    """
    Place keys for both hands.

    The two hands are independent; with workers > 1 they run in a pool of
    two processes.
    """
    start_time = time.time()
    args = [(letters, model.frequency_rank, model.weights) for letters in split.hand_letters]

    if workers > 1:
        with multiprocessing.Pool(min(workers, len(args))) as pool:
            results = pool.starmap(place_hand, args)
    else:
        results = [place_hand(*hand_args) for hand_args in args]

    for hand, result in enumerate(results):
        logger.info("Hand %d: %d orderings tried, finger cost %d", hand, result.candidates, result.cost)
    logger.debug("Key placement finished in %.2fs", time.time() - start_time)
    return results[0], results[1]
