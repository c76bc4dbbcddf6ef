#!/usr/bin/env python3
"""
Hand assignment optimizer.

Splits the alphabet into two equal halves, one per hand, so that the total
adjacency weight of letter pairs typed by the same hand is as small as
possible. Every subset of size n/2 is scored: subsets are enumerated as bit
masks in increasing numeric order with Gosper's same-popcount successor, and
scored in numpy batches.

The first minimum seen in enumeration order wins, so among equal-cost splits
the numerically smallest mask is returned. The scan can be range-partitioned
across worker processes (by colexicographic rank) without changing the
result.
"""

import itertools
import logging
import multiprocessing
import time
from dataclasses import dataclass
from math import comb
from typing import Iterator, List, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 1 << 16


@dataclass(frozen=True)
class HandSplit:
    """Partition of the alphabet into two hands."""

    hand_letters: Tuple[Tuple[int, ...], Tuple[int, ...]]
    """Letter indices per hand; hand 1 holds the letters whose mask bit is set"""

    mask: int
    """Winning subset bit mask"""

    cost: int
    """Same-hand adjacency weight of the split"""

    def hand_of(self, letter: int) -> int:
        return (self.mask >> letter) & 1


def next_same_popcount(mask: int) -> int:
    """
    Next larger integer with the same number of set bits (Gosper's hack).

    Raises:
        ValueError: If mask is not positive
    """
    if mask <= 0:
        raise ValueError(f"Mask must be positive, got {mask}")
    lowest = mask & -mask
    ripple = mask + lowest
    return (((mask & ~ripple) // lowest) >> 1) | ripple


def iter_fixed_size_subsets(n: int, k: int,
                            start: Optional[int] = None,
                            count: Optional[int] = None) -> Iterator[int]:
    """
    Lazily enumerate k-element subsets of range(n) as increasing bit masks.

    Args:
        n: Universe size
        k: Subset size
        start: First mask to yield (defaults to the lowest k bits set)
        count: Maximum number of masks to yield (None = until exhausted)
    """
    if not 0 < k <= n:
        raise ValueError(f"Subset size must be in 1..{n}, got {k}")

    mask = (1 << k) - 1 if start is None else start
    limit = 1 << n
    produced = 0
    while mask < limit and (count is None or produced < count):
        yield mask
        produced += 1
        mask = next_same_popcount(mask)


def subset_rank(mask: int) -> int:
    """Position of a mask in the increasing enumeration of same-size subsets."""
    rank = 0
    position = 0
    bit = 0
    while mask >> bit:
        if (mask >> bit) & 1:
            position += 1
            rank += comb(bit, position)
        bit += 1
    return rank


def unrank_subset(rank: int, k: int) -> int:
    """
    Mask of the k-element subset at a given rank (inverse of subset_rank).

    Uses the combinatorial number system: the highest element is the largest
    c with comb(c, k) <= rank, and so on down.
    """
    mask = 0
    for size in range(k, 0, -1):
        c = size - 1
        while comb(c + 1, size) <= rank:
            c += 1
        rank -= comb(c, size)
        mask |= 1 << c
    return mask


def hand_conflict_cost(mask: int, weights: np.ndarray) -> int:
    """
    Same-hand cost of a single split.

    Sums weights[i, j] over unordered pairs i <= j whose letters are on the
    same side of the mask.
    """
    n = weights.shape[0]
    total = 0
    for i in range(n):
        side = (mask >> i) & 1
        for j in range(i, n):
            if ((mask >> j) & 1) == side:
                total += int(weights[i, j])
    return total


def hand_conflict_costs(masks: np.ndarray, weights: np.ndarray) -> np.ndarray:
    """
    Same-hand cost for a batch of splits.

    Same-hand weight is the total pair weight minus the weight of pairs with
    one letter on each side.

    Args:
        masks: int64 array of subset masks
        weights: Symmetric weight graph

    Returns:
        int64 array of costs, aligned with masks
    """
    n = weights.shape[0]
    w = weights.astype(np.float64)
    bits = ((masks[:, None] >> np.arange(n, dtype=np.int64)) & 1).astype(np.float64)
    cross = ((bits @ w) * (1.0 - bits)).sum(axis=1)
    total = np.triu(w).sum()
    return np.rint(total - cross).astype(np.int64)


def _scan_partition(weights: np.ndarray, hand_size: int, start_rank: int,
                    count: int, batch_size: int) -> Tuple[int, int]:
    """
    Score a contiguous range of the subset enumeration.

    Returns:
        (cost, mask) of the first minimum in the range
    """
    n = weights.shape[0]
    subsets = iter_fixed_size_subsets(n, hand_size, start=unrank_subset(start_rank, hand_size), count=count)

    best_cost: Optional[int] = None
    best_mask = -1
    while True:
        batch = np.fromiter(itertools.islice(subsets, batch_size), dtype=np.int64)
        if batch.size == 0:
            break
        costs = hand_conflict_costs(batch, weights)
        idx = int(np.argmin(costs))
        if best_cost is None or int(costs[idx]) < best_cost:
            best_cost = int(costs[idx])
            best_mask = int(batch[idx])

    return best_cost, best_mask


def _partition_ranges(total: int, parts: int) -> List[Tuple[int, int]]:
    """Split range(total) into contiguous (start, count) chunks."""
    parts = max(1, min(parts, total))
    size, extra = divmod(total, parts)
    ranges = []
    start = 0
    for part in range(parts):
        count = size + (1 if part < extra else 0)
        ranges.append((start, count))
        start += count
    return ranges


def split_from_mask(mask: int, n: int, cost: int) -> HandSplit:
    """Build a HandSplit from a winning mask."""
    hands: Tuple[List[int], List[int]] = ([], [])
    for letter in range(n):
        hands[(mask >> letter) & 1].append(letter)
    return HandSplit(hand_letters=(tuple(hands[0]), tuple(hands[1])), mask=mask, cost=cost)


def assign_hands(weights: np.ndarray,
                 hand_size: Optional[int] = None,
                 workers: int = 1,
                 batch_size: int = DEFAULT_BATCH_SIZE) -> HandSplit:
    """
    Find the split of the alphabet with the smallest same-hand cost.

    Args:
        weights: Symmetric (n, n) weight graph
        hand_size: Letters in the enumerated subset (defaults to n // 2)
        workers: Worker processes; 1 scans in the current process
        batch_size: Masks scored per numpy batch

    Returns:
        Optimal HandSplit
    """
    n = weights.shape[0]
    if hand_size is None:
        hand_size = n // 2
    total = comb(n, hand_size)

    logger.info("Scoring %d hand splits (%d of %d letters, %d worker(s))", total, hand_size, n, workers)
    start_time = time.time()

    if workers <= 1:
        best_cost, best_mask = _scan_partition(weights, hand_size, 0, total, batch_size)
    else:
        args = [(weights, hand_size, start, count, batch_size)
                for start, count in _partition_ranges(total, workers)]
        with multiprocessing.Pool(len(args)) as pool:
            winners = pool.starmap(_scan_partition, args)
        # Equal costs resolve to the smallest mask, i.e. the first seen overall
        best_cost, best_mask = min(winners)

    logger.info("Hand split found in %.2fs: cost %d", time.time() - start_time, best_cost)
    return split_from_mask(best_mask, n, best_cost)
