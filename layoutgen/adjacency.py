#!/usr/bin/env python3
"""
Adjacency model: letter-pair weight graph and letter frequency ranking.

Both are built once from the corpus and shared read-only by the hand
assignment and key placement optimizers.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

import numpy as np

from layoutgen.geometry import NUM_LETTERS
from layoutgen.text_utils import CorpusError, corpus_to_indices

logger = logging.getLogger(__name__)


def _read_only(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


def build_weight_graph(corpus: str) -> np.ndarray:
    """
    Count adjacent occurrences of every unordered letter pair.

    For each position i the pair (corpus[i], corpus[i+1]) increments
    weights[a, b] and weights[b, a]; a doubled letter increments weights[a, a]
    once.

    Args:
        corpus: Lowercase a-z text

    Returns:
        Symmetric read-only (26, 26) int64 array

    Raises:
        CorpusError: If the corpus has fewer than 2 letters
    """
    if len(corpus) < 2:
        raise CorpusError(f"Need at least 2 letters to build a weight graph, got {len(corpus)}")

    indices = np.asarray(corpus_to_indices(corpus), dtype=np.int64)
    first, second = indices[:-1], indices[1:]

    weights = np.zeros((NUM_LETTERS, NUM_LETTERS), dtype=np.int64)
    np.add.at(weights, (first, second), 1)

    distinct = first != second
    np.add.at(weights, (second[distinct], first[distinct]), 1)

    return _read_only(weights)


def count_letters(corpus: str) -> np.ndarray:
    """Raw per-letter occurrence counts as a read-only int64 vector."""
    indices = np.asarray(corpus_to_indices(corpus), dtype=np.int64)
    counts = np.bincount(indices, minlength=NUM_LETTERS).astype(np.int64)
    return _read_only(counts)


def rank_by_frequency(letter_counts: Sequence[int]) -> Tuple[int, ...]:
    """Order letter indices by descending count, ties by ascending index."""
    return tuple(sorted(range(len(letter_counts)), key=lambda idx: (-int(letter_counts[idx]), idx)))


def build_frequency_rank(corpus: str) -> Tuple[int, ...]:
    """
    Rank all 26 letters by how often they occur in the corpus.

    Letters that never occur are kept, at the tail, in index order.
    """
    return rank_by_frequency(count_letters(corpus))


def same_group_cost(letters: Iterable[int], weights: np.ndarray) -> int:
    """
    Sum the weight of every unordered pair {i, j} (i == j included) in a group.

    Args:
        letters: Letter indices sharing a hand or a finger
        weights: Weight graph

    Returns:
        Total pair weight
    """
    group = list(letters)
    total = 0
    for i in range(len(group)):
        row = weights[group[i]]
        for j in range(i, len(group)):
            total += int(row[group[j]])
    return total


@dataclass(frozen=True)
class AdjacencyModel:
    """Statistical model consumed by both optimizers."""

    weights: np.ndarray
    """Symmetric letter-pair adjacency counts"""

    letter_counts: np.ndarray
    """Raw occurrence count per letter"""

    frequency_rank: Tuple[int, ...]
    """All letters by descending frequency"""

    corpus_length: int = 0

    @property
    def total_weight(self) -> int:
        """Number of adjacent pairs in the corpus (upper triangle incl. diagonal)."""
        return int(np.triu(self.weights).sum())


def build_adjacency_model(corpus: str) -> AdjacencyModel:
    """
    Build the weight graph, letter counts and frequency rank for a corpus.

    Raises:
        CorpusError: If the corpus has fewer than 2 letters
    """
    weights = build_weight_graph(corpus)
    letter_counts = count_letters(corpus)
    model = AdjacencyModel(
        weights=weights,
        letter_counts=letter_counts,
        frequency_rank=rank_by_frequency(letter_counts),
        corpus_length=len(corpus),
    )
    logger.debug("Adjacency model: %d letters, %d adjacent pairs", model.corpus_length, model.total_weight)
    return model
