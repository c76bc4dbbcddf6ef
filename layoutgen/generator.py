#!/usr/bin/env python3
"""
Layout generation pipeline.

Adjacency model -> hand assignment -> key placement (per hand) -> assembly.
Each stage consumes the previous stage's output without modifying it.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, Tuple

from layoutgen.adjacency import AdjacencyModel, build_adjacency_model
from layoutgen.hand_assignment import DEFAULT_BATCH_SIZE, HandSplit, assign_hands
from layoutgen.key_placement import PlacementResult, place_keys_on_hands
from layoutgen.layout import Layout, assemble_layout
from layoutgen.text_utils import validate_corpus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """Everything produced by one generator run."""

    layout: Layout
    split: HandSplit
    placements: Tuple[PlacementResult, PlacementResult]
    model: AdjacencyModel
    timings: Dict[str, float] = field(default_factory=dict)
    """Seconds spent per stage"""

    @property
    def finger_costs(self) -> Tuple[int, int]:
        return self.placements[0].cost, self.placements[1].cost

    @property
    def total_finger_cost(self) -> int:
        return sum(self.finger_costs)


def generate_layout(corpus: str, workers: int = 1,
                    batch_size: int = DEFAULT_BATCH_SIZE) -> GenerationResult:
    """
    Derive the optimal two-hand layout for a corpus.

    Args:
        corpus: Lowercase a-z text
        workers: Worker processes for the search stages
        batch_size: Hand splits scored per numpy batch

    Returns:
        GenerationResult with the layout and per-stage results

    Raises:
        CorpusError: If the corpus is empty or shorter than 2 letters
    """
    validate_corpus(corpus)
    timings = {}

    start = time.time()
    model = build_adjacency_model(corpus)
    timings['adjacency_model'] = time.time() - start

    start = time.time()
    split = assign_hands(model.weights, workers=workers, batch_size=batch_size)
    timings['hand_assignment'] = time.time() - start

    start = time.time()
    placements = place_keys_on_hands(split, model, workers=workers)
    timings['key_placement'] = time.time() - start

    layout = assemble_layout(placements[0].hand_layout, placements[1].hand_layout)
    logger.info("Layout generated in %.2fs", sum(timings.values()))

    return GenerationResult(
        layout=layout,
        split=split,
        placements=placements,
        model=model,
        timings=timings,
    )
