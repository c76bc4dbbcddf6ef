#!/usr/bin/env python3
"""
Layout evaluator.

Recomputes, for a fixed layout and a corpus, the costs the generator
optimizes plus raw corpus statistics:

  - same_hand_cost:    weight-graph weight of letter pairs on the same hand
  - finger_cost:       weight-graph weight of letter pairs on the same finger
                       (of the same hand)
  - same_hand_count:   consecutive corpus letters typed by one hand
  - same_finger_count: consecutive corpus letters typed by one finger
  - press_difficulty:  sum of the cost group of every typed corpus letter

Letters that the layout does not place are left out of every metric.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from layoutgen.adjacency import build_weight_graph, same_group_cost
from layoutgen.base_scorer import BaseLayoutScorer, ScoreResult
from layoutgen.geometry import (
    ALPHABET, HAND_GEOMETRY, NUM_HANDS, cost_group_map, finger_label, finger_map,
)
from layoutgen.layout import Layout
from layoutgen.text_utils import corpus_to_indices

logger = logging.getLogger(__name__)


class LayoutEvaluator(BaseLayoutScorer):
    """Scores a fixed layout with the generator's cost definitions."""

    def __init__(self, layout: Layout, corpus: str, config: Optional[Dict[str, Any]] = None):
        super().__init__(layout, corpus, config)

        self.weights = build_weight_graph(self.corpus)
        self.key_fingers = finger_map(HAND_GEOMETRY)
        self.key_costs = cost_group_map(HAND_GEOMETRY)

        # letter -> (hand, finger, cost group)
        self.char_map: Dict[int, Tuple[int, int, int]] = {}
        for letter, (hand, slot) in self.layout.key_of().items():
            self.char_map[letter] = (hand, self.key_fingers[slot], self.key_costs[slot])

    def unplaced_letters(self) -> List[str]:
        """Corpus letters the layout has no key for."""
        used = set(corpus_to_indices(self.corpus))
        return sorted(ALPHABET[letter] for letter in used if letter not in self.char_map)

    def same_hand_cost(self) -> int:
        return sum(same_group_cost(hand.letters(), self.weights) for hand in self.layout.hands)

    def finger_groups(self) -> Dict[Tuple[int, int], List[int]]:
        """Letters per (hand, finger)."""
        groups: Dict[Tuple[int, int], List[int]] = {}
        for hand, hand_layout in enumerate(self.layout.hands):
            for finger, letters in hand_layout.finger_assignment(HAND_GEOMETRY).items():
                groups[(hand, finger)] = letters
        return groups

    def finger_cost(self) -> Tuple[int, Dict[str, int]]:
        """Total same-finger cost and the cost per finger label."""
        per_finger = {}
        for (hand, finger), letters in sorted(self.finger_groups().items()):
            per_finger[finger_label(hand, finger)] = same_group_cost(letters, self.weights)
        return sum(per_finger.values()), per_finger

    def count_consecutive(self) -> Dict[str, int]:
        """Walk the corpus and count same-hand / same-finger transitions and press difficulty."""
        indices = corpus_to_indices(self.corpus)
        same_hand = 0
        same_finger = 0
        skipped = 0
        for first, second in zip(indices, indices[1:]):
            if first not in self.char_map or second not in self.char_map:
                skipped += 1
                continue
            hand1, finger1, _ = self.char_map[first]
            hand2, finger2, _ = self.char_map[second]
            if hand1 == hand2:
                same_hand += 1
                if finger1 == finger2:
                    same_finger += 1

        press_difficulty = sum(self.char_map[letter][2] for letter in indices if letter in self.char_map)
        return {
            'same_hand_count': same_hand,
            'same_finger_count': same_finger,
            'press_difficulty': press_difficulty,
            'skipped_pairs': skipped,
        }

    def calculate_scores(self) -> ScoreResult:
        finger_total, per_finger = self.finger_cost()
        counts = self.count_consecutive()
        unplaced = self.unplaced_letters()

        if unplaced:
            logger.warning("Layout has no key for corpus letters: %s", ''.join(unplaced))

        components = {
            'same_hand_cost': self.same_hand_cost(),
            'finger_cost': finger_total,
            'same_hand_count': counts['same_hand_count'],
            'same_finger_count': counts['same_finger_count'],
            'press_difficulty': counts['press_difficulty'],
        }

        return ScoreResult(
            primary_score=finger_total,
            components=components,
            metadata={
                'corpus_length': len(self.corpus),
                'scoring_method': 'weight_graph_and_corpus_walk',
                'description': 'Same-hand and same-finger adjacency costs with raw consecutive counts',
            },
            validation_info={
                'placed_letters': len(self.char_map),
                'unplaced_corpus_letters': ''.join(unplaced),
                'skipped_pairs': counts['skipped_pairs'],
                'hands': NUM_HANDS,
            },
            detailed_breakdown={
                'finger_costs': per_finger,
            },
        )
