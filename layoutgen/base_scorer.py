#!/usr/bin/env python3
"""
Scoring interface for fixed layouts.

A scorer takes a two-hand Layout and a corpus and returns a ScoreResult,
where every cost is "lower = better".
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Any, Optional
import time

from layoutgen.layout import Layout
from layoutgen.text_utils import validate_corpus


@dataclass
class ScoreResult:
    """Costs computed for one layout."""

    primary_score: float
    components: Dict[str, float] = field(default_factory=dict)
    scorer_name: str = ""

    layout_string: str = ""
    """Slots of hand 0, then hand 1"""

    metadata: Dict[str, Any] = field(default_factory=dict)
    detailed_breakdown: Dict[str, Any] = field(default_factory=dict)
    """Per-finger costs and other nested detail (detailed output only)"""

    validation_info: Dict[str, Any] = field(default_factory=dict)
    """Coverage of the corpus by the layout"""

    execution_time: float = 0.0


class BaseLayoutScorer(ABC):
    """
    Base class for layout scorers.

    Subclasses implement calculate_scores(); score_layout() wraps it with
    timing and fills in the layout string.
    """

    def __init__(self, layout: Layout, corpus: str, config: Optional[Dict[str, Any]] = None):
        """
        Args:
            layout: Layout to score
            corpus: Lowercase a-z text
            config: Tool configuration (merged 'evaluator' section)

        Raises:
            CorpusError: If the corpus is too short to score
        """
        validate_corpus(corpus)
        self.layout = layout
        self.corpus = corpus
        self.config = config or {}
        self.scorer_name = self.__class__.__name__.lower().replace('evaluator', '_evaluator')

    @abstractmethod
    def calculate_scores(self) -> ScoreResult:
        """Compute all cost components for the layout."""

    def score_layout(self) -> ScoreResult:
        start_time = time.time()
        result = self.calculate_scores()
        result.execution_time = time.time() - start_time
        result.scorer_name = self.scorer_name
        result.layout_string = self.get_layout_string()
        return result

    def get_layout_string(self) -> str:
        """Both hands' slots as 'hand0 | hand1'."""
        return ' | '.join(hand.to_string() for hand in self.layout.hands)
