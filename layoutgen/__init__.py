# layoutgen/__init__.py
"""
Split Keyboard Layout Generator

Derives a two-handed, 15-key-per-hand keyboard layout from a text corpus and
evaluates fixed layouts with the same cost model.
"""

__version__ = "1.0.0"

# Import main classes for easy access
from .adjacency import AdjacencyModel, build_adjacency_model
from .base_scorer import BaseLayoutScorer, ScoreResult
from .config_loader import ConfigLoader, load_tool_config
from .evaluator import LayoutEvaluator
from .generator import GenerationResult, generate_layout
from .hand_assignment import HandSplit, assign_hands
from .key_placement import KeyPlacer, place_keys_on_hands
from .layout import HandLayout, Layout, assemble_layout
from .text_utils import CorpusError

__all__ = [
    'AdjacencyModel',
    'BaseLayoutScorer',
    'ConfigLoader',
    'CorpusError',
    'GenerationResult',
    'HandLayout',
    'HandSplit',
    'KeyPlacer',
    'Layout',
    'LayoutEvaluator',
    'ScoreResult',
    'assemble_layout',
    'assign_hands',
    'build_adjacency_model',
    'generate_layout',
    'load_tool_config',
    'place_keys_on_hands',
]
