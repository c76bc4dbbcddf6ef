#!/usr/bin/env python3
"""
Data utilities for the layout generator.

Exports the adjacency model as CSV tables in the letter / letter_pair
formats used by frequency data files, and reads layout files.
"""

import logging
from pathlib import Path
from typing import Dict

import numpy as np
import pandas as pd

from layoutgen.adjacency import AdjacencyModel
from layoutgen.geometry import ALPHABET
from layoutgen.layout import Layout, parse_layout_tokens
from layoutgen.text_utils import iter_tokens

logger = logging.getLogger(__name__)

LETTER_FREQUENCIES_FILE = 'letter_frequencies.csv'
LETTER_PAIR_WEIGHTS_FILE = 'letter_pair_weights.csv'


def letter_frequency_table(model: AdjacencyModel) -> pd.DataFrame:
    """Letters in frequency-rank order with raw counts."""
    return pd.DataFrame({
        'letter': [ALPHABET[letter] for letter in model.frequency_rank],
        'frequency': [int(model.letter_counts[letter]) for letter in model.frequency_rank],
    })


def letter_pair_weight_table(model: AdjacencyModel, include_zero: bool = False) -> pd.DataFrame:
    """
    Unordered letter pairs (i <= j) with their adjacency weight, heaviest first.

    Args:
        model: Adjacency model
        include_zero: If True, keep pairs that never occur
    """
    rows, cols = np.triu_indices(model.weights.shape[0])
    df = pd.DataFrame({
        'letter_pair': [ALPHABET[i] + ALPHABET[j] for i, j in zip(rows, cols)],
        'weight': model.weights[rows, cols].astype(np.int64),
    })
    if not include_zero:
        df = df[df['weight'] > 0]
    # Stable sort keeps alphabetical order among equal weights
    return df.sort_values('weight', ascending=False, kind='mergesort').reset_index(drop=True)


def save_model_tables(model: AdjacencyModel, output_dir: str) -> Dict[str, str]:
    """
    Write letter frequencies and letter-pair weights as CSV files.

    Returns:
        Mapping of table name to written file path
    """
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    written = {}
    for name, filename, table in (
        ('letter_frequencies', LETTER_FREQUENCIES_FILE, letter_frequency_table(model)),
        ('letter_pair_weights', LETTER_PAIR_WEIGHTS_FILE, letter_pair_weight_table(model)),
    ):
        filepath = out_dir / filename
        table.to_csv(filepath, index=False)
        written[name] = str(filepath)
        logger.info("Saved %d rows to %s", len(table), filepath)

    return written


def load_layout_file(filepath: str) -> Layout:
    """
    Read a layout saved as grid rows (15 tokens per hand).

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file holds fewer than 30 tokens
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Layout file not found: {filepath}")

    with open(path, 'r', encoding='utf-8', errors='ignore') as f:
        return parse_layout_tokens(iter_tokens(f))
