#!/usr/bin/env python3
"""
Output utilities for the layout generator and evaluator.

Common functions for printing layouts and formatting scoring results.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Sequence, TextIO
import sys

from layoutgen.base_scorer import ScoreResult
from layoutgen.geometry import HAND_NAMES, letter_char
from layoutgen.hand_assignment import HandSplit
from layoutgen.layout import HandLayout, Layout, format_hand_grid, format_layout_grid

SEPARATOR = "-" * 49


def format_split(split: HandSplit) -> str:
    """Letters of each hand, e.g. 'Hand 0 (Left) letters: a c e ...'."""
    lines = ["=== Splitting Keys ==="]
    for hand, letters in enumerate(split.hand_letters):
        letters_str = ' '.join(letter_char(letter) for letter in letters)
        lines.append(f"Hand {hand} ({HAND_NAMES[hand]}) letters: {letters_str}")
    lines.append(f"Same-hand cost: {split.cost}")
    return '\n'.join(lines)


def format_hand_layout(hand_layout: HandLayout, hand: int, cost: Optional[int] = None) -> str:
    """One hand as a titled 3x5 grid."""
    lines = [f"--- Hand {hand} (Optimal Layout) ---"]
    lines.extend(format_hand_grid(hand_layout, hand))
    if cost is not None:
        lines.append(f"Finger cost: {cost}")
    lines.append(SEPARATOR)
    return '\n'.join(lines)


def print_layout(layout: Layout, costs: Optional[Sequence[int]] = None,
                 file: Optional[TextIO] = None) -> None:
    """
    Print both hands of a layout.

    Args:
        layout: Layout to print
        costs: Optional per-hand finger costs
        file: File object to write to (defaults to stdout)
    """
    if file is None:
        file = sys.stdout

    print("=== Placing Keys ===", file=file)
    for hand, hand_layout in enumerate(layout.hands):
        cost = costs[hand] if costs is not None else None
        print(format_hand_layout(hand_layout, hand, cost), file=file)


def save_layout_file(layout: Layout, filepath: str) -> None:
    """Write the bare grid rows of a layout, readable by the evaluator."""
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(format_layout_grid(layout) + '\n')


def format_csv_output(result: ScoreResult,
                      config: Optional[Dict[str, Any]] = None,
                      include_metadata: bool = True) -> str:
    """
    Format scoring results as CSV output.

    Args:
        result: ScoreResult object to format
        config: Output format configuration
        include_metadata: Whether to include metadata fields

    Returns:
        CSV formatted string
    """
    if config is None:
        config = {}

    delimiter = config.get('delimiter', ',')
    include_headers = config.get('include_headers', True)

    headers = ['primary_score']
    values = [str(result.primary_score)]

    for component in sorted(result.components.keys()):
        headers.append(component)
        values.append(str(result.components[component]))

    if include_metadata:
        headers.extend(['scorer_name', 'layout', 'execution_time'])
        values.extend([result.scorer_name, result.layout_string.replace(' ', ''), f"{result.execution_time:.3f}"])

        for key in sorted(result.validation_info.keys()):
            value = result.validation_info[key]
            if isinstance(value, (str, int, float, bool)):
                headers.append(f'validation_{key}')
                values.append(str(value))

    lines = []
    if include_headers:
        lines.append(delimiter.join(headers))
    lines.append(delimiter.join(values))

    return '\n'.join(lines)


def format_score_only_output(result: ScoreResult,
                             config: Optional[Dict[str, Any]] = None,
                             include_components: bool = True) -> str:
    """
    Format scoring results as score-only output (compact format).

    Returns:
        Separated scores string: primary score, then components in name order
    """
    if config is None:
        config = {}

    separator = config.get('separator', ' ')

    scores = [str(result.primary_score)]

    if include_components:
        for component in sorted(result.components.keys()):
            scores.append(str(result.components[component]))

    return separator.join(scores)


def format_detailed_output(result: ScoreResult,
                           config: Optional[Dict[str, Any]] = None) -> str:
    """
    Format scoring results as detailed human-readable output.

    Args:
        result: ScoreResult object to format
        config: Output format configuration

    Returns:
        Formatted detailed output string
    """
    if config is None:
        config = {}

    show_breakdown = config.get('show_breakdown', False)
    show_validation = config.get('show_validation_info', False)

    lines = ["=== Evaluation Results ==="]

    corpus_length = result.metadata.get('corpus_length')
    if corpus_length is not None:
        lines.append(f"Target Document Length: {corpus_length} characters")

    if result.components:
        lines.append("Scores:")
        for component, score in result.components.items():
            component_name = component.replace('_', ' ').capitalize()
            lines.append(f"  {component_name:<28}: {score}")

    if result.layout_string:
        lines.append("")
        lines.append(f"Layout: {result.layout_string}")

    if show_breakdown and result.detailed_breakdown:
        lines.append("")
        lines.append("Breakdown:")
        lines.extend(_format_detailed_breakdown(result.detailed_breakdown))

    if show_validation and result.validation_info:
        lines.append("")
        lines.append("Validation:")
        for key, value in result.validation_info.items():
            if value == '':
                value = '(none)'
            lines.append(f"  {key.replace('_', ' ')}: {value}")

    if result.execution_time > 0:
        lines.append("")
        lines.append(f"Execution time: {result.execution_time:.3f}s")

    return '\n'.join(lines)


def _format_detailed_breakdown(breakdown: Dict[str, Any], indent: int = 2) -> list:
    lines = []
    pad = ' ' * indent
    for key, value in breakdown.items():
        if isinstance(value, dict):
            lines.append(f"{pad}{key.replace('_', ' ')}:")
            lines.extend(_format_detailed_breakdown(value, indent + 2))
        else:
            lines.append(f"{pad}{key}: {value}")
    return lines


def print_results(result: ScoreResult,
                  output_format: str = "detailed",
                  config: Optional[Dict[str, Any]] = None,
                  file=None) -> None:
    """
    Print scoring results in the specified format.

    Args:
        result: ScoreResult object to print
        output_format: Format type ('detailed', 'csv', 'score_only')
        config: Output format configuration
        file: File object to write to (defaults to stdout)
    """
    if file is None:
        file = sys.stdout

    if output_format == "csv":
        output = format_csv_output(result, config)
    elif output_format == "score_only":
        output = format_score_only_output(result, config)
    elif output_format == "detailed":
        output = format_detailed_output(result, config)
    else:
        raise ValueError(f"Unknown output format: {output_format}")

    print(output, file=file)
