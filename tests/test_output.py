import io

import pandas as pd
import pytest

from layoutgen.adjacency import build_adjacency_model
from layoutgen.base_scorer import ScoreResult
from layoutgen.data_utils import (
    LETTER_FREQUENCIES_FILE, LETTER_PAIR_WEIGHTS_FILE, letter_frequency_table,
    letter_pair_weight_table, load_layout_file, save_model_tables,
)
from layoutgen.geometry import letter_index
from layoutgen.hand_assignment import split_from_mask
from layoutgen.layout import HandLayout, assemble_layout
from layoutgen.output_utils import (
    SEPARATOR, format_csv_output, format_detailed_output, format_hand_layout,
    format_score_only_output, format_split, print_layout, print_results, save_layout_file,
)


@pytest.fixture
def result():
    return ScoreResult(
        primary_score=7,
        components={'finger_cost': 7, 'same_hand_cost': 12},
        scorer_name='layout_evaluator',
        layout_string='ab | cd',
        metadata={'corpus_length': 40},
        detailed_breakdown={'finger_costs': {'L1': 3, 'R1': 4}},
        validation_info={'unplaced_corpus_letters': '', 'skipped_pairs': 0},
    )


def test_format_split():
    text = format_split(split_from_mask(0b0011, 4, 7))
    assert text.splitlines() == [
        "=== Splitting Keys ===",
        "Hand 0 (Left) letters: c d",
        "Hand 1 (Right) letters: a b",
        "Same-hand cost: 7",
    ]


def test_format_hand_layout():
    slots = [None] * 15
    slots[7] = letter_index('e')
    text = format_hand_layout(HandLayout(tuple(slots)), 1, cost=5)
    assert text.splitlines() == [
        "--- Hand 1 (Optimal Layout) ---",
        "_ _ _ _ _",
        "_ _ e _ _",
        "_ _ _ _ _",
        "Finger cost: 5",
        SEPARATOR,
    ]


def test_print_layout_both_hands():
    layout = assemble_layout(HandLayout.empty(), HandLayout.empty())
    out = io.StringIO()
    print_layout(layout, costs=(1, 2), file=out)
    text = out.getvalue()
    assert text.startswith("=== Placing Keys ===")
    assert "--- Hand 0 (Optimal Layout) ---" in text
    assert "Finger cost: 2" in text


def test_csv_output(result):
    lines = format_csv_output(result).splitlines()
    assert lines[0].startswith("primary_score,finger_cost,same_hand_cost,scorer_name,layout")
    assert lines[1].startswith("7,7,12,layout_evaluator,ab|cd")


def test_csv_without_headers(result):
    text = format_csv_output(result, {'delimiter': ';', 'include_headers': False})
    assert text.splitlines()[0].startswith("7;7;12")


def test_score_only_output(result):
    assert format_score_only_output(result) == "7 7 12"
    assert format_score_only_output(result, {'separator': ','}) == "7,7,12"


def test_detailed_output(result):
    text = format_detailed_output(result, {'show_breakdown': True, 'show_validation_info': True})
    assert "=== Evaluation Results ===" in text
    assert "Target Document Length: 40 characters" in text
    assert "Breakdown:" in text
    assert "L1: 3" in text
    assert "unplaced corpus letters: (none)" in text


def test_detailed_output_hides_breakdown_by_default(result):
    assert "Breakdown:" not in format_detailed_output(result)


def test_print_results_unknown_format(result):
    with pytest.raises(ValueError):
        print_results(result, "xml")


def test_layout_file_roundtrip(tmp_path):
    slots0 = [None] * 15
    slots1 = [None] * 15
    slots0[8] = letter_index('t')
    slots1[3] = letter_index('o')
    layout = assemble_layout(HandLayout(tuple(slots0)), HandLayout(tuple(slots1)))

    path = tmp_path / "out" / "layout.txt"
    save_layout_file(layout, str(path))
    assert len(path.read_text().splitlines()) == 6
    assert load_layout_file(str(path)) == layout


def test_load_layout_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_layout_file(str(tmp_path / "nope.txt"))


def test_letter_frequency_table():
    table = letter_frequency_table(build_adjacency_model("abab"))
    assert list(table.columns) == ['letter', 'frequency']
    assert len(table) == 26
    assert table.iloc[0].tolist() == ['a', 2]
    assert table.iloc[2].tolist() == ['c', 0]


def test_letter_pair_weight_table():
    model = build_adjacency_model("ababz")
    table = letter_pair_weight_table(model)
    assert table['letter_pair'].tolist() == ['ab', 'bz']
    assert table['weight'].tolist() == [3, 1]
    assert len(letter_pair_weight_table(model, include_zero=True)) == 351


def test_save_model_tables(tmp_path):
    written = save_model_tables(build_adjacency_model("abab"), str(tmp_path))
    assert written['letter_frequencies'].endswith(LETTER_FREQUENCIES_FILE)

    pairs = pd.read_csv(tmp_path / LETTER_PAIR_WEIGHTS_FILE)
    assert list(pairs.columns) == ['letter_pair', 'weight']
    assert pairs.iloc[0].tolist() == ['ab', 3]


def test_load_layout_file_skips_undecodable_bytes(tmp_path):
    path = tmp_path / "layout.txt"
    path.write_bytes(b"\xff a" + b" _" * 29 + b"\n")
    layout = load_layout_file(str(path))
    # the stray byte is dropped, so 'a' is the first token of hand 0
    assert layout.hands[0].slots[0] == letter_index('a')
