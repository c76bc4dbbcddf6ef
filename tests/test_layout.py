import pytest

from layoutgen.geometry import HAND_NAMES, finger_label, grid_slot, letter_index
from layoutgen.layout import (
    HandLayout, Layout, assemble_layout, format_hand_grid, format_layout_grid,
    hand_grid_rows, parse_layout_tokens,
)


def _hand(letters_by_slot):
    slots = [None] * 15
    for slot, char in letters_by_slot.items():
        slots[slot] = letter_index(char)
    return HandLayout(tuple(slots))


def test_grid_slot_mirrors_hand_one():
    assert grid_slot(0, 0, 0) == 0
    assert grid_slot(0, 2, 4) == 14
    assert grid_slot(1, 0, 0) == 4
    assert grid_slot(1, 0, 4) == 0
    assert grid_slot(1, 2, 0) == 14
    assert grid_slot(1, 1, 2) == 7


def test_format_hand_grid():
    hand = _hand({0: 'a', 4: 'b', 7: 'c'})
    assert format_hand_grid(hand, 0) == [
        "a _ _ _ b",
        "_ _ c _ _",
        "_ _ _ _ _",
    ]
    assert format_hand_grid(hand, 1) == [
        "b _ _ _ a",
        "_ _ c _ _",
        "_ _ _ _ _",
    ]


def test_hand_grid_rows_shape():
    rows = hand_grid_rows(HandLayout.empty(), 0)
    assert len(rows) == 3
    assert all(row == ['_'] * 5 for row in rows)


def test_format_then_parse_gives_same_layout():
    layout = assemble_layout(
        _hand({7: 'e', 8: 't', 2: 'a', 13: 'q'}),
        _hand({7: 'o', 8: 'n', 0: 'z', 11: 'x'}),
    )
    text = format_layout_grid(layout)
    assert len(text.splitlines()) == 6
    assert parse_layout_tokens(text.split()) == layout


def test_parse_is_lenient_with_bad_tokens():
    tokens = ['A', 'ab', '1', '_', 'b'] + ['_'] * 10 + ['c'] + ['?'] * 14
    layout = parse_layout_tokens(tokens)
    assert layout.hands[0].slots[4] == letter_index('b')
    assert layout.hands[0].letters() == [letter_index('b')]
    # first visual position of hand 1 is its slot 4
    assert layout.hands[1].slots[4] == letter_index('c')


def test_parse_ignores_repeated_letter():
    tokens = ['a', 'a'] + ['_'] * 13 + ['a'] + ['_'] * 14
    layout = parse_layout_tokens(tokens)
    assert layout.hands[0].slot_of() == {0: 0}
    assert layout.hands[1].letters() == []


def test_parse_leaves_trailing_tokens():
    tokens = iter(['_'] * 30 + ['extra'])
    parse_layout_tokens(tokens)
    assert list(tokens) == ['extra']


def test_parse_needs_thirty_tokens():
    with pytest.raises(ValueError):
        parse_layout_tokens(['_'] * 29)


def test_hand_layout_rejects_duplicate_letter():
    with pytest.raises(ValueError):
        HandLayout((0, 0) + (None,) * 13)


def test_layout_rejects_letter_on_both_hands():
    with pytest.raises(ValueError):
        Layout((_hand({0: 'a'}), _hand({3: 'a'})))


def test_finger_assignment_and_key_of():
    hand = _hand({7: 'e', 2: 'a', 8: 't'})
    fingers = hand.finger_assignment()
    assert fingers[1] == [letter_index('a'), letter_index('e')]
    assert fingers[0] == [letter_index('t')]
    assert fingers[2] == [] and fingers[3] == []

    layout = assemble_layout(HandLayout.empty(), hand)
    assert layout.key_of()[letter_index('t')] == (1, 8)
    assert hand.to_string() == "__a____et______"


def test_hand_names_and_finger_labels():
    assert HAND_NAMES == ('Left', 'Right')
    assert finger_label(0, 0) == 'L1'
    assert finger_label(1, 3) == 'R4'
    assert finger_label(1, None) == '--'
