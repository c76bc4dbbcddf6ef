#!/usr/bin/env python3
"""
Layout data types, assembly and grid conversion.

A HandLayout maps each of the 15 key slots of one hand to a letter index or
None (empty). A Layout pairs the two hands and is the final artifact of the
generator. Grid conversion follows the printed 3x5 form, where hand 1 is
mirrored left to right (see geometry.grid_slot).
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from layoutgen.geometry import (
    GRID_COLS, GRID_ROWS, HAND_GEOMETRY, NUM_HAND_KEYS, NUM_HANDS,
    PhysicalKey, grid_slot, letter_char, letter_index,
)

EMPTY_SYMBOL = '_'


@dataclass(frozen=True)
class HandLayout:
    """Slot-to-letter assignment for one hand."""

    slots: Tuple[Optional[int], ...]

    def __post_init__(self):
        placed = [letter for letter in self.slots if letter is not None]
        if len(placed) != len(set(placed)):
            raise ValueError(f"Letter placed on more than one slot: {self.to_string()}")

    @classmethod
    def empty(cls, num_keys: int = NUM_HAND_KEYS) -> 'HandLayout':
        return cls(slots=(None,) * num_keys)

    def letters(self) -> List[int]:
        """Placed letters in slot order."""
        return [letter for letter in self.slots if letter is not None]

    def empty_slots(self) -> List[int]:
        return [slot for slot, letter in enumerate(self.slots) if letter is None]

    def slot_of(self) -> Dict[int, int]:
        """Map each placed letter to its slot."""
        return {letter: slot for slot, letter in enumerate(self.slots) if letter is not None}

    def finger_assignment(self, geometry: Sequence[PhysicalKey] = HAND_GEOMETRY) -> Dict[int, List[int]]:
        """Letters on each finger, in slot order."""
        fingers: Dict[int, List[int]] = {key.finger_id: [] for key in geometry}
        for key in geometry:
            letter = self.slots[key.key_index]
            if letter is not None:
                fingers[key.finger_id].append(letter)
        return fingers

    def to_string(self) -> str:
        """Slots as a compact string, e.g. 'ab_c...'."""
        return ''.join(EMPTY_SYMBOL if letter is None else letter_char(letter) for letter in self.slots)


@dataclass(frozen=True)
class Layout:
    """Both hands of a generated layout."""

    hands: Tuple[HandLayout, HandLayout]

    def __post_init__(self):
        if len(self.hands) != NUM_HANDS:
            raise ValueError(f"Layout needs {NUM_HANDS} hands, got {len(self.hands)}")
        overlap = set(self.hands[0].letters()) & set(self.hands[1].letters())
        if overlap:
            raise ValueError(f"Letters placed on both hands: {sorted(letter_char(l) for l in overlap)}")

    def key_of(self) -> Dict[int, Tuple[int, int]]:
        """Map each placed letter to (hand, slot)."""
        positions = {}
        for hand, hand_layout in enumerate(self.hands):
            for letter, slot in hand_layout.slot_of().items():
                positions[letter] = (hand, slot)
        return positions


def assemble_layout(hand0: HandLayout, hand1: HandLayout) -> Layout:
    """Pair the two per-hand layouts into the final Layout."""
    return Layout(hands=(hand0, hand1))


def hand_grid_rows(hand_layout: HandLayout, hand: int) -> List[List[str]]:
    """Symbols of one hand as 3 rows of 5, in printed (visual) order."""
    rows = []
    for row in range(GRID_ROWS):
        symbols = []
        for col in range(GRID_COLS):
            letter = hand_layout.slots[grid_slot(hand, row, col)]
            symbols.append(EMPTY_SYMBOL if letter is None else letter_char(letter))
        rows.append(symbols)
    return rows


def format_hand_grid(hand_layout: HandLayout, hand: int) -> List[str]:
    """One hand as 3 lines of space-separated symbols."""
    return [' '.join(symbols) for symbols in hand_grid_rows(hand_layout, hand)]


def format_layout_grid(layout: Layout) -> str:
    """Both hands as 6 grid lines (hand 0 first), readable by parse_layout_tokens."""
    lines = []
    for hand, hand_layout in enumerate(layout.hands):
        lines.extend(format_hand_grid(hand_layout, hand))
    return '\n'.join(lines)


def _token_letter(token: str) -> Optional[int]:
    if len(token) == 1 and 'a' <= token <= 'z':
        return letter_index(token)
    return None


def parse_layout_tokens(tokens: Iterable[str]) -> Layout:
    """
    Read a layout from grid tokens in printed order (15 for hand 0, then 15
    for hand 1).

    A single lowercase letter binds that letter to the slot; the empty symbol
    or any other token leaves the slot empty. A letter already placed earlier
    is ignored the same way.

    Raises:
        ValueError: If fewer than 30 tokens are available
    """
    token_iter = iter(tokens)
    slots = [[None] * NUM_HAND_KEYS for _ in range(NUM_HANDS)]
    seen = set()
    for hand in range(NUM_HANDS):
        for visual_index in range(NUM_HAND_KEYS):
            try:
                token = next(token_iter)
            except StopIteration:
                raise ValueError(
                    f"Layout input ended early: hand {hand} has {visual_index} of {NUM_HAND_KEYS} keys"
                ) from None
            letter = _token_letter(token)
            if letter is None or letter in seen:
                continue
            row, col = divmod(visual_index, GRID_COLS)
            slots[hand][grid_slot(hand, row, col)] = letter
            seen.add(letter)

    return assemble_layout(HandLayout(tuple(slots[0])), HandLayout(tuple(slots[1])))
