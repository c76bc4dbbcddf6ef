#!/usr/bin/env python3
"""
Physical key geometry for the split layout generator.

Each hand has 15 key slots in a 3x5 block. Every slot is bound to one finger
and one cost group; the table is the same for both hands; the left/right
mirroring of hand 1 is applied only when the layout is drawn as a grid.

Finger ids:  0 = index, 1 = middle, 2 = ring, 3 = pinky
Cost groups: 0 (easiest) .. 4 (hardest)
"""

from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

NUM_LETTERS = 26
NUM_HAND_KEYS = 15
NUM_HANDS = 2

GRID_ROWS = 3
GRID_COLS = 5

ALPHABET = 'abcdefghijklmnopqrstuvwxyz'

HAND_NAMES = ('Left', 'Right')


class PhysicalKey(NamedTuple):
    """One key slot of a hand."""
    key_index: int
    finger_id: int
    cost_group: int


# Slot index is the sole key into this table, for both hands
HAND_GEOMETRY: Tuple[PhysicalKey, ...] = (
    PhysicalKey(key_index=0, finger_id=3, cost_group=4),
    PhysicalKey(key_index=1, finger_id=2, cost_group=2),
    PhysicalKey(key_index=2, finger_id=1, cost_group=1),
    PhysicalKey(key_index=3, finger_id=0, cost_group=2),
    PhysicalKey(key_index=4, finger_id=0, cost_group=3),
    PhysicalKey(key_index=5, finger_id=3, cost_group=1),
    PhysicalKey(key_index=6, finger_id=2, cost_group=1),
    PhysicalKey(key_index=7, finger_id=1, cost_group=0),
    PhysicalKey(key_index=8, finger_id=0, cost_group=0),
    PhysicalKey(key_index=9, finger_id=0, cost_group=2),
    PhysicalKey(key_index=10, finger_id=3, cost_group=3),
    PhysicalKey(key_index=11, finger_id=2, cost_group=3),
    PhysicalKey(key_index=12, finger_id=1, cost_group=2),
    PhysicalKey(key_index=13, finger_id=0, cost_group=2),
    PhysicalKey(key_index=14, finger_id=0, cost_group=4),
)


def letter_index(char: str) -> int:
    """
    Convert a lowercase letter to its index (0 = 'a').

    Raises:
        ValueError: If char is not a single letter a-z
    """
    if len(char) != 1 or char not in ALPHABET:
        raise ValueError(f"Not a letter a-z: '{char}'")
    return ord(char) - ord('a')


def letter_char(index: int) -> str:
    """Convert a letter index back to its lowercase character."""
    if not 0 <= index < NUM_LETTERS:
        raise ValueError(f"Letter index out of range: {index}")
    return ALPHABET[index]


def keys_by_cost_group(geometry: Sequence[PhysicalKey] = HAND_GEOMETRY) -> List[List[int]]:
    """
    Group key slot indices by cost group.

    Args:
        geometry: Physical key table

    Returns:
        List indexed by cost group, each a list of slot indices in table order
    """
    num_groups = max(key.cost_group for key in geometry) + 1
    groups: List[List[int]] = [[] for _ in range(num_groups)]
    for key in geometry:
        groups[key.cost_group].append(key.key_index)
    return groups


def finger_map(geometry: Sequence[PhysicalKey] = HAND_GEOMETRY) -> Dict[int, int]:
    """Map each slot index to its finger id."""
    return {key.key_index: key.finger_id for key in geometry}


def cost_group_map(geometry: Sequence[PhysicalKey] = HAND_GEOMETRY) -> Dict[int, int]:
    """Map each slot index to its cost group."""
    return {key.key_index: key.cost_group for key in geometry}


def grid_slot(hand: int, row: int, col: int) -> int:
    """
    Slot index shown at a grid position.

    Hand 0 is drawn row-major; hand 1 is mirrored left to right so that its
    index finger column sits next to hand 0's.
    """
    if hand == 0:
        return row * GRID_COLS + col
    return (row + 1) * GRID_COLS - col - 1


def finger_label(hand: int, finger_id: Optional[int]) -> str:
    """Short label such as 'L1' (left index) or 'R4' (right pinky)."""
    if finger_id is None:
        return '--'
    return f"{HAND_NAMES[hand][0]}{finger_id + 1}"
