"""
core - Ядро Peg Solitaire

Битовая доска, таблица ходов и состояние партии.
"""

from .bitboard import (
    BitBoard, VALID_CELLS, CELL_INDEX, CELL_COUNT, CENTER_INDEX,
    FULL_MASK, ENGLISH_START, ENGLISH_GOAL,
    popcount, has_peg, set_peg, clear_peg, is_goal, is_valid_position,
)
from .moves import (
    Move, MOVES, MOVE_COUNT, REQUIRED_MASKS, EMPTY_MASKS, TOGGLE_MASKS,
    legal_moves, apply_move_index, move_index, targets_from,
)
from .game import Game
from .utils import PEG, HOLE, cell_to_notation, notation_to_cell, format_move

__all__ = [
    'BitBoard', 'Game', 'Move',
    'VALID_CELLS', 'CELL_INDEX', 'CELL_COUNT', 'CENTER_INDEX',
    'FULL_MASK', 'ENGLISH_START', 'ENGLISH_GOAL',
    'popcount', 'has_peg', 'set_peg', 'clear_peg', 'is_goal', 'is_valid_position',
    'MOVES', 'MOVE_COUNT', 'REQUIRED_MASKS', 'EMPTY_MASKS', 'TOGGLE_MASKS',
    'legal_moves', 'apply_move_index', 'move_index', 'targets_from',
    'PEG', 'HOLE', 'cell_to_notation', 'notation_to_cell', 'format_move',
]
