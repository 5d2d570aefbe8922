"""
core/moves.py

Таблица ходов английской доски и генератор допустимых ходов.

Таблица строится один раз при импорте: по клеткам в порядке индексов,
для каждой клетки — направления (+2, 0), (-2, 0), (0, +2), (0, -2).
Порядок таблицы определяет, какое решение найдёт поиск первым,
и какой ход предложит советник.
"""

from typing import Dict, List, Tuple

from .bitboard import CELL_INDEX, VALID_CELLS

Move = Tuple[int, int, int]

# Смещения (dx, dy): вправо, влево, вниз, вверх
JUMP_DIRECTIONS: List[Tuple[int, int]] = [(2, 0), (-2, 0), (0, 2), (0, -2)]


def _build_moves() -> List[Move]:
    moves: List[Move] = []
    for x, y in VALID_CELLS:
        for dx, dy in JUMP_DIRECTIONS:
            over = CELL_INDEX.get((x + dx // 2, y + dy // 2))
            to = CELL_INDEX.get((x + dx, y + dy))
            if over is not None and to is not None:
                moves.append((CELL_INDEX[(x, y)], over, to))
    return moves


MOVES: Tuple[Move, ...] = tuple(_build_moves())
MOVE_COUNT = len(MOVES)  # 76

# Маски: from и over должны быть заняты, to — пуст; ход = XOR трёх битов
REQUIRED_MASKS: Tuple[int, ...] = tuple((1 << a) | (1 << b) for a, b, _ in MOVES)
EMPTY_MASKS: Tuple[int, ...] = tuple(1 << c for _, _, c in MOVES)
TOGGLE_MASKS: Tuple[int, ...] = tuple((1 << a) ^ (1 << b) ^ (1 << c) for a, b, c in MOVES)

_MASK_TABLE: Tuple[Tuple[int, int, int], ...] = tuple(
    zip(range(MOVE_COUNT), REQUIRED_MASKS, EMPTY_MASKS)
)
_MOVE_INDEX: Dict[Move, int] = {move: m for m, move in enumerate(MOVES)}


def legal_moves(pos: int) -> List[int]:
    """Индексы допустимых ходов в порядке таблицы."""
    return [m for m, req, empty in _MASK_TABLE if pos & req == req and not pos & empty]


def apply_move_index(pos: int, m: int) -> int:
    return pos ^ TOGGLE_MASKS[m]


def move_index(move: Move) -> int:
    """Индекс хода (from, over, to) в таблице. KeyError, если такого хода нет."""
    return _MOVE_INDEX[tuple(move)]


def targets_from(pos: int, cell: int) -> List[int]:
    """Клетки, куда может прыгнуть колышек из `cell`."""
    return [MOVES[m][2] for m in legal_moves(pos) if MOVES[m][0] == cell]
