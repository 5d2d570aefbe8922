"""
core/bitboard.py

Битовое представление английской доски (33 клетки) в одном int.
Клетки пронумерованы плотно: 0..32, построчно внутри креста.
"""

from typing import Dict, Iterable, List, Tuple


# Клетки креста в порядке (row-major): (x, y), x — столбец, y — строка
VALID_CELLS: List[Tuple[int, int]] = [
    (x, y)
    for y in range(7)
    for x in range(7)
    if 2 <= x <= 4 or 2 <= y <= 4
]

CELL_INDEX: Dict[Tuple[int, int], int] = {cell: i for i, cell in enumerate(VALID_CELLS)}

CELL_COUNT = len(VALID_CELLS)       # 33
CENTER_INDEX = CELL_INDEX[(3, 3)]   # 16

FULL_MASK = (1 << CELL_COUNT) - 1
ENGLISH_START = FULL_MASK ^ (1 << CENTER_INDEX)
ENGLISH_GOAL = 1 << CENTER_INDEX


def popcount(pos: int) -> int:
    return pos.bit_count()


def has_peg(pos: int, i: int) -> bool:
    return bool((pos >> i) & 1)


def set_peg(pos: int, i: int) -> int:
    return pos | (1 << i)


def clear_peg(pos: int, i: int) -> int:
    return pos & ~(1 << i)


def is_goal(pos: int) -> bool:
    """Один колышек, и он в центре."""
    return pos == ENGLISH_GOAL


def is_valid_position(pos: int) -> bool:
    """Позиция — неотрицательный int без битов вне 33 клеток."""
    return isinstance(pos, int) and not isinstance(pos, bool) and 0 <= pos <= FULL_MASK


def coords_to_cell(x: int, y: int) -> int:
    """(x, y) → индекс клетки. KeyError для клеток вне креста."""
    return CELL_INDEX[(x, y)]


class BitBoard:
    """Иммутабельная обёртка над позицией для игры, вывода и проверки решений."""
    __slots__ = ('pegs', '_count')

    def __init__(self, pegs: int):
        self.pegs = pegs
        self._count = popcount(pegs)

    @classmethod
    def english_start(cls) -> 'BitBoard':
        """Стандартная начальная позиция: всё, кроме центра."""
        return cls(ENGLISH_START)

    @classmethod
    def english_goal(cls) -> 'BitBoard':
        """Целевое состояние (1 колышек в центре)."""
        return cls(ENGLISH_GOAL)

    @classmethod
    def from_cells(cls, cells: Iterable[Tuple[int, int]]) -> 'BitBoard':
        """Создаёт доску из списка координат (x, y)."""
        pegs = 0
        for x, y in cells:
            pegs |= 1 << coords_to_cell(x, y)
        return cls(pegs)

    def peg_count(self) -> int:
        return self._count

    def has_peg(self, i: int) -> bool:
        return has_peg(self.pegs, i)

    def get_moves(self) -> List[Tuple[int, int, int]]:
        """Допустимые ходы (from, over, to) в порядке таблицы ходов."""
        from .moves import MOVES, legal_moves
        return [MOVES[m] for m in legal_moves(self.pegs)]

    def apply_move(self, from_pos: int, over: int, to_pos: int) -> 'BitBoard':
        """Применяет ход — один XOR."""
        return BitBoard(self.pegs ^ (1 << from_pos) ^ (1 << over) ^ (1 << to_pos))

    def is_goal(self) -> bool:
        return is_goal(self.pegs)

    def is_dead(self) -> bool:
        """Ходов нет, а цель не достигнута."""
        from .moves import legal_moves
        return not self.is_goal() and not legal_moves(self.pegs)

    def to_string(self) -> str:
        """Текстовое представление доски 7x7 (крест)."""
        lines = []
        for y in range(7):
            row = ""
            for x in range(7):
                i = CELL_INDEX.get((x, y))
                if i is None:
                    row += "  "
                elif self.has_peg(i):
                    row += "● "
                else:
                    row += "○ "
            lines.append(row.rstrip())
        return "\n".join(lines)

    def __hash__(self) -> int:
        return hash(self.pegs)

    def __eq__(self, other) -> bool:
        return isinstance(other, BitBoard) and self.pegs == other.pegs

    def __repr__(self) -> str:
        return f"BitBoard({self._count} pegs)"
