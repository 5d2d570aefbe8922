"""
peg_io/visualizer.py

Визуализация доски и решений.
"""

from typing import List, Optional

from core.bitboard import CELL_INDEX, has_peg
from core.moves import Move
from core.utils import PEG, HOLE, format_move


def display_board(pos: int) -> str:
    """
    Форматирует доску с подписями строк и столбцов.

    Args:
        pos: позиция (33-битная маска)

    Returns:
        Строка для вывода
    """
    header = "   " + " ".join(chr(x + ord('A')) for x in range(7))
    lines = [header]

    for y in range(7):
        cells = []
        for x in range(7):
            i = CELL_INDEX.get((x, y))
            if i is None:
                cells.append(" ")
            else:
                cells.append(PEG if has_peg(pos, i) else HOLE)
        lines.append(f"{y + 1:<2} " + " ".join(cells).rstrip())

    return "\n".join(lines)


def format_solution(moves: Optional[List[Move]]) -> str:
    """
    Форматирует список ходов для вывода.

    Args:
        moves: список ходов (from, over, to) или None

    Returns:
        Форматированная строка
    """
    if moves is None:
        return "❌ Решение не найдено"
    if not moves:
        return "✅ Позиция уже решена"

    lines = [f"✅ Найдено решение за {len(moves)} ходов:"]
    for i, move in enumerate(moves, 1):
        lines.append(f"  {i:2}. {format_move(move)}")

    return "\n".join(lines)
