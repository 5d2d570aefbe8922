"""
core/utils.py

Общие утилиты и константы для Peg Solitaire.
"""

from .bitboard import CELL_INDEX, VALID_CELLS

# Символы для отображения
PEG = '●'       # Колышек
HOLE = '○'      # Пустое место (можно прыгнуть)


def cell_to_notation(i: int) -> str:
    """Индекс клетки → шахматная нотация (C1, D4, ...)."""
    x, y = VALID_CELLS[i]
    return f"{chr(x + ord('A'))}{y + 1}"


def notation_to_cell(notation: str) -> int:
    """Шахматная нотация → индекс клетки."""
    text = notation.strip().upper()
    if len(text) != 2 or not ('A' <= text[0] <= 'G') or not ('1' <= text[1] <= '7'):
        raise ValueError(f"Некорректная клетка: {notation!r}")
    x = ord(text[0]) - ord('A')
    y = int(text[1]) - 1
    if (x, y) not in CELL_INDEX:
        raise ValueError(f"Клетка вне доски: {notation!r}")
    return CELL_INDEX[(x, y)]


def format_move(move) -> str:
    """Форматирует ход для вывода: 'D2 → D4'."""
    from_pos, _, to_pos = move
    return f"{cell_to_notation(from_pos)} → {cell_to_notation(to_pos)}"
