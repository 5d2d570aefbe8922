"""
peg_io/parser.py

Парсинг входных данных: кодировка позиции для сообщений и текстовый формат.
"""

import re

from core.bitboard import CELL_COUNT, FULL_MASK
from core.utils import notation_to_cell
from utils.error_handling import InvalidPositionError

# Ширина с запасом: FULL_MASK — 10 десятичных или 9 hex цифр
_DECIMAL_RE = re.compile(r'^[0-9]{1,20}$')
_HEX_RE = re.compile(r'^0[xX][0-9a-fA-F]{1,16}$')


def encode_position(pos: int, as_hex: bool = False) -> str:
    """Позиция → строка: десятичная или '0x...'."""
    return f"0x{pos:x}" if as_hex else str(pos)


def decode_position(value) -> int:
    """
    Строка (десятичная или 0x-hex) или int → позиция.

    Raises:
        InvalidPositionError: формат неверен или есть биты вне 33 клеток
    """
    if isinstance(value, bool):
        raise InvalidPositionError(f"Некорректная позиция: {value!r}")

    if isinstance(value, int):
        pos = value
    elif isinstance(value, str):
        text = value.strip()
        if _DECIMAL_RE.match(text):
            pos = int(text, 10)
        elif _HEX_RE.match(text):
            pos = int(text, 16)
        else:
            raise InvalidPositionError(f"Не удалось распарсить позицию: {value!r}")
    else:
        raise InvalidPositionError(f"Некорректный тип позиции: {type(value).__name__}")

    if pos < 0:
        raise InvalidPositionError(f"Отрицательная позиция: {value!r}")
    if pos & ~FULL_MASK:
        raise InvalidPositionError(
            f"Позиция {value!r} содержит биты вне {CELL_COUNT} клеток"
        )
    return pos


def parse_input(text: str) -> int:
    """
    Парсит текстовый формат описания позиции.

    Формат: pegs=C1,D1,... empty=D4   (или pegs=all empty=D4)
    Клетки, не упомянутые в pegs, пусты; empty снимает колышки.

    Returns:
        Позиция (33-битная маска)
    """
    pegs_match = re.search(r'pegs=([\w,]+)', text)
    empty_match = re.search(r'empty=([\w,]*)', text)

    if not pegs_match:
        raise InvalidPositionError(
            "Неверный формат. Ожидается: pegs=C1,D1,... empty=D4"
        )

    pos = 0
    pegs = pegs_match.group(1)
    if pegs.lower() == 'all':
        pos = FULL_MASK
    else:
        for cell in pegs.split(','):
            pos |= 1 << _cell(cell)

    if empty_match:
        for cell in empty_match.group(1).split(','):
            if cell.strip():
                pos &= ~(1 << _cell(cell))

    return pos


def _cell(notation: str) -> int:
    try:
        return notation_to_cell(notation)
    except ValueError as e:
        raise InvalidPositionError(str(e)) from e
