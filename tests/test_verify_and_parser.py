"""
tests/test_verify_and_parser.py

Тесты для:
- replay / verify_witness (проверка решений)
- encode_position / decode_position / parse_input (кодировка позиций)
- display_board / format_solution (вывод)
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from core.bitboard import ENGLISH_GOAL, ENGLISH_START, FULL_MASK
from core.utils import HOLE, PEG
from peg_io.parser import decode_position, encode_position, parse_input
from peg_io.visualizer import display_board, format_solution
from solutions.verify import replay, verify_witness
from utils.error_handling import InvalidMoveError, InvalidPositionError

TWO_PEGS = (1 << 4) | (1 << 9)


# --- verify ---

def test_verify_witness_valid():
    """Корректное решение проходит проверку."""
    assert verify_witness(TWO_PEGS, [(4, 9, 16)]) is True


def test_verify_witness_wrong_final_cell():
    """Один колышек не в центре: валидно только без require_center."""
    pos = (1 << 9) | (1 << 16)
    moves = [(16, 9, 4)]

    assert verify_witness(pos, moves) is False
    assert verify_witness(pos, moves, require_center=False) is True


def test_verify_witness_illegal_move():
    """Ход в занятую клетку или не из таблицы отклоняется."""
    assert verify_witness(ENGLISH_START, [(0, 1, 2)]) is False
    assert verify_witness(TWO_PEGS, [(4, 9, 17)]) is False
    assert verify_witness(TWO_PEGS, [(4, 9, 16), (4, 9, 16)]) is False


def test_verify_witness_empty():
    """Пустое решение корректно, только если позиция уже конечная."""
    assert verify_witness(ENGLISH_GOAL, []) is True
    assert verify_witness(1 << 0, []) is False
    assert verify_witness(1 << 0, [], require_center=False) is True
    assert verify_witness(TWO_PEGS, []) is False


def test_verify_witness_leftover_pegs():
    """После ходов осталось больше одного колышка."""
    assert verify_witness(ENGLISH_START, [(4, 9, 16)]) is False


def test_replay():
    """replay возвращает итоговую позицию или бросает InvalidMoveError."""
    assert replay(TWO_PEGS, [(4, 9, 16)]) == ENGLISH_GOAL
    assert replay(TWO_PEGS, []) == TWO_PEGS

    with pytest.raises(InvalidMoveError):
        replay(TWO_PEGS, [(16, 9, 4)])
    with pytest.raises(InvalidMoveError):
        replay(TWO_PEGS, ["D2"])


# --- parser ---

def test_encode_position():
    """Кодировка позиции: десятичная и hex."""
    assert encode_position(ENGLISH_START) == "8589869055"
    assert encode_position(ENGLISH_START, as_hex=True) == "0x1fffeffff"
    assert encode_position(0) == "0"


@pytest.mark.parametrize("value, expected", [
    ("8589869055", ENGLISH_START),
    ("0x1fffeffff", ENGLISH_START),
    ("0X10000", ENGLISH_GOAL),
    (" 65536 ", ENGLISH_GOAL),
    (65536, ENGLISH_GOAL),
    ("0", 0),
    (str(FULL_MASK), FULL_MASK),
])
def test_decode_position(value, expected):
    assert decode_position(value) == expected


@pytest.mark.parametrize("value", [
    "", "abc", "-1", "1.5", "0x", "0xzz", str(FULL_MASK + 1),
    "1" * 5000, "0x" + "f" * 5000, "0" * 21,
    -1, 1 << 33, 1.0, None, True, [1],
])
def test_decode_position_invalid(value):
    with pytest.raises(InvalidPositionError):
        decode_position(value)


def test_parse_input():
    """Текстовый формат позиции."""
    assert parse_input("pegs=all empty=D4") == ENGLISH_START
    assert parse_input("pegs=D2,D3") == TWO_PEGS
    assert parse_input("pegs=D2,D3,D4 empty=D4") == TWO_PEGS


def test_parse_input_invalid():
    """Отсутствие pegs= и клетки вне креста."""
    with pytest.raises(InvalidPositionError):
        parse_input("empty=D4")
    with pytest.raises(InvalidPositionError):
        parse_input("pegs=A1")
    with pytest.raises(InvalidPositionError):
        parse_input("pegs=all empty=H9")


# --- вывод ---

def test_display_board():
    """Доска с подписями: заголовок и 7 строк."""
    text = display_board(ENGLISH_START)
    lines = text.splitlines()

    assert len(lines) == 8
    assert lines[0].split() == list("ABCDEFG")
    assert text.count(PEG) == 32
    assert text.count(HOLE) == 1
    assert lines[4].startswith("4 ")


def test_format_solution():
    """Форматирование решения."""
    assert format_solution(None) == "❌ Решение не найдено"
    assert format_solution([]) == "✅ Позиция уже решена"

    text = format_solution([(11, 10, 9), (4, 9, 16)])
    assert "2 ходов" in text
    assert "D2 → D4" in text
    assert len(text.splitlines()) == 3
