"""
solutions/verify.py

Проверка решений: воспроизведение ходов по правилу XOR.
"""

from typing import List, Sequence

from core.bitboard import CENTER_INDEX, popcount
from core.moves import Move, REQUIRED_MASKS, EMPTY_MASKS, TOGGLE_MASKS, move_index
from utils.error_handling import InvalidMoveError


def replay(start: int, moves: Sequence[Move]) -> int:
    """
    Применяет ходы к позиции и возвращает итоговую позицию.

    Raises:
        InvalidMoveError: ход не из таблицы или недопустим на своём шаге
    """
    pos = start
    for step, move in enumerate(moves):
        try:
            m = move_index(move)
        except (KeyError, TypeError):
            raise InvalidMoveError(f"Ход {step}: {move!r} отсутствует в таблице ходов")

        # В from и over должны быть колышки, в to — дырка
        if pos & REQUIRED_MASKS[m] != REQUIRED_MASKS[m] or pos & EMPTY_MASKS[m]:
            raise InvalidMoveError(f"Ход {step}: {move!r} недопустим в текущей позиции")

        pos ^= TOGGLE_MASKS[m]
    return pos


def verify_witness(start: int, moves: List[Move], require_center: bool = True) -> bool:
    """
    Проверяет корректность решения.

    Правила:
    - каждый ход есть в таблице и допустим на своём шаге;
    - после всех ходов остаётся ровно один колышек;
    - если require_center=True, он стоит в центре.

    Пустое решение корректно, только если start уже конечная позиция.
    """
    try:
        final = replay(start, moves)
    except InvalidMoveError:
        return False

    if popcount(final) != 1:
        return False

    if require_center:
        return final == (1 << CENTER_INDEX)

    return True
