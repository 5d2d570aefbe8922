"""
solvers/queries.py

Запросы поверх TimeboxedDFSSolver:
- check: решаема ли позиция
- solve: полная линия решения
- advise: подсказка одного хода
- first_mistake: первая нерешаемая позиция в истории (бинарный поиск)

Все запросы проверяют позицию до начала поиска и отвечают на вырожденные
входы (0 или 1 колышек) сразу, без учёта бюджета.
"""

import time
import math
from typing import List, Optional, Sequence

from .base import Outcome, ProgressCallback, SearchResult
from .timeboxed_dfs import check_position, solve_position
from core.bitboard import ENGLISH_GOAL, is_valid_position, popcount
from core.moves import MOVES, TOGGLE_MASKS, Move, legal_moves
from utils.error_handling import InvalidPositionError
from utils.monitoring import monitor_time

ADVISOR_FLOOR = 0.2  # минимальный бюджет проверки одного хода, сек


def validate_position(pos) -> int:
    """Возвращает pos или бросает InvalidPositionError."""
    if not is_valid_position(pos):
        raise InvalidPositionError(f"Некорректная позиция: {pos!r}")
    return pos


def _validate_budget(budget) -> float:
    if isinstance(budget, bool) or not isinstance(budget, (int, float)):
        raise ValueError(f"Некорректный бюджет: {budget!r}")
    try:
        value = float(budget)
    except OverflowError:
        raise ValueError(f"Некорректный бюджет: {budget!r}")
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"Некорректный бюджет: {budget!r}")
    return value


def _degenerate(pos: int) -> Optional[SearchResult]:
    """Ответ для 0 или 1 колышка; None, если нужен поиск."""
    count = popcount(pos)
    if count == 0:
        return SearchResult(Outcome.UNSOLVABLE)
    if count == 1:
        if pos == ENGLISH_GOAL:
            return SearchResult(Outcome.SOLVED, witness=[])
        return SearchResult(Outcome.UNSOLVABLE)
    return None


@monitor_time('query.check')
def check(pos: int, budget: float,
          progress_callback: Optional[ProgressCallback] = None) -> SearchResult:
    """Решаемость позиции: SOLVED / UNSOLVABLE / UNKNOWN, без решения."""
    validate_position(pos)
    budget = _validate_budget(budget)
    result = _degenerate(pos)
    if result is not None:
        result.witness = None
        return result
    return check_position(pos, budget, progress_callback)


@monitor_time('query.solve')
def solve(pos: int, budget: float,
          progress_callback: Optional[ProgressCallback] = None) -> SearchResult:
    """Линия решения; witness заполнен при SOLVED."""
    validate_position(pos)
    budget = _validate_budget(budget)
    result = _degenerate(pos)
    if result is not None:
        return result
    return solve_position(pos, budget, progress_callback)


@monitor_time('query.advise')
def advise(pos: int, budget: float, floor: float = ADVISOR_FLOOR,
           progress_callback: Optional[ProgressCallback] = None) -> Optional[Move]:
    """
    Подсказка хода.

    Перебирает допустимые ходы по порядку, пока не истёк общий бюджет;
    каждый ход проверяется check() с бюджетом max(floor, оставшееся время).
    Возвращает первый ход, после которого позиция доказуемо решаема,
    иначе первый допустимый ход, иначе None.
    """
    validate_position(pos)
    budget = _validate_budget(budget)
    candidates = legal_moves(pos)
    deadline = time.monotonic() + budget

    for m in candidates:
        now = time.monotonic()
        if now > deadline:
            break
        child = pos ^ TOGGLE_MASKS[m]
        result = check(child, max(floor, deadline - now), progress_callback)
        if result.outcome is Outcome.SOLVED:
            return MOVES[m]

    return MOVES[candidates[0]] if candidates else None


@monitor_time('query.first_mistake')
def first_mistake(history: Sequence[int], budget: float,
                  progress_callback: Optional[ProgressCallback] = None) -> Optional[int]:
    """
    Индекс первой нерешаемой позиции в истории или None.

    Предполагается, что решаемость вдоль истории не возрастает:
    бинарный поиск это не проверяет. Каждая проба получает весь budget;
    UNKNOWN считается "не решаемо".
    """
    states: List[int] = [validate_position(s) for s in history]
    budget = _validate_budget(budget)
    if not states:
        return None

    if check(states[-1], budget, progress_callback).outcome is Outcome.SOLVED:
        return None
    if len(states) <= 1:
        return 0

    lo, hi = 0, len(states) - 1
    while lo < hi:
        mid = (lo + hi) // 2
        if check(states[mid], budget, progress_callback).outcome is Outcome.SOLVED:
            lo = mid + 1
        else:
            hi = mid
    return lo


def is_winnable(pos: int, budget: float) -> bool:
    """
    Упрощённый ответ: True только при SOLVED.

    И UNSOLVABLE, и UNKNOWN (истёк бюджет) дают False.
    """
    return check(pos, budget).outcome is Outcome.SOLVED
