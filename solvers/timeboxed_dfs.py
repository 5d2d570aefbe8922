"""
solvers/timeboxed_dfs.py

DFS с ограничением по времени и мемоизацией неудачных состояний.

Особенности:
- Дедлайн проверяется в каждом узле; истечение даёт UNKNOWN,
  который сразу поднимается через все уровни рекурсии
- Таблица мемо создаётся заново на каждое задание: позиция → наибольший
  остаток ходов, с которым она уже не решилась
- Ходы перебираются строго в порядке таблицы ходов
- Каждые PROGRESS_INTERVAL узлов вызывается progress_callback
"""

import time
from typing import Dict, List, Optional

from .base import (
    BaseSolver, Outcome, ProgressCallback, SearchProgress, SearchResult, SolverStats
)
from core.bitboard import BitBoard, ENGLISH_GOAL, popcount
from core.moves import MOVES, TOGGLE_MASKS, Move, legal_moves
from utils.error_handling import handle_errors

PROGRESS_INTERVAL = 8192

_SOLVED = Outcome.SOLVED
_UNSOLVABLE = Outcome.UNSOLVABLE
_UNKNOWN = Outcome.UNKNOWN


class TimeboxedDFSSolver(BaseSolver):
    """
    DFS решатель с бюджетом времени и трёхзначным результатом.

    Цель — ровно один колышек в центре, за popcount(start) - 1 ходов.
    """

    def __init__(self, use_memo: bool = True, timeout: Optional[float] = None,
                 progress_callback: Optional[ProgressCallback] = None,
                 progress_interval: int = PROGRESS_INTERVAL, verbose: bool = False):
        """
        Args:
            use_memo: отсекать позиции, уже не решившиеся с большим остатком
            timeout: бюджет для solve(board) в секундах (None — без ограничения)
            progress_callback: получает SearchProgress каждые progress_interval узлов
            progress_interval: период уведомлений в узлах
            verbose: выводить отладочную информацию
        """
        super().__init__(verbose=verbose)
        self.use_memo = use_memo
        self.timeout = timeout
        self.progress_callback = progress_callback
        self.progress_interval = max(1, progress_interval)

    def solve(self, board: BitBoard) -> Optional[List[Move]]:
        """Решение или None (и при UNSOLVABLE, и при UNKNOWN)."""
        budget = self.timeout if self.timeout is not None else float('inf')
        result = self.search(board.pegs, budget)
        return result.witness if result.solved else None

    def search(self, start: int, budget: float, record_path: bool = True,
               label: str = "searching") -> SearchResult:
        """
        Поиск от позиции start в пределах budget секунд.

        Args:
            start: позиция (33-битная маска)
            budget: бюджет времени в секундах
            record_path: собирать ли решение (для check не нужно)
            label: подпись в уведомлениях о прогрессе

        Returns:
            SearchResult; witness заполнен только при SOLVED и record_path
        """
        stats = SolverStats()
        self.stats = stats
        t0 = time.monotonic()
        deadline = t0 + budget
        target = popcount(start) - 1

        if target < 0:
            stats.time_elapsed = time.monotonic() - t0
            return SearchResult(_UNSOLVABLE, stats=stats)

        self._log(f"Starting {label} (pegs={target + 1}, budget={budget}s)")

        path: List[int] = [0] * target
        memo: Dict[int, int] = {}
        use_memo = self.use_memo
        interval = self.progress_interval
        notify = self._notify
        clock = time.monotonic
        toggles = TOGGLE_MASKS
        nodes = 0
        pruned = 0
        max_depth = 0

        def dfs(s: int, d: int) -> Outcome:
            nonlocal nodes, pruned, max_depth
            if clock() > deadline:
                return _UNKNOWN

            nodes += 1
            if d > max_depth:
                max_depth = d
            if nodes % interval == 0:
                notify(SearchProgress(label, nodes, d, target))

            if d == target:
                return _SOLVED if s == ENGLISH_GOAL else _UNSOLVABLE

            remaining = target - d
            if use_memo:
                prev = memo.get(s)
                if prev is not None and prev >= remaining:
                    pruned += 1
                    return _UNSOLVABLE
                # Записываем до рекурсии
                memo[s] = remaining

            for m in legal_moves(s):
                if record_path:
                    path[d] = m
                result = dfs(s ^ toggles[m], d + 1)
                if result is not _UNSOLVABLE:
                    return result
            return _UNSOLVABLE

        outcome = dfs(start, 0)

        stats.nodes_visited = nodes
        stats.nodes_pruned = pruned
        stats.max_depth = max_depth
        stats.time_elapsed = time.monotonic() - t0

        witness = None
        if outcome is _SOLVED and record_path:
            witness = [MOVES[m] for m in path]
            stats.solution_length = len(witness)

        self._log(f"Done: {outcome.value} ({stats})")
        return SearchResult(outcome, witness, stats)

    @handle_errors(default_return=None)
    def _notify(self, progress: SearchProgress) -> None:
        if self.progress_callback is not None:
            self.progress_callback(progress)


def solve_position(start: int, budget: float,
                   progress_callback: Optional[ProgressCallback] = None) -> SearchResult:
    """Поиск с построением решения."""
    solver = TimeboxedDFSSolver(progress_callback=progress_callback)
    return solver.search(start, budget, record_path=True, label="searching")


def check_position(start: int, budget: float,
                   progress_callback: Optional[ProgressCallback] = None) -> SearchResult:
    """Тот же поиск без построения решения."""
    solver = TimeboxedDFSSolver(progress_callback=progress_callback)
    return solver.search(start, budget, record_path=False, label="checking")
