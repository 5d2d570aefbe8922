"""
solvers - Поиск решений Peg Solitaire

Экспортирует:
- TimeboxedDFSSolver: DFS с бюджетом времени и мемоизацией на задание
- Outcome / SearchResult: трёхзначный результат поиска
- check, solve, advise, first_mistake: запросы поверх поиска
"""

from .base import (
    BaseSolver, Outcome, ProgressCallback, SearchProgress, SearchResult, SolverStats
)
from .timeboxed_dfs import (
    PROGRESS_INTERVAL, TimeboxedDFSSolver, check_position, solve_position
)
from .queries import (
    ADVISOR_FLOOR, advise, check, first_mistake, is_winnable, solve, validate_position
)

__all__ = [
    'BaseSolver',
    'Outcome',
    'ProgressCallback',
    'SearchProgress',
    'SearchResult',
    'SolverStats',
    'PROGRESS_INTERVAL',
    'TimeboxedDFSSolver',
    'check_position',
    'solve_position',
    'ADVISOR_FLOOR',
    'advise',
    'check',
    'first_mistake',
    'is_winnable',
    'solve',
    'validate_position',
]
