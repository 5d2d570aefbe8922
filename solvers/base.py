"""
solvers/base.py

Базовый класс решателя и общие типы результата поиска.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from core.bitboard import BitBoard
from core.moves import Move
from utils.logging import get_logger


class Outcome(Enum):
    """Трёхзначный результат поиска."""
    SOLVED = "solved"            # найден путь к цели
    UNSOLVABLE = "unsolvable"    # доказано: пути нет
    UNKNOWN = "unknown"          # бюджет истёк раньше ответа


@dataclass
class SolverStats:
    """Статистика работы решателя."""
    nodes_visited: int = 0
    nodes_pruned: int = 0
    max_depth: int = 0
    time_elapsed: float = 0.0
    solution_length: int = 0

    def __str__(self) -> str:
        return (
            f"Nodes: {self.nodes_visited}, "
            f"Pruned: {self.nodes_pruned}, "
            f"Depth: {self.max_depth}, "
            f"Time: {self.time_elapsed:.3f}s"
        )


@dataclass
class SearchResult:
    """Результат одного задания поиска."""
    outcome: Outcome
    witness: Optional[List[Move]] = None
    stats: SolverStats = field(default_factory=SolverStats)

    @property
    def solved(self) -> bool:
        return self.outcome is Outcome.SOLVED


@dataclass(frozen=True)
class SearchProgress:
    """Уведомление о ходе поиска."""
    label: str
    nodes: int
    depth: int
    target: int

    def __str__(self) -> str:
        return f"{self.label}… nodes={self.nodes:,} depth={self.depth}/{self.target}"


ProgressCallback = Callable[[SearchProgress], None]


class BaseSolver(ABC):
    """
    Базовый класс решателя.

    Все решатели наследуют от него и реализуют метод solve().
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.stats = SolverStats()

    @abstractmethod
    def solve(self, board: BitBoard) -> Optional[List[Move]]:
        """
        Решает головоломку.

        Args:
            board: начальная позиция

        Returns:
            Список ходов (from, over, to) или None
        """
        pass

    def _log(self, message: str) -> None:
        """Пишет в лог, если verbose=True."""
        if self.verbose:
            get_logger().info(f"[{self.__class__.__name__}] {message}")
