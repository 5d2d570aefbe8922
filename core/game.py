"""
core/game.py

Состояние партии: текущая позиция, история ходов и позиций,
откат, обрезка истории и режим "челлендж" с жизнями.
"""

from typing import List, Optional

from .bitboard import ENGLISH_START, is_goal
from .moves import MOVES, Move, TOGGLE_MASKS, legal_moves, move_index, targets_from

CHALLENGE_LIVES = 3


class Game:
    """
    Партия на английской доске.

    states[0] — начальная позиция, states[k] — позиция после k ходов;
    всегда len(states) == len(moves) + 1.
    """

    def __init__(self, state: int = ENGLISH_START, lives: Optional[int] = None):
        self.start = state
        self.lives = lives
        self.moves: List[Move] = []
        self.states: List[int] = [state]

    @classmethod
    def challenge(cls, state: int = ENGLISH_START) -> 'Game':
        """Партия в режиме челленджа (3 жизни)."""
        return cls(state, lives=CHALLENGE_LIVES)

    @property
    def state(self) -> int:
        return self.states[-1]

    def reset(self) -> None:
        self.moves = []
        self.states = [self.start]
        if self.lives is not None:
            self.lives = CHALLENGE_LIVES

    def apply_move(self, move: Move) -> bool:
        """Делает ход, если он допустим. Возвращает False без изменений иначе."""
        try:
            m = move_index(move)
        except (KeyError, TypeError):
            return False
        if m not in legal_moves(self.state):
            return False
        self.moves.append(MOVES[m])
        self.states.append(self.state ^ TOGGLE_MASKS[m])
        return True

    def undo(self) -> bool:
        if not self.moves:
            return False
        self.moves.pop()
        self.states.pop()
        return True

    def truncate_to(self, k: int) -> None:
        """Оставляет первые k ходов (k ограничивается диапазоном [0, len(moves)])."""
        k = max(0, min(k, len(self.moves)))
        del self.moves[k:]
        del self.states[k + 1:]

    def state_at(self, i: int) -> int:
        return self.states[i]

    def legal_moves(self) -> List[Move]:
        return [MOVES[m] for m in legal_moves(self.state)]

    def targets_from(self, cell: int) -> List[int]:
        return targets_from(self.state, cell)

    def is_goal(self) -> bool:
        return is_goal(self.state)

    def is_stuck(self) -> bool:
        """Ходов больше нет, а цель не достигнута."""
        return not self.is_goal() and not legal_moves(self.state)

    # --- челлендж ---

    def lose_life(self) -> int:
        if self.lives is None:
            raise ValueError("Режим челленджа не включён")
        self.lives = max(0, self.lives - 1)
        return self.lives

    def is_game_over(self) -> bool:
        return self.lives is not None and self.lives <= 0

    def rewind_to_last_winnable(self, mistake_index: int) -> int:
        """Обрезает историю до позиции перед первой ошибкой."""
        last_ok = max(0, mistake_index - 1)
        self.truncate_to(last_ok)
        return last_ok
