"""
utils/error_handling.py

Исключения и обработка ошибок.

Исчерпание перебора и истечение бюджета — не ошибки, а обычные
результаты поиска (Outcome.UNSOLVABLE / Outcome.UNKNOWN).
"""

from typing import Callable, Any
from functools import wraps

from .logging import get_logger


class SolverError(Exception):
    """Базовое исключение проекта."""
    pass


class InvalidPositionError(SolverError):
    """Некорректная кодировка позиции или биты вне 33 клеток."""
    pass


class InvalidMoveError(SolverError):
    """Ход отсутствует в таблице ходов или недопустим в позиции."""
    pass


class ProtocolError(SolverError):
    """Некорректное сообщение-задание (тип, позиции, бюджет)."""
    pass


def handle_errors(default_return: Any = None, log_error: bool = True):
    """
    Декоратор для обработки ошибок.

    Args:
        default_return: значение по умолчанию при ошибке
        log_error: логировать ли ошибку
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except SolverError as e:
                if log_error:
                    get_logger().error(f"{func.__name__}: {str(e)}")
                return default_return
            except Exception as e:
                if log_error:
                    get_logger().error(
                        f"{func.__name__}: Неожиданная ошибка: {str(e)}",
                        exc_info=True
                    )
                return default_return
        return wrapper
    return decorator
