"""
utils - Логирование, обработка ошибок и мониторинг.
"""

from .logging import SolverLogger, get_logger, setup_file_logging
from .error_handling import (
    SolverError, InvalidPositionError, InvalidMoveError, ProtocolError,
    handle_errors,
)
from .monitoring import PerformanceMonitor, get_monitor, monitor_time

__all__ = [
    'SolverLogger', 'get_logger', 'setup_file_logging',
    'SolverError', 'InvalidPositionError', 'InvalidMoveError', 'ProtocolError',
    'handle_errors',
    'PerformanceMonitor', 'get_monitor', 'monitor_time',
]
