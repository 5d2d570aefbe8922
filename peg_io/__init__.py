"""
peg_io - Ввод/вывод для Peg Solitaire

Экспортирует:
- Кодирование позиций и парсинг текстового формата
- Визуализация доски
- Протокол заданий и JobRunner
"""

from .parser import encode_position, decode_position, parse_input
from .visualizer import display_board, format_solution
from .protocol import (
    JOB_KINDS, DEFAULT_BUDGETS, JobRequest, JobResponse, JobRunner,
    process_message, run_job, safe_default,
)

__all__ = [
    'encode_position',
    'decode_position',
    'parse_input',
    'display_board',
    'format_solution',
    'JOB_KINDS',
    'DEFAULT_BUDGETS',
    'JobRequest',
    'JobResponse',
    'JobRunner',
    'process_message',
    'run_job',
    'safe_default',
]
