"""
solutions - Проверка найденных решений.
"""

from .verify import replay, verify_witness

__all__ = [
    'replay',
    'verify_witness',
]
