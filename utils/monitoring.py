"""
utils/monitoring.py

Мониторинг производительности заданий.
"""

import threading
import time
from typing import Dict, List, Any, Optional
from collections import defaultdict


class PerformanceMonitor:
    """Монитор производительности: время операций и счётчики."""

    def __init__(self):
        self.metrics: Dict[str, List[float]] = defaultdict(list)
        self.counters: Dict[str, int] = defaultdict(int)
        self._lock = threading.Lock()

    def record_time(self, operation: str, elapsed: float):
        """
        Записывает время выполнения операции.

        Args:
            operation: имя операции
            elapsed: время в секундах
        """
        with self._lock:
            self.metrics[operation].append(elapsed)

    def increment_counter(self, counter: str, value: int = 1):
        """
        Увеличивает счётчик.

        Args:
            counter: имя счётчика
            value: значение для увеличения
        """
        with self._lock:
            self.counters[counter] += value

    def get_stats(self, operation: Optional[str] = None) -> Dict[str, Any]:
        """
        Возвращает статистику.

        Args:
            operation: имя операции (если None, возвращает общую статистику)

        Returns:
            Словарь со статистикой
        """
        if operation:
            times = list(self.metrics.get(operation, []))
            if not times:
                return {}
            return {
                'operation': operation,
                'count': len(times),
                'total': sum(times),
                'average': sum(times) / len(times),
                'min': min(times),
                'max': max(times),
                'last': times[-1],
            }

        stats = {
            'operations': {},
            'counters': dict(self.counters),
            'total_operations': sum(len(times) for times in self.metrics.values())
        }
        for op in list(self.metrics):
            stats['operations'][op] = self.get_stats(op)
        return stats

    def reset(self):
        """Сбрасывает все метрики."""
        with self._lock:
            self.metrics.clear()
            self.counters.clear()


# Глобальный монитор
_monitor: Optional[PerformanceMonitor] = None


def get_monitor() -> PerformanceMonitor:
    """Возвращает глобальный монитор."""
    global _monitor
    if _monitor is None:
        _monitor = PerformanceMonitor()
    return _monitor


def monitor_time(operation: str):
    """
    Декоратор для мониторинга времени выполнения.

    Usage:
        @monitor_time('my_function')
        def my_function():
            ...
    """
    def decorator(func):
        def wrapper(*args, **kwargs):
            monitor = get_monitor()
            start = time.time()
            try:
                result = func(*args, **kwargs)
                monitor.record_time(operation, time.time() - start)
                return result
            except Exception:
                monitor.record_time(f"{operation}_error", time.time() - start)
                raise
        return wrapper
    return decorator
