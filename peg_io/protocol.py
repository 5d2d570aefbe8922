"""
peg_io/protocol.py

Протокол заданий между внешним UI и движком.

Запрос:  {"kind": "check"|"solve"|"advise"|"firstMistake",
          "position": "...", "positions": [...], "budget": 2.0, "truncate": false}
Ответы:  {"kind": ..., "status": "progress"|"done", "payload": ...}

На каждый запрос приходит ровно один ответ "done". При любой ошибке он
несёт безопасное значение по умолчанию и поле "error".
"""

import math
import queue
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional

from .parser import decode_position
from solvers import queries
from solvers.base import Outcome, SearchProgress
from utils.error_handling import ProtocolError, SolverError
from utils.logging import get_logger
from utils.monitoring import get_monitor

JOB_KINDS = ('check', 'solve', 'advise', 'firstMistake')

# Старые имена заданий
KIND_ALIASES = {'ai': 'advise', 'mistake': 'firstMistake'}

DEFAULT_BUDGETS = {
    'check': 2.0,
    'solve': 10.0,
    'advise': 2.0,
    'firstMistake': 2.0,
}

STATUS_PROGRESS = 'progress'
STATUS_DONE = 'done'

Message = Dict[str, Any]
Emit = Callable[[Message], None]


def safe_default(kind: str) -> Any:
    """Значение payload для "done" при ошибке."""
    if kind == 'check':
        return Outcome.UNKNOWN.value
    if kind == 'solve':
        return {'outcome': Outcome.UNKNOWN.value, 'moves': None}
    return None


def _kind_of(message: Any) -> str:
    kind = message.get('kind') if isinstance(message, dict) else None
    if not isinstance(kind, str):
        return str(kind)
    return KIND_ALIASES.get(kind, kind)


def _parse_budget(kind: str, value: Any) -> float:
    if value is None:
        return DEFAULT_BUDGETS[kind]
    if isinstance(value, bool):
        raise ProtocolError(f"Некорректный бюджет: {value!r}")
    try:
        budget = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ProtocolError(f"Некорректный бюджет: {value!r}")
    if not math.isfinite(budget) or budget < 0:
        raise ProtocolError(f"Некорректный бюджет: {value!r}")
    return budget


@dataclass
class JobRequest:
    """Разобранное задание."""
    kind: str
    positions: List[int]
    budget: float
    truncate: bool = False

    @property
    def position(self) -> int:
        return self.positions[0]

    @classmethod
    def from_message(cls, message: Any) -> 'JobRequest':
        """
        Разбирает сообщение. Поля задания могут лежать в самом сообщении
        или во вложенном "payload"; "state"/"states" — синонимы
        "position"/"positions".

        Raises:
            ProtocolError: неизвестный тип, нет позиций, плохой бюджет
            InvalidPositionError: некорректная позиция
        """
        if not isinstance(message, dict):
            raise ProtocolError("Сообщение должно быть объектом")

        kind = _kind_of(message)
        if kind not in JOB_KINDS:
            raise ProtocolError(f"Неизвестный тип задания: {message.get('kind')!r}")

        fields = message.get('payload')
        if not isinstance(fields, dict):
            fields = message

        budget = _parse_budget(kind, fields.get('budget'))

        if kind == 'firstMistake':
            raw = fields.get('positions', fields.get('states'))
            if not isinstance(raw, list):
                raise ProtocolError("Для firstMistake нужен список позиций")
            positions = [decode_position(value) for value in raw]
        else:
            raw = fields.get('position', fields.get('state'))
            if raw is None:
                raise ProtocolError(f"Для {kind} нужна позиция")
            positions = [decode_position(raw)]

        return cls(kind, positions, budget, bool(fields.get('truncate', False)))


@dataclass
class JobResponse:
    """Ответ на задание: прогресс или итог."""
    kind: str
    status: str
    payload: Any = None
    error: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_message(self) -> Message:
        message = {'kind': self.kind, 'status': self.status, 'payload': self.payload}
        if self.error is not None:
            message['error'] = self.error
        message.update(self.extra)
        return message


def run_job(request: JobRequest,
            progress_callback: Optional[Callable[[SearchProgress], None]] = None) -> Any:
    """Выполняет задание и возвращает payload для ответа "done"."""
    kind = request.kind

    if kind == 'check':
        result = queries.check(request.position, request.budget, progress_callback)
        return result.outcome.value

    if kind == 'solve':
        result = queries.solve(request.position, request.budget, progress_callback)
        moves = None
        if result.witness is not None:
            moves = [list(move) for move in result.witness]
        return {'outcome': result.outcome.value, 'moves': moves}

    if kind == 'advise':
        move = queries.advise(request.position, request.budget,
                              progress_callback=progress_callback)
        return list(move) if move is not None else None

    if kind == 'firstMistake':
        return queries.first_mistake(request.positions, request.budget, progress_callback)

    raise ProtocolError(f"Неизвестный тип задания: {kind!r}")


def process_message(message: Any, emit: Emit) -> Message:
    """
    Обрабатывает одно сообщение: прогресс и ровно один "done" через emit.

    Returns:
        Итоговое сообщение "done"
    """
    logger = get_logger()
    monitor = get_monitor()
    kind = _kind_of(message)
    extra: Dict[str, Any] = {}

    def on_progress(progress: SearchProgress) -> None:
        emit(JobResponse(kind, STATUS_PROGRESS, str(progress)).to_message())

    start_time = time.time()
    try:
        request = JobRequest.from_message(message)
        if kind == 'firstMistake':
            extra['truncate'] = request.truncate
        logger.info(f"Job {kind}: started (budget={request.budget}s)")
        payload = run_job(request, on_progress)
        response = JobResponse(kind, STATUS_DONE, payload, extra=extra)
        monitor.increment_counter(f"jobs.{kind}")
        logger.info(f"Job {kind}: done in {time.time() - start_time:.3f}s")
    except SolverError as e:
        logger.error(f"Job {kind}: {str(e)}")
        monitor.increment_counter('jobs.failed')
        response = JobResponse(kind, STATUS_DONE, safe_default(kind), error=str(e), extra=extra)
    except Exception as e:
        logger.error(f"Job {kind}: Неожиданная ошибка: {str(e)}", exc_info=True)
        monitor.increment_counter('jobs.failed')
        response = JobResponse(kind, STATUS_DONE, safe_default(kind), error=str(e), extra=extra)

    done = response.to_message()
    emit(done)
    return done


class JobRunner:
    """
    Выполняет задания по одному в отдельном рабочем потоке.

    Пока задание выполняется, новое сообщение сразу получает "done"
    с error="busy". Прогресс и итог передаются через queue.Queue.
    """

    def __init__(self, poll_interval: float = 0.1):
        self.poll_interval = poll_interval
        self._lock = threading.Lock()
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    def _release(self) -> None:
        with self._lock:
            self._busy = False

    def submit(self, message: Any) -> Iterator[Message]:
        """
        Запускает задание и возвращает итератор ответов
        (ноль или больше "progress", затем один "done").
        """
        kind = _kind_of(message)
        with self._lock:
            rejected = self._busy
            self._busy = True

        if rejected:
            get_logger().warning(f"Job {kind}: rejected, another job is running")
            get_monitor().increment_counter('jobs.busy')
            done = JobResponse(kind, STATUS_DONE, safe_default(kind), error='busy')
            return iter([done.to_message()])

        events: "queue.Queue[Message]" = queue.Queue()
        released = False

        def release_once() -> None:
            # Только один раз за задание: иначе поздний finally
            # освободит раннер, уже занятый следующим заданием
            nonlocal released
            if not released:
                released = True
                self._release()

        def emit(msg: Message) -> None:
            # Освобождаем раннер до того, как клиент увидит "done"
            if msg.get('status') == STATUS_DONE:
                release_once()
            events.put_nowait(msg)

        def worker() -> None:
            try:
                process_message(message, emit)
            finally:
                release_once()

        thread = threading.Thread(target=worker, name=f"peg33-job-{kind}", daemon=True)
        thread.start()
        return self._drain(events, thread, kind)

    def _drain(self, events: "queue.Queue[Message]", thread: threading.Thread,
               kind: str) -> Iterator[Message]:
        while True:
            try:
                msg = events.get(timeout=self.poll_interval)
            except queue.Empty:
                if thread.is_alive():
                    continue
                # Поток завершился: забираем последнее событие, если есть
                try:
                    msg = events.get_nowait()
                except queue.Empty:
                    yield JobResponse(kind, STATUS_DONE, safe_default(kind),
                                      error='worker stopped').to_message()
                    return
            yield msg
            if msg.get('status') == STATUS_DONE:
                return

    def run(self, message: Any,
            on_progress: Optional[Callable[[Message], None]] = None) -> Message:
        """Выполняет задание до конца и возвращает сообщение "done"."""
        done: Message = {}
        for msg in self.submit(message):
            if msg.get('status') == STATUS_PROGRESS:
                if on_progress is not None:
                    on_progress(msg)
            else:
                done = msg
        return done
