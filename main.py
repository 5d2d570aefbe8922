#!/usr/bin/env python3
"""
main.py

Точка входа для Peg33 Solver.

Использование:
    python main.py check                          # английская доска
    python main.py solve --budget 30              # полная линия решения
    python main.py advise --state 0x1fffeffff     # подсказка хода
    python main.py check --pegs "pegs=all empty=D4,D5"
    python main.py mistake --history S0,S1,S2     # первая ошибка в истории
"""

import sys
import argparse
import logging

from core.bitboard import ENGLISH_START
from core.utils import format_move
from peg_io import (
    DEFAULT_BUDGETS, JobRunner, decode_position, display_board, encode_position,
    format_solution, parse_input,
)
from utils.error_handling import InvalidPositionError
from utils.logging import get_logger, setup_file_logging


COMMANDS = {
    'check': 'check',
    'solve': 'solve',
    'advise': 'advise',
    'mistake': 'firstMistake',
}

OUTCOME_LABELS = {
    'solved': '✅ Решаемо',
    'unsolvable': '❌ Нерешаемо',
    'unknown': '❓ Неизвестно (истёк бюджет)',
}


def read_state(args) -> int:
    """Позиция из --state или --pegs; по умолчанию английская доска."""
    if args.state:
        return decode_position(args.state)
    if args.pegs:
        return parse_input(args.pegs)
    return ENGLISH_START


def build_message(args) -> dict:
    kind = COMMANDS[args.command]
    message = {'kind': kind}
    if args.budget is not None:
        message['budget'] = args.budget

    if kind == 'firstMistake':
        if not args.history:
            raise InvalidPositionError("Для mistake нужен --history")
        message['positions'] = [
            encode_position(decode_position(s)) for s in args.history.split(',')
        ]
    else:
        message['position'] = encode_position(read_state(args))
    return message


def print_result(kind: str, done: dict) -> None:
    payload = done.get('payload')

    if kind == 'check':
        print(f"\n{OUTCOME_LABELS.get(payload, payload)}")
    elif kind == 'solve':
        print(f"\n{OUTCOME_LABELS.get(payload['outcome'], payload['outcome'])}")
        moves = payload['moves']
        if moves is not None:
            print(format_solution([tuple(m) for m in moves]))
    elif kind == 'advise':
        if payload is None:
            print("\n❌ Ходов нет")
        else:
            print(f"\n💡 Ход: {format_move(tuple(payload))}")
    elif kind == 'firstMistake':
        if payload is None:
            print("\n✅ Ошибок нет: последняя позиция решаема")
        else:
            print(f"\n❌ Первая нерешаемая позиция: #{payload}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Peg33 Solver',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры:
  python main.py check                       # английская доска
  python main.py solve --budget 30           # линия решения
  python main.py advise --state 0x1fffeffff  # подсказка хода
        """
    )
    parser.add_argument('command', choices=list(COMMANDS.keys()), help='Тип задания')
    parser.add_argument('--state', help='Позиция: десятичная или 0x-строка')
    parser.add_argument('--pegs', help='Позиция в формате: pegs=C1,D1,... empty=D4')
    parser.add_argument('--history', help='Позиции через запятую (для mistake)')
    parser.add_argument('--budget', type=float, default=None,
                        help='Бюджет в секундах (по умолчанию зависит от задания)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Подробный лог')
    parser.add_argument('--log-file', help='Дублировать лог в файл')

    args = parser.parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.WARNING
    get_logger().set_level(level)
    if args.log_file:
        setup_file_logging(args.log_file, level)

    print("=" * 50)
    print("🎯 Peg33 Solver")
    print("=" * 50)

    try:
        message = build_message(args)
    except InvalidPositionError as e:
        print(f"❌ Ошибка: {e}")
        return 1

    kind = message['kind']
    if kind != 'firstMistake':
        print(f"\nПозиция {message['position']}:")
        print(display_board(int(message['position'])))

    budget = message.get('budget', DEFAULT_BUDGETS[kind])
    print(f"\n🔧 Задание: {kind}, бюджет {budget}с")
    print("-" * 50)

    done = JobRunner().run(message, on_progress=lambda msg: print(f"  {msg['payload']}"))

    if 'error' in done:
        print(f"❌ Ошибка: {done['error']}")
        return 1

    print_result(kind, done)
    return 0


if __name__ == "__main__":
    sys.exit(main())
