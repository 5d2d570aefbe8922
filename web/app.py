"""
web/app.py

Flask API для движка Peg33: задания check / solve / advise / firstMistake.
"""

import os
import sys
import json

from flask import Flask, request, jsonify, Response, stream_with_context

# Добавляем корень проекта в path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.bitboard import ENGLISH_GOAL, ENGLISH_START, VALID_CELLS
from core.moves import MOVES, legal_moves, targets_from
from peg_io.parser import decode_position, encode_position
from peg_io.protocol import JobRunner
from utils.error_handling import InvalidPositionError
from utils.logging import get_logger
from utils.monitoring import get_monitor

app = Flask(__name__)

# Один раннер на процесс: одновременно выполняется не больше одного задания
RUNNER = JobRunner()


def _sse(message) -> str:
    return f"data: {json.dumps(message)}\n\n"


@app.route('/api/job', methods=['POST'])
def job():
    """
    Выполняет задание и возвращает итоговый ответ "done".

    Входные данные:
    {
        "kind": "check",            // check | solve | advise | firstMistake
        "position": "8589869055",   // десятичная или 0x-строка
        "budget": 2.0
    }
    """
    message = request.get_json(silent=True)
    get_logger().info(f"Job request: {message.get('kind') if isinstance(message, dict) else None}")
    return jsonify(RUNNER.run(message))


@app.route('/api/job-stream', methods=['POST'])
def job_stream():
    """
    То же задание с потоковой передачей прогресса (SSE).
    Последнее событие — ответ "done".
    """
    message = request.get_json(silent=True)
    events = RUNNER.submit(message)

    def generate():
        for event in events:
            yield _sse(event)

    return Response(stream_with_context(generate()), mimetype='text/event-stream')


@app.route('/api/moves', methods=['GET'])
def moves():
    """Допустимые ходы позиции; с ?cell=i — ещё и клетки, куда прыгает колышек i."""
    try:
        state = decode_position(request.args.get('state', ''))
    except InvalidPositionError as e:
        return jsonify({'success': False, 'error': str(e)}), 400

    result = {
        'success': True,
        'state': encode_position(state),
        'moves': [list(MOVES[m]) for m in legal_moves(state)],
    }

    cell = request.args.get('cell')
    if cell is not None:
        if not cell.isdigit() or int(cell) >= len(VALID_CELLS):
            return jsonify({'success': False, 'error': f'Некорректная клетка: {cell}'}), 400
        result['cell'] = int(cell)
        result['targets'] = targets_from(state, int(cell))

    return jsonify(result)


@app.route('/api/stats', methods=['GET'])
def stats():
    """Статистика заданий с момента запуска."""
    return jsonify({'success': True, 'busy': RUNNER.busy, 'stats': get_monitor().get_stats()})


@app.route('/api/preset/<name>')
def get_preset(name):
    """Получить предустановленную позицию."""
    presets = {
        'english': {
            'name': 'Английская доска',
            'state': encode_position(ENGLISH_START),
        },
        'goal': {
            'name': 'Цель (один колышек в центре)',
            'state': encode_position(ENGLISH_GOAL),
        },
    }

    if name not in presets:
        return jsonify({'error': 'Preset not found'}), 404

    return jsonify(presets[name])


def run_options(environ=None) -> dict:
    """
    Параметры app.run из окружения.

    Отладчик Werkzeug (PEG33_DEBUG=1) и внешний интерфейс (PEG33_HOST)
    включаются только явно.
    """
    env = os.environ if environ is None else environ
    return {
        'debug': env.get('PEG33_DEBUG', '').lower() in ('1', 'true', 'yes'),
        'host': env.get('PEG33_HOST', '127.0.0.1'),
        'port': int(env.get('PEG33_PORT', '5000')),
    }


if __name__ == '__main__':
    options = run_options()

    print("=" * 50)
    print("Peg33 Solver - Web API")
    print("=" * 50)
    print(f"\nOpen http://localhost:{options['port']} in your browser")
    print()

    app.run(**options)
