"""
tests/test_web_app.py

Тесты Flask API через тестовый клиент.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import json

import pytest

from core.bitboard import ENGLISH_GOAL, ENGLISH_START
from web.app import app, run_options


@pytest.fixture
def client():
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


def test_job_check(client):
    """POST /api/job возвращает итоговый ответ."""
    response = client.post('/api/job', json={'kind': 'check', 'position': str((1 << 4) | (1 << 9))})

    assert response.status_code == 200
    assert response.get_json() == {'kind': 'check', 'status': 'done', 'payload': 'solved'}


def test_job_invalid_position(client):
    """Некорректная позиция — "done" с ошибкой, а не 500."""
    response = client.post('/api/job', json={'kind': 'solve', 'position': 'junk'})
    data = response.get_json()

    assert response.status_code == 200
    assert data['payload'] == {'outcome': 'unknown', 'moves': None}
    assert 'error' in data


def test_job_without_body(client):
    """Пустое тело — тоже ответ "done" с ошибкой."""
    response = client.post('/api/job', data='not json', content_type='text/plain')
    data = response.get_json()

    assert data['status'] == 'done'
    assert 'error' in data


def test_job_stream(client):
    """POST /api/job-stream отдаёт SSE; последнее событие — "done"."""
    response = client.post('/api/job-stream', json={
        'kind': 'solve',
        'position': str((1 << 4) | (1 << 10) | (1 << 11)),
    })

    assert response.mimetype == 'text/event-stream'
    chunks = [c for c in response.get_data(as_text=True).split('\n\n') if c]
    events = [json.loads(c[len('data: '):]) for c in chunks]

    assert events[-1]['status'] == 'done'
    assert events[-1]['payload'] == {'outcome': 'solved', 'moves': [[11, 10, 9], [4, 9, 16]]}


def test_moves(client):
    """GET /api/moves: допустимые ходы и цели колышка."""
    response = client.get(f'/api/moves?state={ENGLISH_START}&cell=4')
    data = response.get_json()

    assert data['success'] is True
    assert data['moves'] == [[4, 9, 16], [14, 15, 16], [18, 17, 16], [28, 23, 16]]
    assert data['cell'] == 4
    assert data['targets'] == [16]


def test_moves_bad_input(client):
    """Некорректные state или cell — 400."""
    assert client.get('/api/moves?state=junk').status_code == 400
    assert client.get(f'/api/moves?state={ENGLISH_START}&cell=33').status_code == 400
    assert client.get(f'/api/moves?state={ENGLISH_START}&cell=x').status_code == 400
    assert client.get('/api/moves?state=' + '1' * 5000).status_code == 400


def test_preset(client):
    """Предустановленные позиции."""
    data = client.get('/api/preset/english').get_json()
    assert data['state'] == str(ENGLISH_START)

    data = client.get('/api/preset/goal').get_json()
    assert data['state'] == str(ENGLISH_GOAL)

    assert client.get('/api/preset/french').status_code == 404


def test_stats(client):
    """Статистика заданий."""
    client.post('/api/job', json={'kind': 'check', 'position': str(ENGLISH_GOAL)})
    data = client.get('/api/stats').get_json()

    assert data['success'] is True
    assert data['busy'] is False
    assert data['stats']['counters'].get('jobs.check', 0) >= 1


def test_run_options_local_by_default():
    """Отладчик и внешний интерфейс выключены, пока их не включили явно."""
    assert run_options({}) == {'debug': False, 'host': '127.0.0.1', 'port': 5000}

    options = run_options({'PEG33_DEBUG': '1', 'PEG33_HOST': '0.0.0.0', 'PEG33_PORT': '8080'})
    assert options == {'debug': True, 'host': '0.0.0.0', 'port': 8080}
