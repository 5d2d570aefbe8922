"""
tests/test_main.py

Тесты CLI: разбор аргументов, вывод и коды возврата.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from main import main


def test_check_two_pegs(capsys):
    """check на позиции из текстового формата."""
    code = main(['check', '--pegs', 'pegs=D2,D3'])
    out = capsys.readouterr().out

    assert code == 0
    assert "Решаемо" in out


def test_solve_prints_moves(capsys):
    """solve печатает линию решения в нотации клеток."""
    code = main(['solve', '--state', str((1 << 4) | (1 << 9)), '--budget', '5'])
    out = capsys.readouterr().out

    assert code == 0
    assert "D2 → D4" in out


def test_advise_no_moves(capsys):
    """advise на цели — ходов нет."""
    code = main(['advise', '--state', '0x10000'])
    out = capsys.readouterr().out

    assert code == 0
    assert "Ходов нет" in out


def test_mistake(capsys):
    """mistake находит первую нерешаемую позицию."""
    start = (1 << 4) | (1 << 7) | (1 << 8)
    losing = (1 << 4) | (1 << 6)
    code = main(['mistake', '--history', f"{start},{losing}"])
    out = capsys.readouterr().out

    assert code == 0
    assert "#1" in out


def test_invalid_input_exit_code(capsys):
    """Некорректный ввод — код 1."""
    assert main(['check', '--state', 'junk']) == 1
    assert main(['mistake']) == 1
    assert main(['check', '--state', '0', '--budget', '-1']) == 1
    assert "Ошибка" in capsys.readouterr().out


def test_log_file(tmp_path, capsys):
    """--log-file пишет лог в файл."""
    log_file = tmp_path / "peg33.log"
    code = main(['check', '--state', '65536', '--verbose', '--log-file', str(log_file)])

    assert code == 0
    assert "Job check" in log_file.read_text(encoding='utf-8')
