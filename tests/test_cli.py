"""
Tests for the command-line presenter.
"""

import json
import logging

import pytest

from feistelsim.cli import main, text_to_hex, hex_to_text, render_trace
from feistelsim import encrypt


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ('ROUNDS', 'MAX_ROUNDS', 'STRICT_ENCODING', 'LOG_LEVEL'):
        monkeypatch.delenv(f'FEISTELSIM_{name}', raising=False)


def test_hex_helpers():
    assert text_to_hex("B3") == "4233"
    assert hex_to_text("4233") == "B3"
    with pytest.raises(ValueError):
        hex_to_text("zz")


def test_hex_error_does_not_chain_the_parse_error():
    with pytest.raises(ValueError) as excinfo:
        hex_to_text("zz")
    assert excinfo.value.__cause__ is None
    assert excinfo.value.__suppress_context__


def test_render_trace_lists_every_step():
    trace = encrypt("AB", "key", 2).trace
    output = render_trace(trace)
    assert output.count("Step ") == len(trace)
    assert "Initial Split" in output
    assert "Final Combine" in output
    assert "'eyk1'" in output


def test_encrypt_command(capsys):
    assert main(['encrypt', 'AB', '--key', 'key', '--rounds', '1']) == 0
    out = capsys.readouterr().out
    assert "Ciphertext: 'B3'" in out
    assert "Ciphertext (hex): 4233" in out


def test_decrypt_command_with_hex(capsys):
    assert main(['decrypt', '4233', '-k', 'key', '-r', '1', '--hex']) == 0
    assert "Plaintext: 'AB'" in capsys.readouterr().out


def test_json_output(capsys):
    assert main(['encrypt', 'AB', '-k', 'key', '-r', '2', '--json']) == 0
    data = json.loads(capsys.readouterr().out)
    assert data['mode'] == 'encrypt'
    assert len(data['steps']) == 5
    assert data['result'] == encrypt("AB", "key", 2).ciphertext


@pytest.mark.parametrize("argv", [
    ['encrypt', 'AB', '-k', 'key', '-r', '0'],
    ['encrypt', 'AB', '-k', 'key', '-r', '17'],
    ['encrypt', 'AB', '-k', '', '-r', '2'],
    ['decrypt', 'not-hex', '-k', 'key', '--hex'],
])
def test_invalid_requests_exit_with_status_2(argv, capsys):
    assert main(argv) == 2
    assert "Error:" in capsys.readouterr().err


def test_max_rounds_from_environment(monkeypatch, capsys):
    monkeypatch.setenv('FEISTELSIM_MAX_ROUNDS', '20')
    assert main(['encrypt', 'AB', '-k', 'key', '-r', '17']) == 0


def test_lower_max_rounds_keeps_the_tool_usable(monkeypatch, capsys):
    monkeypatch.setenv('FEISTELSIM_MAX_ROUNDS', '3')
    assert main(['encrypt', 'AB', '-k', 'key', '-r', '2']) == 0
    assert main(['encrypt', 'AB', '-k', 'key']) == 0
    assert main(['encrypt', 'AB', '-k', 'key', '-r', '4']) == 2


def test_unknown_log_level_is_reported(monkeypatch, capsys):
    monkeypatch.setenv('FEISTELSIM_LOG_LEVEL', 'LOUD')
    assert main(['encrypt', 'AB', '-k', 'key']) == 2
    assert "FEISTELSIM_LOG_LEVEL" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [
    ['encrypt', 'AB', '-k', '', '-r', '2'],
    ['decrypt', 'not-hex', '-k', 'key', '--hex'],
])
def test_rejected_requests_are_logged(argv, caplog, capsys):
    caplog.set_level(logging.DEBUG, logger='feistelsim.cli')
    assert main(argv) == 2
    assert any("Rejected" in r.getMessage() for r in caplog.records)
