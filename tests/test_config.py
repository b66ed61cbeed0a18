import importlib
import json
import logging

import pytest

from lexsign_core.config import Settings, load_settings
from lexsign_core.errors import UnsupportedKeyType
from lexsign_core.logger import get_logger


def test_defaults(monkeypatch):
    for var in ("LEXSIGN_KEYS_DIR", "LEXSIGN_KEY_TYPE", "LEXSIGN_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    assert load_settings() == Settings(keys_dir="keys", key_type="p256", log_level="INFO")


def test_env_then_explicit_config(monkeypatch):
    monkeypatch.setenv("LEXSIGN_KEYS_DIR", "/tmp/env-keys")
    monkeypatch.setenv("LEXSIGN_KEY_TYPE", "K256")
    monkeypatch.setenv("LEXSIGN_LOG_LEVEL", "debug")

    s = load_settings()
    assert s.keys_dir == "/tmp/env-keys"
    assert s.key_type == "k256"
    assert s.log_level_no == logging.DEBUG

    s = load_settings({"keys_dir": "explicit", "key_type": "p256"})
    assert s.keys_dir == "explicit"
    assert s.key_type == "p256"


def test_rejects_unknown_values():
    with pytest.raises(UnsupportedKeyType):
        load_settings({"key_type": "rsa"})
    with pytest.raises(ValueError):
        load_settings({"log_level": "chatty"})


def test_logger_single_handler_and_json_format(capsys):
    log = get_logger("Lexsign.Test.Format", level=logging.INFO)
    get_logger("Lexsign.Test.Format", level=logging.INFO)
    assert len(log.handlers) == 1

    log.info("hello")
    line = capsys.readouterr().out.strip().splitlines()[-1]
    entry = json.loads(line)
    assert entry["level"] == "INFO"
    assert entry["name"] == "Lexsign.Test.Format"
    assert entry["msg"] == "hello"
    assert entry["ts"].endswith("Z")


def test_logger_level_from_env(monkeypatch):
    monkeypatch.setenv("LEXSIGN_LOG_LEVEL", "WARNING")
    assert get_logger("Lexsign.Test.EnvLevel").level == logging.WARNING


def test_logger_writes_file(tmp_path):
    target = tmp_path / "logs" / "lexsign.log"
    log = get_logger("Lexsign.Test.File", level=logging.INFO, to_file=str(target))
    log.info("to file")
    for h in log.handlers:
        h.flush()
    assert "to file" in target.read_text()


def test_bad_env_log_level_does_not_break_import(monkeypatch, caplog):
    import lexsign_core.logger as logger_module

    monkeypatch.setenv("LEXSIGN_LOG_LEVEL", "verbose")
    importlib.reload(logger_module)
    with caplog.at_level(logging.WARNING):
        log = logger_module.get_logger("Lexsign.Test.BadLevel")
    assert log.level == logging.INFO
    assert "falling back to INFO" in caplog.text

    # strict validation stays in load_settings
    with pytest.raises(ValueError):
        load_settings()
