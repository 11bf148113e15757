"""Tests for configuration management."""

import os
from unittest.mock import patch

import structlog

from sessionscore.config import SessionScoreConfig, configure_logging, load_config


def test_default_config():
    with patch.dict(os.environ, {}, clear=True):
        config = SessionScoreConfig()
    assert config.log_level == "INFO"
    assert config.log_format == "console"
    assert config.data_dir.endswith(".sessionscore")


def test_config_from_env(tmp_path):
    env = {
        "SESSIONSCORE_DATA_DIR": str(tmp_path),
        "SESSIONSCORE_LOG_LEVEL": "debug",
        "SESSIONSCORE_LOG_FORMAT": "json",
    }
    with patch.dict(os.environ, env, clear=False):
        config = load_config()
        assert config.data_dir == str(tmp_path)
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"


def test_ensure_data_dir(tmp_path):
    config = SessionScoreConfig(data_dir=str(tmp_path / "test_sessionscore"))
    p = config.ensure_data_dir()
    assert p.exists()
    assert p.is_dir()


def test_configure_logging_json(capsys):
    configure_logging(SessionScoreConfig(log_level="INFO", log_format="json"))
    structlog.get_logger().info("hello_logs", answer=42)
    err = capsys.readouterr().err
    assert '"event": "hello_logs"' in err
    assert '"answer": 42' in err


def test_configure_logging_filters_below_level(capsys):
    configure_logging(SessionScoreConfig(log_level="WARNING", log_format="json"))
    structlog.get_logger().info("quiet")
    assert "quiet" not in capsys.readouterr().err
