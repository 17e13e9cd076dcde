# tests/test_config.py
import logging

import pytest

from src.config import Settings

@pytest.mark.parametrize("raw, expected", [("info", "INFO"), ("Debug", "DEBUG"), (" warning ", "WARNING")])
def test_log_level_is_upper_cased(raw, expected):
    """소문자로 지정한 LOG_LEVEL도 logging이 인식하는 레벨 이름으로 변환됩니다."""
    settings = Settings(LOG_LEVEL=raw)

    assert settings.log_level == expected
    assert isinstance(logging.getLevelName(settings.log_level), int)

def test_log_level_from_environment(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "error")
    assert Settings().log_level == "ERROR"
