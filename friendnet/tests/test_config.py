from __future__ import annotations

import logging

from friendnet.config import DEFAULT_SETTINGS, Settings


def test_log_level_is_upper_cased():
    assert Settings(log_level="info").log_level == "INFO"
    assert Settings(log_level=" debug ").log_level == "DEBUG"


def test_lower_case_log_level_is_accepted_by_logging():
    level = Settings(log_level="warning").log_level
    assert logging.getLevelName(level) == logging.WARNING


def test_defaults():
    assert DEFAULT_SETTINGS.max_recommendations == 5
    assert DEFAULT_SETTINGS.search_limit == 10
    assert DEFAULT_SETTINGS.bcrypt_rounds == 4  # set by conftest
    assert DEFAULT_SETTINGS.cors_origins == ("*",)
