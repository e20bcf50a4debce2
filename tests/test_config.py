import logging

import pytest

from team_sizing.config import CONFIDENCE_LEVELS, confidence_label
from team_sizing.logger_setup import setup_logger


@pytest.mark.parametrize("level,expected", [
    (1, "Very Uncertain"),
    (3, "Neutral"),
    (5, "Very Confident"),
    (0, "Very Uncertain"),
    (-2, "Very Uncertain"),
    (9, "Very Confident"),
])
def test_confidence_label_is_clamped(level, expected):
    assert confidence_label(level) == expected
    assert confidence_label(level) in CONFIDENCE_LEVELS


def test_setup_logger_attaches_handlers_once(tmp_path):
    name = "team_sizing_test_setup"
    first = setup_logger(name, log_dir=str(tmp_path / "logs"))
    second = setup_logger(name, log_dir=str(tmp_path / "logs"))
    try:
        assert first is second
        assert len(second.handlers) == 2
        assert not second.propagate
        assert (tmp_path / "logs" / "team_sizing.log").exists()
    finally:
        for handler in list(second.handlers):
            handler.close()
            second.removeHandler(handler)
    assert logging.getLogger(name).handlers == []
