import logging
from pathlib import Path

from annalist.core.logging import get_logger, setup_logger


def test_verbosity_selects_level() -> None:
    assert setup_logger(verbosity=0).level == logging.WARNING
    assert setup_logger(verbosity=1).level == logging.INFO
    assert setup_logger(verbosity=3).level == logging.DEBUG
    assert setup_logger(level=logging.ERROR, verbosity=3).level == logging.ERROR


def test_setup_replaces_handlers(tmp_path: Path) -> None:
    setup_logger(verbosity=1)
    logger = setup_logger(verbosity=1, log_file=tmp_path / "annalist.log")
    assert len(logger.handlers) == 2

    get_logger("annalist.reporting").warning("history missing")
    for handler in logger.handlers:
        handler.flush()
    assert "history missing" in (tmp_path / "annalist.log").read_text()
