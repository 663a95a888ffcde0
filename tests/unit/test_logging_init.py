from __future__ import annotations

import logging

from gradesheet.logging.init import (
    APP_LOGGER_NAME,
    SUMMARY_LEVEL,
    enable_debug,
    format_miss_counts,
    get_logger,
    log_summary,
    reset_logging,
    setup_logging,
)


def test_setup_logging_is_idempotent():
    first = setup_logging()
    second = setup_logging()

    assert first is second
    assert first.name == APP_LOGGER_NAME
    assert len(first.handlers) == 1
    assert first.propagate is False


def test_labels(capsys):
    logger = setup_logging(logging.DEBUG)
    logger.debug("d")
    logger.info("i")
    logger.warning("w")
    logger.error("e")
    log_summary("documents=1")

    out = capsys.readouterr().out.splitlines()
    assert out == ["DEBUG d", "INFO i", "WARN w", "ERROR e", "SUMMARY documents=1"]


def test_module_loggers_reach_app_handler(capsys):
    setup_logging()
    logging.getLogger("gradesheet.services.orchestrator").info("sheet1.txt: 3 students")

    assert capsys.readouterr().out == "INFO sheet1.txt: 3 students\n"


def test_get_logger_sets_up_lazily():
    reset_logging()
    logger = get_logger()
    assert logger is get_logger()
    assert logging.getLevelName(SUMMARY_LEVEL) == "SUMMARY"


def test_enable_debug_lowers_logger_and_handlers(capsys):
    setup_logging()
    logger = enable_debug()

    assert logger.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in logger.handlers)
    assert capsys.readouterr().out == "DEBUG debug mode enabled\n"


def test_format_miss_counts():
    assert format_miss_counts({"NOT_FOUND": 2, "NO_MARK": 0, "NO_STUDENTS": 1}) == "NOT_FOUND=2 NO_MARK=0 NO_STUDENTS=1"
