"""Structured log formatting and calculation timing."""

import logging

from utils.logging_config import PerformanceLogger, StructuredFormatter, setup_logger


def _record(msg, **extra):
    record = logging.LogRecord("toolphi", logging.INFO, __file__, 10, msg, None, None, func="run")
    for k, v in extra.items():
        setattr(record, k, v)
    return record


def test_structured_format_includes_tool_context():
    line = StructuredFormatter().format(_record("calculated", tool="mortgage"))
    assert "[INFO    ]" in line
    assert line.endswith("calculated {tool=mortgage}")


def test_structured_format_without_context():
    line = StructuredFormatter().format(_record("plain"))
    assert line.endswith("] plain")


def test_setup_logger_is_idempotent(tmp_path):
    log_file = tmp_path / "logs" / "app.log"
    logger = setup_logger("toolphi.test.idempotent", level="debug", log_file=str(log_file))
    again = setup_logger("toolphi.test.idempotent")
    assert again is logger
    assert len(logger.handlers) == 2
    assert logger.level == logging.DEBUG
    logger.info("hello")
    for h in logger.handlers:
        h.flush()
    assert "hello" in log_file.read_text(encoding="utf-8")


def test_performance_logger_flags_slow_operations(caplog):
    logger = logging.getLogger("toolphi.test.perf")
    logger.propagate = True
    with caplog.at_level(logging.DEBUG, logger="toolphi.test.perf"):
        with PerformanceLogger(logger, "instant", threshold_ms=10_000) as perf:
            pass
        with PerformanceLogger(logger, "slow", threshold_ms=-1):
            pass
    assert perf.duration_ms is not None
    assert any(r.levelno == logging.DEBUG and "instant took" in r.getMessage() for r in caplog.records)
    assert any(r.levelno == logging.WARNING and "SLOW: slow" in r.getMessage() for r in caplog.records)
