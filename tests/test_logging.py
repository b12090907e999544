import logging

from medref_api.app.core.logging_config import setup_logging


def test_setup_logging_targets_package_logger_once(tmp_path):
    name = "medref_api.tests.setup"
    logfile = tmp_path / "logs" / "medref.log"
    logger = setup_logging("debug", str(logfile), logger_name=name)
    again = setup_logging("warning", str(logfile), logger_name=name)
    try:
        assert again is logger
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 2
        assert logger.propagate is True
        logger.warning("Stored medication %s", 7)
        for handler in logger.handlers:
            handler.flush()
        assert "[WARNING] medref_api.tests.setup: Stored medication 7" in logfile.read_text(encoding="utf-8")
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()


def test_unknown_level_means_info():
    logger = setup_logging("chatty", logger_name="medref_api.tests.level")
    try:
        assert logger.level == logging.INFO
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)