import logging

from solislab.logging_config import setup_logging


def test_repeated_setup_does_not_stack_handlers():
    setup_logging()
    setup_logging(level=logging.DEBUG)
    logger = logging.getLogger("solislab")
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.handlers[0].level == logging.DEBUG


def test_log_file_receives_package_records(tmp_path):
    log_file = tmp_path / "run.log"
    setup_logging(level=logging.INFO, log_file=str(log_file))
    logging.getLogger("solislab.experiments.batch").info("batch started")
    logging.getLogger("solislab.flow").debug("not written at INFO")
    for handler in logging.getLogger("solislab").handlers:
        handler.flush()
        if isinstance(handler, logging.FileHandler):
            handler.close()
    text = log_file.read_text(encoding="utf-8")
    assert "solislab.experiments.batch - INFO - batch started" in text
    assert "not written" not in text
