import logging

from core.log_utils import get_logger, setup_logging


def test_setup_logging_to_file(tmp_path):
    log_file = tmp_path / 'test.log'
    logger = setup_logging(str(log_file))
    logger.info('hello split')
    for handler in logger.handlers:
        handler.flush()
    assert 'hello split' in log_file.read_text()
    assert len(logger.handlers) == 1


def test_setup_logging_console_and_level():
    logger = setup_logging(level=logging.DEBUG)
    assert logger.level == logging.DEBUG
    assert isinstance(logger.handlers[0], logging.StreamHandler)


def test_get_logger():
    assert isinstance(get_logger(), logging.Logger)
    assert get_logger('splitting.planner').name == 'splitting.planner'
