import logging
from logging.handlers import RotatingFileHandler

from site_mapper.logger import LOGGER_NAME, configure, init_logging


def test_configure_replaces_handlers():
    first = configure(level="DEBUG")
    second = configure(level="WARNING")
    assert first is second
    assert second.level == logging.WARNING
    assert len(second.handlers) == 1
    assert second.propagate is False


def test_log_file_is_written(tmp_path):
    log_file = tmp_path / "crawl.log"
    lg = init_logging(level="INFO", log_file=log_file, log_format="%(levelname)s %(message)s")
    assert any(isinstance(h, RotatingFileHandler) for h in lg.handlers)

    logging.getLogger(LOGGER_NAME).info("Visiting %s", "http://example.com")
    configure(level="INFO")  # closes the file handler

    assert log_file.read_text(encoding="utf-8") == "INFO Visiting http://example.com\n"
