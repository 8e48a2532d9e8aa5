"""Tests for logger setup."""

import logging

from compass.logger import CompassHandler, setup_logger


class TestSetupLogger:
    """Tests for setup_logger."""

    def test_sets_level(self):
        logger = setup_logger(logging.DEBUG)

        assert logger.name == "compass"
        assert logger.level == logging.DEBUG

    def test_repeated_setup_keeps_one_handler(self):
        setup_logger(logging.DEBUG)
        logger = setup_logger(logging.WARNING)

        handlers = [h for h in logger.handlers if isinstance(h, CompassHandler)]
        assert len(handlers) == 1
        assert logger.level == logging.WARNING

    def test_writes_to_stderr(self, capsys):
        setup_logger(logging.INFO)

        logging.getLogger("compass.session").info("hello from the client")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "compass.session > hello from the client" in captured.err
