"""
Tests for logging setup and terminal colors
"""

import io
import logging

from dss_codec import logger as app_logger
from dss_codec.colors import Colors, colored, supports_color


def test_verbose_mode_switches_level():
    try:
        app_logger.set_verbose_mode(True)
        assert app_logger.get_logger().level == logging.DEBUG

        app_logger.set_verbose_mode(False)
        log = app_logger.get_logger()
        assert log.level == logging.INFO
    finally:
        app_logger.set_verbose_mode(False)


def test_setup_logger_keeps_single_handler():
    app_logger.get_logger()
    log = app_logger.get_logger()
    assert log.name == "dss_codec"
    assert len([h for h in log.handlers if h is app_logger._console_handler]) == 1
    assert len(log.handlers) == 1


def test_module_loggers_are_children():
    parent = app_logger.get_logger()
    assert logging.getLogger("dss_codec.signature_dsa").parent is parent


def test_colored_plain_when_not_a_terminal():
    stream = io.StringIO()
    assert not supports_color(stream)
    assert colored("ok", Colors.GREEN, stream) == "ok"
