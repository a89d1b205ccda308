#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Tests for logger setup (dcf_screener/utils/logger.py).
"""

import logging

import pytest

from dcf_screener.utils import get_logger
from dcf_screener.utils.logger import PACKAGE_LOGGER


class RecordingHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def recorders():
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    root_logger = logging.getLogger()
    on_package, on_root = RecordingHandler(), RecordingHandler()
    package_logger.addHandler(on_package)
    root_logger.addHandler(on_root)
    yield on_package, on_root
    package_logger.removeHandler(on_package)
    root_logger.removeHandler(on_root)


def test_module_loggers_have_no_handlers_of_their_own():
    logger = get_logger("dcf_screener.pipeline")
    assert logger.handlers == []
    assert logger.parent is logging.getLogger(PACKAGE_LOGGER)


def test_package_handler_is_attached_once():
    for _ in range(3):
        get_logger("dcf_screener.data.loader")
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    assert len(package_logger.handlers) == 1
    assert package_logger.propagate is False


def test_outside_names_nest_under_package():
    assert get_logger("__main__").name == "dcf_screener.__main__"
    assert get_logger(PACKAGE_LOGGER).name == PACKAGE_LOGGER


def test_record_reaches_package_handler_once_and_not_root(recorders):
    on_package, on_root = recorders
    get_logger("dcf_screener.dcf.logic").warning("one line")

    assert [r.getMessage() for r in on_package.records] == ["one line"]
    assert on_root.records == []
