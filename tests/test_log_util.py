import logging

import pytest

from shclip.utils.log_util import level_from_name, log_io


@pytest.mark.parametrize("value, expected", [
    ("debug", logging.DEBUG),
    (" WARNING ", logging.WARNING),
    ("30", 30),
    (logging.ERROR, logging.ERROR),
    ("verbose", logging.INFO),
    (None, logging.INFO),
    (True, logging.INFO),
])
def test_level_from_name(value, expected):
    assert level_from_name(value) == expected


def test_level_from_name_custom_default():
    assert level_from_name("nope", default=logging.WARNING) == logging.WARNING


def test_log_io_records_call_and_result(caplog):
    @log_io(mask=("secret",))
    def add(a, b, secret=None):
        return a + b

    with caplog.at_level(logging.DEBUG, logger="shclip"):
        assert add(1, 2, secret="token") == 3

    assert "add(a=1, b=2, secret=***)" in caplog.text
    assert "= 3" in caplog.text
    assert "token" not in caplog.text


def test_log_io_logs_and_reraises(caplog):
    @log_io()
    def fail():
        raise ValueError("nope")

    with caplog.at_level(logging.DEBUG, logger="shclip"):
        with pytest.raises(ValueError):
            fail()
    assert "Exception in" in caplog.text


def test_log_io_summarizes_vertex_arrays(caplog):
    @log_io()
    def count(flat):
        return len(flat)

    flat = [float(i) for i in range(40)]
    with caplog.at_level(logging.DEBUG, logger="shclip"):
        assert count(flat) == 40
    assert "flat=<list len=40 [0.0, 1.0, 2.0, 3.0, ...]>" in caplog.text
    assert "39.0" not in caplog.text
