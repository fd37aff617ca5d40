import logging

import numpy as np
import pytest

from orbweaver import Line, Vector
from orbweaver.logging_utils import _safe_repr, debug_log_call

logger = logging.getLogger("orbweaver.tests.logging")


def test_debug_log_call_traces_entry_and_exit(caplog):
    @debug_log_call(logger)
    def midpoint(line):
        return line.point_at(0.5)

    caplog.set_level(logging.DEBUG, logger=logger.name)
    result = midpoint(Line(Vector(0, 0), Vector(2, 2)))

    assert result == Vector(1, 1)
    messages = [record.getMessage() for record in caplog.records]
    assert any(msg.startswith("Entering") and "Line[(0.000, 0.000) -> (2.000, 2.000)]" in msg for msg in messages)
    assert any(msg.startswith("Exiting") and "(1.000, 1.000)" in msg for msg in messages)


def test_debug_log_call_reraises(caplog):
    @debug_log_call(logger, name="explode")
    def explode():
        raise RuntimeError("boom")

    caplog.set_level(logging.DEBUG, logger=logger.name)
    with pytest.raises(RuntimeError):
        explode()
    assert any(record.getMessage() == "Exception in explode" for record in caplog.records)


def test_debug_log_call_is_silent_above_debug(caplog):
    @debug_log_call(logger)
    def noop():
        return None

    caplog.set_level(logging.INFO, logger=logger.name)
    noop()
    assert not caplog.records


def test_safe_repr_summarizes_web_objects():
    lines = [Line(Vector(0, 0), Vector(1, i)) for i in range(10)]
    assert _safe_repr(lines) == "list[Line] len=10"
    assert _safe_repr([1, 2, 3, 4, 5, 6]) == "[1, 2, 3, 4, ... 2 more]"
    assert _safe_repr(np.random.default_rng(0)) == "<rng PCG64>"
