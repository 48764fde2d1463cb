# tests/test_planner_trace.py
import logging
import os

import pytest

from errors import FailureKind
from plan import Plan
from planner_trace import (
    NULL_TRACE,
    LoggingTrace,
    PlannerTrace,
    RecordingTrace,
    SourceLocation,
    format_location,
)
from tasks import PrimitiveTask

LOCATION = SourceLocation("/tmp/domains.py", 42)


def test_null_trace_is_disabled():
    assert NULL_TRACE.enabled is False
    assert isinstance(NULL_TRACE, PlannerTrace)
    # every event is accepted and ignored
    NULL_TRACE.begin()
    NULL_TRACE.push_context("task", {}, LOCATION)
    NULL_TRACE.primitive_selected("action", {}, LOCATION)
    NULL_TRACE.fail(LOCATION, FailureKind.GUARD_FAILED)
    NULL_TRACE.pop_context()
    NULL_TRACE.end(None)


def test_format_location():
    assert format_location(LOCATION) == "domains.py(42)"
    assert format_location(None) == "<unknown>"


def test_recording_trace_tracks_context_stack():
    trace = RecordingTrace()
    trace.begin()
    trace.push_context("outer", {"x": 1}, LOCATION)
    trace.push_context("inner", {"x": 2}, LOCATION)

    assert trace.current.name == "inner"
    assert trace.path() == "outer inner"

    trace.fail(LOCATION, FailureKind.GUARD_FAILED)
    trace.pop_context()
    trace.primitive_selected("act", {"x": 1}, LOCATION)
    trace.pop_context()
    trace.end(Plan(["act"]))

    assert trace.current is None
    assert [e.kind for e in trace.events] == ["begin", "push", "push", "fail", "pop", "primitive", "pop", "end"]

    failure = trace.failures[0]
    assert failure.name == "inner"
    assert failure.state == {"x": 2}
    assert failure.detail is FailureKind.GUARD_FAILED
    assert failure.depth == 2
    assert trace.primitives == ["act"]
    assert trace.result == ["act"]


def test_begin_resets_recording():
    trace = RecordingTrace()
    trace.begin()
    trace.primitive_selected("a", None, LOCATION)
    trace.end(None)
    trace.begin()
    assert [e.kind for e in trace.events] == ["begin"]
    assert trace.result is None


def test_context_manager_pops_on_exception():
    trace = RecordingTrace()
    with pytest.raises(ValueError):
        with trace.context("task", {}, LOCATION):
            assert trace.current.name == "task"
            raise ValueError("boom")
    assert trace.contexts == []


def test_logging_trace_reports_failure_path_and_state(caplog):
    caplog.set_level(logging.DEBUG, logger="HTN")
    trace = LoggingTrace()

    trace.begin()
    trace.push_context("have_dinner", {"hungry": True}, LOCATION)
    trace.push_context("get_dinner", {"cash": 0}, LOCATION)
    trace.fail(LOCATION, FailureKind.NO_METHOD_APPLICABLE)
    trace.pop_context()
    trace.pop_context()
    trace.end(None)

    messages = [r.getMessage() for r in caplog.records]
    assert "domains.py(42) Planning context: have_dinner get_dinner" in messages
    assert "domains.py(42) Planning failed [no method applicable]: have_dinner get_dinner" in messages
    assert "(cash: 0)" in messages
    assert messages[-1] == "Planning failed!"


def test_logging_trace_reports_plan(caplog):
    caplog.set_level(logging.INFO, logger="HTN")
    trace = LoggingTrace()
    trace.end(Plan(["cook_dinner", "eat_dinner"]))
    assert caplog.records[-1].getMessage() == "Planning succeeded! cook_dinner eat_dinner"


def test_tasks_remember_where_they_were_declared():
    task = PrimitiveTask("wave")
    assert os.path.basename(task.location.filename) == "test_planner_trace.py"
    assert task.name == "wave"
