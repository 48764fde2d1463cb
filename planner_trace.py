# planner_trace.py
import os
import sys
from collections import namedtuple
from contextlib import contextmanager

from log import logger
from state import render

# (task name, state snapshot, declaration site) for one active evaluation
SearchContext = namedtuple("SearchContext", ["name", "state", "location"])

# One recorded observer call
TraceEvent = namedtuple("TraceEvent", ["kind", "name", "state", "location", "depth", "detail"])

SourceLocation = namedtuple("SourceLocation", ["filename", "lineno"])

_internal_files = set()


def internal_module(filename):
    """Exclude ``filename`` from declaration-site lookups."""
    _internal_files.add(os.path.abspath(filename))


def declaration_site():
    """Return the first caller frame outside the planner's own modules."""
    frame = sys._getframe(1)
    while frame is not None:
        filename = os.path.abspath(frame.f_code.co_filename)
        if filename not in _internal_files:
            return SourceLocation(frame.f_code.co_filename, frame.f_lineno)
        frame = frame.f_back
    return None


def format_location(location):
    if location is None:
        return "<unknown>"
    return f"{os.path.basename(location.filename)}({location.lineno})"


class PlannerTrace:
    """
    Observer notified by the search engine.

    This base class does nothing and reports ``enabled = False``; the engine
    then skips the calls (and the state snapshots they would need) entirely.
    Subclasses set ``enabled = True`` and override the events they care about.
    """

    enabled = False

    def begin(self):
        pass

    def end(self, result):
        pass

    def push_context(self, name, state, location):
        pass

    def pop_context(self):
        pass

    def primitive_selected(self, name, state, location):
        pass

    def fail(self, location, kind=None):
        pass

    @contextmanager
    def context(self, name, state, location):
        self.push_context(name, state, location)
        try:
            yield
        finally:
            self.pop_context()


NULL_TRACE = PlannerTrace()


class ContextTrace(PlannerTrace):
    """Trace sink that keeps the stack of active search contexts."""

    enabled = True

    def __init__(self):
        self.contexts = []

    def push_context(self, name, state, location):
        self.contexts.append(SearchContext(name, state, location))

    def pop_context(self):
        self.contexts.pop()

    @property
    def current(self):
        """Innermost active context, or None outside of any task."""
        return self.contexts[-1] if self.contexts else None

    def path(self):
        return " ".join(c.name for c in self.contexts)


class LoggingTrace(ContextTrace):
    """Writes the search progress to the planner log."""

    def __init__(self, log=None):
        super().__init__()
        self.log = log or logger

    def begin(self):
        self.log.info("Planning started")

    def end(self, result):
        if result is None:
            self.log.info("Planning failed!")
        else:
            self.log.info(f"Planning succeeded! {' '.join(str(a) for a in result)}")

    def push_context(self, name, state, location):
        super().push_context(name, state, location)
        self.log.debug(f"{format_location(location)} Planning context: {self.path()}")

    def primitive_selected(self, name, state, location):
        self.log.debug(f"{format_location(location)} Primitive selected: {name} ({render(state)})")

    def fail(self, location, kind=None):
        reason = f" [{kind}]" if kind is not None else ""
        self.log.info(f"{format_location(location)} Planning failed{reason}: {self.path()}")
        if self.current is not None:
            self.log.info(f"({render(self.current.state)})")


class RecordingTrace(ContextTrace):
    """Keeps every event in ``events`` for later inspection."""

    def __init__(self):
        super().__init__()
        self.events = []
        self.result = None

    def _record(self, kind, name=None, state=None, location=None, detail=None):
        self.events.append(TraceEvent(kind, name, state, location, len(self.contexts), detail))

    def begin(self):
        self.events = []
        self.result = None
        self._record("begin")

    def end(self, result):
        self.result = result
        self._record("end", detail=result)

    def push_context(self, name, state, location):
        super().push_context(name, state, location)
        self._record("push", name, state, location)

    def pop_context(self):
        name = self.current.name if self.current is not None else None
        super().pop_context()
        self._record("pop", name)

    def primitive_selected(self, name, state, location):
        self._record("primitive", name, state, location)

    def fail(self, location, kind=None):
        ctx = self.current
        self._record("fail",
                     ctx.name if ctx is not None else None,
                     ctx.state if ctx is not None else None,
                     location,
                     kind)

    def of_kind(self, kind):
        return [e for e in self.events if e.kind == kind]

    @property
    def failures(self):
        return self.of_kind("fail")

    @property
    def primitives(self):
        return [e.name for e in self.of_kind("primitive")]
