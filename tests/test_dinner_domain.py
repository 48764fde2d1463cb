# tests/test_dinner_domain.py
"""End-to-end scenarios on the "have dinner" domain."""
import os

from domains import DinnerState, dinner_domain, initialize_state
from errors import FailureKind
from htn_planner import HTNPlanner
from planner_trace import RecordingTrace


def plan_dinner(state, trace=None):
    return HTNPlanner(dinner_domain).plan("do_something", state, trace)


def test_cooks_eats_and_washes_up(dinner_state):
    start = dinner_state()
    plan = plan_dinner(start)

    assert plan == ["cook_dinner", "eat_dinner", "wash_dishes"]
    assert plan.state == DinnerState(hungry=False, food_in_fridge=False, can_cook=True, cash=30, dishes=False)
    assert start == initialize_state()


def test_falls_back_to_takeout_when_unable_to_cook(dinner_state):
    trace = RecordingTrace()
    plan = plan_dinner(dinner_state(can_cook=False), trace)

    assert plan == ["order_takeout", "eat_dinner"]
    assert plan.state.cash == 10
    assert plan.state.hungry is False
    assert plan.state.dishes is False
    assert plan.state.food_in_fridge is True
    assert [(e.name, e.detail) for e in trace.failures] == [
        ("cook_dinner", FailureKind.GUARD_FAILED),
        ("wash_dishes", FailureKind.GUARD_FAILED),
    ]


def test_watches_tv_when_dinner_is_impossible(dinner_state):
    start = dinner_state(can_cook=False, cash=0)
    trace = RecordingTrace()
    plan = plan_dinner(start, trace)

    assert plan == ["watch_tv"]
    assert plan.state == start

    guard_failures = [e.name for e in trace.failures if e.detail is FailureKind.GUARD_FAILED]
    assert guard_failures == ["cook_dinner", "order_takeout"]
    assert [(e.name, e.detail) for e in trace.failures[2:]] == [
        ("get_dinner", FailureKind.NO_METHOD_APPLICABLE),
        ("have_dinner", FailureKind.TASK_SEQUENCE_FAILED),
    ]


def test_not_hungry_goes_straight_to_tv(dinner_state):
    trace = RecordingTrace()
    plan = plan_dinner(dinner_state(hungry=False), trace)

    assert plan == ["watch_tv"]
    assert [e.name for e in trace.failures] == ["have_dinner"]


def test_failure_state_is_the_failed_task_entry_state(dinner_state):
    trace = RecordingTrace()
    plan_dinner(dinner_state(can_cook=False, cash=5), trace)

    order_failure = trace.failures[1]
    assert order_failure.name == "order_takeout"
    assert order_failure.state.cash == 5
    # guard failures point at the guard's source
    assert os.path.basename(order_failure.location.filename) == "domains.py"


def test_repeated_searches_agree(dinner_state):
    plans = [plan_dinner(dinner_state(can_cook=False)) for _ in range(3)]
    assert all(list(p) == ["order_takeout", "eat_dinner"] for p in plans)


def test_fresh_domain_matches_module_domain(dinner, dinner_state):
    plan = HTNPlanner(dinner).plan("do_something", dinner_state())
    assert plan == plan_dinner(dinner_state())
