from errors import FailureKind
from log import logger
from plan import Plan
from planner_trace import NULL_TRACE, SourceLocation
from state import Checkpoint, snapshot
from tasks import CompoundTask, NullTask, PrimitiveTask, Selector, Sequence


class HTNPlanner:
    """
    Hierarchical Task Network (HTN) planner that generates a plan by recursively
    evaluating guards and decomposing tasks declared in a domain.
    """

    def __init__(self, domain=None):
        """
        Initialize the planner with a task domain.

        Args:
            domain (Domain): Declared tasks; only needed to plan by task name.
        """
        self.domain = domain

    def plan(self, task, state, trace=None):
        """
        Generate a plan for ``task`` starting from ``state``.

        Args:
            task (str or Task): Root task, by name or as a resolved node.
            state (WorldState or dict): Initial world state. Never modified.
            trace (PlannerTrace): Optional observer of the search.

        Returns:
            Plan: The ordered primitive actions if a plan is found, otherwise None.
        """
        if isinstance(task, str):
            if self.domain is None:
                raise ValueError(f"cannot plan {task!r} by name without a domain")
            task = self.domain.resolve(task)
        return find_plan(task, state, trace)


def find_plan(root_task, initial_state, trace=None):
    """
    Search for a plan that accomplishes ``root_task``.

    The search runs on a private copy of ``initial_state``; the returned plan's
    ``state`` is that copy as left by the successful decomposition.
    """
    trace = trace if trace is not None else NULL_TRACE
    if trace.enabled:
        trace.begin()

    working = snapshot(initial_state)
    plan = evaluate(root_task, working, trace)
    if plan is not None:
        plan.state = working

    logger.debug(f"find_plan({root_task.name}) -> {plan}")
    if trace.enabled:
        trace.end(plan)
    return plan


def evaluate(task, state, trace=NULL_TRACE):
    """
    Evaluate one task node against ``state``, which is mutated in place.

    Returns the task's plan, or None when it cannot be decomposed. A failing
    compound task leaves ``state`` as it was right after its own effects; the
    caller's checkpoint removes those too.
    """
    if isinstance(task, CompoundTask):
        return _evaluate_compound(task, state, trace)
    if isinstance(task, PrimitiveTask):
        if trace.enabled:
            trace.primitive_selected(task.name, snapshot(state), task.location)
        return Plan([task.action])
    if isinstance(task, NullTask):
        return Plan()
    raise TypeError(f"not a task node: {task!r}")


def _evaluate_compound(task, state, trace):
    tracing = trace.enabled
    if tracing:
        trace.push_context(task.name, snapshot(state), task.location)
    try:
        variables = task.bind(state)
        for guard in task.preconditions:
            if not guard(state, **variables):
                _fail(trace, _code_location(guard) or task.location, FailureKind.GUARD_FAILED)
                return None

        for effect in task.effects:
            effect(state, **variables)

        decomposition = task.decomposition
        if isinstance(decomposition, Selector):
            return _select(task, decomposition.children, state, trace)
        if isinstance(decomposition, Sequence):
            return _sequence(task, decomposition.children, state, trace)
        return evaluate(decomposition, state, trace)
    finally:
        if tracing:
            trace.pop_context()


def _select(task, alternatives, state, trace):
    # Every alternative starts from the state as it was after the task's effects
    # and leaving the checkpoint undoes the last failed one.
    with Checkpoint(state) as checkpoint:
        for index, alternative in enumerate(alternatives):
            if index:
                checkpoint.rollback()
            plan = evaluate(alternative, state, trace)
            if plan is not None:
                checkpoint.commit()
                return plan

    _fail(trace, task.location, FailureKind.NO_METHOD_APPLICABLE)
    return None


def _sequence(task, steps, state, trace):
    plan = Plan()
    with Checkpoint(state) as checkpoint:
        for step in steps:
            step_plan = evaluate(step, state, trace)
            if step_plan is None:
                break
            plan.concat(step_plan)
        else:
            checkpoint.commit()
            return plan

    _fail(trace, task.location, FailureKind.TASK_SEQUENCE_FAILED)
    return None


def _fail(trace, location, kind):
    if trace.enabled:
        trace.fail(location, kind)


def _code_location(fn):
    code = getattr(fn, "__code__", None)
    if code is None:
        return None
    return SourceLocation(code.co_filename, code.co_firstlineno)
