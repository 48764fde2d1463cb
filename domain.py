# domain.py
from collections import namedtuple

from config import NULL_TASK_NAME
from errors import DomainError
from log import logger
from planner_trace import declaration_site, internal_module
from tasks import CompoundTask, NullTask, PrimitiveTask, Selector, Sequence, Task

internal_module(__file__)

TaskDefinition = namedtuple(
    "TaskDefinition",
    ["name", "strategy", "target", "preconditions", "effects", "variables", "location"]
)

_STRATEGIES = ("selector", "sequence", "primitive")


class Domain:
    """
    Declarative collection of named tasks.

    Each task gets optional guards, local variables and effects, plus exactly
    one way to decompose: ``selector`` (ordered alternatives), ``sequence``
    (ordered steps) or ``primitive`` (one action). Sub-tasks are referenced by
    name and resolved lazily, so tasks may be declared in any order and may
    refer to themselves.

        dinner = Domain("dinner")
        dinner.task("eat_dinner",
                    effects=lambda s: setattr(s, "hungry", False),
                    primitive="eat_dinner")
        dinner.task("have_dinner",
                    precondition=lambda s: s.hungry,
                    sequence=["get_dinner", "eat_dinner"])

    Guards and effects only run before the decomposition step: that step is
    the only one the planner rolls back.
    """

    def __init__(self, name="domain"):
        self.name = name
        self._definitions = {}
        self._nodes = {}
        self._define(TaskDefinition(NULL_TASK_NAME, "null", None, (), (), (), declaration_site()))

    def task(self, name, precondition=None, effects=None, variables=None,
             selector=None, sequence=None, primitive=None):
        """
        Declare a task.

        Args:
            name (str): Unique task name.
            precondition (callable or list): Guard(s) ``fn(state, **variables)``.
            effects (callable or list): Mutation(s) ``fn(state, **variables)``.
            variables (dict or list): ``name -> fn(state)`` evaluated on entry.
            selector (list): Alternative sub-tasks (names or nodes), tried in order.
            sequence (list): Sub-tasks (names or nodes) that must all succeed.
            primitive: Action identifier this task plans to.

        Returns:
            Domain: ``self``, so declarations can be chained.
        """
        given = {
            "selector": selector,
            "sequence": sequence,
            "primitive": primitive,
        }
        chosen = [key for key in _STRATEGIES if given[key] is not None]
        if len(chosen) != 1:
            raise DomainError(
                f"task {name!r} must declare exactly one of selector, sequence or primitive "
                f"(got {', '.join(chosen) or 'none'})"
            )
        strategy = chosen[0]
        target = given[strategy]
        if strategy != "primitive":
            if isinstance(target, (str, Task)):
                raise DomainError(f"task {name!r}: {strategy} takes a list of sub-tasks, got {target!r}")
            target = tuple(target)
            if not target:
                raise DomainError(f"task {name!r} declares an empty {strategy}")
            for child in target:
                if not isinstance(child, (str, Task)):
                    raise DomainError(f"task {name!r}: sub-task {child!r} is neither a name nor a task")

        definition = TaskDefinition(
            name,
            strategy,
            target,
            _callables(name, "precondition", precondition),
            _callables(name, "effect", effects),
            _variables(name, variables),
            declaration_site(),
        )
        self._define(definition)
        return self

    def primitive(self, name, action=None, **kwargs):
        """Declare a task that plans to ``action`` (defaults to ``name``)."""
        return self.task(name, primitive=action if action is not None else name, **kwargs)

    def selector(self, name, alternatives, **kwargs):
        return self.task(name, selector=alternatives, **kwargs)

    def sequence(self, name, steps, **kwargs):
        return self.task(name, sequence=steps, **kwargs)

    def compound(self, name=None, **kwargs):
        """
        Decorator form of ``task``: the decorated function is the first guard.

            @dinner.compound(sequence=["get_dinner", "eat_dinner"])
            def have_dinner(state):
                return state.hungry
        """
        extra = kwargs.pop("precondition", None)

        def decorator(fn):
            guards = [fn] + list(_callables(name or fn.__name__, "precondition", extra))
            self.task(name or fn.__name__, precondition=guards, **kwargs)
            return fn
        return decorator

    def resolve(self, name):
        """
        Return the task node for ``name``, building it on first use.

        Resolution is all or nothing: when any task reachable from ``name``
        cannot be resolved, every node built during this call is discarded
        and DomainError is raised.
        """
        node = self._nodes.get(name)
        if node is not None:
            return node

        built = []
        try:
            return self._build(name, built)
        except DomainError:
            for done in built:
                del self._nodes[done]
            raise

    def _build(self, name, built):
        node = self._nodes.get(name)
        if node is not None:
            return node

        definition = self._definitions.get(name)
        if definition is None:
            raise DomainError(f"unknown task {name!r} in domain {self.name!r}")

        if definition.strategy == "null":
            node = NullTask(name, location=definition.location)
        elif definition.strategy == "primitive":
            target = definition.target
            if not isinstance(target, Task):
                target = PrimitiveTask(target, location=definition.location)
            node = self._compound(definition, target)
        else:
            decomposition = Selector() if definition.strategy == "selector" else Sequence()
            node = self._compound(definition, decomposition)
            # Cache first so recursive references resolve to this node
            self._nodes[name] = node
            built.append(name)
            decomposition._bind([self._child(child, built) for child in definition.target])
            return node

        self._nodes[name] = node
        built.append(name)
        return node

    def validate(self):
        """Resolve every declared task; raises DomainError on dangling names."""
        for name in self._definitions:
            self.resolve(name)
        logger.info(f"Domain {self.name!r} validated: {len(self._definitions)} tasks")
        return self

    def definition(self, name):
        try:
            return self._definitions[name]
        except KeyError:
            raise DomainError(f"unknown task {name!r} in domain {self.name!r}") from None

    def __getitem__(self, name):
        return self.resolve(name)

    def __contains__(self, name):
        return name in self._definitions

    def __iter__(self):
        return iter(self._definitions)

    def __len__(self):
        return len(self._definitions)

    def _define(self, definition):
        if definition.name in self._definitions:
            raise DomainError(f"task {definition.name!r} is already defined in domain {self.name!r}")
        self._definitions[definition.name] = definition

    def _compound(self, definition, decomposition):
        return CompoundTask(
            definition.name,
            decomposition,
            preconditions=definition.preconditions,
            effects=definition.effects,
            variables=definition.variables,
            location=definition.location,
        )

    def _child(self, child, built):
        if isinstance(child, Task):
            return child
        return self._build(child, built)


def _callables(task_name, role, value):
    if value is None:
        return ()
    if callable(value):
        items = (value,)
    elif isinstance(value, (list, tuple)):
        items = tuple(value)
    else:
        raise DomainError(f"task {task_name!r}: {role} {value!r} is not callable")
    for item in items:
        if not callable(item):
            raise DomainError(f"task {task_name!r}: {role} {item!r} is not callable")
    return items


def _variables(task_name, value):
    if value is None:
        return ()
    items = tuple(value.items()) if isinstance(value, dict) else tuple(value)
    for name, expr in items:
        if not callable(expr):
            raise DomainError(f"task {task_name!r}: variable {name!r} is not callable")
    return items
