# tasks.py
from errors import DomainError
from planner_trace import declaration_site, internal_module

internal_module(__file__)


class Task:
    """
    A node of the task network.

    Nodes are declared once and never change afterwards; each search evaluates
    them against its own state.

    Args:
        name (str): Task name shown in traces.
        location (SourceLocation): Where the task was declared. Defaults to
            the first caller outside the planner modules.
    """

    def __init__(self, name, location=None):
        self.name = name
        self.location = location if location is not None else declaration_site()

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r})"


class PrimitiveTask(Task):
    """Maps directly to one executable action identifier."""

    def __init__(self, action, name=None, location=None):
        super().__init__(name if name is not None else _action_name(action), location)
        self.action = action


class NullTask(Task):
    """Succeeds with an empty plan and leaves the state untouched."""


class Decomposition:
    """Ordered children of a compound task."""

    strategy = None

    def __init__(self, children=None):
        self._children = ()
        self._bound = False
        if children is not None:
            self._bind(children)

    @property
    def children(self):
        return self._children

    def _bind(self, children):
        # Domain creates the owning node first so recursive references can
        # point at it, then binds the children exactly once.
        if self._bound:
            raise DomainError(f"{type(self).__name__} children are already bound")
        self._children = tuple(children)
        self._bound = True

    def __repr__(self):
        return f"{type(self).__name__}({[c.name for c in self._children]})"


class Selector(Decomposition):
    """Method selection: the first child that can be planned wins."""

    strategy = "selector"


class Sequence(Decomposition):
    """Task sequence: every child must be planned, left to right."""

    strategy = "sequence"


class CompoundTask(Task):
    """
    A task that gates on guards, applies its effects and then decomposes.

    Args:
        name (str): Task name.
        decomposition (Decomposition or Task): A ``Selector``, a ``Sequence``,
            or the single task (usually a ``PrimitiveTask``) this task binds to.
        preconditions (iterable): Guards ``fn(state, **variables) -> bool``,
            checked in order.
        effects (iterable): Mutations ``fn(state, **variables)``, applied in
            order once every guard holds.
        variables (iterable): ``(name, fn(state))`` pairs evaluated on entry;
            their values are passed to guards and effects as keyword arguments.
        location (SourceLocation): Declaration site.
    """

    def __init__(self, name, decomposition, preconditions=(), effects=(), variables=(), location=None):
        super().__init__(name, location)
        self.decomposition = decomposition
        self.preconditions = tuple(preconditions)
        self.effects = tuple(effects)
        self.variables = tuple(variables)

    @property
    def strategy(self):
        if isinstance(self.decomposition, Decomposition):
            return self.decomposition.strategy
        return "primitive"

    def bind(self, state):
        """Evaluate the local variables against ``state``."""
        values = {}
        for name, expr in self.variables:
            values[name] = expr(state)
        return values


def _action_name(action):
    if isinstance(action, str):
        return action
    return getattr(action, "__name__", str(action))
