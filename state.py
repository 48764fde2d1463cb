# state.py
import copy


class WorldState:
    """
    Base class for planning-time world models.

    Subclasses only declare their facts as attributes (plain classes and
    dataclasses both work); copying, restoring and rendering are handled here
    from the instance ``__dict__``.
    """

    def copy(self):
        return copy.deepcopy(self)

    def restore(self, snapshot):
        """Overwrite this state in place with the facts held by ``snapshot``."""
        self.__dict__.clear()
        self.__dict__.update(copy.deepcopy(snapshot.__dict__))

    def to_string(self):
        return ", ".join(f"{key}: {value}" for key, value in vars(self).items())

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self):
        return f"{type(self).__name__}({self.to_string()})"


def snapshot(state):
    """Return an independent copy of ``state``."""
    if isinstance(state, WorldState):
        return state.copy()
    return copy.deepcopy(state)


def restore(state, saved):
    """Make ``state`` equal to ``saved`` without replacing the object itself."""
    if isinstance(state, WorldState):
        state.restore(saved)
    elif isinstance(state, dict):
        state.clear()
        state.update(copy.deepcopy(saved))
    else:
        state.__dict__.clear()
        state.__dict__.update(copy.deepcopy(saved.__dict__))


def render(state):
    if isinstance(state, WorldState):
        return state.to_string()
    if isinstance(state, dict):
        return ", ".join(f"{key}: {value}" for key, value in state.items())
    return str(state)


class Checkpoint:
    """
    Scoped snapshot of a mutable state.

    Entering captures the state; leaving restores it unless ``commit()`` was
    called, so every failing exit path (including exceptions raised by domain
    callbacks) rolls back.

        with Checkpoint(state) as cp:
            if try_something(state):
                cp.commit()
    """

    def __init__(self, state):
        self.state = state
        self.saved = None
        self.committed = False

    def __enter__(self):
        self.saved = snapshot(self.state)
        self.committed = False
        return self

    def __exit__(self, exc_type, exc, tb):
        if not self.committed:
            self.rollback()
        return False

    def commit(self):
        self.committed = True

    def rollback(self):
        restore(self.state, self.saved)
