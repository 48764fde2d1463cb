# plan.py


class Plan:
    """
    Ordered list of primitive action identifiers produced by a successful
    search, together with the world state reached after the last action.
    """

    def __init__(self, actions=None, state=None):
        self.actions = list(actions) if actions is not None else []
        self.state = state

    def append(self, action):
        self.actions.append(action)
        return self

    def concat(self, other):
        """Append ``other``'s actions in place and adopt its final state."""
        self.actions.extend(other.actions)
        if other.state is not None:
            self.state = other.state
        return self

    def __iter__(self):
        return iter(self.actions)

    def __len__(self):
        return len(self.actions)

    def __getitem__(self, index):
        return self.actions[index]

    def __bool__(self):
        # An empty plan is still a successful plan
        return True

    def __eq__(self, other):
        if isinstance(other, Plan):
            return self.actions == other.actions
        if isinstance(other, (list, tuple)):
            return self.actions == list(other)
        return NotImplemented

    def __repr__(self):
        return f"Plan({self.actions})"
