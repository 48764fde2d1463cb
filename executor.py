from errors import ExecutionError
from log import logger


class PlanExecutor:
    """
    Runs a finished plan against an actor, one primitive action at a time.

    A string action is looked up in ``handlers`` first and then as a method
    on the actor; a callable action is called with the actor. A step that
    returns ``False`` stops the run.
    """

    def __init__(self, actor, handlers=None):
        self.actor = actor
        self.handlers = dict(handlers) if handlers else {}
        self.executed = []

    def execute(self, plan):
        """Execute the actions of ``plan`` in order; return how many succeeded."""
        self.executed = []
        for action in plan:
            if not self.execute_next_task(action):
                logger.info(f"Execution stopped at {action!r} after {len(self.executed)} actions")
                break
        return len(self.executed)

    def execute_next_task(self, action):
        step = self._resolve(action)
        logger.info(f"Executing task: {action}")
        if step() is False:
            return False
        self.executed.append(action)
        return True

    def _resolve(self, action):
        if callable(action):
            return lambda: action(self.actor)
        if action in self.handlers:
            handler = self.handlers[action]
            return lambda: handler(self.actor)
        method = getattr(self.actor, str(action), None)
        if method is None or not callable(method):
            raise ExecutionError(f"{type(self.actor).__name__} has no handler for action {action!r}")
        return method
