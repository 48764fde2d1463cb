from enum import Enum


class FailureKind(Enum):
    """Why a compound task could not be decomposed."""
    GUARD_FAILED = "guard failed"
    NO_METHOD_APPLICABLE = "no method applicable"
    TASK_SEQUENCE_FAILED = "task sequence failed"

    def __str__(self):
        return self.value


class HTNError(Exception):
    """Base class for errors raised outside of the search itself."""


class DomainError(HTNError):
    """A domain declaration is malformed or references an unknown task."""


class ExecutionError(HTNError):
    """A plan step could not be dispatched to the actor."""
