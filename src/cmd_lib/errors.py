"""
Error taxonomy for cmd_lib

Every error raised by the library derives from CmdLibError, so hosts can
catch one type at the boundary (the tool facade does exactly that).

    CmdLibError
    ├── SpawnFailed            - executable could not be started
    ├── CommandFailed          - last stage exited non-zero (or by signal)
    ├── UndefinedVariable      - ${name} missing from the symbol table
    ├── MalformedReference     - ${... never closed
    ├── MalformedCommand       - empty stage, strict-mode quote error, ...
    └── PipelineConsumedError  - pipeline reused after extend/finalize

Nothing is retried: a failed spawn is assumed to be deterministic.
"""
from typing import List, Optional


class CmdLibError(Exception):
    """Base class for all cmd_lib errors"""
    pass


class SpawnFailed(CmdLibError):
    """
    The target executable could not be launched.

    Raised chained from the underlying OSError (not found, permission
    denied, resource limits).
    """

    def __init__(self, command: str, argv: List[str], reason: str, errno: Optional[int] = None):
        super().__init__(f"failed to spawn \"{command}\": {reason}")
        self.command = command
        self.argv = argv
        self.reason = reason
        self.errno = errno


class CommandFailed(CmdLibError):
    """
    The final stage of a pipeline exited with a non-zero status.

    exit_code is None when no status is available, e.g. the process was
    terminated by a signal (see the signal attribute).
    """

    def __init__(self, label: str, exit_code: Optional[int], signal: Optional[int] = None):
        if exit_code is not None:
            message = f"{label} exit with {exit_code}"
        else:
            message = f"{label} exit with unknown status"
        super().__init__(message)
        self.label = label
        self.exit_code = exit_code
        self.signal = signal


class UndefinedVariable(CmdLibError):
    """A ${name} reference has no entry in the symbol table"""

    def __init__(self, name: str, template: str):
        super().__init__(f"resolve {name} failed\n{template}")
        self.name = name
        self.template = template


class MalformedReference(CmdLibError):
    """A ${ was not closed before ';', newline or end of input"""

    def __init__(self, name: str, template: str):
        super().__init__(f"invalid name {name}\n{template}")
        self.name = name
        self.template = template


class MalformedCommand(CmdLibError):
    """Command text cannot be turned into something runnable"""

    def __init__(self, command: str, reason: str):
        super().__init__(f"{reason}: \"{command}\"")
        self.command = command
        self.reason = reason


class PipelineConsumedError(CmdLibError):
    """A Pipeline value was used after extend() or finalize() consumed it"""

    def __init__(self, label: str):
        super().__init__(f"pipeline \"{label}\" was already consumed")
        self.label = label
