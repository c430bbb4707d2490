"""Per-call result values carrying an error kind alongside the payload."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(enum.Enum):
    """Outcome of a filesystem operation.

    Attributes:
        NONE: The operation completed successfully.
        EXISTS: The file or directory being created already exists.
        NOT_EXISTS: The file or directory does not exist (or is not
            the expected type, e.g. a walk root that is not a directory).
        OS_ERROR: An underlying OS call failed.
    """

    NONE = 0
    EXISTS = 1
    NOT_EXISTS = 2
    OS_ERROR = 3


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """A value returned together with the error kind of the call.

    Failed calls still carry a usable value (an empty collection,
    ``False``, ``None`` or a fallback path) so that callers may ignore
    the error when "empty" and "failed" mean the same thing to them.

    Attributes:
        value: The payload of the call.
        error: Error kind, ``ErrorKind.NONE`` on success.
    """

    value: T
    error: ErrorKind = ErrorKind.NONE

    @property
    def ok(self) -> bool:
        return self.error is ErrorKind.NONE
