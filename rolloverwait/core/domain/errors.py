"""Error taxonomy surfaced through the step listener.

Responsibilities:
  - Carry a stable FailureCode plus a human message and structured details.
  - Keep the original transport/cluster exception as the cause of OperationError.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .enums import FailureCode


class StepError(Exception):
    """Failure reported by a lifecycle step."""

    code: FailureCode = FailureCode.CONFIGURATION

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(f"{self.code.value}: {message}")


class ConfigurationError(StepError):
    code = FailureCode.CONFIGURATION


class WriteBindingError(StepError):
    code = FailureCode.WRITE_BINDING


class IndexingCompleteConflict(StepError):
    code = FailureCode.INDEXING_COMPLETE_CONFLICT


class OperationError(StepError):
    code = FailureCode.OPERATION

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @classmethod
    def wrap(cls, exc: BaseException) -> "OperationError":
        if isinstance(exc, OperationError):
            return exc
        return cls(f"{type(exc).__name__}: {exc}", cause=exc)


class ListenerContractViolation(RuntimeError):
    """A step listener was completed more than once."""
