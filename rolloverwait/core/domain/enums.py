"""Domain enums for the rollover readiness step.

Responsibilities:
  - Define the tri-state write binding of an alias on an index.
  - Define outcome kinds and failure codes reported to the step sequencer.

Invariants:
  - Enum values must remain stable; they are printed by the CLI and matched in audits.
  - FAILURE_METADATA must cover every FailureCode.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class WriteBinding(Enum):
    WRITE_TARGET = "WRITE_TARGET"
    NOT_WRITE_TARGET = "NOT_WRITE_TARGET"
    # Classic alias over a single index, which is the write target by default.
    IMPLICIT_SINGLE_BINDING = "IMPLICIT_SINGLE_BINDING"

    @classmethod
    def from_flag(cls, is_write_index: Optional[bool]) -> "WriteBinding":
        if is_write_index is None:
            return cls.IMPLICIT_SINGLE_BINDING
        if is_write_index:
            return cls.WRITE_TARGET
        return cls.NOT_WRITE_TARGET


class OutcomeKind(Enum):
    ALREADY_ROTATED = "ALREADY_ROTATED"
    INDEXING_COMPLETE = "INDEXING_COMPLETE"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    WRITE_BINDING_ERROR = "WRITE_BINDING_ERROR"
    INDEXING_COMPLETE_CONFLICT = "INDEXING_COMPLETE_CONFLICT"
    PENDING_DRY_RUN = "PENDING_DRY_RUN"
    DRY_RUN_SATISFIED = "DRY_RUN_SATISFIED"
    OPERATION_ERROR = "OPERATION_ERROR"


READY_KINDS = {OutcomeKind.ALREADY_ROTATED, OutcomeKind.INDEXING_COMPLETE}

FAILURE_KINDS = {
    OutcomeKind.CONFIGURATION_ERROR,
    OutcomeKind.WRITE_BINDING_ERROR,
    OutcomeKind.INDEXING_COMPLETE_CONFLICT,
    OutcomeKind.OPERATION_ERROR,
}


class FailureCode(Enum):
    CONFIGURATION = "CONFIGURATION"
    WRITE_BINDING = "WRITE_BINDING"
    INDEXING_COMPLETE_CONFLICT = "INDEXING_COMPLETE_CONFLICT"
    OPERATION = "OPERATION"


# Operator/audit metadata keyed by failure code.
FAILURE_METADATA: dict[FailureCode, dict[str, object]] = {
    FailureCode.CONFIGURATION: {
        "operator_action": True,
        "message": "Lifecycle or alias configuration is missing or malformed.",
    },
    FailureCode.WRITE_BINDING: {
        "operator_action": False,
        "message": "Index is not the write target of its rollover alias; may resolve when aliases change.",
    },
    FailureCode.INDEXING_COMPLETE_CONFLICT: {
        "operator_action": True,
        "message": "Index is marked indexing complete but is still the write target of its alias.",
    },
    FailureCode.OPERATION: {
        "operator_action": False,
        "message": "Dry-run rollover request failed in transport or on the cluster.",
    },
}
